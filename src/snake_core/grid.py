"""Grid world representation for the snake game."""

from __future__ import annotations

import enum
from numbers import Integral

import numpy as np

Position = tuple[int, int]


class InvalidDimensions(ValueError):
    """Raised when a world cannot be built with the requested size."""


class CellTag(enum.IntEnum):
    """Integer codes stored in the grid array."""

    EMPTY = 0
    SNAKE_HEAD = 1
    SNAKE_BODY = 2
    FOOD = 3


class GridWorld:
    """NumPy-backed width×height grid of cell tags.

    Coordinates are ``(x, y)`` with ``y`` growing downward; the backing
    array is indexed ``cells[y, x]``. The grid knows nothing about
    gameplay rules.

    Writes outside the grid are ignored rather than reported. The engine
    wraps the head around the edges before painting, so out-of-range
    writes never happen in normal play.
    """

    def __init__(self, width: int, height: int) -> None:
        if not isinstance(width, Integral) or not isinstance(height, Integral):
            raise InvalidDimensions("Grid dimensions must be integers.")
        if width <= 0 or height <= 0:
            raise InvalidDimensions(
                f"Grid dimensions must be positive, got {width}×{height}."
            )
        self.width = int(width)
        self.height = int(height)
        self.cells = np.zeros((self.height, self.width), dtype=np.int8)

    def size(self) -> tuple[int, int]:
        """Return ``(width, height)``."""
        return self.width, self.height

    def clear(self) -> None:
        """Reset all cells to empty."""
        self.cells[:] = CellTag.EMPTY

    def in_bounds(self, x: int, y: int) -> bool:
        """Check whether a coordinate lies within the grid."""
        return 0 <= x < self.width and 0 <= y < self.height

    def get_cell(self, x: int, y: int) -> CellTag:
        """Return the tag at the given coordinate."""
        if not self.in_bounds(x, y):
            raise IndexError(f"Cell ({x}, {y}) is outside the grid.")
        return CellTag(int(self.cells[y, x]))

    def set_cell(self, x: int, y: int, tag: CellTag) -> None:
        """Write *tag* at the given coordinate; no-op outside the grid."""
        if self.in_bounds(x, y):
            self.cells[y, x] = tag

    def cells_of(self, tag: CellTag) -> list[Position]:
        """Return the coordinates of every cell holding *tag*."""
        ys, xs = np.where(self.cells == tag)
        return list(zip(xs.tolist(), ys.tolist(), strict=True))

    def to_dict(self) -> dict:
        """Serialize grid state to a dictionary."""
        return {
            "width": self.width,
            "height": self.height,
            "cells": self.cells.tolist(),
        }
