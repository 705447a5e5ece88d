"""Renderer-side helpers that turn the logical grid into draw data."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from snake_core.grid import CellTag, GridWorld

RGB = tuple[int, int, int]


@dataclass(frozen=True)
class Palette:
    """Fixed tile colors."""

    snake: RGB = (0, 255, 0)
    food: RGB = (255, 0, 0)
    world: RGB = (255, 255, 255)

    def lookup_table(self) -> np.ndarray:
        """Return a (len(CellTag), 3) color table indexed by tag value."""
        table = np.zeros((len(CellTag), 3), dtype=np.uint8)
        table[CellTag.EMPTY] = self.world
        table[CellTag.SNAKE_HEAD] = self.snake
        table[CellTag.SNAKE_BODY] = self.snake
        table[CellTag.FOOD] = self.food
        return table


DEFAULT_PALETTE = Palette()


def tile_colors(world: GridWorld, palette: Palette = DEFAULT_PALETTE) -> np.ndarray:
    """Return one RGB color per tile, shape ``(height, width, 3)``."""
    return palette.lookup_table()[world.cells]


def render_frame(
    world: GridWorld,
    tile_size: int = 16,
    palette: Palette = DEFAULT_PALETTE,
) -> np.ndarray:
    """Rasterize the world into an RGB image of square tiles.

    The result has shape ``(height * tile_size, width * tile_size, 3)``.
    """
    if tile_size < 1:
        raise ValueError("tile_size must be at least 1.")
    colors = tile_colors(world, palette)
    return np.repeat(np.repeat(colors, tile_size, axis=0), tile_size, axis=1)


def frame_info(world: GridWorld, tile_size: int = 16) -> dict:
    """Describe the logical and pixel size of a frame."""
    width, height = world.size()
    return {
        "width": width,
        "height": height,
        "tile_size": tile_size,
        "pixel_width": width * tile_size,
        "pixel_height": height * tile_size,
    }
