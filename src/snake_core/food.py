"""Food spawning logic."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from snake_core.grid import CellTag, GridWorld

if TYPE_CHECKING:
    from snake_core.grid import Position
    from snake_core.snake import Snake

logger = logging.getLogger(__name__)


class FoodSpawner:
    """Picks food positions on a grid.

    Uses a seeded NumPy RNG for deterministic, reproducible placement.
    By default x and y are drawn independently and uniformly with no
    check against the snake, so food may land under the body. With
    ``avoid_snake`` set, a free cell is drawn instead.
    """

    def __init__(
        self,
        world: GridWorld,
        rng: np.random.Generator | None = None,
        avoid_snake: bool = False,
    ) -> None:
        self.world = world
        self.rng = rng if rng is not None else np.random.default_rng()
        self.avoid_snake = avoid_snake

    def spawn(self, snake: Snake | None = None) -> Position:
        """Return a new food position."""
        if self.avoid_snake and snake is not None:
            free = self._free_cells(snake)
            if free:
                idx = self.rng.choice(len(free))
                return free[int(idx)]
            logger.warning("No free cell for food; falling back to uniform.")
        width, height = self.world.size()
        x = int(self.rng.integers(0, width))
        y = int(self.rng.integers(0, height))
        return x, y

    def _free_cells(self, snake: Snake) -> list[Position]:
        # The live world still shows the previous frame, so mark the
        # snake's current cells on a scratch grid.
        scratch = GridWorld(*self.world.size())
        for x, y in snake.body:
            scratch.set_cell(x, y, CellTag.SNAKE_BODY)
        scratch.set_cell(*snake.head, CellTag.SNAKE_HEAD)
        return scratch.cells_of(CellTag.EMPTY)
