"""Real-time game engine composing the grid world, snake, and food logic."""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable

import numpy as np

from snake_core.config import GameConfig
from snake_core.controls import Action
from snake_core.food import FoodSpawner
from snake_core.grid import CellTag, GridWorld, InvalidDimensions, Position
from snake_core.snake import Direction, Snake

logger = logging.getLogger(__name__)

DEFAULT_DIRECTION = Direction.RIGHT


class GameState(enum.Enum):
    """Lifecycle states of a game; exactly one is active."""

    MENU = "menu"
    PLAYING = "playing"
    PAUSED = "paused"
    ENDED = "ended"
    GAME_OVER = "game_over"


class GameEngine:
    """Single-snake, time-driven game engine.

    The engine owns the grid world, snake, food, scores, and timers.
    Input is delivered through :meth:`process_event`, wall-clock time
    through :meth:`tick`. Whenever a full movement interval has built up
    the snake advances by one cell and the world is repainted; renderers
    read :attr:`world` afterwards.
    """

    def __init__(
        self,
        width: int | None = None,
        height: int | None = None,
        config: GameConfig | None = None,
        seed: int | None = None,
    ) -> None:
        self.config = config if config is not None else GameConfig()
        width = self.config.width if width is None else width
        height = self.config.height if height is None else height

        self.world = GridWorld(width, height)
        if width // 2 < self.config.initial_length - 1:
            raise InvalidDimensions(
                f"Grid width {width} cannot hold a snake of length "
                f"{self.config.initial_length} starting at the center."
            )

        seed = self.config.seed if seed is None else seed
        self.rng = np.random.default_rng(seed)
        self.food_spawner = FoodSpawner(
            self.world, rng=self.rng, avoid_snake=self.config.food_avoids_snake,
        )

        self.state = GameState.MENU
        self.snake: Snake | None = None
        self.food: Position | None = None
        self.current_score = 0
        self.best_score = 0
        self.elapsed_time = 0.0
        self.step_count = 0
        self._accumulator = 0.0

        self._handlers: dict[GameState, dict[Action, Callable[[], None]]] = {
            GameState.MENU: {
                Action.START: self.start_game,
            },
            GameState.PLAYING: {
                Action.PAUSE: self.pause_game,
                Action.END: self.end_game,
                Action.RESTART: self.restart_game,
            },
            GameState.PAUSED: {
                Action.CONTINUE: self.continue_game,
                Action.RESTART: self.restart_game,
                Action.END: self.end_game,
            },
            GameState.GAME_OVER: {
                Action.START: self.start_game,
                # Continuing after a collision starts over.
                Action.CONTINUE: self.restart_game,
                Action.RESTART: self.restart_game,
            },
            GameState.ENDED: {},
        }

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def process_event(self, action: Action) -> bool:
        """Apply *action* if the current state accepts it.

        Returns ``True`` when the action was accepted. Actions that do
        not apply to the current state are ignored.
        """
        if self.state == GameState.PLAYING and action.direction is not None:
            return self.try_set_direction(action.direction)

        handler = self._handlers[self.state].get(action)
        if handler is None:
            return False
        handler()
        return True

    @property
    def direction(self) -> Direction:
        return self.snake.direction if self.snake is not None else DEFAULT_DIRECTION

    @property
    def snake_length(self) -> int:
        return len(self.snake) if self.snake is not None else 0

    def try_set_direction(self, desired: Direction) -> bool:
        """Turn the snake unless *desired* reverses the current direction."""
        if self.snake is None:
            return False
        return self.snake.set_direction(desired)

    # ------------------------------------------------------------------
    # State transitions
    # ------------------------------------------------------------------

    def start_game(self) -> None:
        """Reset everything but the best score and begin playing."""
        self.world.clear()
        self.current_score = 0
        self.elapsed_time = 0.0
        self.step_count = 0
        self._accumulator = 0.0

        width, height = self.world.size()
        self.snake = Snake(
            (width // 2, height // 2),
            DEFAULT_DIRECTION,
            length=self.config.initial_length,
        )
        self.food = self.spawn_food()
        self._repaint()

        self.state = GameState.PLAYING
        logger.info(
            "Game started: head=%s, length=%d.", self.snake.head, len(self.snake),
        )

    def restart_game(self) -> None:
        logger.info("Game restarted.")
        self.start_game()

    def pause_game(self) -> None:
        self.state = GameState.PAUSED
        logger.info("Game paused.")

    def continue_game(self) -> None:
        self.state = GameState.PLAYING
        logger.info("Game continued.")

    def end_game(self) -> None:
        """Finish the session for good and record the score."""
        self._record_score()
        self.state = GameState.ENDED
        logger.info("Game ended with score %d.", self.current_score)

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------

    def tick(self, delta_time: float) -> int:
        """Advance the simulation clock by *delta_time* seconds.

        Time only counts while playing. Elapsed time is collected in an
        accumulator; each full movement interval in it pays for one move
        step, up to ``max_steps_per_tick`` per call. Backlog beyond that
        cap is dropped. Returns the number of steps taken.
        """
        if delta_time < 0:
            raise ValueError("delta_time must be non-negative.")
        if self.state != GameState.PLAYING:
            return 0

        interval = self.config.move_interval
        self.elapsed_time += delta_time
        self._accumulator += delta_time

        steps = 0
        while (
            self._accumulator >= interval
            and steps < self.config.max_steps_per_tick
        ):
            self._accumulator -= interval
            self.move_snake()
            steps += 1
            if self.state != GameState.PLAYING:
                break

        if self._accumulator >= interval:
            self._accumulator %= interval
        return steps

    def next_head_position(self) -> Position:
        """Return where the head goes next, wrapped around the edges.

        Only one axis is ever wrapped per step, which is all orthogonal
        movement needs.
        """
        assert self.snake is not None  # noqa: S101
        width, height = self.world.size()
        max_x, max_y = width - 1, height - 1
        x, y = self.snake.next_head()

        if x > max_x:
            x = 0
        elif y > max_y:
            y = 0
        elif x < 0:
            x = max_x
        elif y < 0:
            y = max_y
        return x, y

    def move_snake(self) -> bool:
        """Perform one discrete move step.

        Returns ``False`` if the snake ran into itself; the step then
        changes nothing but the game state.
        """
        if self.snake is None:
            return False

        next_head = self.next_head_position()

        # Checked before the body shifts, so the outgoing tail still blocks.
        if self.snake.collides_with_body(next_head):
            self._game_over()
            return False

        former_tail = self.snake.advance(next_head)
        self.step_count += 1

        if next_head == self.food:
            self.snake.grow(former_tail)
            self.current_score += 1
            logger.debug(
                "Food eaten at %s, score %d.", next_head, self.current_score,
            )
            self.food = self.spawn_food()

        self._repaint()
        return True

    def spawn_food(self) -> Position:
        """Pick a new food position."""
        pos = self.food_spawner.spawn(self.snake)
        logger.debug("Food spawned at %s.", pos)
        return pos

    # ------------------------------------------------------------------
    # State export
    # ------------------------------------------------------------------

    def get_state(self) -> dict:
        """Return the full, serializable game state."""
        return {
            "state": self.state.value,
            "score": self.current_score,
            "best_score": self.best_score,
            "steps": self.step_count,
            "direction": self.direction.name.lower(),
            "snake": self.snake.to_dict() if self.snake is not None else None,
            "food": list(self.food) if self.food is not None else None,
            "grid": self.world.to_dict(),
        }

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _repaint(self) -> None:
        """Redraw snake and food onto a cleared world."""
        assert self.snake is not None  # noqa: S101
        self.world.clear()
        for x, y in self.snake.body:
            self.world.set_cell(x, y, CellTag.SNAKE_BODY)
        hx, hy = self.snake.head
        self.world.set_cell(hx, hy, CellTag.SNAKE_HEAD)
        if self.food is not None:
            self.world.set_cell(self.food[0], self.food[1], CellTag.FOOD)

    def _game_over(self) -> None:
        self._record_score()
        self.state = GameState.GAME_OVER
        logger.info("Game over! Score %d.", self.current_score)

    def _record_score(self) -> None:
        if self.current_score > self.best_score:
            self.best_score = self.current_score
            logger.info("New best score: %d.", self.best_score)
