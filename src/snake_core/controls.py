"""Input actions and the default key bindings."""

from __future__ import annotations

import enum

from snake_core.snake import Direction


class Action(enum.Enum):
    """Semantic actions an input source can deliver to the engine."""

    START = "start"
    PAUSE = "pause"
    CONTINUE = "continue"
    END = "end"
    RESTART = "restart"
    MOVE_UP = "up"
    MOVE_DOWN = "down"
    MOVE_LEFT = "left"
    MOVE_RIGHT = "right"

    @property
    def direction(self) -> Direction | None:
        """Return the movement direction for directional actions."""
        return _ACTION_DIRECTIONS.get(self)


_ACTION_DIRECTIONS: dict[Action, Direction] = {
    Action.MOVE_UP: Direction.UP,
    Action.MOVE_DOWN: Direction.DOWN,
    Action.MOVE_LEFT: Direction.LEFT,
    Action.MOVE_RIGHT: Direction.RIGHT,
}

# Number row drives the game flow, arrows steer.
DEFAULT_KEYMAP: dict[str, Action] = {
    "1": Action.START,
    "2": Action.PAUSE,
    "3": Action.CONTINUE,
    "4": Action.END,
    "5": Action.RESTART,
    "up": Action.MOVE_UP,
    "down": Action.MOVE_DOWN,
    "left": Action.MOVE_LEFT,
    "right": Action.MOVE_RIGHT,
}


def action_for_key(
    key: str, keymap: dict[str, Action] | None = None,
) -> Action | None:
    """Translate a key name into an action, or ``None`` if unbound."""
    bindings = DEFAULT_KEYMAP if keymap is None else keymap
    return bindings.get(key.strip().lower())


def parse_action(name: str) -> Action | None:
    """Look up an action by its value (``"pause"``, ``"up"``, ...)."""
    try:
        return Action(name.strip().lower())
    except ValueError:
        return None
