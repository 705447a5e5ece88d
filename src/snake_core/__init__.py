"""Snake Core: grid snake simulation engine."""

from snake_core.config import GameConfig
from snake_core.controls import DEFAULT_KEYMAP, Action, action_for_key
from snake_core.engine import GameEngine, GameState
from snake_core.grid import CellTag, GridWorld, InvalidDimensions
from snake_core.snake import Direction, Snake

__all__ = [
    "DEFAULT_KEYMAP",
    "Action",
    "CellTag",
    "Direction",
    "GameConfig",
    "GameEngine",
    "GameState",
    "GridWorld",
    "InvalidDimensions",
    "Snake",
    "action_for_key",
]
