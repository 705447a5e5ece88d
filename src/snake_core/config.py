"""Game configuration."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameConfig:
    """Tunable game constants.

    Supports JSON serialization so a setup can be reproduced. Scores are
    never part of the config and are not persisted.
    """

    # World
    width: int = 32
    height: int = 32

    # Snake
    initial_length: int = 10

    # Timing (seconds)
    move_interval: float = 0.05
    max_steps_per_tick: int = 1

    # Food
    food_avoids_snake: bool = False

    # Rendering
    tile_size: int = 16

    seed: int | None = None

    def __post_init__(self) -> None:
        if self.initial_length < 1:
            raise ValueError("initial_length must be at least 1.")
        if self.move_interval <= 0:
            raise ValueError("move_interval must be positive.")
        if self.max_steps_per_tick < 1:
            raise ValueError("max_steps_per_tick must be at least 1.")
        if self.tile_size < 1:
            raise ValueError("tile_size must be at least 1.")

    def to_dict(self) -> dict:
        """Serialize to a plain dict."""
        return asdict(self)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file."""
        raw = json.loads(Path(path).read_text())
        return cls(**raw)
