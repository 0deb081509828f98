"""Game configuration."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, replace
from pathlib import Path

from snake_sim.food import SpawnStrategy
from snake_sim.grid import WallMode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameConfig:
    """Tunable rules for a single-player snake game.

    Supports JSON serialization so a setup can be shared or replayed.
    """

    # Board
    grid_width: int = 20
    grid_height: int = 20
    wall_mode: WallMode = WallMode.WRAP
    start_x: int | None = None
    start_y: int | None = None

    # Input
    move_delay_ms: int | None = 150

    # Speed curve
    initial_interval_ms: int = 150
    min_interval_ms: int = 50
    interval_step_ms: int = 2

    # Food
    food_value: int = 10
    spawn_strategy: SpawnStrategy = SpawnStrategy.ENUMERATE
    max_spawn_attempts: int = 64

    seed: int | None = None

    def __post_init__(self) -> None:
        # Accept plain strings for the enum fields (JSON, CLI flags).
        object.__setattr__(self, "wall_mode", WallMode(self.wall_mode))
        object.__setattr__(
            self, "spawn_strategy", SpawnStrategy(self.spawn_strategy),
        )

        if self.grid_width < 1 or self.grid_height < 1:
            raise ValueError("grid_width and grid_height must be positive.")
        if self.grid_width * self.grid_height < 2:
            raise ValueError("The grid must have at least 2 cells.")
        if self.min_interval_ms < 1:
            raise ValueError("min_interval_ms must be at least 1.")
        if self.initial_interval_ms < self.min_interval_ms:
            raise ValueError("initial_interval_ms must be >= min_interval_ms.")
        if self.interval_step_ms < 0:
            raise ValueError("interval_step_ms must be >= 0.")
        if self.move_delay_ms is not None and self.move_delay_ms < 0:
            raise ValueError("move_delay_ms must be >= 0.")
        if self.food_value < 0:
            raise ValueError("food_value must be >= 0.")
        if self.max_spawn_attempts < 0:
            raise ValueError("max_spawn_attempts must be >= 0.")

        x, y = self.start_cell
        if not (0 <= x < self.grid_width and 0 <= y < self.grid_height):
            raise ValueError("Start position lies outside the grid.")

    @property
    def start_cell(self) -> tuple[int, int]:
        """Head position at game start; defaults to the grid center."""
        x = self.start_x if self.start_x is not None else self.grid_width // 2
        y = self.start_y if self.start_y is not None else self.grid_height // 2
        return x, y

    def with_overrides(self, **overrides) -> GameConfig:
        """Return a copy with the given fields replaced."""
        return replace(self, **overrides)

    def to_dict(self) -> dict:
        """Serialize to a plain dict (enums become their values)."""
        d = asdict(self)
        d["wall_mode"] = self.wall_mode.value
        d["spawn_strategy"] = self.spawn_strategy.value
        return d

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
