"""Food placement logic."""

from __future__ import annotations

import enum
import logging
from collections.abc import Collection
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from snake_sim.grid import Cell, Grid

logger = logging.getLogger(__name__)


class SpawnStrategy(enum.Enum):
    """How :class:`FoodSpawner` searches for a free cell."""

    ENUMERATE = "enumerate"
    SAMPLE = "sample"


@dataclass(frozen=True)
class Food:
    """A single piece of food on the grid."""

    cell: Cell
    value: int = 10
    spawned_at: float = 0.0

    def age(self, timestamp: float) -> float:
        """Milliseconds since the food appeared."""
        return max(0.0, timestamp - self.spawned_at)

    def to_dict(self) -> dict:
        return {
            "cell": list(self.cell),
            "value": self.value,
            "spawned_at": self.spawned_at,
        }


class FoodSpawner:
    """Chooses a free cell uniformly at random.

    Uses a seeded NumPy RNG for deterministic, reproducible placement.
    ``SAMPLE`` tries random cells first and falls back to a full scan
    after *max_attempts* misses, so both strategies terminate and both
    detect a full board.
    """

    def __init__(
        self,
        rng: np.random.Generator | None = None,
        strategy: SpawnStrategy = SpawnStrategy.ENUMERATE,
        max_attempts: int = 64,
    ) -> None:
        if max_attempts < 0:
            raise ValueError("max_attempts must be >= 0.")
        self.rng = rng if rng is not None else np.random.default_rng()
        self.strategy = SpawnStrategy(strategy)
        self.max_attempts = max_attempts

    def spawn(self, grid: Grid, occupied: Collection[Cell]) -> Cell | None:
        """Pick an unoccupied cell.

        Returns ``None`` when every cell is occupied (the board is full).
        """
        if self.strategy == SpawnStrategy.SAMPLE:
            cell = self._sample(grid, occupied)
            if cell is not None:
                return cell
            logger.debug(
                "Rejection sampling missed %d times; scanning the grid.",
                self.max_attempts,
            )
        return self._enumerate(grid, occupied)

    def place(
        self,
        grid: Grid,
        occupied: Collection[Cell],
        value: int = 10,
        timestamp: float = 0.0,
    ) -> Food | None:
        """Spawn and wrap the result in a :class:`Food` record."""
        cell = self.spawn(grid, occupied)
        if cell is None:
            return None
        return Food(cell=cell, value=value, spawned_at=timestamp)

    def _sample(self, grid: Grid, occupied: Collection[Cell]) -> Cell | None:
        if len(occupied) >= grid.cell_count:
            return None
        for _ in range(self.max_attempts):
            x = int(self.rng.integers(grid.width))
            y = int(self.rng.integers(grid.height))
            if (x, y) not in occupied:
                return x, y
        return None

    def _enumerate(self, grid: Grid, occupied: Collection[Cell]) -> Cell | None:
        free = grid.free_cells(occupied)
        if not free:
            logger.warning("No empty cells available for food spawning.")
            return None
        return free[int(self.rng.integers(len(free)))]
