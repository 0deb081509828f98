"""Grid representation for the snake simulation."""

from __future__ import annotations

import enum
from collections.abc import Iterable

import numpy as np

Cell = tuple[int, int]


class WallMode(enum.Enum):
    """Defines behavior when the snake reaches the grid boundary."""

    DEATH = "death"
    WRAP = "wrap"


class Grid:
    """Width×height coordinate space with a configurable boundary policy.

    Coordinates are ``(x, y)`` pairs: ``x`` grows to the right and ``y``
    grows downwards. The grid holds no entity state of its own; occupancy
    is supplied by the caller whenever it matters.
    """

    def __init__(
        self,
        width: int = 20,
        height: int = 20,
        wall_mode: WallMode = WallMode.WRAP,
    ) -> None:
        if width < 1 or height < 1:
            raise ValueError("Grid dimensions must be positive.")
        if width * height < 2:
            raise ValueError("Grid must have at least 2 cells.")
        self.width = width
        self.height = height
        self.wall_mode = WallMode(wall_mode)

    @property
    def cell_count(self) -> int:
        return self.width * self.height

    @property
    def center(self) -> Cell:
        """Return the cell at the middle of the grid."""
        return self.width // 2, self.height // 2

    def contains(self, cell: Cell) -> bool:
        """Check whether a coordinate lies within the grid."""
        x, y = cell
        return 0 <= x < self.width and 0 <= y < self.height

    def is_out_of_bounds(self, cell: Cell) -> bool:
        return not self.contains(cell)

    def wrap(self, cell: Cell) -> Cell:
        """Wrap coordinates around the grid edges."""
        x, y = cell
        return x % self.width, y % self.height

    def resolve(self, cell: Cell) -> Cell | None:
        """Apply the boundary policy to a candidate cell.

        Returns the (possibly wrapped) cell, or ``None`` when the cell is
        outside the grid and the policy is :attr:`WallMode.DEATH`.
        """
        if self.contains(cell):
            return cell
        if self.wall_mode == WallMode.WRAP:
            return self.wrap(cell)
        return None

    def all_cells(self) -> list[Cell]:
        """Return every cell in row-major order."""
        return [(x, y) for y in range(self.height) for x in range(self.width)]

    def occupancy_mask(self, occupied: Iterable[Cell]) -> np.ndarray:
        """Return a ``(height, width)`` boolean array marking *occupied*.

        Cells outside the grid are ignored.
        """
        mask = np.zeros((self.height, self.width), dtype=bool)
        for x, y in occupied:
            if 0 <= x < self.width and 0 <= y < self.height:
                mask[y, x] = True
        return mask

    def free_cells(self, occupied: Iterable[Cell]) -> list[Cell]:
        """Return all cells not in *occupied*, in row-major order."""
        ys, xs = np.nonzero(~self.occupancy_mask(occupied))
        return list(zip(xs.tolist(), ys.tolist(), strict=True))

    def to_dict(self) -> dict:
        """Serialize grid dimensions and policy to a dictionary."""
        return {
            "width": self.width,
            "height": self.height,
            "wall_mode": self.wall_mode.value,
        }
