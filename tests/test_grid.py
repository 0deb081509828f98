"""Tests for the Grid module."""

import numpy as np
import pytest

from snake_sim.grid import Grid, WallMode


class TestGridInit:
    def test_default_dimensions(self):
        grid = Grid()
        assert grid.width == 20
        assert grid.height == 20
        assert grid.wall_mode == WallMode.WRAP

    def test_custom_dimensions(self):
        grid = Grid(width=10, height=8, wall_mode=WallMode.DEATH)
        assert grid.width == 10
        assert grid.height == 8
        assert grid.cell_count == 80
        assert grid.wall_mode == WallMode.DEATH

    def test_wall_mode_from_string(self):
        assert Grid(wall_mode="death").wall_mode == WallMode.DEATH

    def test_zero_sized_grid_rejected(self):
        with pytest.raises(ValueError, match="positive"):
            Grid(width=0, height=5)
        with pytest.raises(ValueError, match="positive"):
            Grid(width=5, height=0)

    def test_single_cell_grid_rejected(self):
        with pytest.raises(ValueError, match="at least 2"):
            Grid(width=1, height=1)

    def test_two_cell_grid_allowed(self):
        grid = Grid(width=2, height=1)
        assert grid.cell_count == 2

    def test_center(self):
        assert Grid(width=20, height=20).center == (10, 10)
        assert Grid(width=5, height=3).center == (2, 1)


class TestGridBoundaries:
    def test_contains(self):
        grid = Grid(width=5, height=4)
        assert grid.contains((0, 0))
        assert grid.contains((4, 3))
        assert not grid.contains((-1, 0))
        assert not grid.contains((5, 0))
        assert not grid.contains((0, 4))

    def test_is_out_of_bounds(self):
        grid = Grid(width=5, height=5)
        assert grid.is_out_of_bounds((5, 2))
        assert not grid.is_out_of_bounds((2, 2))

    def test_wrap(self):
        grid = Grid(width=5, height=4)
        assert grid.wrap((-1, 0)) == (4, 0)
        assert grid.wrap((0, -1)) == (0, 3)
        assert grid.wrap((5, 4)) == (0, 0)
        assert grid.wrap((2, 2)) == (2, 2)

    def test_resolve_wrap(self):
        grid = Grid(width=5, height=5, wall_mode=WallMode.WRAP)
        assert grid.resolve((5, 2)) == (0, 2)
        assert grid.resolve((2, -1)) == (2, 4)

    def test_resolve_death(self):
        grid = Grid(width=5, height=5, wall_mode=WallMode.DEATH)
        assert grid.resolve((5, 2)) is None
        assert grid.resolve((2, 2)) == (2, 2)


class TestGridOccupancy:
    def test_all_cells_row_major(self):
        grid = Grid(width=3, height=2)
        assert grid.all_cells() == [
            (0, 0), (1, 0), (2, 0), (0, 1), (1, 1), (2, 1),
        ]

    def test_occupancy_mask(self):
        grid = Grid(width=4, height=3)
        mask = grid.occupancy_mask([(1, 2), (3, 0)])
        assert mask.shape == (3, 4)
        assert mask[2, 1]
        assert mask[0, 3]
        assert mask.sum() == 2

    def test_occupancy_mask_ignores_outside_cells(self):
        grid = Grid(width=4, height=4)
        mask = grid.occupancy_mask([(9, 9), (-1, 0)])
        assert not np.any(mask)

    def test_free_cells(self):
        grid = Grid(width=4, height=4)
        assert len(grid.free_cells([])) == 16
        free = grid.free_cells({(0, 0), (1, 1)})
        assert len(free) == 14
        assert (0, 0) not in free
        assert (1, 1) not in free
        assert (2, 1) in free

    def test_free_cells_full_grid(self):
        grid = Grid(width=3, height=3)
        assert grid.free_cells(grid.all_cells()) == []


class TestGridSerialization:
    def test_to_dict(self):
        grid = Grid(width=5, height=6, wall_mode=WallMode.DEATH)
        assert grid.to_dict() == {
            "width": 5,
            "height": 6,
            "wall_mode": "death",
        }
