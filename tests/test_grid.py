"""Tests for the Grid module."""

import numpy as np
import pytest

from snake_arcade.grid import Grid


class TestGridInit:
    def test_default_dimensions(self):
        grid = Grid()
        assert grid.width == 35
        assert grid.height == 30
        assert grid.cell_count == 35 * 30

    def test_minimum_size_enforced(self):
        with pytest.raises(ValueError, match="at least 4"):
            Grid(width=3, height=4)
        with pytest.raises(ValueError, match="at least 4"):
            Grid(width=4, height=3)


class TestGridOperations:
    def test_random_cell_in_bounds(self):
        grid = Grid(width=5, height=4)
        rng = np.random.default_rng(0)
        for _ in range(200):
            x, y = grid.random_cell(rng)
            assert 0 <= x < 5
            assert 0 <= y < 4
            assert isinstance(x, int)
            assert isinstance(y, int)

    def test_random_cell_deterministic(self):
        grid = Grid(width=10, height=10)
        a = [grid.random_cell(np.random.default_rng(7)) for _ in range(3)]
        b = [grid.random_cell(np.random.default_rng(7)) for _ in range(3)]
        assert a == b

    def test_to_dict(self):
        assert Grid(width=6, height=5).to_dict() == {"width": 6, "height": 5}
