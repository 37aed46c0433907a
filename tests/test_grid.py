"""Tests for the Grid module."""

import numpy as np
import pytest

from grid_snake.errors import InvalidGridError
from grid_snake.grid import CellType, Grid


class TestGridInit:
    def test_default_dimensions(self):
        grid = Grid()
        assert grid.cols == 20
        assert grid.rows == 20

    def test_custom_dimensions(self):
        grid = Grid(cols=10, rows=8)
        assert grid.cols == 10
        assert grid.rows == 8
        assert grid.cells.shape == (8, 10)

    def test_one_by_one_allowed(self):
        grid = Grid(cols=1, rows=1)
        assert grid.size == 1

    @pytest.mark.parametrize("cols, rows", [(0, 5), (5, 0), (-1, 3)])
    def test_non_positive_dimensions_rejected(self, cols, rows):
        with pytest.raises(InvalidGridError, match="at least 1x1"):
            Grid(cols=cols, rows=rows)

    def test_invalid_grid_error_is_value_error(self):
        with pytest.raises(ValueError):
            Grid(cols=0, rows=0)

    def test_all_cells_start_empty(self):
        grid = Grid(cols=5, rows=5)
        assert np.all(grid.cells == CellType.EMPTY)


class TestGridOperations:
    def test_set_and_get_use_xy(self):
        grid = Grid(cols=6, rows=4)
        grid.set(5, 1, CellType.SNAKE)
        assert grid.get(5, 1) == CellType.SNAKE
        assert grid.cells[1, 5] == CellType.SNAKE

    def test_clear(self):
        grid = Grid(cols=5, rows=5)
        grid.set(0, 0, CellType.SNAKE)
        grid.set(1, 1, CellType.FOOD)
        grid.clear()
        assert np.all(grid.cells == CellType.EMPTY)

    def test_in_bounds(self):
        grid = Grid(cols=5, rows=3)
        assert grid.in_bounds(0, 0)
        assert grid.in_bounds(4, 2)
        assert not grid.in_bounds(-1, 0)
        assert not grid.in_bounds(5, 0)
        assert not grid.in_bounds(0, 3)

    def test_center(self):
        assert Grid(cols=5, rows=5).center == (2, 2)
        assert Grid(cols=4, rows=7).center == (2, 3)

    def test_empty_cells_row_major(self):
        grid = Grid(cols=2, rows=2)
        grid.set(0, 0, CellType.SNAKE)
        assert grid.empty_cells() == [(1, 0), (0, 1), (1, 1)]

    def test_count(self):
        grid = Grid(cols=4, rows=4)
        grid.set(0, 0, CellType.SNAKE)
        grid.set(1, 0, CellType.SNAKE)
        grid.set(3, 3, CellType.FOOD)
        assert grid.count(CellType.SNAKE) == 2
        assert grid.count(CellType.FOOD) == 1
        assert grid.count(CellType.EMPTY) == 13


class TestGridSerialization:
    def test_to_dict(self):
        assert Grid(cols=7, rows=3).to_dict() == {"cols": 7, "rows": 3}
