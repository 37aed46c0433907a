"""Grid representation for the snake game."""

from __future__ import annotations

import enum

import numpy as np

from grid_snake.errors import InvalidGridError


class CellType(enum.IntEnum):
    """Integer codes stored in the occupancy array."""

    EMPTY = 0
    SNAKE = 1
    FOOD = 2


class Grid:
    """NumPy-backed occupancy grid of ``cols x rows`` cells.

    Cells are addressed as ``(x, y)`` with the origin at the top-left.
    The backing array is indexed ``[y, x]`` so that each row of the array
    is one row of the board.
    """

    def __init__(self, cols: int = 20, rows: int = 20) -> None:
        if cols < 1 or rows < 1:
            raise InvalidGridError(cols, rows)
        self.cols = cols
        self.rows = rows
        self.cells = np.zeros((rows, cols), dtype=np.int8)

    @property
    def center(self) -> tuple[int, int]:
        """Return the centre cell, rounding toward the origin."""
        return self.cols // 2, self.rows // 2

    @property
    def size(self) -> int:
        return self.cols * self.rows

    def clear(self) -> None:
        """Reset all cells to empty."""
        self.cells[:] = CellType.EMPTY

    def in_bounds(self, x: int, y: int) -> bool:
        """Check whether a coordinate lies within the grid."""
        return 0 <= x < self.cols and 0 <= y < self.rows

    def get(self, x: int, y: int) -> CellType:
        """Return the cell type at the given coordinate."""
        return CellType(self.cells[y, x])

    def set(self, x: int, y: int, cell_type: CellType) -> None:
        """Set the cell type at the given coordinate."""
        self.cells[y, x] = cell_type

    def is_empty(self, x: int, y: int) -> bool:
        return self.cells[y, x] == CellType.EMPTY

    def empty_cells(self) -> list[tuple[int, int]]:
        """Return all empty cells in row-major scan order."""
        ys, xs = np.where(self.cells == CellType.EMPTY)
        return list(zip(xs.tolist(), ys.tolist(), strict=True))

    def count(self, cell_type: CellType) -> int:
        return int(np.count_nonzero(self.cells == cell_type))

    def to_dict(self) -> dict:
        """Serialize grid dimensions to a dictionary."""
        return {"cols": self.cols, "rows": self.rows}
