"""Food placement logic."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from grid_snake.errors import FoodPlacementExhausted
from grid_snake.grid import CellType

if TYPE_CHECKING:
    from grid_snake.grid import Grid

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 100


class FoodSpawner:
    """Places the single food cell on a free grid cell.

    Sampling is uniform over the whole board with rejection of occupied
    cells. Once *max_attempts* samples have been rejected the spawner
    falls back to the grid centre, then to the first free cell in
    row-major order, so placement always terminates.
    """

    def __init__(
        self,
        grid: Grid,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        rng: np.random.Generator | None = None,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1.")
        self.grid = grid
        self.max_attempts = max_attempts
        self.rng = rng if rng is not None else np.random.default_rng()
        self.position: tuple[int, int] | None = None

    def place(self) -> tuple[int, int] | None:
        """Place food on a free cell and return it.

        Returns ``None`` when the board has no free cell left.
        """
        self.clear()
        try:
            pos = self._sample()
        except FoodPlacementExhausted as exc:
            pos = self._fallback()
            logger.warning("%s Falling back to %s.", exc, pos)

        if pos is not None:
            self.grid.set(pos[0], pos[1], CellType.FOOD)
        self.position = pos
        return pos

    def clear(self) -> None:
        """Remove the current food from the grid, if any."""
        if self.position is None:
            return
        x, y = self.position
        if self.grid.get(x, y) == CellType.FOOD:
            self.grid.set(x, y, CellType.EMPTY)
        self.position = None

    def _sample(self) -> tuple[int, int]:
        for _ in range(self.max_attempts):
            x = int(self.rng.integers(self.grid.cols))
            y = int(self.rng.integers(self.grid.rows))
            if self.grid.is_empty(x, y):
                return x, y
        raise FoodPlacementExhausted(self.max_attempts)

    def _fallback(self) -> tuple[int, int] | None:
        cx, cy = self.grid.center
        if self.grid.is_empty(cx, cy):
            return cx, cy
        empty = self.grid.empty_cells()
        if not empty:
            return None
        return empty[0]

    def to_list(self) -> list[int] | None:
        if self.position is None:
            return None
        return list(self.position)
