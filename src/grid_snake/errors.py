"""Exception types raised by the game engine."""

from __future__ import annotations


class GridSnakeError(Exception):
    """Base class for engine errors."""


class InvalidGridError(GridSnakeError, ValueError):
    """Grid dimensions are not positive integers."""

    def __init__(self, cols: int, rows: int) -> None:
        super().__init__(
            f"Grid dimensions must be at least 1x1, got {cols}x{rows}."
        )
        self.cols = cols
        self.rows = rows


class FoodPlacementExhausted(GridSnakeError):
    """Random food sampling gave up after the configured attempts."""

    def __init__(self, attempts: int) -> None:
        super().__init__(f"No free cell found after {attempts} samples.")
        self.attempts = attempts
