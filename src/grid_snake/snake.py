"""Snake body and movement directions."""

from __future__ import annotations

import enum
from collections import deque
from collections.abc import Iterable


class Direction(enum.Enum):
    """Cardinal movement directions with (dx, dy) values.

    ``y`` grows downward, so ``UP`` is ``(0, -1)``.
    """

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]

    def is_reverse_of(self, other: Direction) -> bool:
        """Return True if *self* points exactly against *other*."""
        return _OPPOSITES[other] is self


# Pairs that would cause an instant 180° reversal.
_OPPOSITES: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


class Snake:
    """A snake represented as an ordered deque of ``(x, y)`` cells.

    The head is ``body[0]``; the tail is ``body[-1]``.
    """

    def __init__(self, cells: Iterable[tuple[int, int]]) -> None:
        self.body: deque[tuple[int, int]] = deque(
            (int(x), int(y)) for x, y in cells
        )
        if not self.body:
            raise ValueError("Snake length must be at least 1.")
        if len(set(self.body)) != len(self.body):
            raise ValueError("Snake cells must not overlap.")

    @classmethod
    def spawn(cls, head_x: int, head_y: int, length: int = 3) -> Snake:
        """Lay out a horizontal snake whose body trails toward x = 0.

        Segments that would fall left of column 0 are clamped onto it and
        the resulting duplicates dropped, so narrow grids get a shorter
        snake rather than an overlapping one.
        """
        if length < 1:
            raise ValueError("Snake length must be at least 1.")
        cells: list[tuple[int, int]] = []
        for i in range(length):
            cell = (max(head_x - i, 0), head_y)
            if cell not in cells:
                cells.append(cell)
        return cls(cells)

    def __len__(self) -> int:
        return len(self.body)

    @property
    def head(self) -> tuple[int, int]:
        """Return the head coordinate."""
        return self.body[0]

    @property
    def tail(self) -> tuple[int, int]:
        return self.body[-1]

    def next_head(self, direction: Direction) -> tuple[int, int]:
        """Compute the next head position without moving."""
        x, y = self.head
        return x + direction.dx, y + direction.dy

    def push_head(self, cell: tuple[int, int]) -> None:
        self.body.appendleft(cell)

    def pop_tail(self) -> tuple[int, int]:
        """Remove and return the tail cell."""
        return self.body.pop()

    def occupies(self, x: int, y: int) -> bool:
        """Check whether the snake occupies a given cell."""
        return (x, y) in self.body

    def to_list(self) -> list[list[int]]:
        """Serialize body cells head first."""
        return [[x, y] for x, y in self.body]
