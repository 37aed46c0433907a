"""Tick-based game engine composing grid, snake, and food logic."""

from __future__ import annotations

import enum
import logging
from collections.abc import Iterable

import numpy as np

from grid_snake.config import EngineConfig
from grid_snake.events import Event, FoodEaten, GameOver, LevelUp
from grid_snake.food import FoodSpawner
from grid_snake.grid import CellType, Grid
from grid_snake.snake import Direction, Snake

logger = logging.getLogger(__name__)


class GameStatus(str, enum.Enum):
    """Lifecycle states of one play session."""

    READY = "ready"
    RUNNING = "running"
    OVER = "over"


class GameEngine:
    """Single-player, tick-based snake engine.

    The engine owns the grid, snake, and food spawner. It has no notion of
    wall-clock time: a scheduler calls :meth:`tick` at ``1 / speed``
    second intervals and input handlers buffer intents through
    :meth:`set_pending_direction` in between.
    """

    def __init__(
        self,
        cols: int | None = None,
        rows: int | None = None,
        config: EngineConfig | None = None,
        seed: int | None = None,
    ) -> None:
        self.config = config or EngineConfig()
        self.rng = np.random.default_rng(
            seed if seed is not None else self.config.seed,
        )
        self.grid = Grid(self.config.cols, self.config.rows)
        self.reset(cols, rows)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def reset(self, cols: int | None = None, rows: int | None = None) -> None:
        """Replace all session state with a fresh game on a new grid.

        Omitted dimensions keep the current grid's. Raises
        :class:`~grid_snake.errors.InvalidGridError` for non-positive
        dimensions, leaving the previous state untouched.
        """
        grid = Grid(
            cols if cols is not None else self.grid.cols,
            rows if rows is not None else self.grid.rows,
        )
        self.grid = grid

        head_x, head_y = grid.center
        self.snake = Snake.spawn(head_x, head_y, self.config.initial_length)
        for x, y in self.snake.body:
            grid.set(x, y, CellType.SNAKE)

        self.current_direction = Direction.RIGHT
        self.pending_direction = Direction.RIGHT
        self.score = 0
        self.level = 1
        self.speed = self.config.base_speed
        self.status = GameStatus.READY
        self.tick_count = 0
        self.events: list[Event] = []

        self.food_spawner = FoodSpawner(
            grid, max_attempts=self.config.max_food_attempts, rng=self.rng,
        )
        self.food_spawner.place()

    def start(self) -> None:
        """Begin play. Restarts on the same grid after a game over."""
        if self.status == GameStatus.RUNNING:
            return
        if self.status == GameStatus.OVER:
            self.reset()
        self.status = GameStatus.RUNNING
        logger.debug("Game started on %dx%d grid.", self.grid.cols, self.grid.rows)

    def restore(
        self,
        snake: Iterable[tuple[int, int]],
        direction: Direction = Direction.RIGHT,
        food: tuple[int, int] | None = None,
        score: int = 0,
    ) -> None:
        """Load an explicit board layout and leave the game running.

        Level and speed are derived from *score*. When *food* is omitted a
        new food cell is placed.
        """
        new_snake = Snake(snake)
        for x, y in new_snake.body:
            if not self.grid.in_bounds(x, y):
                raise ValueError(f"Snake cell {(x, y)} is out of bounds.")
        if food is not None:
            if not self.grid.in_bounds(*food):
                raise ValueError(f"Food cell {food} is out of bounds.")
            if new_snake.occupies(*food):
                raise ValueError("Food must not overlap the snake.")
        if score < 0:
            raise ValueError("score must be non-negative.")

        self.grid.clear()
        self.snake = new_snake
        for x, y in new_snake.body:
            self.grid.set(x, y, CellType.SNAKE)

        self.food_spawner.position = None
        if food is None:
            self.food_spawner.place()
        else:
            self.grid.set(food[0], food[1], CellType.FOOD)
            self.food_spawner.position = (food[0], food[1])

        self.current_direction = direction
        self.pending_direction = direction
        self.score = score
        levels = score // self.config.points_per_level
        self.level = levels + 1
        self.speed = self.config.base_speed * self.config.speed_multiplier**levels
        self.status = GameStatus.RUNNING
        self.events = []

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def set_pending_direction(self, direction: Direction) -> None:
        """Buffer a direction for the next tick; the latest valid one wins.

        A direction that exactly reverses the current one is discarded.
        """
        if self.status == GameStatus.OVER:
            return
        if direction.is_reverse_of(self.current_direction):
            return
        self.pending_direction = direction

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------

    def tick(self) -> dict:
        """Advance the game by one cell.

        Returns the snapshot dict. Outside ``RUNNING`` nothing changes and
        the snapshot carries no events.
        """
        self.events = []
        if self.status != GameStatus.RUNNING:
            return self.get_state()

        self.tick_count += 1
        self.current_direction = self.pending_direction
        new_x, new_y = self.snake.next_head(self.current_direction)

        if not self.grid.in_bounds(new_x, new_y):
            self._end("wall")
            return self.get_state()

        # The tail is still painted here, so moving into it is fatal.
        if self.grid.get(new_x, new_y) == CellType.SNAKE:
            self._end("self")
            return self.get_state()

        ate = self.food_spawner.position == (new_x, new_y)
        self.snake.push_head((new_x, new_y))
        self.grid.set(new_x, new_y, CellType.SNAKE)

        if ate:
            self.food_spawner.position = None
            self._on_food_eaten()
            if self.food_spawner.place() is None:
                self._end("board_full")
        else:
            tail_x, tail_y = self.snake.pop_tail()
            self.grid.set(tail_x, tail_y, CellType.EMPTY)

        return self.get_state()

    def _on_food_eaten(self) -> None:
        self.score += 1
        self.events.append(FoodEaten(self.score))
        if self.score % self.config.points_per_level == 0:
            self.speed *= self.config.speed_multiplier
            self.level = self.score // self.config.points_per_level + 1
            self.events.append(LevelUp(self.level, self.speed))
            logger.info(
                "Level %d reached at score %d (speed %.2f).",
                self.level, self.score, self.speed,
            )

    def _end(self, reason: str) -> None:
        """Mark the game as over and emit the terminal event."""
        self.status = GameStatus.OVER
        self.events.append(GameOver(self.score, self.level, reason))
        logger.info(
            "Game over (%s) at tick %d with score %d, level %d.",
            reason, self.tick_count, self.score, self.level,
        )

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def food(self) -> tuple[int, int] | None:
        return self.food_spawner.position

    @property
    def snake_cells(self) -> list[tuple[int, int]]:
        return list(self.snake.body)

    def get_state(self) -> dict:
        """Return the full, serializable snapshot."""
        return {
            "tick": self.tick_count,
            "status": self.status.value,
            "score": self.score,
            "level": self.level,
            "speed": self.speed,
            "snake": self.snake.to_list(),
            "food": self.food_spawner.to_list(),
            "direction": self.current_direction.name.lower(),
            "grid": self.grid.to_dict(),
            "events": [e.to_dict() for e in self.events],
        }
