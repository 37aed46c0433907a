"""Grid Snake: single-player snake engine and session host."""

from grid_snake.config import EngineConfig
from grid_snake.engine import GameEngine, GameStatus
from grid_snake.errors import (
    FoodPlacementExhausted,
    GridSnakeError,
    InvalidGridError,
)
from grid_snake.events import FoodEaten, GameOver, LevelUp
from grid_snake.grid import CellType, Grid
from grid_snake.snake import Direction, Snake

__all__ = [
    "CellType",
    "Direction",
    "EngineConfig",
    "FoodEaten",
    "FoodPlacementExhausted",
    "GameEngine",
    "GameOver",
    "GameStatus",
    "Grid",
    "GridSnakeError",
    "InvalidGridError",
    "LevelUp",
    "Snake",
]
