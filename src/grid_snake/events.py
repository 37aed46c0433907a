"""Lifecycle signals emitted by the engine during a tick."""

from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class FoodEaten:
    score: int

    type = "food_eaten"

    def to_dict(self) -> dict:
        return {"type": self.type, **asdict(self)}


@dataclass(frozen=True)
class LevelUp:
    level: int
    speed: float

    type = "level_up"

    def to_dict(self) -> dict:
        return {"type": self.type, **asdict(self)}


@dataclass(frozen=True)
class GameOver:
    """The snake hit a wall or itself, or filled the board.

    ``reason`` is one of ``"wall"``, ``"self"`` or ``"board_full"``.
    """

    score: int
    level: int
    reason: str

    type = "game_over"

    def to_dict(self) -> dict:
        return {"type": self.type, **asdict(self)}


Event = FoodEaten | LevelUp | GameOver
