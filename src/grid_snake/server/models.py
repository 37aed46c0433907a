"""Pydantic models for API request/response schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator


class CreateGameRequest(BaseModel):
    """Request body for POST /games.

    Either give ``cols``/``rows`` directly or a pixel viewport
    (``viewport_width``/``viewport_height``) that is divided into cells.
    """

    cols: int | None = Field(default=None, ge=1, le=500)
    rows: int | None = Field(default=None, ge=1, le=500)
    viewport_width: float | None = Field(default=None, gt=0)
    viewport_height: float | None = Field(default=None, gt=0)
    mobile_mode: bool = False
    base_speed: float | None = Field(default=None, gt=0, le=120)
    seed: int | None = None

    @model_validator(mode="after")
    def _viewport_pairs(self) -> CreateGameRequest:
        if (self.viewport_width is None) != (self.viewport_height is None):
            raise ValueError(
                "viewport_width and viewport_height must be given together."
            )
        return self


class DirectionRequest(BaseModel):
    """Request body for POST /games/{game_id}/direction."""

    direction: str = Field(min_length=1, max_length=16)


class GameSummary(BaseModel):
    """Compact game info for list endpoints."""

    game_id: str
    status: str
    cols: int
    rows: int
    score: int
    level: int
    speed: float


class HighScoreResponse(BaseModel):
    high_score: int


class ErrorResponse(BaseModel):
    """Standard error envelope."""

    detail: str
