"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI

from grid_snake.config import EngineConfig
from grid_snake.highscore import (
    HighScoreStore,
    JsonHighScoreStore,
    MemoryHighScoreStore,
)
from grid_snake.server.routes import router, score_router
from grid_snake.server.session_manager import SessionManager
from grid_snake.server.websocket import ws_router


def create_app(
    config: EngineConfig | None = None,
    high_score_path: str | Path | None = None,
) -> FastAPI:
    """Build and return the FastAPI application.

    With *high_score_path* the best score survives restarts in a JSON
    file; otherwise it is kept in memory.
    """
    high_scores: HighScoreStore = (
        JsonHighScoreStore(high_score_path)
        if high_score_path is not None else MemoryHighScoreStore()
    )

    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        yield
        await app.state.session_manager.cleanup()

    app = FastAPI(
        title="Grid Snake API", version="0.1.0", lifespan=_lifespan,
    )
    app.state.session_manager = SessionManager(config, high_scores)
    app.include_router(router)
    app.include_router(score_router)
    app.include_router(ws_router)
    return app
