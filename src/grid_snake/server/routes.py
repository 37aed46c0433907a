"""REST API route handlers for session lifecycle management."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request

from grid_snake.server.models import (
    CreateGameRequest,
    DirectionRequest,
    GameSummary,
    HighScoreResponse,
)
from grid_snake.server.session_manager import (
    GameSession,
    RateLimitExceeded,
    SessionManager,
)

router = APIRouter(prefix="/games", tags=["games"])
score_router = APIRouter(tags=["scores"])


def _get_manager(request: Request) -> SessionManager:
    return request.app.state.session_manager


def _summary(session: GameSession) -> GameSummary:
    engine = session.engine
    return GameSummary(
        game_id=session.game_id,
        status=engine.status.value,
        cols=engine.grid.cols,
        rows=engine.grid.rows,
        score=engine.score,
        level=engine.level,
        speed=engine.speed,
    )


@router.post("", status_code=201)
async def create_game(body: CreateGameRequest, request: Request) -> GameSummary:
    """Create a new session in the ready state."""
    manager = _get_manager(request)
    client_ip = request.client.host if request.client else "unknown"
    try:
        session = manager.create_session(
            cols=body.cols,
            rows=body.rows,
            viewport_width=body.viewport_width,
            viewport_height=body.viewport_height,
            mobile_mode=body.mobile_mode,
            base_speed=body.base_speed,
            seed=body.seed,
            client_ip=client_ip,
        )
    except RateLimitExceeded as exc:
        raise HTTPException(status_code=429, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return _summary(session)


@router.get("")
async def list_games(request: Request) -> list[GameSummary]:
    """List all retained sessions."""
    return [_summary(s) for s in _get_manager(request).list_sessions()]


@router.get("/{game_id}")
async def get_game(game_id: str, request: Request) -> dict:
    """Get session metadata and the current snapshot."""
    manager = _get_manager(request)
    session = manager.get_session(game_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Game not found.")
    return {
        **_summary(session).model_dump(),
        "connected": len(session.sockets),
        "state": manager.snapshot(session),
    }


@router.post("/{game_id}/start", status_code=200)
async def start_game(game_id: str, request: Request) -> dict:
    """Start the session, or restart it after a game over."""
    manager = _get_manager(request)
    try:
        state = await manager.start(game_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return {"status": "started", "game_id": game_id, "state": state}


@router.post("/{game_id}/reset", status_code=200)
async def reset_game(game_id: str, request: Request) -> dict:
    """Stop the session and return it to the ready state."""
    manager = _get_manager(request)
    try:
        state = await manager.reset(game_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return {"status": "reset", "game_id": game_id, "state": state}


@router.post("/{game_id}/direction", status_code=200)
async def set_direction(
    game_id: str, body: DirectionRequest, request: Request,
) -> dict:
    """Buffer a direction intent for the next tick."""
    manager = _get_manager(request)
    try:
        accepted = await manager.submit_direction(game_id, body.direction)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return {"accepted": accepted}


@score_router.get("/highscore")
async def get_high_score(request: Request) -> HighScoreResponse:
    """Return the best score recorded so far."""
    return HighScoreResponse(high_score=_get_manager(request).high_scores.get())
