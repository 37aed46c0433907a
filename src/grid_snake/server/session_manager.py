"""In-memory session registry, lifecycle management, and async tick loops."""

from __future__ import annotations

import asyncio
import json
import logging
import time
import uuid
from dataclasses import dataclass, field

from starlette.websockets import WebSocket, WebSocketState

from grid_snake.config import EngineConfig
from grid_snake.engine import GameEngine, GameStatus
from grid_snake.highscore import HighScoreStore, MemoryHighScoreStore
from grid_snake.input import InputAdapter
from grid_snake.scheduler import run_tick_loop

logger = logging.getLogger(__name__)

# Simple rate limit: max sessions created per IP within the window.
_RATE_LIMIT_WINDOW = 60.0  # seconds
_RATE_LIMIT_MAX = 10
_RATE_COMPACT_INTERVAL = 60.0  # seconds between stale-key sweeps
_MAX_FINISHED_SESSIONS = 100
_IDLE_SESSION_TTL = 600.0  # seconds a READY session may sit unused


class RateLimitExceeded(Exception):
    """Too many sessions created from one client."""


@dataclass
class GameSession:
    """One engine plus everything needed to drive it."""

    game_id: str
    engine: GameEngine
    adapter: InputAdapter
    sockets: list[WebSocket] = field(default_factory=list)
    created_at: float = field(default_factory=time.monotonic)
    last_active: float = field(default_factory=time.monotonic)
    finished_at: float | None = None
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    _task: asyncio.Task | None = field(default=None, repr=False)

    @property
    def status(self) -> GameStatus:
        return self.engine.status

    @property
    def loop_running(self) -> bool:
        return self._task is not None and not self._task.done()


class SessionManager:
    """Central registry owning every game session.

    Each engine is mutated only while its session lock is held, so tick
    consumption and incoming intents are serialized.
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        high_scores: HighScoreStore | None = None,
        max_finished_sessions: int = _MAX_FINISHED_SESSIONS,
        idle_session_ttl: float = _IDLE_SESSION_TTL,
    ) -> None:
        if max_finished_sessions < 0:
            raise ValueError("max_finished_sessions must be >= 0.")
        if idle_session_ttl < 0:
            raise ValueError("idle_session_ttl must be >= 0.")
        self.config = config or EngineConfig()
        self.high_scores = high_scores or MemoryHighScoreStore()
        self._sessions: dict[str, GameSession] = {}
        self._rate_limits: dict[str, list[float]] = {}
        self._last_rate_compact: float = 0.0
        self._max_finished_sessions = max_finished_sessions
        self._idle_session_ttl = idle_session_ttl

    def _check_rate_limit(self, client_ip: str) -> bool:
        """Return True if the client is within rate limits."""
        now = time.monotonic()
        timestamps = self._rate_limits.get(client_ip, [])
        timestamps = [t for t in timestamps if now - t < _RATE_LIMIT_WINDOW]
        if timestamps:
            self._rate_limits[client_ip] = timestamps
        else:
            self._rate_limits.pop(client_ip, None)
        self._compact_rate_limits(now)
        return len(timestamps) < _RATE_LIMIT_MAX

    def _compact_rate_limits(self, now: float) -> None:
        """Remove rate-limit entries whose timestamps have all expired."""
        if now - self._last_rate_compact < _RATE_COMPACT_INTERVAL:
            return
        self._last_rate_compact = now
        stale_ips = [
            ip for ip, ts in self._rate_limits.items()
            if all(now - t >= _RATE_LIMIT_WINDOW for t in ts)
        ]
        for ip in stale_ips:
            del self._rate_limits[ip]
        if stale_ips:
            logger.info(
                "Compacted %d stale rate-limit entries.", len(stale_ips),
            )

    def _record_creation(self, client_ip: str) -> None:
        self._rate_limits.setdefault(client_ip, []).append(time.monotonic())

    # ------------------------------------------------------------------
    # Registry
    # ------------------------------------------------------------------

    def create_session(
        self,
        cols: int | None = None,
        rows: int | None = None,
        viewport_width: float | None = None,
        viewport_height: float | None = None,
        mobile_mode: bool = False,
        base_speed: float | None = None,
        seed: int | None = None,
        client_ip: str = "unknown",
    ) -> GameSession:
        """Create a session in the ``READY`` state and return it.

        Arguments left as ``None`` fall back to the manager's config, so a
        server started with a fixed ``seed`` hands it to every session.
        """
        if not self._check_rate_limit(client_ip):
            raise RateLimitExceeded("Rate limit exceeded. Try again later.")
        self._expire_idle_sessions()

        config = self.config.replace(
            mobile_mode=mobile_mode, base_speed=base_speed, seed=seed,
        )
        if viewport_width is not None and viewport_height is not None:
            vp_cols, vp_rows = config.grid_for_viewport(
                viewport_width, viewport_height,
            )
            cols = cols if cols is not None else vp_cols
            rows = rows if rows is not None else vp_rows

        engine = GameEngine(cols, rows, config=config)
        game_id = uuid.uuid4().hex[:12]
        session = GameSession(
            game_id=game_id, engine=engine, adapter=InputAdapter(engine, config),
        )
        self._sessions[game_id] = session
        self._record_creation(client_ip)
        logger.info(
            "Session %s created (%dx%d, speed %.1f).",
            game_id, engine.grid.cols, engine.grid.rows, engine.speed,
        )
        return session

    def get_session(self, game_id: str) -> GameSession | None:
        return self._sessions.get(game_id)

    def _require(self, game_id: str) -> GameSession:
        session = self._sessions.get(game_id)
        if session is None:
            raise KeyError(f"Game {game_id} not found.")
        return session

    def list_sessions(self) -> list[GameSession]:
        return list(self._sessions.values())

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def start(self, game_id: str) -> dict:
        """Start or restart a session and launch its tick loop."""
        session = self._require(game_id)
        async with session.lock:
            if session.loop_running:
                raise ValueError("Game is already running.")
            session.engine.start()
            session.finished_at = None
            session.last_active = time.monotonic()
            state = self.snapshot(session)
        session._task = asyncio.create_task(self._tick_loop(session))
        logger.info("Session %s started.", game_id)
        await self._broadcast(session, state)
        return state

    async def reset(self, game_id: str) -> dict:
        """Stop the tick loop and put the session back in ``READY``."""
        session = self._require(game_id)
        await self._stop_loop(session)
        async with session.lock:
            session.engine.reset()
            session.finished_at = None
            session.last_active = time.monotonic()
            state = self.snapshot(session)
        await self._broadcast(session, state)
        return state

    async def submit_direction(self, game_id: str, key: str) -> bool:
        """Forward a key name or direction word to the session's engine."""
        session = self._require(game_id)
        async with session.lock:
            return session.adapter.handle_key(key)

    async def handle_message(self, session: GameSession, msg: object) -> bool:
        async with session.lock:
            return session.adapter.handle_message(msg)

    def snapshot(self, session: GameSession) -> dict:
        state = session.engine.get_state()
        state["game_id"] = session.game_id
        state["high_score"] = self.high_scores.get()
        return state

    async def _stop_loop(self, session: GameSession) -> None:
        task = session._task
        if task is not None and not task.done():
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)
        session._task = None

    async def _tick_loop(self, session: GameSession) -> None:
        """Run the scheduler for one session, broadcasting every tick."""

        async def on_snapshot(state: dict) -> None:
            for event in state["events"]:
                if event["type"] == "game_over":
                    await asyncio.to_thread(self.high_scores.record, event["score"])
                    session.finished_at = time.monotonic()
            state["game_id"] = session.game_id
            state["high_score"] = self.high_scores.get()
            await self._broadcast(session, state)

        try:
            await run_tick_loop(session.engine, session.lock, on_snapshot)
        except asyncio.CancelledError:
            logger.info("Tick loop cancelled for session %s.", session.game_id)
        except Exception:
            logger.exception("Tick loop error in session %s.", session.game_id)
        finally:
            if session.status == GameStatus.OVER:
                self._prune_finished_sessions()

    def _prune_finished_sessions(self) -> None:
        """Bound retained finished sessions to avoid unbounded growth."""
        finished = [
            s for s in self._sessions.values()
            if s.status == GameStatus.OVER and not s.sockets
        ]
        overflow = len(finished) - self._max_finished_sessions
        if overflow <= 0:
            return

        finished.sort(
            key=lambda s: s.finished_at if s.finished_at is not None else s.created_at,
        )
        for stale in finished[:overflow]:
            self._sessions.pop(stale.game_id, None)
        logger.info(
            "Pruned %d finished sessions (retaining up to %d).",
            overflow,
            self._max_finished_sessions,
        )

    def _expire_idle_sessions(self) -> None:
        """Drop READY sessions nobody has started or watched within the TTL."""
        now = time.monotonic()
        idle = [
            s for s in self._sessions.values()
            if s.status == GameStatus.READY
            and not s.loop_running
            and not s.sockets
            and now - s.last_active >= self._idle_session_ttl
        ]
        for stale in idle:
            self._sessions.pop(stale.game_id, None)
        if idle:
            logger.info("Expired %d idle sessions.", len(idle))

    async def _broadcast(self, session: GameSession, state: dict) -> None:
        """Send a snapshot to every socket attached to the session."""
        payload = json.dumps(state, separators=(",", ":"))
        dead: list[WebSocket] = []

        # Iterate over a copy so disconnect handlers can mutate the list.
        for ws in list(session.sockets):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.send_text(payload)
            except Exception:
                dead.append(ws)

        for ws in dead:
            if ws in session.sockets:
                session.sockets.remove(ws)

    async def cleanup(self) -> None:
        """Cancel all running tick loops and release rate-limit state."""
        for session in self._sessions.values():
            if session._task and not session._task.done():
                session._task.cancel()
        tasks = [
            s._task for s in self._sessions.values()
            if s._task and not s._task.done()
        ]
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._rate_limits.clear()
        logger.info("SessionManager cleanup complete.")
