"""Tick scheduling collaborators that drive a :class:`GameEngine`."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from grid_snake.engine import GameEngine, GameStatus

logger = logging.getLogger(__name__)

SnapshotCallback = Callable[[dict], Awaitable[None]]


class FrameThrottle:
    """Gate a per-frame callback down to ``speed`` ticks per second.

    Meant for hosts that are called on every display frame: each frame
    asks :meth:`should_tick` with the frame timestamp and only advances the
    engine when a full ``1 / speed`` interval has elapsed since the last
    accepted frame.
    """

    def __init__(self, speed_source: Callable[[], float]) -> None:
        self._speed_source = speed_source
        self.last_tick_ms = 0.0

    def should_tick(self, now_ms: float) -> bool:
        speed = self._speed_source()
        if (now_ms - self.last_tick_ms) / 1000 < 1 / speed:
            return False
        self.last_tick_ms = now_ms
        return True

    def reset(self) -> None:
        self.last_tick_ms = 0.0


async def run_tick_loop(
    engine: GameEngine,
    lock: asyncio.Lock,
    on_snapshot: SnapshotCallback,
) -> None:
    """Tick *engine* until it stops running.

    The interval is re-read from ``engine.speed`` before every sleep, so a
    level-up speeds up the following tick rather than the current one.
    """
    while engine.status == GameStatus.RUNNING:
        await asyncio.sleep(1 / engine.speed)
        async with lock:
            if engine.status != GameStatus.RUNNING:
                break
            state = engine.tick()
        await on_snapshot(state)
    logger.debug("Tick loop exited with status %s.", engine.status.value)
