"""Translate key names, commands, and swipes into direction intents."""

from __future__ import annotations

import logging
from typing import Any

from grid_snake.config import EngineConfig
from grid_snake.engine import GameEngine, GameStatus
from grid_snake.snake import Direction

logger = logging.getLogger(__name__)

_KEY_MAP: dict[str, Direction] = {
    "arrowup": Direction.UP,
    "arrowdown": Direction.DOWN,
    "arrowleft": Direction.LEFT,
    "arrowright": Direction.RIGHT,
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
}


def direction_from_key(key: str) -> Direction | None:
    """Map an arrow-key name or direction word to a :class:`Direction`."""
    return _KEY_MAP.get(key.strip().lower())


def classify_swipe(
    dx: float,
    dy: float,
    min_distance: float = 50.0,
    duration_ms: float | None = None,
    max_duration_ms: float | None = None,
) -> Direction | None:
    """Classify a touch displacement by its dominant axis.

    Screen coordinates are assumed, so a positive *dy* is a swipe down.
    Returns ``None`` for taps (displacement not above *min_distance*) and,
    when both *duration_ms* and *max_duration_ms* are given, for gestures
    held longer than the window.
    """
    if (
        duration_ms is not None
        and max_duration_ms is not None
        and duration_ms > max_duration_ms
    ):
        return None

    if abs(dx) > abs(dy):
        if abs(dx) <= min_distance:
            return None
        return Direction.RIGHT if dx > 0 else Direction.LEFT

    if abs(dy) <= min_distance:
        return None
    return Direction.DOWN if dy > 0 else Direction.UP


class InputAdapter:
    """Feeds one engine with intents decoded from client input."""

    def __init__(
        self, engine: GameEngine, config: EngineConfig | None = None,
    ) -> None:
        self.engine = engine
        self.config = config or engine.config

    def submit(self, direction: Direction | None) -> bool:
        """Forward *direction* unless it reverses the current heading.

        Returns True if the intent reached the engine. A finished game
        accepts nothing.
        """
        if direction is None or self.engine.status == GameStatus.OVER:
            return False
        if direction.is_reverse_of(self.engine.current_direction):
            return False
        self.engine.set_pending_direction(direction)
        return True

    def handle_key(self, key: str) -> bool:
        return self.submit(direction_from_key(key))

    def handle_swipe(
        self, dx: float, dy: float, duration_ms: float | None = None,
    ) -> bool:
        direction = classify_swipe(
            dx,
            dy,
            min_distance=self.config.swipe_threshold,
            duration_ms=duration_ms,
            max_duration_ms=self.config.max_swipe_duration_ms,
        )
        return self.submit(direction)

    def handle_message(self, msg: Any) -> bool:
        """Dispatch a decoded client message.

        Accepted shapes are ``{"direction": "up"}``, ``{"key": "ArrowUp"}``
        and ``{"swipe": {"dx": .., "dy": .., "duration_ms": ..}}``.
        Anything else is ignored.
        """
        if not isinstance(msg, dict):
            return False

        for field_name in ("direction", "key"):
            value = msg.get(field_name)
            if isinstance(value, str):
                return self.handle_key(value)

        swipe = msg.get("swipe")
        if isinstance(swipe, dict):
            dx, dy = swipe.get("dx"), swipe.get("dy")
            duration = swipe.get("duration_ms")
            if not _is_number(dx) or not _is_number(dy):
                return False
            if duration is not None and not _is_number(duration):
                duration = None
            return self.handle_swipe(float(dx), float(dy), duration)

        logger.debug("Ignoring unrecognized input message: %r", msg)
        return False


def _is_number(value: Any) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)
