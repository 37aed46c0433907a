"""High-score persistence."""

from __future__ import annotations

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_KEY = "snakeHighScore"


class HighScoreStore:
    """Key-value high-score store; subclasses provide ``_read``/``_write``."""

    def get(self) -> int:
        return self._read()

    def record(self, score: int) -> bool:
        """Store *score* if it beats the current best. Returns True if so."""
        best = self._read()
        if score <= best:
            return False
        self._write(score)
        logger.info("New high score %d (previous %d).", score, best)
        return True

    def _read(self) -> int:
        raise NotImplementedError

    def _write(self, score: int) -> None:
        raise NotImplementedError


class MemoryHighScoreStore(HighScoreStore):
    def __init__(self, initial: int = 0) -> None:
        self._value = initial

    def _read(self) -> int:
        return self._value

    def _write(self, score: int) -> None:
        self._value = score


class JsonHighScoreStore(HighScoreStore):
    """Stores the high score under *key* in a JSON object on disk.

    A missing or unreadable file counts as a high score of 0, and other
    keys already in the file are preserved on write. The file is read once;
    later reads come from memory and writes refresh the cached value.
    """

    def __init__(self, path: str | Path, key: str = DEFAULT_KEY) -> None:
        self.path = Path(path)
        self.key = key
        self._cached: int | None = None

    def _load(self) -> dict:
        try:
            data = json.loads(self.path.read_text())
        except FileNotFoundError:
            return {}
        except (OSError, json.JSONDecodeError):
            logger.warning("Unreadable high-score file %s; treating as empty.", self.path)
            return {}
        return data if isinstance(data, dict) else {}

    def _read(self) -> int:
        if self._cached is None:
            value = self._load().get(self.key, 0)
            try:
                self._cached = max(int(value), 0)
            except (TypeError, ValueError):
                self._cached = 0
        return self._cached

    def _write(self, score: int) -> None:
        data = self._load()
        data[self.key] = score
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2))
        self._cached = score
