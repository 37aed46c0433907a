"""Engine and presentation configuration."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EngineConfig:
    """Tunable constants for one game engine.

    ``mobile_mode`` only switches presentation constants (cell size and
    swipe threshold); the simulation itself behaves identically.
    Supports JSON serialization for reproducibility.
    """

    # Board
    cols: int = 20
    rows: int = 20
    initial_length: int = 3

    # Pace
    base_speed: float = 10.0
    speed_multiplier: float = 1.5
    points_per_level: int = 10

    # Food
    max_food_attempts: int = 100
    seed: int | None = None

    # Presentation / input
    grid_size: int = 20
    min_swipe_distance: float = 50.0
    max_swipe_duration_ms: float | None = None
    mobile_mode: bool = False
    mobile_grid_size: int = 15
    mobile_min_swipe_distance: float = 30.0

    def __post_init__(self) -> None:
        if self.cols < 1 or self.rows < 1:
            raise ValueError("cols and rows must each be at least 1.")
        if self.initial_length < 1:
            raise ValueError("initial_length must be at least 1.")
        if self.base_speed <= 0:
            raise ValueError("base_speed must be positive.")
        if self.speed_multiplier <= 0:
            raise ValueError("speed_multiplier must be positive.")
        if self.points_per_level < 1:
            raise ValueError("points_per_level must be at least 1.")
        if self.max_food_attempts < 1:
            raise ValueError("max_food_attempts must be at least 1.")
        if self.grid_size < 1 or self.mobile_grid_size < 1:
            raise ValueError("grid_size must be at least 1.")

    @property
    def cell_size(self) -> int:
        """Logical cell size in pixels for the active layout."""
        return self.mobile_grid_size if self.mobile_mode else self.grid_size

    @property
    def swipe_threshold(self) -> float:
        """Minimum swipe displacement for the active layout."""
        if self.mobile_mode:
            return self.mobile_min_swipe_distance
        return self.min_swipe_distance

    def grid_for_viewport(self, width: float, height: float) -> tuple[int, int]:
        """Return how many whole cells fit in a pixel viewport."""
        cols = int(width // self.cell_size)
        rows = int(height // self.cell_size)
        return cols, rows

    def to_dict(self) -> dict:
        return asdict(self)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> EngineConfig:
        """Load config from a JSON file."""
        raw = json.loads(Path(path).read_text())
        return cls(**raw)

    def replace(self, **overrides) -> EngineConfig:
        """Return a copy with *overrides* applied, skipping ``None`` values.

        ``None`` means "not given", so an override can never clear an
        optional field such as ``seed``; use :func:`dataclasses.replace`
        for that.
        """
        d = self.to_dict()
        d.update({k: v for k, v in overrides.items() if v is not None})
        return EngineConfig(**d)
