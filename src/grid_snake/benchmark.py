"""Headless simulation throughput benchmark."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

import numpy as np

from grid_snake.config import EngineConfig
from grid_snake.engine import GameEngine, GameStatus
from grid_snake.snake import Direction

logger = logging.getLogger(__name__)

_DIRECTIONS = list(Direction)


@dataclass
class BenchmarkResult:
    """Results from a throughput benchmark run."""

    total_games: int
    total_ticks: int
    best_score: int
    wall_time_seconds: float
    games_per_second: float
    ticks_per_second: float

    def summary(self) -> str:
        return (
            f"Benchmark: {self.total_games} games, {self.total_ticks} ticks "
            f"in {self.wall_time_seconds:.2f}s (best score "
            f"{self.best_score}) | "
            f"{self.games_per_second:.1f} games/s, "
            f"{self.ticks_per_second:.1f} ticks/s"
        )


def benchmark_throughput(
    *,
    num_games: int = 100,
    cols: int = 20,
    rows: int = 20,
    max_ticks: int = 500,
    seed: int = 42,
) -> BenchmarkResult:
    """Measure raw engine throughput with random intents.

    Each game runs until it ends or *max_ticks* ticks have passed. Intents
    are drawn from a seeded NumPy generator, so results are reproducible
    apart from the timings.
    """
    if num_games < 1:
        raise ValueError("num_games must be at least 1.")
    if max_ticks < 1:
        raise ValueError("max_ticks must be at least 1.")

    rng = np.random.default_rng(seed)
    config = EngineConfig(cols=cols, rows=rows)

    total_ticks = 0
    best_score = 0
    start = time.perf_counter()

    for _ in range(num_games):
        engine = GameEngine(config=config, seed=int(rng.integers(2**31)))
        engine.start()
        for _ in range(max_ticks):
            engine.set_pending_direction(_DIRECTIONS[int(rng.integers(4))])
            engine.tick()
            total_ticks += 1
            if engine.status == GameStatus.OVER:
                break
        best_score = max(best_score, engine.score)

    elapsed = time.perf_counter() - start
    result = BenchmarkResult(
        total_games=num_games,
        total_ticks=total_ticks,
        best_score=best_score,
        wall_time_seconds=elapsed,
        games_per_second=num_games / max(elapsed, 1e-9),
        ticks_per_second=total_ticks / max(elapsed, 1e-9),
    )
    logger.info(result.summary())
    return result
