"""Tests for the tick scheduling helpers."""

import asyncio

import pytest

from grid_snake.config import EngineConfig
from grid_snake.engine import GameEngine, GameStatus
from grid_snake.scheduler import FrameThrottle, run_tick_loop


class TestFrameThrottle:
    def test_gates_by_speed(self):
        throttle = FrameThrottle(lambda: 10.0)
        assert not throttle.should_tick(16)
        assert not throttle.should_tick(99)
        assert throttle.should_tick(100)
        assert not throttle.should_tick(150)
        assert throttle.should_tick(200)

    def test_follows_speed_changes(self):
        speed = {"value": 10.0}
        throttle = FrameThrottle(lambda: speed["value"])
        assert throttle.should_tick(100)
        speed["value"] = 20.0
        assert throttle.should_tick(150)

    def test_reset(self):
        throttle = FrameThrottle(lambda: 10.0)
        assert throttle.should_tick(500)
        throttle.reset()
        assert throttle.last_tick_ms == 0.0

    def test_drives_engine(self):
        engine = GameEngine(20, 20, seed=0)
        engine.start()
        throttle = FrameThrottle(lambda: engine.speed)
        for frame in range(0, 1000, 16):
            if throttle.should_tick(frame):
                engine.tick()
        # 10 ticks/s over ~1 second of 60 fps frames.
        assert 8 <= engine.tick_count <= 10


class TestRunTickLoop:
    @pytest.mark.asyncio
    async def test_runs_until_game_over(self):
        engine = GameEngine(config=EngineConfig(cols=5, rows=5, base_speed=500.0))
        engine.start()
        snapshots: list[dict] = []

        async def collect(state):
            snapshots.append(state)

        await asyncio.wait_for(
            run_tick_loop(engine, asyncio.Lock(), collect), timeout=5,
        )
        assert engine.status == GameStatus.OVER
        assert snapshots[-1]["status"] == "over"
        assert [s["tick"] for s in snapshots] == list(range(1, len(snapshots) + 1))

    @pytest.mark.asyncio
    async def test_not_running_returns_immediately(self):
        engine = GameEngine(5, 5, seed=0)
        called = []

        async def collect(state):
            called.append(state)

        await asyncio.wait_for(
            run_tick_loop(engine, asyncio.Lock(), collect), timeout=1,
        )
        assert called == []

    @pytest.mark.asyncio
    async def test_stops_when_engine_reset(self):
        engine = GameEngine(config=EngineConfig(cols=30, rows=5, base_speed=200.0))
        engine.start()
        lock = asyncio.Lock()

        async def on_snapshot(state):
            if state["tick"] == 2:
                engine.reset()

        await asyncio.wait_for(run_tick_loop(engine, lock, on_snapshot), timeout=5)
        assert engine.status == GameStatus.READY
