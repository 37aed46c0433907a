"""Tests for the engine configuration dataclass."""

import dataclasses
import json

import pytest

from grid_snake.config import EngineConfig


class TestEngineConfig:
    def test_defaults(self):
        cfg = EngineConfig()
        assert cfg.cols == 20
        assert cfg.rows == 20
        assert cfg.base_speed == 10.0
        assert cfg.speed_multiplier == 1.5
        assert cfg.points_per_level == 10
        assert cfg.initial_length == 3
        assert cfg.max_food_attempts == 100
        assert cfg.min_swipe_distance == 50.0
        assert cfg.mobile_mode is False

    @pytest.mark.parametrize(
        "kwargs, match",
        [
            ({"cols": 0}, "cols"),
            ({"initial_length": 0}, "initial_length"),
            ({"base_speed": 0}, "base_speed"),
            ({"speed_multiplier": -1.0}, "speed_multiplier"),
            ({"points_per_level": 0}, "points_per_level"),
            ({"max_food_attempts": 0}, "max_food_attempts"),
            ({"grid_size": 0}, "grid_size"),
        ],
    )
    def test_validation(self, kwargs, match):
        with pytest.raises(ValueError, match=match):
            EngineConfig(**kwargs)

    def test_frozen(self):
        cfg = EngineConfig()
        with pytest.raises(AttributeError):
            cfg.cols = 5


class TestPresentationConstants:
    def test_desktop(self):
        cfg = EngineConfig()
        assert cfg.cell_size == 20
        assert cfg.swipe_threshold == 50.0

    def test_mobile(self):
        cfg = EngineConfig(mobile_mode=True)
        assert cfg.cell_size == 15
        assert cfg.swipe_threshold == 30.0

    def test_grid_for_viewport(self):
        assert EngineConfig().grid_for_viewport(400, 310) == (20, 15)

    def test_grid_for_viewport_mobile(self):
        cfg = EngineConfig(mobile_mode=True)
        assert cfg.grid_for_viewport(400, 300) == (26, 20)


class TestConfigSerialization:
    def test_to_dict_serializable(self):
        assert isinstance(json.dumps(EngineConfig().to_dict()), str)

    def test_save_and_load(self, tmp_path):
        cfg = EngineConfig(cols=12, base_speed=6.5, mobile_mode=True, seed=4)
        path = tmp_path / "nested" / "engine.json"
        cfg.save(path)
        assert path.exists()
        assert EngineConfig.load(path) == cfg

    def test_replace_skips_none(self):
        cfg = EngineConfig(cols=12)
        updated = cfg.replace(cols=None, rows=7, base_speed=None)
        assert updated.cols == 12
        assert updated.rows == 7
        assert updated.base_speed == 10.0

    def test_replace_cannot_clear_seed(self):
        cfg = EngineConfig(seed=7)
        assert cfg.replace(seed=None).seed == 7
        assert dataclasses.replace(cfg, seed=None).seed is None
