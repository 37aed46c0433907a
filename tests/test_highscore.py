"""Tests for high-score persistence."""

import json

from grid_snake.highscore import JsonHighScoreStore, MemoryHighScoreStore


class TestMemoryStore:
    def test_starts_at_zero(self):
        assert MemoryHighScoreStore().get() == 0

    def test_record_only_improvements(self):
        store = MemoryHighScoreStore(initial=5)
        assert not store.record(3)
        assert not store.record(5)
        assert store.record(8)
        assert store.get() == 8


class TestJsonStore:
    def test_missing_file(self, tmp_path):
        assert JsonHighScoreStore(tmp_path / "none.json").get() == 0

    def test_record_persists(self, tmp_path):
        path = tmp_path / "sub" / "scores.json"
        assert JsonHighScoreStore(path).record(12)
        assert JsonHighScoreStore(path).get() == 12
        assert json.loads(path.read_text()) == {"snakeHighScore": 12}

    def test_lower_score_not_written(self, tmp_path):
        path = tmp_path / "scores.json"
        store = JsonHighScoreStore(path)
        store.record(10)
        assert not store.record(4)
        assert store.get() == 10

    def test_corrupt_file_reads_zero(self, tmp_path):
        path = tmp_path / "scores.json"
        path.write_text("{not json")
        store = JsonHighScoreStore(path)
        assert store.get() == 0
        assert store.record(1)
        assert store.get() == 1

    def test_non_numeric_value_reads_zero(self, tmp_path):
        path = tmp_path / "scores.json"
        path.write_text(json.dumps({"snakeHighScore": "lots"}))
        assert JsonHighScoreStore(path).get() == 0

    def test_other_keys_preserved(self, tmp_path):
        path = tmp_path / "scores.json"
        path.write_text(json.dumps({"theme": "dark"}))
        JsonHighScoreStore(path).record(3)
        assert json.loads(path.read_text()) == {"theme": "dark", "snakeHighScore": 3}

    def test_custom_key(self, tmp_path):
        path = tmp_path / "scores.json"
        JsonHighScoreStore(path, key="hiscore").record(7)
        assert json.loads(path.read_text()) == {"hiscore": 7}

    def test_file_read_once(self, tmp_path):
        path = tmp_path / "scores.json"
        path.write_text(json.dumps({"snakeHighScore": 4}))
        store = JsonHighScoreStore(path)
        assert store.get() == 4
        path.write_text(json.dumps({"snakeHighScore": 99}))
        assert store.get() == 4

    def test_record_refreshes_cached_value(self, tmp_path):
        path = tmp_path / "scores.json"
        store = JsonHighScoreStore(path)
        assert store.get() == 0
        assert store.record(9)
        path.unlink()
        assert store.get() == 9
