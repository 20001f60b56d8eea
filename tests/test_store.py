"""Test score persistence and configuration loading."""

import json

import pytest
from pydantic import ValidationError

from src.session import (
    GameConfig,
    GameSession,
    JsonScoreStore,
    Player,
    ScoreRecord,
    ScoreStore,
    SessionStats,
    load_config,
)
from src.utils import ManualClock


def record(name, score):
    return ScoreRecord(name=name, age=10, difficulty="easy", score=score, level=2,
                       date="2026-01-01T00:00:00+00:00")


class TestScoreStore:
    """Test cases for the in-memory store."""

    def test_keeps_top_ten_descending(self):
        store = ScoreStore()
        for score in [50, 10, 90, 30, 70, 20, 100, 0, 60, 80, 40, 110]:
            store.add_score(record("p", score))

        scores = [r.score for r in store.leaderboard()]
        assert scores == [110, 100, 90, 80, 70, 60, 50, 40, 30, 20]

    def test_custom_limit(self):
        store = ScoreStore()
        for score in range(5):
            store.add_score(record("p", score), limit=3)
        assert [r.score for r in store.leaderboard()] == [4, 3, 2]

    def test_leaderboard_is_a_copy(self):
        store = ScoreStore()
        store.add_score(record("p", 5))
        store.leaderboard()[0].score = 999
        assert store.leaderboard()[0].score == 5

    def test_stats_round_trip(self):
        store = ScoreStore()
        store.save_stats("Ada", SessionStats(score=40, level=3))
        assert store.load_stats("Ada") == SessionStats(score=40, level=3)
        assert store.load_stats("Bob") is None

    def test_corrupt_stats_ignored(self):
        store = ScoreStore(stats={"Ada": {"score": -5, "level": 0}})
        assert store.load_stats("Ada") is None


class TestJsonScoreStore:
    """Test cases for the file-backed store."""

    def test_persists_across_instances(self, tmp_path):
        path = tmp_path / "scores.json"
        store = JsonScoreStore(path=path)
        store.add_score(record("Ada", 75))
        store.save_stats("Ada", SessionStats(score=75, level=2))

        reloaded = JsonScoreStore(path=path)
        assert [r.name for r in reloaded.leaderboard()] == ["Ada"]
        assert reloaded.load_stats("Ada").level == 2

    def test_missing_file_is_empty(self, tmp_path):
        store = JsonScoreStore(path=tmp_path / "nope.json")
        assert store.leaderboard() == []
        assert store.load_stats("Ada") is None

    def test_corrupt_file_is_empty(self, tmp_path):
        path = tmp_path / "scores.json"
        path.write_text("{not json")
        store = JsonScoreStore(path=path)
        assert store.leaderboard() == []

    def test_wrong_shape_is_empty(self, tmp_path):
        path = tmp_path / "scores.json"
        path.write_text(json.dumps(["a", "b"]))
        assert JsonScoreStore(path=path).leaderboard() == []

    def test_bad_entries_skipped(self, tmp_path):
        path = tmp_path / "scores.json"
        path.write_text(json.dumps({
            "leaderboard": [{"name": "Ada", "score": 10}, {"score": "lots"}, "junk"],
            "stats": [],
        }))
        store = JsonScoreStore(path=path)
        assert [r.name for r in store.leaderboard()] == ["Ada"]
        assert store.stats == {}

    def test_creates_parent_directory(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "scores.json"
        JsonScoreStore(path=path).add_score(record("Ada", 1))
        assert path.exists()

    def test_session_writes_leaderboard(self, tmp_path):
        """A completed level lands in the file."""
        path = tmp_path / "scores.json"
        session = GameSession.create(
            store=JsonScoreStore(path=path), clock=ManualClock(), seed=1,
            auto_advance=False, pacing_delay=0,
        )
        session.set_player(Player(name="Ada", age=8))
        session.complete_level()

        data = json.loads(path.read_text())
        assert data["leaderboard"][0]["level"] == 2
        assert data["stats"]["Ada"]["level"] == 2


class TestConfig:
    """Test cases for GameConfig and YAML loading."""

    def test_defaults(self):
        config = GameConfig()
        assert config.grid_size == 12
        assert config.word_count == 12
        assert config.combo_window_ms == 10_000
        assert config.powerups["hint"].cost == 100
        assert config.powerups["time-extension"].cooldown_ms == 45_000
        assert config.powerups["shuffle"].cost == 200

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "game.yaml"
        path.write_text(
            "grid_size: 15\n"
            "seed: 42\n"
            "powerups:\n"
            "  hint:\n"
            "    cost: 50\n"
            "    cooldown_ms: 1000\n"
        )
        config = load_config(path)
        assert config.grid_size == 15
        assert config.seed == 42
        assert config.powerups["hint"].cost == 50
        assert config.powerups["shuffle"].cost == 200

    def test_empty_yaml_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path) == GameConfig()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")

    def test_invalid_values(self):
        with pytest.raises(ValidationError):
            GameConfig(shuffle_ratio=1.5)
        with pytest.raises(ValidationError):
            GameConfig(powerups={"teleport": {"cost": 1, "cooldown_ms": 1}})

    def test_config_drives_session(self):
        session = GameSession.create(
            config=GameConfig(grid_size=8, seed=3, pacing_delay=0),
            clock=ManualClock(),
        )
        puzzle = session.set_player(Player(name="Ada"))
        assert puzzle.size == 8
