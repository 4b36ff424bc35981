"""Tests for the game configuration dataclasses."""

import json

import pytest

from snake_arcade.config import GameConfig, ScoreRules


class TestScoreRules:
    def test_defaults(self):
        rules = ScoreRules()
        assert rules.regular == 10
        assert rules.bonus == 50
        assert rules.poison == -10

    def test_classic(self):
        rules = ScoreRules.classic()
        assert rules.regular == 1
        assert rules.bonus == 50


class TestGameConfig:
    def test_defaults(self):
        cfg = GameConfig()
        assert cfg.grid_width == 35
        assert cfg.grid_height == 30
        assert cfg.initial_speed == 200
        assert cfg.min_speed == 50
        assert cfg.poison_threshold == 4
        assert cfg.bonus_threshold == 5
        assert cfg.poison_lifetime_ms == 4000
        assert cfg.game_over_interval_ms == 300

    def test_default_validates(self):
        GameConfig().validate()

    @pytest.mark.parametrize(
        ("overrides", "message"),
        [
            ({"screen_width": 60}, "at least 4"),
            ({"block_size": 0}, "block_size"),
            ({"initial_length": 1}, "initial_length"),
            ({"min_speed": 300}, "min_speed"),
            ({"game_over_interval_ms": 0}, "game_over_interval_ms"),
            ({"bonus_threshold": 0}, "thresholds"),
            ({"poison_lifetime_ms": -1}, "poison_lifetime_ms"),
        ],
    )
    def test_invalid_values(self, overrides, message):
        with pytest.raises(ValueError, match=message):
            GameConfig(**overrides).validate()

    def test_to_dict(self):
        d = GameConfig().to_dict()
        assert d["screen_width"] == 700
        assert d["scoring"]["bonus"] == 50
        assert isinstance(json.dumps(d), str)

    def test_save_and_load(self, tmp_path):
        cfg = GameConfig(
            screen_width=400, initial_speed=150,
            scoring=ScoreRules(regular=3),
        )
        path = tmp_path / "nested" / "config.json"
        cfg.save(path)
        assert path.exists()

        loaded = GameConfig.load(path)
        assert loaded == cfg
        assert loaded.grid_width == 20
        assert loaded.scoring.regular == 3
