# cat_jump/tests/test_config.py
import pytest

from cat_jump.game.config import (
    ConfigError, Difficulty, DifficultyPreset, DIFFICULTY_SETTINGS, EngineConfig, JumpMode, parse_difficulty
)
from cat_jump.game.engine import CatJumpEngine


def test_presets_match_the_table():
    assert DIFFICULTY_SETTINGS[Difficulty.EASY] == DifficultyPreset(4.0, 0.0003, 400.0, 800.0)
    assert DIFFICULTY_SETTINGS[Difficulty.MEDIUM] == DifficultyPreset(5.0, 0.0005, 350.0, 700.0)
    assert DIFFICULTY_SETTINGS[Difficulty.HARD] == DifficultyPreset(6.5, 0.0007, 300.0, 600.0)


def test_presets_are_immutable():
    with pytest.raises(Exception):
        DIFFICULTY_SETTINGS[Difficulty.EASY].initial_speed = 99.0


@pytest.mark.parametrize("value", ["", "extreme", None, 1, "Easy!"])
def test_parse_difficulty_rejects(value):
    with pytest.raises(ConfigError) as exc:
        parse_difficulty(value)
    assert "Easy, Medium, Hard" in str(exc.value)


def test_config_error_is_a_value_error():
    assert issubclass(ConfigError, ValueError)


@pytest.mark.parametrize("overrides", [
    {"gravity": 0.8},
    {"cat_w": 0},
    {"fish_spawn_chance": 1.5},
    {"fish_lanes": ()},
    {"initial_lives": 0},
    {"hitbox_inset": 60},
    {"invincibility_ms": -1},
    {"jump_mode": "twice"},
    {"max_game_speed": float("inf")},
    {"invincibility_ms": float("nan")},
    {"points_per_fish": float("inf")},
    {"width": float("nan")},
    {"fish_lanes": (30.0, float("nan"))},
])
def test_engine_rejects_bad_config(overrides):
    with pytest.raises(ConfigError):
        CatJumpEngine(config=EngineConfig(**overrides), seed=1)


def test_bad_preset_is_rejected():
    presets = dict(DIFFICULTY_SETTINGS)
    presets[Difficulty.EASY] = DifficultyPreset(4.0, 0.0003, 800.0, 400.0)
    with pytest.raises(ConfigError):
        EngineConfig(difficulties=presets).validate()

    del presets[Difficulty.EASY]
    with pytest.raises(ConfigError):
        EngineConfig(difficulties=presets).validate()

    # Hard starts at 6.5, above this cap
    with pytest.raises(ConfigError):
        EngineConfig(max_game_speed=5.0).validate()


@pytest.mark.parametrize("preset", [
    DifficultyPreset(float("nan"), 0.0003, 400.0, 800.0),
    DifficultyPreset(4.0, float("inf"), 400.0, 800.0),
    DifficultyPreset(4.0, 0.0003, float("nan"), 800.0),
    DifficultyPreset(4.0, 0.0003, 400.0, float("inf")),
])
def test_non_finite_preset_is_rejected(preset):
    presets = dict(DIFFICULTY_SETTINGS)
    presets[Difficulty.EASY] = preset
    with pytest.raises(ConfigError):
        CatJumpEngine(config=EngineConfig(difficulties=presets), seed=1)


def test_overrides_reach_the_engine():
    eng = CatJumpEngine(config=EngineConfig(initial_lives=5, jump_mode="press"), seed=1)
    assert eng.config.jump_mode is JumpMode.PRESS
    eng.start("Easy")
    assert eng.lives == 5
