"""Tests for environment settings."""

import pytest

from unoflip.config import DEFAULT_SAVE_PATH, Settings
from unoflip.engine.game import WINNING_SCORE


def test_defaults() -> None:
    settings = Settings.from_env({})
    assert settings.save_path == DEFAULT_SAVE_PATH
    assert settings.log_level == "WARNING"
    assert settings.seed is None
    assert settings.target_score == WINNING_SCORE


def test_values_from_environment() -> None:
    settings = Settings.from_env({
        "UNOFLIP_SAVE_PATH": "/tmp/game.sav",
        "UNOFLIP_LOG_LEVEL": "debug",
        "UNOFLIP_SEED": "12",
        "UNOFLIP_TARGET_SCORE": " 250 ",
    })
    assert settings == Settings("/tmp/game.sav", "DEBUG", 12, 250)


def test_blank_values_fall_back_to_defaults() -> None:
    settings = Settings.from_env({"UNOFLIP_SEED": "", "UNOFLIP_SAVE_PATH": ""})
    assert settings.seed is None
    assert settings.save_path == DEFAULT_SAVE_PATH


@pytest.mark.parametrize(
    "env",
    [{"UNOFLIP_SEED": "abc"}, {"UNOFLIP_TARGET_SCORE": "1.5"}, {"UNOFLIP_TARGET_SCORE": "0"}],
)
def test_invalid_values_rejected(env) -> None:
    with pytest.raises(ValueError, match=next(iter(env))):
        Settings.from_env(env)
