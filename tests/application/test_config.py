from pathlib import Path

import pytest
from pydantic import ValidationError

from vocabb.application.config import AppConfig, resolve_config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, mock_home):
    for name in ["VOCABB_QUIZ_LENGTH", "VOCABB_STORE_PATH", "VOCABB_BACKEND"]:
        monkeypatch.delenv(name, raising=False)


def test_defaults(mock_home):
    config = resolve_config()

    assert config.backend == "yaml"
    assert config.quiz_length == 10
    assert config.due_buffer_seconds == 1.0
    assert config.forecast_days == 7
    assert config.default_category == "All"
    assert config.store_path == mock_home / ".local/share/vocabb/vocabulary.yaml"


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("VOCABB_QUIZ_LENGTH", "5")
    monkeypatch.setenv("VOCABB_BACKEND", "memory")

    config = resolve_config()

    assert config.quiz_length == 5
    assert config.backend == "memory"


def test_cli_overrides_win_and_none_is_ignored(monkeypatch, tmp_path):
    monkeypatch.setenv("VOCABB_QUIZ_LENGTH", "5")

    config = resolve_config({"quiz_length": 3, "store_path": None, "seed": 42})

    assert config.quiz_length == 3
    assert config.seed == 42
    assert config.store_path.name == "vocabulary.yaml"


def test_toml_file_is_read(mock_home, monkeypatch):
    config_dir = mock_home / ".config" / "vocabb"
    config_dir.mkdir(parents=True)
    (config_dir / "config.toml").write_text(
        'quiz_length = 20\ndefault_category = "IELTS"\n', encoding="utf-8"
    )

    config = resolve_config()
    assert config.quiz_length == 20
    assert config.default_category == "IELTS"

    monkeypatch.setenv("VOCABB_QUIZ_LENGTH", "12")
    assert resolve_config().quiz_length == 12


def test_store_path_expands_user(mock_home):
    config = AppConfig(store_path="~/words.yaml")

    assert config.store_path == Path(mock_home) / "words.yaml"


def test_validation_errors():
    with pytest.raises(ValidationError):
        AppConfig(quiz_length=0)
    with pytest.raises(ValidationError):
        AppConfig(default_category="   ")


def test_daily_goal(monkeypatch):
    monkeypatch.setenv("VOCABB_DAILY_GOAL", "30")

    assert resolve_config().daily_goal == 30
    assert AppConfig().daily_goal == 30
    with pytest.raises(ValidationError):
        AppConfig(daily_goal=0)
