"""
Unit tests for settings.
It asserts expected behavior and guards against regressions in the corresponding component.
These tests are executed by `pytest` locally and in CI and should remain deterministic.
"""

import pytest

from src.common import settings as settings_module


def test_load_settings_success() -> None:
    settings_module.get_settings.cache_clear()
    settings = settings_module.get_settings()
    assert settings.PROJECT_NAME == "test-project"
    assert settings.ENV == "test"
    assert settings.LOG_LEVEL == "INFO"


def test_load_settings_defaults_when_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("PROJECT_NAME", raising=False)
    monkeypatch.setenv("LOG_LEVEL", "  ")
    settings = settings_module.load_settings(load_env=False)
    assert settings.PROJECT_NAME == "hydrovac-finder"
    assert settings.LOG_LEVEL == "INFO"


def test_log_level_is_normalized(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "debug")
    assert settings_module.load_settings(load_env=False).LOG_LEVEL == "DEBUG"


def test_invalid_log_level_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "CHATTY")
    with pytest.raises(RuntimeError, match="Invalid environment configuration"):
        settings_module.load_settings(load_env=False)
