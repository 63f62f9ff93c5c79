"""
Unit tests for application settings.

Environment variables are isolated with monkeypatch; the settings cache is
cleared around each test.
"""

from collections.abc import Iterator

import pytest

from src.config.settings import Settings, get_settings


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Iterator[None]:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestSettings:
    """Tests for Settings defaults and overrides."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in (
            "GEMINI_API_KEY",
            "GEMINI_MODEL",
            "BACKEND_TIMEOUT_SECONDS",
            "BACKEND_TEMPERATURE",
            "LOG_LEVEL",
            "API_HOST",
            "API_PORT",
        ):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.gemini_api_key == ""
        assert settings.gemini_model == "gemini-2.0-flash"
        assert settings.backend_timeout_seconds == 60.0
        assert settings.backend_temperature is None
        assert settings.log_level == "INFO"
        assert settings.api_host == "127.0.0.1"
        assert settings.api_port == 8000

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GEMINI_API_KEY", "secret")
        monkeypatch.setenv("backend_timeout_seconds", "15")
        monkeypatch.setenv("BACKEND_TEMPERATURE", "0.3")

        settings = Settings(_env_file=None)

        assert settings.gemini_api_key == "secret"
        assert settings.backend_timeout_seconds == 15.0
        assert settings.backend_temperature == 0.3

    def test_get_settings_is_cached(self) -> None:
        assert get_settings() is get_settings()
