"""Unit tests for settings."""

import pytest
from pydantic import ValidationError

from weather_wizard.config import Settings, get_settings
from weather_wizard.models.weather import DisplayUnit


class TestSettings:
    """Tests for Settings loading."""

    def test_defaults(self, monkeypatch):
        for name in (
            "OPENWEATHERMAP_API_KEY",
            "WEATHER_API_BASE_URL",
            "WEATHER_API_TIMEOUT",
            "DEFAULT_UNIT",
            "LOG_LEVEL",
        ):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.openweathermap_api_key == ""
        assert settings.weather_api_base_url == "https://api.openweathermap.org/data/2.5"
        assert settings.weather_icon_base_url == "https://openweathermap.org"
        assert settings.weather_api_timeout is None
        assert settings.default_unit is DisplayUnit.METRIC
        assert settings.log_level == "WARNING"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("OPENWEATHERMAP_API_KEY", "env-key")
        monkeypatch.setenv("weather_api_timeout", "3.5")
        monkeypatch.setenv("DEFAULT_UNIT", "imperial")

        settings = Settings(_env_file=None)

        assert settings.openweathermap_api_key == "env-key"
        assert settings.weather_api_timeout == 3.5
        assert settings.default_unit is DisplayUnit.IMPERIAL

    def test_unit_is_case_insensitive(self, monkeypatch):
        monkeypatch.setenv("DEFAULT_UNIT", " Imperial ")

        assert Settings(_env_file=None).default_unit is DisplayUnit.IMPERIAL

    def test_unknown_unit_rejected(self, monkeypatch):
        monkeypatch.setenv("DEFAULT_UNIT", "kelvin")

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_env_file(self, tmp_path, monkeypatch):
        monkeypatch.delenv("OPENWEATHERMAP_API_KEY", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("OPENWEATHERMAP_API_KEY=file-key\n")

        settings = Settings(_env_file=env_file)

        assert settings.openweathermap_api_key == "file-key"

    def test_get_settings_is_cached(self):
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()
