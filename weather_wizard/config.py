"""Application configuration using Pydantic settings."""

from functools import lru_cache
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings

from weather_wizard.models.weather import DisplayUnit


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Weather API Configuration
    openweathermap_api_key: str = ""  # Missing key surfaces as a provider 401
    weather_api_base_url: str = "https://api.openweathermap.org/data/2.5"
    weather_icon_base_url: str = "https://openweathermap.org"
    weather_api_timeout: Optional[float] = None  # None keeps the httpx default

    # Display
    default_unit: DisplayUnit = DisplayUnit.METRIC

    # Logging
    log_level: str = "WARNING"

    @field_validator("default_unit", mode="before")
    @classmethod
    def lowercase_unit(cls, value):
        """Accept 'Imperial' as well as 'imperial'."""
        if isinstance(value, str):
            return value.strip().lower()
        return value

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
