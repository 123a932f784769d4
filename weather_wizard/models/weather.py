"""Weather data models reduced from provider responses."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class DisplayUnit(str, Enum):
    """Unit system used for display. Never alters stored data."""

    METRIC = "metric"
    IMPERIAL = "imperial"

    @property
    def toggled(self) -> "DisplayUnit":
        """The other unit system."""
        if self is DisplayUnit.METRIC:
            return DisplayUnit.IMPERIAL
        return DisplayUnit.METRIC


class BackgroundTier(str, Enum):
    """Visual theming bucket derived from the current temperature."""

    FREEZING = "freezing"
    COLD = "cold"
    MILD = "mild"
    WARM = "warm"
    HOT = "hot"

    @property
    def gradient(self) -> tuple[str, str]:
        """Start and end colours of the background gradient."""
        return _TIER_GRADIENTS[self]


_TIER_GRADIENTS = {
    BackgroundTier.FREEZING: ("#1e3a8a", "#1d4ed8"),
    BackgroundTier.COLD: ("#1d4ed8", "#3b82f6"),
    BackgroundTier.MILD: ("#3b82f6", "#4ade80"),
    BackgroundTier.WARM: ("#4ade80", "#fde047"),
    BackgroundTier.HOT: ("#facc15", "#ef4444"),
}


class CurrentConditions(BaseModel):
    """Current weather conditions for a location."""

    model_config = ConfigDict(frozen=True)

    location_name: str = Field(..., description="Location name as resolved by the provider")
    country_code: str = Field("", description="ISO 3166 country code")
    temperature_celsius: float = Field(..., description="Temperature in Celsius")
    humidity_percent: int = Field(..., ge=0, le=100, description="Humidity percentage")
    wind_speed_ms: float = Field(..., ge=0, description="Wind speed in meters per second")
    condition_description: str = Field(..., description="Weather condition (e.g., 'light rain')")
    icon_id: str = Field(..., description="Weather icon code from provider")


class ForecastDay(BaseModel):
    """One representative forecast sample for a day."""

    model_config = ConfigDict(frozen=True)

    timestamp_utc: datetime = Field(..., description="Sample time (UTC)")
    temperature_celsius: float = Field(..., description="Temperature in Celsius")
    condition_description: str = Field(..., description="Expected conditions")
    icon_id: str = Field(..., description="Weather icon code from provider")


class ForecastSummary(BaseModel):
    """Up to five days of forecast, one sample per day."""

    model_config = ConfigDict(frozen=True)

    query: str = Field(..., description="Query the forecast was fetched for")
    days: tuple[ForecastDay, ...] = Field(default_factory=tuple, max_length=5)

    def __len__(self) -> int:
        return len(self.days)
