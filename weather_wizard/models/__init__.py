"""Models package exports."""

from weather_wizard.models.lookup import LookupState, LookupStatus, StageResult
from weather_wizard.models.weather import (
    BackgroundTier,
    CurrentConditions,
    DisplayUnit,
    ForecastDay,
    ForecastSummary,
)

__all__ = [
    "BackgroundTier",
    "CurrentConditions",
    "DisplayUnit",
    "ForecastDay",
    "ForecastSummary",
    "LookupState",
    "LookupStatus",
    "StageResult",
]
