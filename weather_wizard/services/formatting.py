"""Unit conversion and display formatting helpers.

All functions here are pure; the controller binds them to its current
display unit.
"""

import math
from datetime import datetime, timezone
from typing import NamedTuple, Optional

from weather_wizard.models.weather import BackgroundTier, CurrentConditions, DisplayUnit

MPS_TO_MPH = 2.237

# Fixed en-US labels so output does not depend on the process locale
_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

# Inclusive upper bounds in Celsius; anything above the last bound is HOT
_TIER_BOUNDS = (
    (0.0, BackgroundTier.FREEZING),
    (10.0, BackgroundTier.COLD),
    (20.0, BackgroundTier.MILD),
    (30.0, BackgroundTier.WARM),
)


class WindSpeed(NamedTuple):
    """Wind speed ready for display."""

    value: float
    label: str


def _round_half_up(value: float) -> int:
    """Round to nearest integer with halves going up (-2.5 -> -2, 2.5 -> 3)."""
    return int(math.floor(value + 0.5))


def convert_temperature(temp_celsius: float, to_unit: DisplayUnit) -> float:
    """Convert a Celsius temperature to the given unit system."""
    if to_unit is DisplayUnit.IMPERIAL:
        return temp_celsius * 9 / 5 + 32
    return temp_celsius


def format_temperature(temp_celsius: float, unit: DisplayUnit) -> str:
    """Format a Celsius temperature, e.g. 15.4 -> '15°C' or '60°F'."""
    converted = convert_temperature(temp_celsius, unit)
    suffix = "F" if unit is DisplayUnit.IMPERIAL else "C"
    return f"{_round_half_up(converted)}°{suffix}"


def format_wind_speed(speed_ms: float, unit: DisplayUnit) -> WindSpeed:
    """Convert wind speed for display; metric values pass through unchanged."""
    if unit is DisplayUnit.IMPERIAL:
        return WindSpeed(round(speed_ms * MPS_TO_MPH, 2), "mph")
    return WindSpeed(speed_ms, "m/s")


def select_background_tier(temp_celsius: float) -> BackgroundTier:
    """Map a Celsius temperature to its background tier."""
    for upper_bound, tier in _TIER_BOUNDS:
        if temp_celsius <= upper_bound:
            return tier
    return BackgroundTier.HOT


def icon_url(icon_id: str, base_url: str = "https://openweathermap.org") -> str:
    """Build the provider icon URL for an icon code."""
    return f"{base_url.rstrip('/')}/img/wn/{icon_id}.png"


def weekday_label(timestamp: datetime, tz: Optional[timezone] = None) -> str:
    """Short en-US weekday name for a timestamp (e.g., 'Mon').

    Naive timestamps are treated as UTC.
    """
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    if tz is not None:
        timestamp = timestamp.astimezone(tz)
    return _WEEKDAYS[timestamp.weekday()]


def unit_toggle_label(unit: DisplayUnit) -> str:
    """Label for the control that switches away from ``unit``."""
    if unit is DisplayUnit.METRIC:
        return "Switch to °F"
    return "Switch to °C"


def location_label(current: CurrentConditions) -> str:
    """Location heading, e.g. 'London, GB'."""
    if current.country_code:
        return f"{current.location_name}, {current.country_code}"
    return current.location_name
