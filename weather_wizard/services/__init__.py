"""Services package exports."""

from weather_wizard.services.logging_service import configure_logging, get_logger
from weather_wizard.services.lookup_controller import LookupController
from weather_wizard.services.weather_service import WeatherService

__all__ = [
    "LookupController",
    "WeatherService",
    "configure_logging",
    "get_logger",
]
