"""Error kinds raised while looking up weather data.

Only the ``message`` of a lookup error ever reaches the view model; the
exception objects themselves stay inside the service and controller.
"""

from typing import Optional


class ProviderError(Exception):
    """Low-level failure talking to the weather provider.

    Attributes:
        endpoint: Provider endpoint that failed (e.g., 'weather', 'forecast')
        status_code: HTTP status code, or None for transport/decoding failures
    """

    def __init__(self, endpoint: str, reason: str, status_code: Optional[int] = None):
        self.endpoint = endpoint
        self.status_code = status_code
        self.reason = reason
        super().__init__(f"{endpoint} request failed: {reason}")


class WeatherLookupError(Exception):
    """Base class for user-visible lookup failures."""

    message = "Weather lookup failed"

    def __init__(self, cause: Optional[Exception] = None):
        self.cause = cause
        super().__init__(self.message)


class CurrentConditionsError(WeatherLookupError):
    """The current-conditions stage failed (any status or transport error)."""

    message = "City not found"


class ForecastError(WeatherLookupError):
    """The forecast stage failed (any status or transport error)."""

    message = "Forecast not found"
