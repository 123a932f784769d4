"""Weather service for OpenWeatherMap API integration."""

from datetime import datetime, timezone
from typing import Any, Optional, Sequence

import httpx
import structlog
from pydantic import ValidationError

from weather_wizard.config import Settings, get_settings
from weather_wizard.errors import CurrentConditionsError, ForecastError, ProviderError
from weather_wizard.models.lookup import StageResult
from weather_wizard.models.weather import CurrentConditions, ForecastDay, ForecastSummary

logger = structlog.get_logger(__name__)

# The 5-day forecast endpoint returns one sample every 3 hours
SAMPLES_PER_DAY = 8
FORECAST_DAYS = 5

# Malformed payloads fail the stage instead of escaping the service
_PARSE_ERRORS = (KeyError, IndexError, TypeError, ValueError, ValidationError)


def reduce_forecast(
    timeline: Sequence[Any],
    stride: int = SAMPLES_PER_DAY,
    days: int = FORECAST_DAYS,
) -> list[Any]:
    """Pick one sample per day from a 3-hour timeline.

    Takes indices 0, stride, 2*stride, ... and keeps the first ``days`` of
    them. This is a deliberate simplification: the sample sits at a fixed
    time-of-day offset from the first entry, with no averaging or min/max.
    """
    return list(timeline[::stride][:days])


def _parse_current(data: dict) -> CurrentConditions:
    """Reduce a /weather payload to CurrentConditions."""
    main = data["main"]
    weather = data["weather"][0]
    return CurrentConditions(
        location_name=data["name"],
        country_code=data.get("sys", {}).get("country", ""),
        temperature_celsius=main["temp"],
        humidity_percent=main["humidity"],
        wind_speed_ms=data["wind"]["speed"],
        condition_description=weather["description"],
        icon_id=weather["icon"],
    )


def _parse_forecast_day(item: dict) -> ForecastDay:
    """Reduce one /forecast timeline entry to a ForecastDay."""
    weather = item["weather"][0]
    return ForecastDay(
        timestamp_utc=datetime.fromtimestamp(item["dt"], tz=timezone.utc),
        temperature_celsius=item["main"]["temp"],
        condition_description=weather["description"],
        icon_id=weather["icon"],
    )


class WeatherService:
    """Service for fetching weather data from OpenWeatherMap.

    Each request is attempted exactly once. Failures are returned as a
    failed StageResult, never raised.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        settings: Optional[Settings] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.settings = settings or get_settings()
        self.api_key = api_key if api_key is not None else self.settings.openweathermap_api_key
        self._client = client

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            if self.settings.weather_api_timeout is None:
                self._client = httpx.AsyncClient()
            else:
                self._client = httpx.AsyncClient(
                    timeout=httpx.Timeout(self.settings.weather_api_timeout)
                )
        return self._client

    async def close(self):
        """Close HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def _call_api(self, endpoint: str, query: str) -> dict:
        """Call an OpenWeatherMap endpoint once.

        Args:
            endpoint: API endpoint (e.g., 'weather', 'forecast')
            query: Location query

        Returns:
            Decoded JSON payload

        Raises:
            ProviderError: On non-2xx status, transport failure or bad JSON
        """
        if not self.api_key:
            # Sent anyway; the provider answers 401 and the stage fails normally
            logger.warning("weather_api_key_missing", endpoint=endpoint)

        url = f"{self.settings.weather_api_base_url}/{endpoint}"
        params = {"q": query, "units": "metric", "appid": self.api_key}

        client = await self._get_client()
        try:
            response = await client.get(url, params=params)
        except httpx.HTTPError as e:
            logger.error(
                "weather_api_error",
                endpoint=endpoint,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise ProviderError(endpoint, str(e)) from e

        if response.status_code == 401:
            logger.error("weather_api_auth_error", endpoint=endpoint)
        if not response.is_success:
            logger.info(
                "weather_api_unsuccessful",
                endpoint=endpoint,
                query=query,
                status_code=response.status_code,
            )
            raise ProviderError(
                endpoint, f"HTTP {response.status_code}", status_code=response.status_code
            )

        try:
            return response.json()
        except ValueError as e:
            logger.error("weather_api_invalid_json", endpoint=endpoint, error=str(e))
            raise ProviderError(endpoint, "invalid JSON", status_code=response.status_code) from e

    async def get_current_conditions(self, query: str) -> StageResult[CurrentConditions]:
        """Get current conditions for a location.

        Args:
            query: Free-text location (e.g., 'London' or 'London,GB')

        Returns:
            StageResult holding CurrentConditions or a CurrentConditionsError
        """
        try:
            data = await self._call_api("weather", query)
        except ProviderError as e:
            return StageResult.failure(CurrentConditionsError(e))

        try:
            current = _parse_current(data)
        except _PARSE_ERRORS as e:
            logger.error(
                "weather_parse_error",
                query=query,
                error=str(e),
                error_type=type(e).__name__,
            )
            return StageResult.failure(CurrentConditionsError(e))

        logger.debug("weather_current_parsed", query=query, location=current.location_name)
        return StageResult.success(current)

    async def get_forecast(self, query: str) -> StageResult[ForecastSummary]:
        """Get the five-day forecast summary for a location.

        Args:
            query: Free-text location

        Returns:
            StageResult holding ForecastSummary or a ForecastError
        """
        try:
            data = await self._call_api("forecast", query)
        except ProviderError as e:
            return StageResult.failure(ForecastError(e))

        try:
            samples = reduce_forecast(data["list"])
            summary = ForecastSummary(
                query=query,
                days=tuple(_parse_forecast_day(item) for item in samples),
            )
        except _PARSE_ERRORS as e:
            logger.error(
                "weather_forecast_parse_error",
                query=query,
                error=str(e),
                error_type=type(e).__name__,
            )
            return StageResult.failure(ForecastError(e))

        logger.debug("weather_forecast_parsed", query=query, days=len(summary))
        return StageResult.success(summary)
