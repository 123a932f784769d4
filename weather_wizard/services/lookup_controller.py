"""Lookup controller: orchestrates provider calls into a LookupState."""

import itertools
from typing import Callable, Optional

import structlog

from weather_wizard.config import Settings, get_settings
from weather_wizard.models.lookup import LookupState, LookupStatus
from weather_wizard.models.weather import BackgroundTier, DisplayUnit
from weather_wizard.services import formatting
from weather_wizard.services.weather_service import WeatherService

logger = structlog.get_logger(__name__)

StateListener = Callable[[LookupState], None]

_lookup_ids = itertools.count(1)


class LookupController:
    """Owns the single LookupState and the display unit.

    The controller runs on one event loop and does no locking. Overlapping
    ``search`` calls are not cancelled: whichever response lands last wins.
    A forecast is only applied while its own lookup's conditions are still
    the ones on screen.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        settings: Optional[Settings] = None,
        service: Optional[WeatherService] = None,
        unit: Optional[DisplayUnit] = None,
    ):
        self.settings = settings or get_settings()
        self._service = service or WeatherService(api_key=api_key, settings=self.settings)
        self._unit = unit or self.settings.default_unit
        self._state = LookupState()
        self._listeners: list[StateListener] = []

    @property
    def state(self) -> LookupState:
        return self._state

    @property
    def unit(self) -> DisplayUnit:
        return self._unit

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a listener called with the state after every change.

        Returns:
            Function that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self._state)

    def _update(self, **changes) -> None:
        self._state = LookupState(**{**dict(self._state), **changes})
        self._notify()

    async def search(self, query: str) -> LookupState:
        """Look up current conditions, then the forecast, for ``query``.

        An empty query is ignored. Loading ends as soon as the
        current-conditions request settles; the forecast request follows
        only when it succeeded, and its failure keeps ``current``.

        Returns:
            State after both stages have settled
        """
        query = query.strip()
        if not query:
            logger.debug("lookup_skipped_empty_query")
            return self._state

        # Service log lines for this lookup carry the same lookup_id
        with structlog.contextvars.bound_contextvars(lookup_id=next(_lookup_ids)):
            return await self._run_lookup(query)

    async def _run_lookup(self, query: str) -> LookupState:
        log = logger.bind(query=query)
        log.info("lookup_started")
        self._update(query=query, status=LookupStatus.LOADING, error=None)

        current_result = await self._service.get_current_conditions(query)
        if not current_result.ok:
            log.info("lookup_current_failed", error=current_result.error.message)
            self._update(status=LookupStatus.ERROR, error=current_result.error.message)
            return self._state

        current = current_result.value
        forecast = self._state.forecast
        if forecast is not None and forecast.query != query:
            # Belongs to an earlier query; never pair it with new conditions
            forecast = None
        self._update(
            current=current,
            forecast=forecast,
            status=LookupStatus.SUCCESS,
            error=None,
        )

        forecast_result = await self._service.get_forecast(query)
        if self._state.current is not current:
            # reset() or a newer lookup replaced the conditions meanwhile
            log.info("lookup_forecast_discarded")
            return self._state
        if forecast_result.ok:
            self._update(forecast=forecast_result.value)
            log.info("lookup_completed", forecast_days=len(forecast_result.value))
        elif self._state.is_loading:
            # A newer lookup owns the status until its conditions settle
            log.info("lookup_forecast_failed", error=forecast_result.error.message, applied=False)
        else:
            log.info("lookup_forecast_failed", error=forecast_result.error.message)
            self._update(
                status=LookupStatus.PARTIAL_SUCCESS,
                error=forecast_result.error.message,
            )
        return self._state

    def reset(self) -> None:
        """Clear query, results and error."""
        self._state = LookupState()
        logger.debug("lookup_reset")
        self._notify()

    def toggle_unit(self) -> DisplayUnit:
        """Flip between metric and imperial display. No network call."""
        self._unit = self._unit.toggled
        logger.debug("display_unit_toggled", unit=self._unit.value)
        self._notify()
        return self._unit

    def format_temperature(self, temp_celsius: float) -> str:
        return formatting.format_temperature(temp_celsius, self._unit)

    def format_wind_speed(self, speed_ms: float) -> formatting.WindSpeed:
        return formatting.format_wind_speed(speed_ms, self._unit)

    @staticmethod
    def select_background_tier(temp_celsius: float) -> BackgroundTier:
        return formatting.select_background_tier(temp_celsius)

    def icon_url(self, icon_id: str) -> str:
        return formatting.icon_url(icon_id, self.settings.weather_icon_base_url)

    async def close(self) -> None:
        """Release the underlying HTTP client."""
        await self._service.close()

    async def __aenter__(self) -> "LookupController":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
