"""Lookup view model and per-stage results."""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, model_validator

from weather_wizard.errors import WeatherLookupError
from weather_wizard.models.weather import CurrentConditions, ForecastSummary

T = TypeVar("T")


class LookupStatus(str, Enum):
    """Explicit lifecycle of a lookup."""

    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    PARTIAL_SUCCESS = "partial_success"  # current ok, forecast failed
    ERROR = "error"


class LookupState(BaseModel):
    """View model observed by the rendering layer.

    Attributes:
        query: Last submitted location query
        current: Current conditions from the last successful lookup
        forecast: Forecast summary for the query that produced ``current``
        error: User-visible error message
        status: Lifecycle status
    """

    model_config = ConfigDict(frozen=True)

    query: str = ""
    current: Optional[CurrentConditions] = None
    forecast: Optional[ForecastSummary] = None
    error: Optional[str] = None
    status: LookupStatus = LookupStatus.IDLE

    @model_validator(mode="after")
    def status_matches_fields(self) -> "LookupState":
        """Reject combinations the lifecycle can never produce."""
        if self.status in (LookupStatus.LOADING, LookupStatus.SUCCESS) and self.error:
            raise ValueError(f"error not allowed when status is {self.status.value}")
        if self.status in (LookupStatus.ERROR, LookupStatus.PARTIAL_SUCCESS) and not self.error:
            raise ValueError(f"error required when status is {self.status.value}")
        if (
            self.status in (LookupStatus.SUCCESS, LookupStatus.PARTIAL_SUCCESS)
            and self.current is None
        ):
            raise ValueError(f"current required when status is {self.status.value}")
        return self

    @property
    def is_loading(self) -> bool:
        """True only while the current-conditions request is in flight."""
        return self.status is LookupStatus.LOADING


@dataclass(frozen=True)
class StageResult(Generic[T]):
    """Outcome of one provider request: a value or a lookup error."""

    value: Optional[T] = None
    error: Optional[WeatherLookupError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "StageResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: WeatherLookupError) -> "StageResult[T]":
        return cls(error=error)
