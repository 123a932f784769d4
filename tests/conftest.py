"""Pytest configuration and fixtures."""

import os
from typing import Callable, Generator
from unittest.mock import AsyncMock

import httpx
import pytest
import structlog

# Set test environment variables before importing the package
os.environ.setdefault("OPENWEATHERMAP_API_KEY", "test-api-key")

from weather_wizard.config import Settings
from weather_wizard.services.weather_service import WeatherService

BASE_URL = "https://api.openweathermap.org/data/2.5"
LONDON_EPOCH = 1706788800  # 2024-02-01T12:00:00Z, a Thursday


def make_forecast_payload(samples: int = 40, start: int = LONDON_EPOCH) -> dict:
    """Forecast payload with 3-hour samples; temp of sample i is i."""
    return {
        "list": [
            {
                "dt": start + i * 10800,
                "main": {"temp": float(i)},
                "weather": [{"description": f"sample {i}", "icon": "01d"}],
            }
            for i in range(samples)
        ]
    }


@pytest.fixture(autouse=True)
def reset_structlog() -> Generator[None, None, None]:
    """Undo any configure_logging() a test performed."""
    yield
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()


@pytest.fixture
def test_settings() -> Settings:
    """Settings that ignore the environment and any .env file."""
    return Settings(
        _env_file=None,
        openweathermap_api_key="test-api-key",
        weather_api_base_url=BASE_URL,
        weather_icon_base_url="https://openweathermap.org",
        default_unit="metric",
        log_level="WARNING",
    )


@pytest.fixture
def current_payload() -> dict:
    """Provider /weather payload for London at 15.4°C."""
    return {
        "name": "London",
        "sys": {"country": "GB"},
        "main": {"temp": 15.4, "humidity": 72},
        "weather": [{"description": "light rain", "icon": "10d"}],
        "wind": {"speed": 4.1},
        "dt": LONDON_EPOCH,
    }


@pytest.fixture
def forecast_payload() -> dict:
    """Provider /forecast payload with 40 samples (5 days x 8)."""
    return make_forecast_payload()


@pytest.fixture
def build_forecast_payload() -> Callable[..., dict]:
    """Factory for forecast payloads of arbitrary length."""
    return make_forecast_payload


@pytest.fixture
def mock_client() -> AsyncMock:
    """AsyncMock standing in for httpx.AsyncClient."""
    client = AsyncMock()
    client.is_closed = False
    return client


@pytest.fixture
def provider_transport(current_payload, forecast_payload) -> Callable[..., httpx.MockTransport]:
    """Factory for a MockTransport simulating the provider.

    Keyword arguments override the status code of each endpoint; every
    request is recorded in ``transport.requests``.
    """

    def factory(weather_status: int = 200, forecast_status: int = 200) -> httpx.MockTransport:
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            if request.url.path.endswith("/weather"):
                if weather_status != 200:
                    return httpx.Response(weather_status, json={"cod": str(weather_status)})
                return httpx.Response(200, json=current_payload)
            if request.url.path.endswith("/forecast"):
                if forecast_status != 200:
                    return httpx.Response(forecast_status, json={"cod": str(forecast_status)})
                return httpx.Response(200, json=forecast_payload)
            return httpx.Response(404)

        transport = httpx.MockTransport(handler)
        transport.requests = requests
        return transport

    return factory


@pytest.fixture
def make_service(test_settings) -> Callable[..., WeatherService]:
    """Factory for a WeatherService backed by a MockTransport."""

    def factory(transport: httpx.MockTransport, api_key: str = "test-api-key") -> WeatherService:
        client = httpx.AsyncClient(transport=transport)
        return WeatherService(api_key=api_key, settings=test_settings, client=client)

    return factory
