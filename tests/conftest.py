# ABOUTME: Shared test fixtures for the dashboard test suite.
# ABOUTME: Provides canned provider payloads and a URL-routing mock HTTP client.

from unittest.mock import AsyncMock

import httpx
import pytest


def make_response(json_data=None, status_code: int = 200, content: bytes | None = None) -> httpx.Response:
    """Build a real httpx.Response so raise_for_status and json() behave as in production."""
    request = httpx.Request("GET", "https://test")
    if content is not None:
        return httpx.Response(status_code=status_code, content=content, request=request)
    return httpx.Response(status_code=status_code, json=json_data, request=request)


def mock_client(json_data=None, status_code: int = 200) -> httpx.AsyncClient:
    """Create a mock httpx.AsyncClient that returns the given JSON response for every GET."""
    mock = AsyncMock(spec=httpx.AsyncClient)
    mock.get.return_value = make_response(json_data, status_code)
    return mock


def routing_client(routes) -> httpx.AsyncClient:
    """Create a mock client whose GET answers are chosen by `routes(url, params)`.

    `routes` returns an httpx.Response, or an exception instance to raise.
    """
    mock = AsyncMock(spec=httpx.AsyncClient)

    def _get(url, params=None, **kwargs):
        result = routes(url, params or {})
        if isinstance(result, Exception):
            raise result
        return result

    mock.get.side_effect = _get
    return mock


def current_payload(**overrides) -> dict:
    current = {
        "time": "2025-01-15T12:00",
        "interval": 900,
        "temperature_2m": 29.6,
        "relative_humidity_2m": 74,
        "apparent_temperature": 33.4,
        "weather_code": 2,
        "wind_speed_10m": 14.6,
        "wind_direction_10m": 112.5,
        "wind_gusts_10m": 27.4,
        "pressure_msl": 1011.6,
        "visibility": 12345.0,
        "is_day": 1,
    }
    current.update(overrides)
    return {"latitude": 13.08, "longitude": 80.27, "timezone": "Asia/Kolkata", "current": current}


def daily_payload(days: int = 7, **overrides) -> dict:
    daily = {
        "time": [f"2025-01-{15 + i:02d}" for i in range(days)],
        "weather_code": [0, 1, 3, 61, 80, 95, 45][:days],
        "temperature_2m_max": [30.2, 31.0, 29.4, 28.6, 27.9, 29.1, 30.5][:days],
        "temperature_2m_min": [22.1, 23.4, 22.8, 21.9, 22.2, 22.6, 23.0][:days],
        "precipitation_probability_max": [0, 10, 35, 80, 100, 65, 5][:days],
        "wind_speed_10m_max": [18.4, 20.0, 15.2, 25.7, 30.1, 12.0, 9.6][:days],
        "relative_humidity_2m_mean": [70, 72, 75, 85, 90, 80, 68][:days],
    }
    daily.update(overrides)
    return {"latitude": 13.08, "longitude": 80.27, "timezone": "Asia/Kolkata", "daily": daily}


def quake_feature(quake_id: str, mag, place, depth: float = 10.0, time_ms: int = 1736942400000) -> dict:
    return {
        "type": "Feature",
        "id": quake_id,
        "properties": {"mag": mag, "place": place, "time": time_ms},
        "geometry": {"type": "Point", "coordinates": [142.37, 38.29, depth]},
    }


def seismic_payload(count: int = 10) -> dict:
    return {
        "type": "FeatureCollection",
        "features": [quake_feature(f"us{i:04d}", 2.5 + i * 0.5, f"{i} km N of Somewhere") for i in range(count)],
    }


def weather_routes(current=None, daily=None, seismic=None):
    """Route forecast calls by their `current`/`daily` parameter and everything else to the feed."""
    current = current if current is not None else make_response(current_payload())
    daily = daily if daily is not None else make_response(daily_payload())
    seismic = seismic if seismic is not None else make_response(seismic_payload())

    def routes(url, params):
        if "current" in params:
            return current
        if "daily" in params:
            return daily
        return seismic

    return routes


@pytest.fixture
def chennai_client() -> httpx.AsyncClient:
    return routing_client(weather_routes())
