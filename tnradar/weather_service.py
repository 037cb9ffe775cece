# ABOUTME: Service layer for Open-Meteo and Nominatim calls and response mapping.
# ABOUTME: Handles location search, reverse geocoding, current conditions, and the daily forecast.

import asyncio
import logging
from typing import Any

import httpx
from pydantic import BaseModel

from tnradar.conditions import get_condition_description, map_condition_code
from tnradar.models import CurrentWeather, ForecastDay, Location
from tnradar.rounding import round_half_up
from tnradar.sanitize import validate_search_query
from tnradar.schemas import (
    CurrentBlock,
    CurrentResponse,
    DailyBlock,
    DailyResponse,
    GeocodingResponse,
    ReverseGeocodingResponse,
    SchemaValidationError,
    validate_payload,
)

logger = logging.getLogger(__name__)

GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"
FORECAST_URL = "https://api.open-meteo.com/v1/forecast"
REVERSE_GEOCODING_URL = "https://nominatim.openstreetmap.org/reverse"

CURRENT_PARAMS = (
    "temperature_2m,relative_humidity_2m,apparent_temperature,weather_code,"
    "wind_speed_10m,wind_direction_10m,wind_gusts_10m,pressure_msl,visibility,is_day"
)

DAILY_PARAMS = (
    "weather_code,temperature_2m_max,temperature_2m_min,precipitation_probability_max,"
    "wind_speed_10m_max,relative_humidity_2m_mean"
)

MAX_SEARCH_RESULTS = 5
FORECAST_DAYS = 7
FALLBACK_CITY = "Current Location"
WEATHER_ERROR_MESSAGE = "Failed to fetch weather data. Please try again."


class WeatherFetchError(RuntimeError):
    """The current/forecast pair could not be fetched or validated."""


class WeatherSnapshot(BaseModel):
    """Validated result of one weather fetch, committed as a unit."""

    current: CurrentWeather
    forecast: list[ForecastDay]
    daily: DailyBlock


async def fetch_json(client: httpx.AsyncClient, url: str, params: dict | None = None) -> Any:
    """GET a URL and decode its JSON body, raising on non-2xx status."""
    resp = await client.get(url, params=params)
    resp.raise_for_status()
    return resp.json()


async def search_location(client: httpx.AsyncClient, query: str, url: str = GEOCODING_URL) -> list[Location]:
    """Search the geocoding provider for up to five matching locations.

    Best-effort: invalid queries, network errors, and malformed responses all
    yield an empty list.
    """
    check = validate_search_query(query)
    if not check.valid:
        logger.debug("Rejected search query %r", query)
        return []

    try:
        data = await fetch_json(
            client, url, params={"name": check.sanitized, "count": MAX_SEARCH_RESULTS, "language": "en", "format": "json"}
        )
        payload = validate_payload(data, GeocodingResponse)
    except SchemaValidationError as e:
        logger.warning("Location search for %r: %s", check.sanitized, e)
        return []
    except (httpx.HTTPError, ValueError):
        logger.exception("Location search failed for %r", check.sanitized)
        return []

    return [
        Location(city=r.name, locality=r.admin1, country=r.country, lat=r.latitude, lon=r.longitude)
        for r in payload.results[:MAX_SEARCH_RESULTS]
    ]


async def reverse_geocode(
    client: httpx.AsyncClient, latitude: float, longitude: float, url: str = REVERSE_GEOCODING_URL
) -> Location:
    """Name the place at the given coordinates.

    Falls back to a coordinate-only "Current Location" when the lookup fails.
    """
    fallback = Location(city=FALLBACK_CITY, locality="", country="", lat=latitude, lon=longitude)
    try:
        data = await fetch_json(client, url, params={"format": "json", "lat": latitude, "lon": longitude, "zoom": 10})
        payload = validate_payload(data, ReverseGeocodingResponse)
    except SchemaValidationError as e:
        logger.warning("Reverse geocoding at %s,%s: %s", latitude, longitude, e)
        return fallback
    except (httpx.HTTPError, ValueError):
        logger.exception("Reverse geocoding failed at %s,%s", latitude, longitude)
        return fallback

    address = payload.address
    if address is None:
        return fallback
    city = address.city or address.town or address.village or address.municipality or address.county or FALLBACK_CITY
    return Location(
        city=city,
        locality=address.state or address.region or "",
        country=address.country or "",
        lat=latitude,
        lon=longitude,
    )


def parse_current(block: CurrentBlock) -> CurrentWeather:
    """Round Open-Meteo current conditions into a CurrentWeather record."""
    is_day = block.is_day == 1
    return CurrentWeather(
        temperature=round_half_up(block.temperature_2m),
        feels_like=round_half_up(block.apparent_temperature),
        condition=map_condition_code(block.weather_code, is_day),
        humidity=block.relative_humidity_2m,
        wind_speed=round_half_up(block.wind_speed_10m),
        wind_direction=block.wind_direction_10m,
        wind_gusts=round_half_up(block.wind_gusts_10m),
        pressure=round_half_up(block.pressure_msl),
        visibility=round_half_up(block.visibility / 1000),
        is_day=is_day,
        description=get_condition_description(block.weather_code),
        icon=str(block.weather_code),
    )


def parse_daily(block: DailyBlock) -> list[ForecastDay]:
    """Parse Open-Meteo column-oriented daily data into at most seven ForecastDay rows."""
    return [
        ForecastDay(
            date=block.time[i],
            max_temp=round_half_up(block.temperature_2m_max[i]),
            min_temp=round_half_up(block.temperature_2m_min[i]),
            condition=map_condition_code(block.weather_code[i], True),
            rain_probability=block.precipitation_probability_max[i],
            wind_speed=round_half_up(block.wind_speed_10m_max[i]),
            humidity=block.relative_humidity_2m_mean[i],
        )
        for i in range(block.day_count(FORECAST_DAYS))
    ]


async def get_current_weather(
    client: httpx.AsyncClient, latitude: float, longitude: float, url: str = FORECAST_URL
) -> CurrentWeather:
    """Fetch and validate current conditions."""
    data = await fetch_json(
        client,
        url,
        params={"latitude": latitude, "longitude": longitude, "current": CURRENT_PARAMS, "timezone": "auto"},
    )
    return parse_current(validate_payload(data, CurrentResponse).current)


async def get_daily_forecast(
    client: httpx.AsyncClient, latitude: float, longitude: float, url: str = FORECAST_URL
) -> DailyBlock:
    """Fetch and validate the daily forecast columns."""
    data = await fetch_json(
        client,
        url,
        params={"latitude": latitude, "longitude": longitude, "daily": DAILY_PARAMS, "timezone": "auto"},
    )
    return validate_payload(data, DailyResponse).daily


async def get_weather(client: httpx.AsyncClient, location: Location, url: str = FORECAST_URL) -> WeatherSnapshot:
    """Fetch current conditions and the daily forecast for a location together.

    Both calls must succeed and validate; otherwise WeatherFetchError is raised
    and nothing from either call is returned.
    """
    if location.lat is None or location.lon is None:
        raise WeatherFetchError(f"{location.city} has no coordinates")

    tasks = (
        asyncio.ensure_future(get_current_weather(client, location.lat, location.lon, url)),
        asyncio.ensure_future(get_daily_forecast(client, location.lat, location.lon, url)),
    )
    try:
        current, daily = await asyncio.gather(*tasks)
    except SchemaValidationError as e:
        logger.warning("Weather for %s: %s", location.city, e)
        raise WeatherFetchError(WEATHER_ERROR_MESSAGE) from e
    except (httpx.HTTPError, ValueError) as e:
        logger.exception("Weather fetch failed for %s", location.city)
        raise WeatherFetchError(WEATHER_ERROR_MESSAGE) from e
    finally:
        # gather leaves the sibling running when one call fails.
        for task in tasks:
            task.cancel()

    return WeatherSnapshot(current=current, forecast=parse_daily(daily), daily=daily)
