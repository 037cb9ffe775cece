# ABOUTME: Pydantic BaseModels for the dashboard's normalized domain records.
# ABOUTME: Defines locations, current weather, forecasts, model variants, and disaster alerts.

from typing import Literal

from pydantic import BaseModel, ConfigDict

WeatherCondition = Literal[
    "sunny",
    "cloudy",
    "rainy",
    "stormy",
    "snowy",
    "windy",
    "hot",
    "cold",
    "partly-cloudy",
    "fog",
]

Severity = Literal["minor", "light", "moderate", "strong", "major"]

ModelId = Literal["gfs", "ecmwf", "icon", "blended"]

MODEL_IDS: tuple[str, ...] = ("gfs", "ecmwf", "icon", "blended")


class Location(BaseModel):
    """A selected place. Coordinates are required before any weather fetch."""

    model_config = ConfigDict(frozen=True)

    city: str
    locality: str | None = None
    country: str | None = None
    lat: float | None = None
    lon: float | None = None


class CurrentWeather(BaseModel):
    """Current conditions, rounded for display."""

    temperature: int
    feels_like: int
    condition: WeatherCondition
    humidity: int
    wind_speed: int
    wind_direction: float
    wind_gusts: int
    pressure: int
    visibility: int
    is_day: bool
    description: str
    icon: str


class ForecastDay(BaseModel):
    """One day of the daily forecast. Index 0 of a forecast is today."""

    date: str
    max_temp: int
    min_temp: int
    condition: WeatherCondition
    rain_probability: int
    wind_speed: int
    humidity: int


class ModelForecast(BaseModel):
    """One day of a comparison model's forecast."""

    date: str
    temperature: int
    wind_speed: int
    wind_gusts: int
    rain_probability: int
    condition: WeatherCondition


class WeatherModel(BaseModel):
    """A labeled forecast variant shown in the model comparison."""

    id: ModelId
    name: str
    country: str
    flag: str
    forecast: list[ModelForecast] = []


class Earthquake(BaseModel):
    """A seismic event from the USGS feed, graded by magnitude."""

    id: str
    location: str
    magnitude: float
    depth: int
    time: str
    severity: Severity


class Cyclone(BaseModel):
    """A tracked tropical cyclone."""

    id: str
    name: str
    category: int
    wind_speed: int
    pressure: int
    regions: list[str] = []
    status: Literal["active", "weakening", "strengthening"]
    lat: float
    lon: float


class TsunamiAlert(BaseModel):
    """A regional tsunami bulletin."""

    id: str
    region: str
    level: Literal["watch", "advisory", "warning"]
    issued_at: str
    description: str


class WindAlert(BaseModel):
    """Wind severity summary derived from current wind speed and gusts."""

    severity: Literal["normal", "strong", "extreme"]
    speed: int
    gusts: int
    message: str
