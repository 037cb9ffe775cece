# ABOUTME: Derives the GFS, ECMWF, ICON, and Blended comparison forecasts from one daily forecast.
# ABOUTME: The three named models are random perturbations of the base; Blended reproduces it.

import random
from typing import NamedTuple

from tnradar.conditions import map_condition_code
from tnradar.models import ModelForecast, ModelId, WeatherModel
from tnradar.rounding import clamp_percent, round_half_up
from tnradar.schemas import DailyBlock
from tnradar.weather_service import FORECAST_DAYS


class ModelProfile(NamedTuple):
    """Perturbation ranges for one synthetic model."""

    id: ModelId
    name: str
    country: str
    flag: str
    temp_spread: float
    wind_low: float
    wind_high: float
    gust_factor: float
    rain_spread: float


MODEL_PROFILES: tuple[ModelProfile, ...] = (
    ModelProfile("gfs", "GFS", "United States", "🇺🇸", 1.0, 0.95, 1.05, 1.4, 5),
    ModelProfile("ecmwf", "ECMWF", "European Union", "🇪🇺", 0.75, 0.9, 1.1, 1.5, 4),
    ModelProfile("icon", "ICON", "Germany", "🇩🇪", 1.25, 0.85, 1.15, 1.6, 6),
)

BLENDED_GUST_FACTOR = 1.5


def _perturbed(profile: ModelProfile, daily: DailyBlock, days: int, rng: random.Random) -> WeatherModel:
    forecast = []
    for i in range(days):
        wind = daily.wind_speed_10m_max[i]
        forecast.append(
            ModelForecast(
                date=daily.time[i],
                temperature=round_half_up(
                    daily.temperature_2m_max[i] + rng.uniform(-profile.temp_spread, profile.temp_spread)
                ),
                wind_speed=round_half_up(wind * rng.uniform(profile.wind_low, profile.wind_high)),
                wind_gusts=round_half_up(wind * profile.gust_factor),
                rain_probability=clamp_percent(
                    daily.precipitation_probability_max[i]
                    + round_half_up(rng.uniform(-profile.rain_spread, profile.rain_spread))
                ),
                condition=map_condition_code(daily.weather_code[i], True),
            )
        )
    return WeatherModel(id=profile.id, name=profile.name, country=profile.country, flag=profile.flag, forecast=forecast)


def _blended(daily: DailyBlock, days: int) -> WeatherModel:
    forecast = [
        ModelForecast(
            date=daily.time[i],
            temperature=round_half_up(daily.temperature_2m_max[i]),
            wind_speed=round_half_up(daily.wind_speed_10m_max[i]),
            wind_gusts=round_half_up(daily.wind_speed_10m_max[i] * BLENDED_GUST_FACTOR),
            rain_probability=clamp_percent(daily.precipitation_probability_max[i]),
            condition=map_condition_code(daily.weather_code[i], True),
        )
        for i in range(days)
    ]
    return WeatherModel(id="blended", name="Blended", country="Combined Average", flag="🌍", forecast=forecast)


def generate_model_data(daily: DailyBlock, rng: random.Random | None = None) -> list[WeatherModel]:
    """Build the four comparison models from a validated daily forecast.

    Output values vary between calls unless a seeded `rng` is supplied. Every
    model shares the base forecast's dates; conditions are never perturbed.
    """
    rng = rng or random.Random()
    days = daily.day_count(FORECAST_DAYS)
    models = [_perturbed(profile, daily, days, rng) for profile in MODEL_PROFILES]
    models.append(_blended(daily, days))
    return models
