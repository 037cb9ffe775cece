# ABOUTME: Runtime settings for provider endpoints, HTTP behavior, and state persistence.
# ABOUTME: Loaded from TNRADAR_* environment variables and a .env file using Pydantic Settings.

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Endpoint bases and client options. Defaults point at the public providers."""

    model_config = SettingsConfigDict(
        env_prefix="TNRADAR_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
    )

    weather_api_base: str = "https://api.open-meteo.com/v1"
    geo_api_base: str = "https://geocoding-api.open-meteo.com/v1"
    reverse_geo_url: str = "https://nominatim.openstreetmap.org/reverse"
    seismic_feed_url: str = "https://earthquake.usgs.gov/earthquakes/feed/v1.0/summary/2.5_day.geojson"
    http_timeout: float = 10.0
    user_agent: str = "tnradar/0.1"
    state_file: Path | None = None

    @property
    def forecast_url(self) -> str:
        return f"{self.weather_api_base}/forecast"

    @property
    def geocoding_url(self) -> str:
        return f"{self.geo_api_base}/search"


def load_settings() -> Settings:
    """Build Settings from the environment; unset or empty variables keep their defaults."""
    return Settings()
