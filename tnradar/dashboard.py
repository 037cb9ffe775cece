# ABOUTME: Orchestrates the fetchers and owns the dashboard's committed state.
# ABOUTME: Persists the selected location and model, and discards results from superseded fetches.

import asyncio
import logging
import random

import httpx
from pydantic import BaseModel, ValidationError

from tnradar.conditions import assess_wind
from tnradar.deps import DashboardDeps
from tnradar.disasters import get_earthquakes, placeholder_cyclones, placeholder_tsunamis
from tnradar.models import (
    MODEL_IDS,
    CurrentWeather,
    Cyclone,
    Earthquake,
    ForecastDay,
    Location,
    ModelId,
    TsunamiAlert,
    WeatherModel,
    WindAlert,
)
from tnradar.schemas import SchemaValidationError
from tnradar.store import LOCATION_KEY, MODEL_KEY
from tnradar.synthesis import generate_model_data
from tnradar.weather_service import (
    WEATHER_ERROR_MESSAGE,
    WeatherFetchError,
    get_weather,
    reverse_geocode,
    search_location,
)

logger = logging.getLogger(__name__)

DEFAULT_MODEL: ModelId = "gfs"


class DashboardState(BaseModel):
    """Everything the UI reads. Replaced as a whole on each commit."""

    location: Location | None = None
    current_weather: CurrentWeather | None = None
    forecast: list[ForecastDay] = []
    weather_models: list[WeatherModel] = []
    selected_model: ModelId = DEFAULT_MODEL
    cyclones: list[Cyclone] = []
    earthquakes: list[Earthquake] = []
    tsunamis: list[TsunamiAlert] = []
    loading: bool = False
    error: str | None = None

    @property
    def wind_alert(self) -> WindAlert | None:
        if self.current_weather is None:
            return None
        return assess_wind(self.current_weather.wind_speed, self.current_weather.wind_gusts)


class Dashboard:
    """State container over the weather, geocoding, and disaster fetchers.

    Each weather or disaster fetch takes a generation number when it starts;
    a fetch that finishes after a newer one has started drops its result.
    """

    def __init__(self, deps: DashboardDeps, rng: random.Random | None = None):
        self.deps = deps
        self.rng = rng
        self.state = DashboardState(location=self._load_location(), selected_model=self._load_model())
        self._weather_generation = 0
        self._disaster_generation = 0

    async def __aenter__(self) -> "Dashboard":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.deps.http_client.aclose()

    def _load_location(self) -> Location | None:
        raw = self.deps.store.get(LOCATION_KEY)
        if not raw:
            return None
        try:
            return Location.model_validate_json(raw)
        except ValidationError:
            logger.warning("Ignoring unreadable saved location")
            return None

    def _load_model(self) -> ModelId:
        saved = self.deps.store.get(MODEL_KEY)
        if saved in MODEL_IDS:
            return saved
        return DEFAULT_MODEL

    def _commit(self, **changes) -> None:
        self.state = self.state.model_copy(update=changes)

    async def search_location(self, query: str) -> list[Location]:
        return await search_location(self.deps.http_client, query, url=self.deps.settings.geocoding_url)

    async def set_location(self, location: Location) -> None:
        """Select a location and refresh weather and disaster data for it."""
        self._commit(location=location)
        await self.refresh()

    async def locate(self, latitude: float, longitude: float) -> Location:
        """Select the place at the given coordinates, naming it by reverse geocoding."""
        location = await reverse_geocode(
            self.deps.http_client, latitude, longitude, url=self.deps.settings.reverse_geo_url
        )
        await self.set_location(location)
        return location

    async def refresh(self) -> None:
        tasks = [self.fetch_disaster_data()]
        if self.state.location is not None:
            tasks.append(self.fetch_weather(self.state.location))
        await asyncio.gather(*tasks)

    async def fetch_weather(self, location: Location) -> None:
        """Fetch current conditions and forecast together and commit them as one update.

        A location without coordinates is ignored. On failure the previous
        weather stays in place and `state.error` carries a user-facing message.
        """
        if location.lat is None or location.lon is None:
            return

        self._weather_generation += 1
        generation = self._weather_generation
        self._commit(loading=True, error=None)

        try:
            snapshot = await get_weather(self.deps.http_client, location, url=self.deps.settings.forecast_url)
        except WeatherFetchError:
            if generation == self._weather_generation:
                self._commit(error=WEATHER_ERROR_MESSAGE)
            else:
                logger.info("Discarding failed weather fetch for %s, superseded", location.city)
        else:
            if generation == self._weather_generation:
                self._commit(
                    current_weather=snapshot.current,
                    forecast=snapshot.forecast,
                    weather_models=generate_model_data(snapshot.daily, self.rng),
                    loading=False,
                    error=None,
                )
                self.deps.store.set(LOCATION_KEY, location.model_dump_json())
                logger.info("Weather updated for %s (%d forecast days)", location.city, len(snapshot.forecast))
            else:
                logger.info("Discarding weather for %s, superseded by a newer fetch", location.city)
        finally:
            # A newer fetch owns the flag once it has started.
            if generation == self._weather_generation:
                self._commit(loading=False)

    async def fetch_disaster_data(self) -> None:
        """Refresh earthquakes from the seismic feed and reset the placeholder alerts.

        Feed failures are logged only; previously loaded earthquakes are kept.
        """
        self._disaster_generation += 1
        generation = self._disaster_generation

        earthquakes = None
        try:
            earthquakes = await get_earthquakes(self.deps.http_client, url=self.deps.settings.seismic_feed_url)
        except SchemaValidationError as e:
            logger.warning("Seismic feed: %s", e)
        except (httpx.HTTPError, ValueError):
            logger.exception("Earthquake fetch failed")
        finally:
            changes = {"cyclones": placeholder_cyclones(), "tsunamis": placeholder_tsunamis()}
            if earthquakes is not None:
                if generation == self._disaster_generation:
                    changes["earthquakes"] = earthquakes
                else:
                    logger.info("Discarding earthquakes from a superseded fetch")
            self._commit(**changes)

    def select_model(self, model_id: str) -> None:
        if model_id not in MODEL_IDS:
            raise ValueError(f"Unknown weather model: {model_id!r}")
        self._commit(selected_model=model_id)
        self.deps.store.set(MODEL_KEY, model_id)
