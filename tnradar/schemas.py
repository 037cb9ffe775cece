# ABOUTME: Strict Pydantic schemas for raw provider payloads (Open-Meteo, Nominatim, USGS).
# ABOUTME: Rejects malformed responses before they reach the mapping code.

from typing import Annotated, Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

Number = int | float


class ProviderPayload(BaseModel):
    """Base for provider schemas. Strict: a string is never cast to a number, and NaN or Infinity is rejected."""

    model_config = ConfigDict(strict=True, allow_inf_nan=False)


class GeocodingResult(ProviderPayload):
    name: str
    admin1: str | None = None
    country: str | None = None
    latitude: Number
    longitude: Number


class GeocodingResponse(ProviderPayload):
    """Open-Meteo geocoding search. `results` is omitted when nothing matches."""

    results: list[GeocodingResult] = []


class ReverseAddress(ProviderPayload):
    city: str | None = None
    town: str | None = None
    village: str | None = None
    municipality: str | None = None
    county: str | None = None
    state: str | None = None
    region: str | None = None
    country: str | None = None


class ReverseGeocodingResponse(ProviderPayload):
    address: ReverseAddress | None = None


class CurrentBlock(ProviderPayload):
    temperature_2m: Number
    relative_humidity_2m: int
    apparent_temperature: Number
    weather_code: int
    wind_speed_10m: Number
    wind_direction_10m: Number
    wind_gusts_10m: Number
    pressure_msl: Number
    visibility: Number
    is_day: int


class CurrentResponse(ProviderPayload):
    current: CurrentBlock


class DailyBlock(ProviderPayload):
    """Column-oriented daily arrays.

    Each column is checked for element type only; equal lengths across columns
    are not asserted here.
    """

    time: list[str]
    weather_code: list[int]
    temperature_2m_max: list[Number]
    temperature_2m_min: list[Number]
    precipitation_probability_max: list[int]
    wind_speed_10m_max: list[Number]
    relative_humidity_2m_mean: list[int]

    def day_count(self, limit: int = 7) -> int:
        """Number of leading days present in every column, capped at `limit`."""
        return min(
            limit,
            len(self.time),
            len(self.weather_code),
            len(self.temperature_2m_max),
            len(self.temperature_2m_min),
            len(self.precipitation_probability_max),
            len(self.wind_speed_10m_max),
            len(self.relative_humidity_2m_mean),
        )


class DailyResponse(ProviderPayload):
    daily: DailyBlock


class QuakeProperties(ProviderPayload):
    mag: Number | None = None
    place: str | None = None
    time: Number


class QuakeGeometry(ProviderPayload):
    coordinates: Annotated[list[Number], Field(min_length=3, max_length=3)]


class QuakeFeature(ProviderPayload):
    id: str
    properties: QuakeProperties
    geometry: QuakeGeometry


class SeismicFeed(ProviderPayload):
    """USGS GeoJSON summary feed."""

    features: list[QuakeFeature]


class SchemaValidationError(ValueError):
    """A provider payload did not match its expected shape."""

    def __init__(self, schema_name: str, error: ValidationError):
        self.schema_name = schema_name
        self.error = error
        first = error.errors()[0]
        where = ".".join(str(p) for p in first["loc"]) or "<root>"
        super().__init__(
            f"{schema_name} payload rejected: {error.error_count()} error(s), first at {where}: {first['msg']}"
        )


P = TypeVar("P", bound=ProviderPayload)


def validate_payload(raw: Any, schema: type[P]) -> P:
    """Validate an untyped JSON value against a provider schema.

    Raises SchemaValidationError on any missing required field or wrong primitive type.
    """
    try:
        return schema.model_validate(raw)
    except ValidationError as e:
        raise SchemaValidationError(schema.__name__, e) from e
