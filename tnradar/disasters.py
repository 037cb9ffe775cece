# ABOUTME: Service layer for the USGS seismic feed plus placeholder cyclone and tsunami records.
# ABOUTME: Maps feed features to Earthquake records graded by magnitude.

from datetime import datetime, timezone

import httpx

from tnradar.models import Cyclone, Earthquake, Severity, TsunamiAlert
from tnradar.rounding import round_half_up
from tnradar.schemas import QuakeFeature, SeismicFeed, validate_payload
from tnradar.weather_service import fetch_json

SEISMIC_FEED_URL = "https://earthquake.usgs.gov/earthquakes/feed/v1.0/summary/2.5_day.geojson"

MAX_EARTHQUAKES = 8
UNKNOWN_PLACE = "Unknown location"

# Evaluated high to low, first match wins.
_SEVERITY_THRESHOLDS: tuple[tuple[float, Severity], ...] = (
    (7, "major"),
    (6, "strong"),
    (5, "moderate"),
    (4, "light"),
)


def earthquake_severity(magnitude: float) -> Severity:
    for threshold, severity in _SEVERITY_THRESHOLDS:
        if magnitude >= threshold:
            return severity
    return "minor"


def _to_iso(dt: datetime) -> str:
    return dt.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_earthquake(feature: QuakeFeature) -> Earthquake:
    magnitude = feature.properties.mag if feature.properties.mag is not None else 0
    return Earthquake(
        id=feature.id,
        location=feature.properties.place or UNKNOWN_PLACE,
        magnitude=magnitude,
        depth=round_half_up(feature.geometry.coordinates[2]),
        time=_to_iso(datetime.fromtimestamp(feature.properties.time / 1000, tz=timezone.utc)),
        severity=earthquake_severity(magnitude),
    )


def parse_earthquakes(feed: SeismicFeed) -> list[Earthquake]:
    """Map the first eight features in feed order; the feed is not re-sorted."""
    return [parse_earthquake(f) for f in feed.features[:MAX_EARTHQUAKES]]


async def get_earthquakes(client: httpx.AsyncClient, url: str = SEISMIC_FEED_URL) -> list[Earthquake]:
    """Fetch the trailing-day M2.5+ feed.

    Raises httpx.HTTPError, ValueError for an undecodable body, or
    SchemaValidationError for a malformed feed.
    """
    data = await fetch_json(client, url)
    return parse_earthquakes(validate_payload(data, SeismicFeed))


def placeholder_cyclones() -> list[Cyclone]:
    """Illustrative cyclone; live cyclone feeds require authentication."""
    return [
        Cyclone(
            id="cy1",
            name="DANA",
            category=2,
            wind_speed=165,
            pressure=970,
            regions=["Bay of Bengal", "Eastern India"],
            status="active",
            lat=18.5,
            lon=88.2,
        )
    ]


def placeholder_tsunamis(now: datetime | None = None) -> list[TsunamiAlert]:
    issued = now or datetime.now(timezone.utc)
    return [
        TsunamiAlert(
            id="ts1",
            region="Pacific Ocean - No Active Warnings",
            level="watch",
            issued_at=_to_iso(issued),
            description="No significant tsunami activity detected. Monitoring continues.",
        )
    ]
