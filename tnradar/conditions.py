# ABOUTME: Maps WMO weather codes to the dashboard's condition vocabulary and descriptions.
# ABOUTME: Also grades wind speed and gusts into a wind alert.

from tnradar.models import WeatherCondition, WindAlert

# (low, high, condition), inclusive, first match wins.
_CONDITION_RANGES: tuple[tuple[int, int, WeatherCondition], ...] = (
    (0, 0, "sunny"),
    (1, 2, "partly-cloudy"),
    (3, 3, "cloudy"),
    (45, 48, "fog"),
    (51, 67, "rainy"),
    (71, 77, "snowy"),
    (80, 82, "rainy"),
    (85, 86, "snowy"),
    (95, 99, "stormy"),
)

DEFAULT_CONDITION: WeatherCondition = "cloudy"

CONDITION_DESCRIPTIONS: dict[int, str] = {
    0: "Clear sky",
    1: "Mainly clear",
    2: "Partly cloudy",
    3: "Overcast",
    45: "Fog",
    48: "Depositing rime fog",
    51: "Light drizzle",
    53: "Moderate drizzle",
    55: "Dense drizzle",
    61: "Slight rain",
    63: "Moderate rain",
    65: "Heavy rain",
    71: "Slight snow",
    73: "Moderate snow",
    75: "Heavy snow",
    80: "Slight rain showers",
    81: "Moderate rain showers",
    82: "Violent rain showers",
    95: "Thunderstorm",
    96: "Thunderstorm with hail",
    99: "Severe thunderstorm",
}


def map_condition_code(code: int, is_day: bool) -> WeatherCondition:
    """Map a WMO weather code to a domain condition.

    `is_day` is accepted for the provider's calling convention; clear sky is
    "sunny" by day and by night.
    """
    for low, high, condition in _CONDITION_RANGES:
        if low <= code <= high:
            return condition
    return DEFAULT_CONDITION


def get_condition_description(code: int) -> str:
    return CONDITION_DESCRIPTIONS.get(code, "Unknown")


def assess_wind(speed: int, gusts: int) -> WindAlert:
    """Grade wind (km/h) as extreme, strong, or normal."""
    if gusts >= 90 or speed >= 70:
        return WindAlert(severity="extreme", speed=speed, gusts=gusts, message="Dangerous wind conditions - take shelter")
    if gusts >= 60 or speed >= 50:
        return WindAlert(severity="strong", speed=speed, gusts=gusts, message="High wind warning - secure loose objects")
    return WindAlert(severity="normal", speed=speed, gusts=gusts, message="Normal wind conditions")
