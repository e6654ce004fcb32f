"""WMO weather code labels and icon classes shared by normalizer and dashboard."""

from __future__ import annotations

from typing import Literal

UNKNOWN_CONDITION = "Unknown"

WEATHER_CODE_LABELS: dict[int, str] = {
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
    71: "Slight snow fall",
    73: "Moderate snow fall",
    75: "Heavy snow fall",
    77: "Snow grains",
    80: "Slight rain showers",
    81: "Moderate rain showers",
    82: "Violent rain showers",
    85: "Slight snow showers",
    86: "Heavy snow showers",
    95: "Thunderstorm",
    96: "Thunderstorm with slight hail",
    99: "Thunderstorm with heavy hail",
}

WeatherClass = Literal["clear", "cloudy", "rain", "snow", "showers", "thunder"]


def describe_weather_code(code: int | None) -> str:
    """Return the readable label for a WMO code, or ``"Unknown"``."""
    if isinstance(code, bool) or not isinstance(code, int):
        return UNKNOWN_CONDITION
    return WEATHER_CODE_LABELS.get(code, UNKNOWN_CONDITION)


def classify_weather_code(code: int | None) -> WeatherClass:
    """Bucket a WMO code into the icon class used by the dashboard.

    Ranges are checked in order; anything unmatched (fog, unknown) is cloudy.
    """
    if isinstance(code, bool) or not isinstance(code, int):
        return "cloudy"
    if code in (0, 1):
        return "clear"
    if code in (2, 3):
        return "cloudy"
    if 51 <= code <= 67:
        return "rain"
    if 71 <= code <= 77:
        return "snow"
    if 80 <= code <= 82:
        return "showers"
    if code >= 95:
        return "thunder"
    return "cloudy"
