"""Tests for the WMO weather code dictionary and icon classes."""

from __future__ import annotations

import pytest

from skycast.weather.codes import (
    UNKNOWN_CONDITION,
    WEATHER_CODE_LABELS,
    classify_weather_code,
    describe_weather_code,
)

EXPECTED_LABELS = {
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


def test_dictionary_covers_exactly_the_documented_codes() -> None:
    assert WEATHER_CODE_LABELS == EXPECTED_LABELS


@pytest.mark.parametrize(("code", "label"), sorted(EXPECTED_LABELS.items()))
def test_known_codes_return_exact_phrase(code: int, label: str) -> None:
    assert describe_weather_code(code) == label


@pytest.mark.parametrize("code", [-1, 4, 12, 50, 62, 100, 1000])
def test_unknown_codes_return_unknown(code: int) -> None:
    assert describe_weather_code(code) == UNKNOWN_CONDITION == "Unknown"


@pytest.mark.parametrize("code", [None, "0", 0.5, True])
def test_non_integer_codes_return_unknown(code: object) -> None:
    assert describe_weather_code(code) == "Unknown"  # type: ignore[arg-type]


@pytest.mark.parametrize(
    ("code", "expected"),
    [
        (0, "clear"),
        (1, "clear"),
        (2, "cloudy"),
        (3, "cloudy"),
        (45, "cloudy"),
        (53, "rain"),
        (65, "rain"),
        (73, "snow"),
        (77, "snow"),
        (81, "showers"),
        (85, "cloudy"),
        (95, "thunder"),
        (99, "thunder"),
        (None, "cloudy"),
    ],
)
def test_classify_weather_code(code: int | None, expected: str) -> None:
    assert classify_weather_code(code) == expected
