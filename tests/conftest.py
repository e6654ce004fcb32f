"""Shared fixtures: Open-Meteo payload builders and an anyio backend pin."""

from __future__ import annotations

from typing import Any

import pytest


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


def make_forecast_payload(
    *,
    hours: int = 48,
    days: int = 7,
    weather_code: int = 0,
    is_day: Any = 1,
) -> dict[str, Any]:
    """Build an Open-Meteo-shaped forecast response."""
    return {
        "latitude": 51.5,
        "longitude": -0.12,
        "timezone": "Europe/London",
        "current": {
            "time": "2026-10-19T14:00",
            "temperature_2m": 14.6,
            "relative_humidity_2m": 72,
            "is_day": is_day,
            "weather_code": weather_code,
            "wind_speed_10m": 11.3,
        },
        "hourly": {
            "time": [f"2026-10-{19 + h // 24:02d}T{h % 24:02d}:00" for h in range(hours)],
            "temperature_2m": [10.0 + (h % 24) * 0.5 for h in range(hours)],
            "weather_code": [3 if h % 2 else 61 for h in range(hours)],
        },
        "daily": {
            "time": [f"2026-10-{19 + d:02d}" for d in range(days)],
            "weather_code": [95, 0, 3, 61, 71, 80, 45][:days] + [0] * max(0, days - 7),
            "temperature_2m_max": [16.0 + d for d in range(days)],
            "temperature_2m_min": [8.0 + d for d in range(days)],
        },
    }


@pytest.fixture
def forecast_payload() -> dict[str, Any]:
    return make_forecast_payload()


@pytest.fixture
def make_payload() -> Any:
    return make_forecast_payload
