"""Open-Meteo forecast client and response normalization."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from ..exceptions import NetworkError
from .codes import describe_weather_code
from .models import (
    Coordinate,
    CurrentConditions,
    DailySeries,
    ForecastModel,
    HourlySeries,
    LocationLabel,
)

FORECAST_URL = "https://api.open-meteo.com/v1/forecast"
HOURLY_WINDOW = 24

CURRENT_FIELDS = (
    "temperature_2m",
    "relative_humidity_2m",
    "is_day",
    "weather_code",
    "wind_speed_10m",
)
HOURLY_FIELDS = ("temperature_2m", "weather_code")
DAILY_FIELDS = ("weather_code", "temperature_2m_max", "temperature_2m_min")


class OpenMeteoClient:
    """Shared async HTTP plumbing for Open-Meteo endpoints.

    One attempt per call; failures surface as ``NetworkError`` and are never
    retried here.
    """

    service_name = "open-meteo"

    def __init__(
        self,
        logger: logging.Logger,
        *,
        timeout_seconds: float = 10.0,
        user_agent: str = "skycast/0.1",
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.logger = logger
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=timeout_seconds,
            headers={"Accept": "application/json", "User-Agent": user_agent},
        )

    async def __aenter__(self) -> OpenMeteoClient:
        return self

    async def __aexit__(self, exc_type: Any, exc: Any, exc_tb: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _request_json(self, url: str, params: dict[str, Any], context: str) -> dict[str, Any]:
        try:
            response = await self._client.get(url, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            raise NetworkError(
                f"{self.service_name} {context} failed with status {status} "
                f"at {url}: {exc.response.text[:300]}",
                status_code=status,
            ) from exc
        except httpx.HTTPError as exc:
            raise NetworkError(
                f"{self.service_name} {context} request failed at {url}: "
                f"{type(exc).__name__}: {exc}"
            ) from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise NetworkError(
                f"{self.service_name} {context} returned non-JSON response at {url}."
            ) from exc

        if not isinstance(payload, dict):
            raise NetworkError(
                f"{self.service_name} {context} returned unexpected payload type "
                f"{type(payload).__name__} at {url}."
            )
        return payload


class ForecastClient(OpenMeteoClient):
    """Fetches Open-Meteo forecasts and normalizes them into ``ForecastModel``."""

    def __init__(
        self,
        logger: logging.Logger,
        *,
        base_url: str = FORECAST_URL,
        hourly_window: int = HOURLY_WINDOW,
        **kwargs: Any,
    ) -> None:
        super().__init__(logger, **kwargs)
        self.base_url = base_url
        self.hourly_window = hourly_window

    async def fetch(
        self,
        coordinate: Coordinate,
        display_name: str,
        display_country: str = "",
    ) -> ForecastModel:
        """Fetch a fresh forecast for ``coordinate``; nothing is cached."""
        params = build_forecast_params(coordinate)
        self.logger.info(
            "Forecast fetch start lat=%s lon=%s", coordinate.latitude, coordinate.longitude
        )
        payload = await self._request_json(self.base_url, params, context="forecast fetch")
        model = normalize_forecast(
            payload,
            display_name,
            display_country,
            hourly_window=self.hourly_window,
        )
        self.logger.info(
            "Forecast fetch success location=%s hourly=%d daily=%d",
            display_name,
            len(model.hourly.time),
            len(model.daily.time),
        )
        return model


def build_forecast_params(coordinate: Coordinate) -> dict[str, Any]:
    return {
        "latitude": coordinate.latitude,
        "longitude": coordinate.longitude,
        "current": ",".join(CURRENT_FIELDS),
        "hourly": ",".join(HOURLY_FIELDS),
        "daily": ",".join(DAILY_FIELDS),
        "timezone": "auto",
    }


def normalize_forecast(
    payload: dict[str, Any],
    display_name: str,
    display_country: str = "",
    *,
    hourly_window: int = HOURLY_WINDOW,
) -> ForecastModel:
    """Map a raw Open-Meteo forecast payload onto ``ForecastModel``.

    Hourly series keep only the first ``hourly_window`` entries (no padding);
    daily series pass through untouched. Location labels come from the
    caller, never from the payload.
    """
    current = _require_block(payload, "current")
    hourly = _require_block(payload, "hourly")
    daily = _require_block(payload, "daily")

    weather_code = _require_code(current, "weather_code", block="current")
    try:
        return ForecastModel(
            current=CurrentConditions(
                temperature=_require_number(current, "temperature_2m", block="current"),
                condition=describe_weather_code(weather_code),
                wind_speed=_require_number(current, "wind_speed_10m", block="current"),
                humidity=_require_number(current, "relative_humidity_2m", block="current"),
                is_day=_is_day_flag(current.get("is_day")),
                weather_code=weather_code,
            ),
            hourly=HourlySeries(
                time=_series(hourly, "time", block="hourly")[:hourly_window],
                temperature=_series(hourly, "temperature_2m", block="hourly")[:hourly_window],
                weather_code=_series(hourly, "weather_code", block="hourly")[:hourly_window],
            ),
            daily=DailySeries(
                time=_series(daily, "time", block="daily"),
                max_temperature=_series(daily, "temperature_2m_max", block="daily"),
                min_temperature=_series(daily, "temperature_2m_min", block="daily"),
                weather_code=_series(daily, "weather_code", block="daily"),
            ),
            location=LocationLabel(name=display_name, country=display_country),
        )
    except ValidationError as exc:
        raise NetworkError(f"Forecast payload could not be normalized: {exc}") from exc


def _is_day_flag(value: Any) -> bool:
    return not isinstance(value, bool) and value == 1


def _require_block(payload: dict[str, Any], key: str) -> dict[str, Any]:
    block = payload.get(key)
    if not isinstance(block, dict):
        raise NetworkError(f"Forecast payload missing '{key}' object.")
    return block


def _require_number(data: dict[str, Any], key: str, *, block: str) -> float:
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise NetworkError(f"Forecast payload missing numeric '{block}.{key}'.")
    return float(value)


def _require_code(data: dict[str, Any], key: str, *, block: str) -> int | None:
    """Integral codes only; a fractional value is not a WMO code and maps to None."""
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise NetworkError(f"Forecast payload missing numeric '{block}.{key}'.")
    if isinstance(value, float) and not value.is_integer():
        return None
    return int(value)


def _series(data: dict[str, Any], key: str, *, block: str) -> list[Any]:
    values = data.get(key)
    if not isinstance(values, list):
        raise NetworkError(f"Forecast payload missing '{block}.{key}' list.")
    return values
