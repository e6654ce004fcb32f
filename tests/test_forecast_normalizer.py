"""Tests for Open-Meteo forecast normalization and the forecast client."""

from __future__ import annotations

import logging
from typing import Any

import httpx
import pytest

from skycast.exceptions import NetworkError
from skycast.weather.models import Coordinate
from skycast.weather.open_meteo import (
    ForecastClient,
    build_forecast_params,
    normalize_forecast,
)

LONDON = Coordinate(latitude=51.5074, longitude=-0.1278)


def _make_client(handler: Any = None) -> ForecastClient:
    logger = logging.getLogger("test_forecast_client")
    if handler is None:
        return ForecastClient(logger)
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return ForecastClient(logger, client=http)


def test_current_block_is_normalized(forecast_payload: dict[str, Any]) -> None:
    model = normalize_forecast(forecast_payload, "London", "United Kingdom")

    assert model.current.temperature == 14.6
    assert model.current.wind_speed == 11.3
    assert model.current.humidity == 72
    assert model.current.weather_code == 0
    assert model.current.condition == "Clear sky"
    assert model.current.is_day is True


@pytest.mark.parametrize(
    ("code", "label"),
    [(0, "Clear sky"), (61, "Slight rain"), (95, "Thunderstorm"), (12, "Unknown")],
)
def test_current_condition_uses_code_dictionary(make_payload: Any, code: int, label: str) -> None:
    model = normalize_forecast(make_payload(weather_code=code), "London", "United Kingdom")
    assert model.current.condition == label
    assert model.current.weather_code == code


@pytest.mark.parametrize(("flag", "expected"), [(1, True), (0, False), (-1, False), (2, False)])
def test_is_day_true_only_for_flag_one(make_payload: Any, flag: int, expected: bool) -> None:
    model = normalize_forecast(make_payload(is_day=flag), "x")
    assert model.current.is_day is expected


def test_is_day_absent_or_boolean_is_false(make_payload: Any) -> None:
    payload = make_payload()
    del payload["current"]["is_day"]
    assert normalize_forecast(payload, "x").current.is_day is False

    assert normalize_forecast(make_payload(is_day=True), "x").current.is_day is False


def test_hourly_truncated_to_first_24_in_order(make_payload: Any) -> None:
    payload = make_payload(hours=168)
    model = normalize_forecast(payload, "x")

    assert len(model.hourly.time) == 24
    assert len(model.hourly.temperature) == 24
    assert len(model.hourly.weather_code) == 24
    assert list(model.hourly.time) == payload["hourly"]["time"][:24]
    assert list(model.hourly.temperature) == payload["hourly"]["temperature_2m"][:24]
    assert list(model.hourly.weather_code) == payload["hourly"]["weather_code"][:24]


@pytest.mark.parametrize("hours", [0, 1, 23, 24])
def test_hourly_shorter_than_window_is_not_padded(make_payload: Any, hours: int) -> None:
    model = normalize_forecast(make_payload(hours=hours), "x")
    assert len(model.hourly.time) == hours
    assert len(model.hourly.temperature) == hours


@pytest.mark.parametrize("days", [1, 7, 16])
def test_daily_passes_through_length_and_order(make_payload: Any, days: int) -> None:
    payload = make_payload(days=days)
    model = normalize_forecast(payload, "x")

    assert list(model.daily.time) == payload["daily"]["time"]
    assert list(model.daily.max_temperature) == payload["daily"]["temperature_2m_max"]
    assert list(model.daily.min_temperature) == payload["daily"]["temperature_2m_min"]
    assert list(model.daily.weather_code) == payload["daily"]["weather_code"]


def test_location_comes_from_caller_not_payload(forecast_payload: dict[str, Any]) -> None:
    forecast_payload["name"] = "Somewhere Else"
    model = normalize_forecast(forecast_payload, "Current Location", "")
    assert model.location.name == "Current Location"
    assert model.location.country == ""


def test_null_temperatures_are_kept(make_payload: Any) -> None:
    payload = make_payload(hours=3)
    payload["hourly"]["temperature_2m"][1] = None
    model = normalize_forecast(payload, "x")
    assert model.hourly.temperature == (10.0, None, 11.0)


def test_null_weather_codes_in_series_are_kept(make_payload: Any) -> None:
    payload = make_payload()
    payload["hourly"]["weather_code"][3] = None
    payload["daily"]["weather_code"][6] = None
    model = normalize_forecast(payload, "x")

    assert model.hourly.weather_code[3] is None
    assert len(model.hourly.weather_code) == 24
    assert model.daily.weather_code[6] is None
    assert len(model.daily.weather_code) == 7


@pytest.mark.parametrize(("raw", "expected"), [(61.7, None), (61.0, 61)])
def test_current_code_must_be_integral(
    make_payload: Any, raw: float, expected: int | None
) -> None:
    model = normalize_forecast(make_payload(weather_code=raw), "x")
    assert model.current.weather_code == expected
    assert model.current.condition == ("Unknown" if expected is None else "Slight rain")


def test_mismatched_daily_lengths_raise_network_error(forecast_payload: dict[str, Any]) -> None:
    forecast_payload["daily"]["temperature_2m_min"].pop()
    with pytest.raises(NetworkError, match="daily series lengths differ"):
        normalize_forecast(forecast_payload, "x")


@pytest.mark.parametrize("block", ["current", "hourly", "daily"])
def test_missing_block_raises(forecast_payload: dict[str, Any], block: str) -> None:
    del forecast_payload[block]
    with pytest.raises(NetworkError, match=f"missing '{block}' object"):
        normalize_forecast(forecast_payload, "x")


def test_missing_current_temperature_raises(forecast_payload: dict[str, Any]) -> None:
    forecast_payload["current"]["temperature_2m"] = None
    with pytest.raises(NetworkError, match="current.temperature_2m"):
        normalize_forecast(forecast_payload, "x")


def test_build_forecast_params_requests_all_blocks() -> None:
    params = build_forecast_params(LONDON)
    assert params == {
        "latitude": 51.5074,
        "longitude": -0.1278,
        "current": "temperature_2m,relative_humidity_2m,is_day,weather_code,wind_speed_10m",
        "hourly": "temperature_2m,weather_code",
        "daily": "weather_code,temperature_2m_max,temperature_2m_min",
        "timezone": "auto",
    }


@pytest.mark.anyio
async def test_fetch_issues_one_request_per_call(forecast_payload: dict[str, Any]) -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=forecast_payload)

    async with _make_client(handler) as client:
        first = await client.fetch(LONDON, "London", "United Kingdom")
        second = await client.fetch(LONDON, "London", "United Kingdom")

    assert len(seen) == 2
    assert first == second
    assert seen[0].url.host == "api.open-meteo.com"
    assert seen[0].url.params["timezone"] == "auto"
    assert seen[0].url.params["latitude"] == "51.5074"
    assert first.location.name == "London"


@pytest.mark.anyio
async def test_fetch_non_success_status_raises_network_error() -> None:
    calls = 0

    def handler(request: httpx.Request) -> httpx.Response:
        nonlocal calls
        calls += 1
        return httpx.Response(503, text="upstream down")

    async with _make_client(handler) as client:
        with pytest.raises(NetworkError, match="status 503") as excinfo:
            await client.fetch(LONDON, "London")

    assert excinfo.value.status_code == 503
    assert calls == 1


@pytest.mark.anyio
async def test_fetch_transport_failure_raises_network_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with _make_client(handler) as client:
        with pytest.raises(NetworkError, match="ConnectError"):
            await client.fetch(LONDON, "London")


@pytest.mark.anyio
async def test_fetch_non_json_body_raises_network_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>oops</html>")

    async with _make_client(handler) as client:
        with pytest.raises(NetworkError, match="non-JSON"):
            await client.fetch(LONDON, "London")


@pytest.mark.anyio
async def test_fetch_uses_request_json_seam(forecast_payload: dict[str, Any]) -> None:
    client = _make_client()
    captured: dict[str, Any] = {}

    async def _fake_request(url: str, params: dict[str, Any], context: str) -> dict[str, Any]:
        captured.update(url=url, params=params, context=context)
        return forecast_payload

    client._request_json = _fake_request  # type: ignore[assignment]
    model = await client.fetch(LONDON, "London", "United Kingdom")
    await client.aclose()

    assert captured["context"] == "forecast fetch"
    assert captured["url"] == "https://api.open-meteo.com/v1/forecast"
    assert model.location.country == "United Kingdom"
