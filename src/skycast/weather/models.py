"""Typed models for places and normalized forecasts."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Coordinate(BaseModel):
    """Latitude/longitude in decimal degrees."""

    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float


class PlaceCandidate(BaseModel):
    """One geocoding match offered to the user for selection."""

    model_config = ConfigDict(frozen=True)

    name: str
    country: str = ""
    admin1: str = Field(default="", description="Admin region (state/province) label")
    coordinate: Coordinate

    @property
    def label(self) -> str:
        """Secondary line shown under the name, e.g. "England, United Kingdom"."""
        return ", ".join(part for part in (self.admin1, self.country) if part)


class CurrentConditions(BaseModel):
    model_config = ConfigDict(frozen=True)

    temperature: float
    condition: str
    wind_speed: float
    humidity: float
    is_day: bool
    weather_code: int | None


class HourlySeries(BaseModel):
    """Parallel hourly sequences; index ``i`` is the same hour in each."""

    model_config = ConfigDict(frozen=True)

    time: tuple[str, ...] = ()
    temperature: tuple[float | None, ...] = ()
    weather_code: tuple[int | None, ...] = ()

    @model_validator(mode="after")
    def check_parallel(self) -> HourlySeries:
        if not len(self.time) == len(self.temperature) == len(self.weather_code):
            raise ValueError(
                "hourly series lengths differ: "
                f"time={len(self.time)} temperature={len(self.temperature)} "
                f"weather_code={len(self.weather_code)}"
            )
        return self


class DailySeries(BaseModel):
    """Parallel daily sequences; index ``i`` is the same date in each."""

    model_config = ConfigDict(frozen=True)

    time: tuple[str, ...] = ()
    max_temperature: tuple[float | None, ...] = ()
    min_temperature: tuple[float | None, ...] = ()
    weather_code: tuple[int | None, ...] = ()

    @model_validator(mode="after")
    def check_parallel(self) -> DailySeries:
        lengths = {
            len(self.time),
            len(self.max_temperature),
            len(self.min_temperature),
            len(self.weather_code),
        }
        if len(lengths) != 1:
            raise ValueError(
                "daily series lengths differ: "
                f"time={len(self.time)} max={len(self.max_temperature)} "
                f"min={len(self.min_temperature)} weather_code={len(self.weather_code)}"
            )
        return self


class LocationLabel(BaseModel):
    """Display name carried over from location resolution, not from the forecast."""

    model_config = ConfigDict(frozen=True)

    name: str
    country: str = ""


class ForecastModel(BaseModel):
    """Normalized forecast consumed by the dashboard."""

    model_config = ConfigDict(frozen=True)

    current: CurrentConditions
    hourly: HourlySeries
    daily: DailySeries
    location: LocationLabel
