"""Typed settings loader for the SkyCast dashboard."""

from __future__ import annotations

from typing import Any

from pydantic import AnyUrl, Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigError

DEFAULT_LOCATION_LAT = 51.5074
DEFAULT_LOCATION_LON = -0.1278
DEFAULT_LOCATION_NAME = "London"
DEFAULT_LOCATION_COUNTRY = "United Kingdom"


class Settings(BaseSettings):
    """Application settings loaded from environment variables and `.env`."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    forecast_url: AnyUrl = Field(
        default="https://api.open-meteo.com/v1/forecast",
        alias="SKYCAST_FORECAST_URL",
    )
    geocoding_url: AnyUrl = Field(
        default="https://geocoding-api.open-meteo.com/v1/search",
        alias="SKYCAST_GEOCODING_URL",
    )
    http_timeout_seconds: float = Field(default=10.0, alias="SKYCAST_HTTP_TIMEOUT_SECONDS")
    user_agent: str = Field(
        default="skycast/0.1 (+https://open-meteo.com)",
        alias="SKYCAST_USER_AGENT",
    )

    geocoding_result_count: int = Field(default=5, alias="SKYCAST_GEOCODING_RESULT_COUNT")
    geocoding_language: str = Field(default="en", alias="SKYCAST_GEOCODING_LANGUAGE")
    hourly_window: int = Field(default=24, alias="SKYCAST_HOURLY_WINDOW")

    default_location_lat: float = Field(
        default=DEFAULT_LOCATION_LAT, alias="SKYCAST_DEFAULT_LAT"
    )
    default_location_lon: float = Field(
        default=DEFAULT_LOCATION_LON, alias="SKYCAST_DEFAULT_LON"
    )
    default_location_name: str = Field(
        default=DEFAULT_LOCATION_NAME, alias="SKYCAST_DEFAULT_NAME"
    )
    default_location_country: str = Field(
        default=DEFAULT_LOCATION_COUNTRY, alias="SKYCAST_DEFAULT_COUNTRY"
    )

    # Known device position; without it geolocation is reported as unavailable.
    device_lat: float | None = Field(default=None, alias="SKYCAST_DEVICE_LAT")
    device_lon: float | None = Field(default=None, alias="SKYCAST_DEVICE_LON")

    @field_validator("device_lat", "device_lon", mode="before")
    @classmethod
    def empty_string_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @model_validator(mode="after")
    def validate_ranges(self) -> Settings:
        if self.http_timeout_seconds <= 0:
            raise ValueError("SKYCAST_HTTP_TIMEOUT_SECONDS must be > 0.")
        if self.geocoding_result_count <= 0:
            raise ValueError("SKYCAST_GEOCODING_RESULT_COUNT must be > 0.")
        if self.hourly_window <= 0:
            raise ValueError("SKYCAST_HOURLY_WINDOW must be > 0.")
        if not self.user_agent.strip():
            raise ValueError("SKYCAST_USER_AGENT must not be empty.")
        if not self.geocoding_language.strip():
            raise ValueError("SKYCAST_GEOCODING_LANGUAGE must not be empty.")

        if not (-90 <= self.default_location_lat <= 90):
            raise ValueError("SKYCAST_DEFAULT_LAT must be between -90 and 90.")
        if not (-180 <= self.default_location_lon <= 180):
            raise ValueError("SKYCAST_DEFAULT_LON must be between -180 and 180.")

        if (self.device_lat is None) != (self.device_lon is None):
            raise ValueError("SKYCAST_DEVICE_LAT and SKYCAST_DEVICE_LON must be set together.")
        if self.device_lat is not None and not (-90 <= self.device_lat <= 90):
            raise ValueError("SKYCAST_DEVICE_LAT must be between -90 and 90.")
        if self.device_lon is not None and not (-180 <= self.device_lon <= 180):
            raise ValueError("SKYCAST_DEVICE_LON must be between -180 and 180.")
        return self


def load_settings() -> Settings:
    """Load and validate settings, raising ConfigError on failure."""
    try:
        return Settings()
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Failed reading environment/.env: {exc}") from exc
