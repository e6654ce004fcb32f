"""Device geolocation sources and the default-location fallback."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from .config import (
    DEFAULT_LOCATION_COUNTRY,
    DEFAULT_LOCATION_LAT,
    DEFAULT_LOCATION_LON,
    DEFAULT_LOCATION_NAME,
    Settings,
)
from .exceptions import GeolocationError
from .weather.models import Coordinate

CURRENT_LOCATION_NAME = "Current Location"


class Geolocator(Protocol):
    """Anything that can report the device position asynchronously."""

    async def locate(self) -> Coordinate: ...


class UnavailableGeolocator:
    """Platform without a location capability; every request fails."""

    def __init__(self, reason: str = "Geolocation is not supported on this platform.") -> None:
        self.reason = reason

    async def locate(self) -> Coordinate:
        raise GeolocationError(self.reason)


class StaticGeolocator:
    """Reports a fixed, externally supplied device position."""

    def __init__(self, coordinate: Coordinate) -> None:
        self.coordinate = coordinate

    async def locate(self) -> Coordinate:
        return self.coordinate


@dataclass(frozen=True, slots=True)
class ResolvedLocation:
    coordinate: Coordinate
    name: str
    country: str
    used_fallback: bool = False
    fallback_reason: str | None = None


DEFAULT_LOCATION = ResolvedLocation(
    coordinate=Coordinate(latitude=DEFAULT_LOCATION_LAT, longitude=DEFAULT_LOCATION_LON),
    name=DEFAULT_LOCATION_NAME,
    country=DEFAULT_LOCATION_COUNTRY,
)


def default_location_from_settings(settings: Settings) -> ResolvedLocation:
    return ResolvedLocation(
        coordinate=Coordinate(
            latitude=settings.default_location_lat,
            longitude=settings.default_location_lon,
        ),
        name=settings.default_location_name,
        country=settings.default_location_country,
    )


def geolocator_from_settings(settings: Settings) -> Geolocator:
    if settings.device_lat is not None and settings.device_lon is not None:
        return StaticGeolocator(
            Coordinate(latitude=settings.device_lat, longitude=settings.device_lon)
        )
    return UnavailableGeolocator()


async def resolve_current_location(geolocator: Geolocator) -> Coordinate:
    """Await the device position; raises ``GeolocationError`` on denial/absence."""
    return await geolocator.locate()


async def locate_or_default(
    geolocator: Geolocator,
    logger: logging.Logger,
    *,
    default: ResolvedLocation = DEFAULT_LOCATION,
) -> ResolvedLocation:
    """Resolve the device position, substituting ``default`` when it is unavailable."""
    try:
        coordinate = await resolve_current_location(geolocator)
    except GeolocationError as exc:
        logger.warning(
            "Geolocation unavailable (%s); falling back to %s, %s",
            exc,
            default.name,
            default.country,
        )
        return ResolvedLocation(
            coordinate=default.coordinate,
            name=default.name,
            country=default.country,
            used_fallback=True,
            fallback_reason=str(exc),
        )
    return ResolvedLocation(coordinate=coordinate, name=CURRENT_LOCATION_NAME, country="")
