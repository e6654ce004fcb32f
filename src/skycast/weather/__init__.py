"""Open-Meteo integrations and the normalized forecast model."""

from .codes import classify_weather_code, describe_weather_code
from .geocoding import GeocodingClient
from .models import (
    Coordinate,
    CurrentConditions,
    DailySeries,
    ForecastModel,
    HourlySeries,
    LocationLabel,
    PlaceCandidate,
)
from .open_meteo import ForecastClient, normalize_forecast

__all__ = [
    "Coordinate",
    "CurrentConditions",
    "DailySeries",
    "ForecastClient",
    "ForecastModel",
    "GeocodingClient",
    "HourlySeries",
    "LocationLabel",
    "PlaceCandidate",
    "classify_weather_code",
    "describe_weather_code",
    "normalize_forecast",
]
