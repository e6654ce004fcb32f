"""Open-Meteo geocoding search for place candidates."""

from __future__ import annotations

import logging
from typing import Any

from .models import Coordinate, PlaceCandidate
from .open_meteo import OpenMeteoClient

GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"
MAX_RESULTS = 5


class GeocodingClient(OpenMeteoClient):
    """Resolves free-text place names into a short list of candidates."""

    def __init__(
        self,
        logger: logging.Logger,
        *,
        base_url: str = GEOCODING_URL,
        result_count: int = MAX_RESULTS,
        language: str = "en",
        **kwargs: Any,
    ) -> None:
        super().__init__(logger, **kwargs)
        self.base_url = base_url
        self.result_count = result_count
        self.language = language

    async def search_by_name(self, text: str) -> list[PlaceCandidate]:
        """Return up to ``result_count`` candidates; blank input issues no request."""
        query = text.strip()
        if not query:
            return []

        params = {
            "name": query,
            "count": self.result_count,
            "language": self.language,
            "format": "json",
        }
        payload = await self._request_json(self.base_url, params, context="geocoding search")

        # Open-Meteo omits "results" entirely when nothing matches.
        results = payload.get("results") or []
        if not isinstance(results, list):
            self.logger.warning("Geocoding 'results' was %s; treating as empty", type(results).__name__)
            return []

        candidates = [c for c in (_to_candidate(item) for item in results) if c is not None]
        self.logger.info("Geocoding search query=%r matches=%d", query, len(candidates))
        return candidates


def _to_candidate(item: Any) -> PlaceCandidate | None:
    if not isinstance(item, dict):
        return None
    lat = item.get("latitude")
    lon = item.get("longitude")
    if isinstance(lat, bool) or isinstance(lon, bool):
        return None
    if not isinstance(lat, (int, float)) or not isinstance(lon, (int, float)):
        return None
    return PlaceCandidate(
        name=_as_str(item.get("name")),
        country=_as_str(item.get("country")),
        admin1=_as_str(item.get("admin1")),
        coordinate=Coordinate(latitude=float(lat), longitude=float(lon)),
    )


def _as_str(value: Any) -> str:
    if isinstance(value, str):
        return value.strip()
    return ""
