"""Wires dashboard actions to the Open-Meteo clients and the state reducer."""

from __future__ import annotations

import itertools
import logging
from collections.abc import Callable

from .exceptions import NetworkError
from .location import DEFAULT_LOCATION, Geolocator, ResolvedLocation, locate_or_default
from .state import (
    DashboardEvent,
    DashboardState,
    FetchFailed,
    FetchStarted,
    FetchSucceeded,
    NoticeRaised,
    SearchCleared,
    SearchFailed,
    SearchResultsReceived,
    SearchStarted,
    is_stale,
    reduce,
)
from .weather.geocoding import GeocodingClient
from .weather.models import Coordinate, PlaceCandidate
from .weather.open_meteo import ForecastClient

FETCH_FAILED_MESSAGE = "Failed to load weather data. Please try again."
SEARCH_FAILED_MESSAGE = "Search failed. Please try again."
FALLBACK_NOTICE = "Unable to retrieve your location. Showing {name}, {country} instead."


class DashboardController:
    """Single writer of ``DashboardState``; every action goes through ``dispatch``."""

    def __init__(
        self,
        *,
        geocoder: GeocodingClient,
        forecaster: ForecastClient,
        geolocator: Geolocator,
        logger: logging.Logger,
        default_location: ResolvedLocation = DEFAULT_LOCATION,
        on_change: Callable[[DashboardState], None] | None = None,
    ) -> None:
        self.geocoder = geocoder
        self.forecaster = forecaster
        self.geolocator = geolocator
        self.logger = logger
        self.default_location = default_location
        self._on_change = on_change
        self._tokens = itertools.count(1)
        self.state = DashboardState()

    def dispatch(self, event: DashboardEvent) -> DashboardState:
        new_state = reduce(self.state, event)
        if new_state is not self.state:
            self.state = new_state
            if self._on_change is not None:
                self._on_change(new_state)
        return self.state

    async def submit_search(self, query: str) -> tuple[PlaceCandidate, ...]:
        """Search for places; blank queries are ignored without a request."""
        if not query.strip():
            return ()
        self.dispatch(SearchStarted())
        try:
            results = tuple(await self.geocoder.search_by_name(query))
        except NetworkError as exc:
            self.logger.error("Location search failed: %s", exc)
            self.dispatch(SearchFailed(SEARCH_FAILED_MESSAGE))
            return ()
        self.dispatch(SearchResultsReceived(results))
        return results

    async def select_place(self, candidate: PlaceCandidate) -> bool:
        self.dispatch(SearchCleared())
        return await self.load(candidate.coordinate, candidate.name, candidate.country)

    async def load(self, coordinate: Coordinate, name: str, country: str = "") -> bool:
        """Fetch and show the forecast for ``coordinate``; returns True if applied."""
        token = next(self._tokens)
        self.dispatch(FetchStarted(token))
        return await self._fetch(token, coordinate, name, country)

    async def use_current_location(self) -> bool:
        token = next(self._tokens)
        self.dispatch(FetchStarted(token))
        try:
            resolved = await locate_or_default(
                self.geolocator, self.logger, default=self.default_location
            )
        except Exception:
            self.dispatch(FetchFailed(token, FETCH_FAILED_MESSAGE))
            raise

        if is_stale(self.state, token):
            self.logger.info(
                "Discarding stale geolocation token=%d latest=%d", token, self.state.latest_token
            )
            return False
        if resolved.used_fallback:
            self.dispatch(
                NoticeRaised(
                    token,
                    FALLBACK_NOTICE.format(name=resolved.name, country=resolved.country),
                )
            )
        return await self._fetch(token, resolved.coordinate, resolved.name, resolved.country)

    async def _fetch(self, token: int, coordinate: Coordinate, name: str, country: str) -> bool:
        try:
            model = await self.forecaster.fetch(coordinate, name, country)
        except NetworkError as exc:
            self.logger.error("Forecast fetch failed for %s: %s", name, exc)
            self.dispatch(FetchFailed(token, FETCH_FAILED_MESSAGE))
            return False

        if is_stale(self.state, token):
            self.logger.info(
                "Discarding stale forecast token=%d latest=%d", token, self.state.latest_token
            )
            return False
        self.dispatch(FetchSucceeded(token, model))
        return True
