"""Immutable dashboard state and the pure reducer that transitions it."""

from __future__ import annotations

from dataclasses import dataclass, replace

from .weather.models import ForecastModel, PlaceCandidate


@dataclass(frozen=True, slots=True)
class DashboardState:
    """Everything the dashboard renders; replaced wholesale on every event."""

    forecast: ForecastModel | None = None
    loading: bool = False
    error: str | None = None
    notice: str | None = None
    searching: bool = False
    search_results: tuple[PlaceCandidate, ...] = ()
    latest_token: int = 0


@dataclass(frozen=True, slots=True)
class FetchStarted:
    token: int


@dataclass(frozen=True, slots=True)
class FetchSucceeded:
    token: int
    model: ForecastModel


@dataclass(frozen=True, slots=True)
class FetchFailed:
    token: int
    message: str


@dataclass(frozen=True, slots=True)
class SearchStarted:
    pass


@dataclass(frozen=True, slots=True)
class SearchResultsReceived:
    results: tuple[PlaceCandidate, ...]


@dataclass(frozen=True, slots=True)
class SearchFailed:
    message: str


@dataclass(frozen=True, slots=True)
class SearchCleared:
    pass


@dataclass(frozen=True, slots=True)
class NoticeRaised:
    token: int
    message: str


DashboardEvent = (
    FetchStarted
    | FetchSucceeded
    | FetchFailed
    | SearchStarted
    | SearchResultsReceived
    | SearchFailed
    | SearchCleared
    | NoticeRaised
)


def is_stale(state: DashboardState, token: int) -> bool:
    """True when a completion belongs to a fetch that has since been superseded."""
    return token != state.latest_token


def reduce(state: DashboardState, event: DashboardEvent) -> DashboardState:
    """Return the state after ``event``; never mutates ``state``.

    Fetch completions and notices carrying an outdated token leave the state
    untouched, and a failed fetch keeps the last good forecast on screen.
    """
    if isinstance(event, FetchStarted):
        if event.token <= state.latest_token:
            return state
        return replace(
            state,
            loading=True,
            error=None,
            notice=None,
            latest_token=event.token,
        )

    if isinstance(event, FetchSucceeded):
        if is_stale(state, event.token):
            return state
        return replace(state, forecast=event.model, loading=False, error=None)

    if isinstance(event, FetchFailed):
        if is_stale(state, event.token):
            return state
        return replace(state, loading=False, error=event.message)

    if isinstance(event, SearchStarted):
        return replace(state, searching=True, error=None)

    if isinstance(event, SearchResultsReceived):
        return replace(state, searching=False, search_results=tuple(event.results))

    if isinstance(event, SearchFailed):
        return replace(state, searching=False, search_results=(), error=event.message)

    if isinstance(event, SearchCleared):
        return replace(state, search_results=())

    if isinstance(event, NoticeRaised):
        if is_stale(state, event.token):
            return state
        return replace(state, notice=event.message)

    raise TypeError(f"Unsupported dashboard event: {type(event).__name__}")
