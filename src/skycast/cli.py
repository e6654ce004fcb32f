"""SkyCast CLI: search places, fetch forecasts, render the terminal dashboard."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence

from rich.console import Console
from rich.table import Table

from .config import Settings, load_settings
from .controller import DashboardController
from .exceptions import ConfigError
from .location import (
    Geolocator,
    StaticGeolocator,
    default_location_from_settings,
    geolocator_from_settings,
)
from .log_setup import setup_logger
from .ui.terminal_dashboard import TerminalDashboard
from .weather.geocoding import GeocodingClient
from .weather.models import Coordinate, PlaceCandidate
from .weather.open_meteo import ForecastClient

EXIT_OK = 0
EXIT_CONFIG = 2
EXIT_UPSTREAM = 4
EXIT_UNEXPECTED = 99


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="skycast",
        description="Terminal weather dashboard powered by Open-Meteo.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log request traces.")
    sub = parser.add_subparsers(dest="command", required=True)

    search = sub.add_parser("search", help="List places matching a name.")
    search.add_argument("query", help="Free-text place name.")

    forecast = sub.add_parser("forecast", help="Show the dashboard for a place or coordinates.")
    forecast.add_argument("query", nargs="?", default=None, help="Place name to search for.")
    forecast.add_argument(
        "--pick",
        type=int,
        default=1,
        help="1-based index of the search result to use (default: 1).",
    )
    forecast.add_argument("--lat", type=float, default=None, help="Latitude.")
    forecast.add_argument("--lon", type=float, default=None, help="Longitude.")
    forecast.add_argument("--name", default="Selected Location", help="Display name.")
    forecast.add_argument("--country", default="", help="Display country.")

    here = sub.add_parser(
        "here",
        help="Show the dashboard for the device location, falling back to the default.",
    )
    here.add_argument("--lat", type=float, default=None, help="Device latitude override.")
    here.add_argument("--lon", type=float, default=None, help="Device longitude override.")
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments."""
    args = build_parser().parse_args(argv)
    if args.command in {"forecast", "here"} and (args.lat is None) != (args.lon is None):
        raise ValueError("--lat and --lon must be given together.")
    if args.command == "forecast":
        if args.query is None and args.lat is None:
            raise ValueError("forecast needs a place name or --lat/--lon.")
        if args.query is not None and args.lat is not None:
            raise ValueError("Use either a place name or --lat/--lon, not both.")
        if args.pick <= 0:
            raise ValueError("--pick must be >= 1.")
    return args


def _print_candidates(console: Console, query: str, results: Sequence[PlaceCandidate]) -> None:
    if not results:
        console.print(f"No places found for {query!r}.")
        return
    table = Table(title=f"Places matching {query!r}")
    table.add_column("#", justify="right")
    table.add_column("Name", overflow="fold")
    table.add_column("Region", overflow="fold")
    table.add_column("Latitude", justify="right")
    table.add_column("Longitude", justify="right")
    for index, place in enumerate(results, start=1):
        table.add_row(
            str(index),
            place.name or "-",
            place.label or "-",
            f"{place.coordinate.latitude:.4f}",
            f"{place.coordinate.longitude:.4f}",
        )
    console.print(table)


def _build_controller(
    settings: Settings,
    logger: logging.Logger,
    geolocator: Geolocator,
) -> DashboardController:
    http_kwargs = {
        "timeout_seconds": settings.http_timeout_seconds,
        "user_agent": settings.user_agent,
    }
    return DashboardController(
        geocoder=GeocodingClient(
            logger,
            base_url=str(settings.geocoding_url),
            result_count=settings.geocoding_result_count,
            language=settings.geocoding_language,
            **http_kwargs,
        ),
        forecaster=ForecastClient(
            logger,
            base_url=str(settings.forecast_url),
            hourly_window=settings.hourly_window,
            **http_kwargs,
        ),
        geolocator=geolocator,
        logger=logger,
        default_location=default_location_from_settings(settings),
    )


async def run(
    args: argparse.Namespace,
    settings: Settings,
    logger: logging.Logger,
    console: Console,
) -> int:
    """Execute one CLI command against a fresh controller."""
    geolocator: Geolocator = geolocator_from_settings(settings)
    if args.command == "here" and args.lat is not None:
        geolocator = StaticGeolocator(Coordinate(latitude=args.lat, longitude=args.lon))

    controller = _build_controller(settings, logger, geolocator)
    dashboard = TerminalDashboard(console=console)
    async with controller.geocoder, controller.forecaster:
        if args.command == "search":
            results = await controller.submit_search(args.query)
            if controller.state.error:
                console.print(f"[red]{controller.state.error}[/red]")
                return EXIT_UPSTREAM
            _print_candidates(console, args.query, results)
            return EXIT_OK

        if args.command == "here":
            await controller.use_current_location()
        elif args.query is not None:
            results = await controller.submit_search(args.query)
            if controller.state.error:
                dashboard.render(controller.state)
                return EXIT_UPSTREAM
            if not results:
                console.print(f"No places found for {args.query!r}.")
                return EXIT_UPSTREAM
            if args.pick > len(results):
                _print_candidates(console, args.query, results)
                console.print(f"--pick {args.pick} is out of range (1-{len(results)}).")
                return EXIT_UPSTREAM
            await controller.select_place(results[args.pick - 1])
        else:
            await controller.load(
                Coordinate(latitude=args.lat, longitude=args.lon),
                args.name,
                args.country,
            )

    dashboard.render(controller.state)
    if controller.state.error or controller.state.forecast is None:
        return EXIT_UPSTREAM
    return EXIT_OK


def main(argv: Sequence[str] | None = None) -> int:
    """Run the SkyCast CLI."""
    try:
        args = parse_args(argv)
    except ValueError as exc:
        print(f"skycast: error: {exc}", file=sys.stderr)
        return EXIT_CONFIG

    logger = setup_logger(level=logging.INFO if args.verbose else logging.WARNING)
    console = Console()

    try:
        settings = load_settings()
    except ConfigError as exc:
        logger.error("Configuration failure: %s", exc)
        return EXIT_CONFIG

    try:
        return asyncio.run(run(args, settings, logger, console))
    except Exception as exc:  # pragma: no cover
        logger.exception("Unexpected SkyCast failure: %s", exc)
        return EXIT_UNEXPECTED


if __name__ == "__main__":
    sys.exit(main())
