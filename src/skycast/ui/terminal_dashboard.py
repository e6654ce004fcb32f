"""Rich-rendered weather dashboard for the terminal."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, datetime

from rich.columns import Columns
from rich.console import Console, Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..state import DashboardState
from ..weather.codes import classify_weather_code, describe_weather_code
from ..weather.models import ForecastModel, PlaceCandidate
from .theme import Theme, glyph_for, theme_for

SPARK_CHARS = "▁▂▃▄▅▆▇█"
TREND_LABEL_EVERY = 6


def build_sparkline(values: Sequence[float | None]) -> str:
    """Scale values onto block characters; missing points render as spaces."""
    present = [v for v in values if v is not None]
    if not present:
        return ""
    low, high = min(present), max(present)
    span = high - low
    top = len(SPARK_CHARS) - 1
    chars = []
    for value in values:
        if value is None:
            chars.append(" ")
        elif span == 0:
            chars.append(SPARK_CHARS[top // 2])
        else:
            chars.append(SPARK_CHARS[round((value - low) / span * top)])
    return "".join(chars)


def format_hour(timestamp: str) -> str:
    try:
        return datetime.fromisoformat(timestamp).strftime("%H:%M")
    except ValueError:
        return timestamp


def format_day(day: str, index: int) -> str:
    if index == 0:
        return "Today"
    try:
        return date.fromisoformat(day).strftime("%a")
    except ValueError:
        return day


def format_temp(value: float | None) -> str:
    if value is None:
        return "-"
    return f"{round(value)}°"


class TerminalDashboard:
    """Render a ``DashboardState`` as panels: hero, trend, 7-day strip, tiles."""

    def __init__(self, *, console: Console, today: date | None = None) -> None:
        self.console = console
        self._today = today

    def render(self, state: DashboardState) -> None:
        self.console.print(self.build(state))

    def build(self, state: DashboardState) -> RenderableType:
        forecast = state.forecast
        theme = theme_for(forecast.current.is_day if forecast else True)
        parts: list[RenderableType] = [self._build_header_panel(forecast, theme)]

        if state.error:
            parts.append(Text(f"! {state.error}", style="bold red"))
        if state.notice:
            parts.append(Text(f"i {state.notice}", style="yellow"))
        if state.search_results:
            parts.append(self._build_search_panel(state.search_results, theme))

        if forecast is None:
            message = "Loading weather..." if state.loading else "No location selected."
            parts.append(Panel(Text(message, style="dim"), border_style=theme.border))
            return Group(*parts)

        hero = self._build_hero_panel(forecast, theme)
        trend = self._build_trend_panel(forecast, theme)
        if self.console.width < 110:
            parts.extend([hero, trend])
        else:
            parts.append(Columns([hero, trend], equal=True, expand=True))
        parts.append(self._build_daily_panel(forecast, theme))
        parts.append(self._build_tiles(forecast, theme))
        if state.loading:
            parts.append(Text("Refreshing...", style="dim"))
        return Group(*parts)

    def _build_header_panel(self, forecast: ForecastModel | None, theme: Theme) -> Panel:
        today = self._today or date.today()
        text = Text()
        text.append("SkyCast", style=f"bold {theme.accent}")
        if forecast is not None:
            location = forecast.location
            place = ", ".join(part for part in (location.name, location.country) if part)
            text.append("  |  ")
            text.append(place or "Unknown location", style="bold white")
        text.append("  ")
        text.append(today.strftime("%A, %d %B").replace(" 0", " "), style="dim")
        return Panel(text, border_style=theme.border, title=theme.title)

    def _build_search_panel(
        self, results: Sequence[PlaceCandidate], theme: Theme
    ) -> Panel:
        table = Table(show_header=True, header_style="bold")
        table.add_column("#", justify="right", width=3)
        table.add_column("Place", overflow="fold")
        table.add_column("Region", overflow="fold")
        table.add_column("Lat/Lon", justify="right")
        for index, place in enumerate(results, start=1):
            table.add_row(
                str(index),
                place.name or "-",
                place.label or "-",
                f"{place.coordinate.latitude:.4f}, {place.coordinate.longitude:.4f}",
            )
        return Panel(table, title="Search Results", border_style=theme.border)

    def _build_hero_panel(self, forecast: ForecastModel, theme: Theme) -> Panel:
        current = forecast.current
        weather_class = classify_weather_code(current.weather_code)
        glyph, style = glyph_for(weather_class, is_day=current.is_day)
        text = Text()
        text.append(f"{glyph} ", style=style)
        text.append(f"{round(current.temperature)}°C", style=f"bold {theme.accent}")
        text.append("\n")
        text.append(current.condition, style="bold")
        text.append("\n")
        text.append(f"Wind {current.wind_speed:g} km/h", style="dim")
        text.append("  ")
        text.append(f"Humidity {current.humidity:g}%", style="dim")
        return Panel(text, title="Now", border_style=theme.border)

    def _build_trend_panel(self, forecast: ForecastModel, theme: Theme) -> Panel:
        hourly = forecast.hourly
        if not hourly.time:
            return Panel(Text("No hourly data", style="dim"), title="Temperature Trend")
        spark = Text(build_sparkline(hourly.temperature), style=theme.accent)
        labels = Table.grid(padding=(0, 2))
        picks = range(0, len(hourly.time), TREND_LABEL_EVERY)
        for _ in picks:
            labels.add_column(justify="center")
        labels.add_row(*(format_hour(hourly.time[i]) for i in picks))
        labels.add_row(*(format_temp(hourly.temperature[i]) for i in picks))
        return Panel(
            Group(spark, labels),
            title=f"Temperature Trend · Next {len(hourly.time)} Hours",
            border_style=theme.border,
        )

    def _build_daily_panel(self, forecast: ForecastModel, theme: Theme) -> Panel:
        daily = forecast.daily
        cards: list[Panel] = []
        for index, day in enumerate(daily.time):
            code = daily.weather_code[index]
            glyph, style = glyph_for(classify_weather_code(code), is_day=True)
            body = Text(justify="center")
            body.append(f"{glyph}\n", style=style)
            body.append(format_temp(daily.max_temperature[index]), style="bold")
            body.append(" / ")
            body.append(format_temp(daily.min_temperature[index]), style="dim")
            body.append("\n")
            body.append(describe_weather_code(code), style="italic")
            cards.append(Panel(body, title=format_day(day, index), width=18))
        if not cards:
            return Panel(Text("No daily data", style="dim"), title="7-Day Forecast")
        return Panel(
            Columns(cards),
            title=f"{len(cards)}-Day Forecast",
            border_style=theme.border,
        )

    def _build_tiles(self, forecast: ForecastModel, theme: Theme) -> Columns:
        current = forecast.current
        tiles = [
            ("Wind Speed", f"{current.wind_speed:g} km/h"),
            ("Humidity", f"{current.humidity:g}%"),
            ("Daylight", "Day" if current.is_day else "Night"),
        ]
        return Columns(
            [
                Panel(Text(value, style="bold"), title=title, border_style=theme.border)
                for title, value in tiles
            ],
            equal=True,
            expand=True,
        )
