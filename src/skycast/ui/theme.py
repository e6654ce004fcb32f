"""Day/night colour themes and weather glyphs for the terminal dashboard."""

from __future__ import annotations

from dataclasses import dataclass

from ..weather.codes import WeatherClass


@dataclass(frozen=True, slots=True)
class Theme:
    title: str
    border: str
    accent: str


DAY_THEME = Theme(title="Day", border="bright_blue", accent="bright_yellow")
NIGHT_THEME = Theme(title="Night", border="blue", accent="bright_cyan")

_GLYPHS: dict[WeatherClass, tuple[str, str]] = {
    "clear": ("☀", "yellow"),
    "cloudy": ("☁", "grey70"),
    "rain": ("🌧", "blue"),
    "snow": ("❄", "bright_white"),
    "showers": ("🌦", "bright_blue"),
    "thunder": ("⚡", "magenta"),
}


def theme_for(is_day: bool) -> Theme:
    return DAY_THEME if is_day else NIGHT_THEME


def glyph_for(weather_class: WeatherClass, *, is_day: bool) -> tuple[str, str]:
    """Return ``(glyph, style)``; clear skies show a moon at night."""
    if weather_class == "clear" and not is_day:
        return "☾", "bright_cyan"
    return _GLYPHS[weather_class]
