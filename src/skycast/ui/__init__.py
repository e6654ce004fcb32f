"""Terminal presentation of the dashboard state."""

from .terminal_dashboard import TerminalDashboard, build_sparkline
from .theme import DAY_THEME, NIGHT_THEME, Theme, glyph_for, theme_for

__all__ = [
    "DAY_THEME",
    "NIGHT_THEME",
    "TerminalDashboard",
    "Theme",
    "build_sparkline",
    "glyph_for",
    "theme_for",
]
