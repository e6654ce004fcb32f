"""SkyCast terminal weather dashboard backed by Open-Meteo."""

__version__ = "0.1.0"
