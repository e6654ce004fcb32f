"""Application exception classes."""


class ConfigError(Exception):
    """Raised when configuration is invalid or incomplete."""


class NetworkError(Exception):
    """Raised when an upstream call fails, returns non-success, or is malformed."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class GeolocationError(Exception):
    """Raised when device location is denied or the platform cannot provide one."""
