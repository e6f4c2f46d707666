# src/joblistings/errors.py
"""
Exceptions raised by the layers *around* the parser (fetching, config).

The parser itself never raises: bad input turns into an empty result or a
dropped row. These are for the things a caller has to act on.
"""


class JobListingsError(Exception):
    """Base class for everything this package raises on purpose."""


class SheetsFetchError(JobListingsError, RuntimeError):
    """Could not get values out of the Sheets API (network, HTTP status, bad JSON)."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ConfigError(JobListingsError, ValueError):
    """An environment setting is missing or unusable."""
