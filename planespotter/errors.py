"""Exception types raised by planespotter."""

from __future__ import annotations


class PlanespotterError(Exception):
    """Base class for planespotter failures."""


class InvalidPosition(PlanespotterError):
    """Raised when observer coordinates fall outside the accepted range."""


class ConfigError(PlanespotterError):
    """Raised when bootstrap configuration is missing or malformed."""


class FetchError(PlanespotterError):
    """Raised when the OpenSky request fails or returns a non-success status."""


class ParseError(PlanespotterError):
    """Raised when the OpenSky response body cannot be decoded."""


class SaveNotFound(PlanespotterError):
    """Raised when loading a save file that has not been created yet."""


class SaveCorrupted(PlanespotterError):
    """Raised when a save file exists but is not a valid save document."""


__all__ = [
    "ConfigError",
    "FetchError",
    "InvalidPosition",
    "ParseError",
    "PlanespotterError",
    "SaveCorrupted",
    "SaveNotFound",
]
