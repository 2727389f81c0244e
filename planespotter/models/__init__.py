"""Pydantic models for planespotter."""

from .geo import Position, SearchArea
from .observation import NOT_AVAILABLE, Observation
from .save_state import ApiAuth, Config, SaveState, SeenRegistry
from .spotter import ConfigUpdate, ConfigView, SpotterStatus, StatsResponse

__all__ = [
    "ApiAuth",
    "Config",
    "ConfigUpdate",
    "ConfigView",
    "NOT_AVAILABLE",
    "Observation",
    "Position",
    "SaveState",
    "SearchArea",
    "SeenRegistry",
    "SpotterStatus",
    "StatsResponse",
]
