"""Request and response models for the spotter control API."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from planespotter.domain import LoopState
from planespotter.models.geo import Position
from planespotter.models.save_state import ApiAuth, Config

MASKED_PASSWORD = "********"


class SpotterStatus(BaseModel):
    """Snapshot of the spotting loop."""

    state: LoopState = Field(..., description="Current loop state")
    message: str = Field(..., description="Human-readable status line")
    running: bool = Field(..., description="True while the worker is polling")
    polls_completed: int = Field(default=0, description="Successful polls this run")
    last_poll_at: Optional[datetime] = Field(
        default=None, description="Time of the last successful poll (UTC)"
    )
    last_new_count: Optional[int] = Field(
        default=None, description="New aircraft found by the last poll"
    )
    rate_limit_remaining: Optional[str] = Field(
        default=None, description="Last X-Rate-Limit-Remaining header seen"
    )


class ConfigUpdate(BaseModel):
    """Settings form submission."""

    latitude: float = Field(..., description="Latitude in decimal degrees")
    longitude: float = Field(..., description="Longitude in decimal degrees")
    username: str = Field(..., min_length=1, description="OpenSky username")
    password: str = Field(..., min_length=1, description="OpenSky password")
    spot_distance_km: int = Field(..., ge=0, description="Search radius in km")
    check_freq_seconds: int = Field(..., ge=1, description="Seconds between polls")

    def to_config(self) -> Config:
        return Config(
            position=Position(latitude=self.latitude, longitude=self.longitude),
            api_auth=ApiAuth(username=self.username, password=self.password),
            spot_distance_km=self.spot_distance_km,
            check_freq_seconds=self.check_freq_seconds,
        )


class ConfigView(BaseModel):
    """Settings as rendered back to the client, password masked."""

    latitude: float
    longitude: float
    username: str
    password: str
    spot_distance_km: int
    check_freq_seconds: int

    @classmethod
    def from_config(cls, config: Config) -> "ConfigView":
        return cls(
            latitude=config.position.latitude,
            longitude=config.position.longitude,
            username=config.api_auth.username,
            password=MASKED_PASSWORD if config.api_auth.password else "",
            spot_distance_km=config.spot_distance_km,
            check_freq_seconds=config.check_freq_seconds,
        )


class StatsResponse(BaseModel):
    """Cumulative spotting statistics."""

    seen_count: int = Field(..., description="Number of distinct callsigns notified")
    callsigns: list[str] = Field(default_factory=list, description="Callsigns in order seen")


__all__ = [
    "ConfigUpdate",
    "ConfigView",
    "MASKED_PASSWORD",
    "SpotterStatus",
    "StatsResponse",
]
