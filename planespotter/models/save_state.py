"""Models persisted to the save file: observer config and seen registry."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from planespotter.models.geo import Position

DEFAULT_LATITUDE = 40.730610
DEFAULT_LONGITUDE = -73.935242
DEFAULT_SPOT_DISTANCE_KM = 20
DEFAULT_CHECK_FREQ_SECONDS = 60


def _default_position() -> Position:
    return Position(latitude=DEFAULT_LATITUDE, longitude=DEFAULT_LONGITUDE)


class ApiAuth(BaseModel):
    """OpenSky account credentials."""

    username: str = Field(default="", alias="Username")
    password: str = Field(default="", alias="Password")

    model_config = ConfigDict(populate_by_name=True)


class Config(BaseModel):
    """Observer configuration edited through the settings surface."""

    position: Position = Field(default_factory=_default_position, alias="Position")
    api_auth: ApiAuth = Field(default_factory=ApiAuth, alias="ApiAuth")
    spot_distance_km: int = Field(
        default=DEFAULT_SPOT_DISTANCE_KM,
        alias="SpotDistanceKm",
        description="Radius of the search area in kilometres",
    )
    check_freq_seconds: int = Field(
        default=DEFAULT_CHECK_FREQ_SECONDS,
        alias="CheckFreqSeconds",
        description="Seconds between OpenSky polls",
    )

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class SeenRegistry(BaseModel):
    """Callsigns that have already triggered a notification."""

    seen_count: int = Field(default=0, alias="SeenCount")
    callsigns: list[str] = Field(default_factory=list, alias="Callsigns")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_validator("callsigns", mode="before")
    @classmethod
    def _null_callsigns(cls, value: Any) -> Any:
        # Older save files wrote an unset list as null.
        return [] if value is None else value

    def __contains__(self, callsign: str) -> bool:
        return callsign in self.callsigns

    def record_if_new(self, callsign: str) -> bool:
        """Append ``callsign`` unless already present.

        Returns True when the callsign was new. The registry is append-only
        and ``seen_count`` always matches the number of stored callsigns
        after a mutation.
        """

        if callsign in self.callsigns:
            return False

        self.callsigns.append(callsign)
        self.seen_count = len(self.callsigns)
        return True


class SaveState(BaseModel):
    """Config and registry persisted together as one flat JSON document."""

    config: Config = Field(default_factory=Config)
    registry: SeenRegistry = Field(default_factory=SeenRegistry)

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "SaveState":
        return cls(
            config=Config.model_validate(document),
            registry=SeenRegistry.model_validate(document),
        )

    def to_document(self) -> dict[str, Any]:
        return {
            **self.config.model_dump(by_alias=True),
            **self.registry.model_dump(by_alias=True),
        }


__all__ = [
    "ApiAuth",
    "Config",
    "DEFAULT_CHECK_FREQ_SECONDS",
    "DEFAULT_LATITUDE",
    "DEFAULT_LONGITUDE",
    "DEFAULT_SPOT_DISTANCE_KM",
    "SaveState",
    "SeenRegistry",
]
