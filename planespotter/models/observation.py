"""Display-ready aircraft observation built from an OpenSky state vector."""

from __future__ import annotations

from pydantic import BaseModel, Field

NOT_AVAILABLE = "N/A"


class Observation(BaseModel):
    """A single aircraft as shown in a notification.

    Every field is already formatted for display. Fields that could not be
    decoded from the upstream record hold ``"N/A"``.
    """

    icao24: str = Field(default=NOT_AVAILABLE, description="ICAO 24-bit transponder address")
    callsign: str = Field(default=NOT_AVAILABLE, description="Callsign with padding removed")
    baro_altitude: str = Field(
        default=NOT_AVAILABLE, description="Barometric altitude in feet, e.g. '3280 ft'"
    )
    on_ground: str = Field(default=NOT_AVAILABLE, description="'true' or 'false'")
    velocity: str = Field(
        default=NOT_AVAILABLE, description="Ground speed in knots, e.g. '194 kts'"
    )
    true_track: str = Field(default=NOT_AVAILABLE, description="Track in whole degrees")


__all__ = ["NOT_AVAILABLE", "Observation"]
