"""Geographic models for the observer position and the query bounding box."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Position(BaseModel):
    """Observer position in decimal degrees."""

    latitude: float = Field(..., alias="Latitude", description="Latitude in decimal degrees")
    longitude: float = Field(
        ..., alias="Longitude", description="Longitude in decimal degrees"
    )

    model_config = ConfigDict(populate_by_name=True)


class SearchArea(BaseModel):
    """Bounding box sent to OpenSky as lamin/lamax/lomin/lomax."""

    la_min: str = Field(..., description="Southern latitude bound")
    la_max: str = Field(..., description="Northern latitude bound")
    lo_min: str = Field(..., description="Western longitude bound")
    lo_max: str = Field(..., description="Eastern longitude bound")


__all__ = ["Position", "SearchArea"]
