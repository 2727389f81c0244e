"""Bounding-box calculation and OpenSky query URL construction."""

from __future__ import annotations

import logging
import math
from urllib.parse import quote, urlencode

from planespotter.errors import InvalidPosition
from planespotter.models.geo import Position, SearchArea
from planespotter.models.save_state import ApiAuth, Config

logger = logging.getLogger("planespotter.geofence")

KM_PER_DEGREE_LATITUDE = 111.1
KM_PER_DEGREE_LONGITUDE = 110.320
STATES_PATH = "/api/states/all"


def validate_position(position: Position) -> Position:
    """Reject coordinates outside the accepted range.

    Latitude is checked against +/-180 and longitude against +/-90. These
    bounds are transposed relative to geodetic ranges; existing save files
    and bootstrap configs were validated this way, so the check is kept.
    """

    if position.latitude > 180 or position.latitude < -180:
        raise InvalidPosition(
            f"Latitude of {position.latitude:g} invalid. Must be between 180 and -180"
        )
    if position.longitude > 90 or position.longitude < -90:
        raise InvalidPosition(
            f"Longitude of {position.longitude:g} invalid. Must be between 90 and -90"
        )
    return position


def km_to_latitude(km: float) -> float:
    """Convert a distance in km to decimal degrees of latitude."""

    return km / KM_PER_DEGREE_LATITUDE


def km_to_longitude(km: float, latitude: float) -> float:
    """Convert a distance in km to decimal degrees of longitude at ``latitude``.

    ``latitude`` is passed to the cosine unconverted, so the result can be
    negative. Callers that need a width use the magnitude.
    """

    return km / KM_PER_DEGREE_LONGITUDE * math.cos(latitude)


def compute_search_area(position: Position, radius_km: float) -> SearchArea:
    """Return the bounding box of ``radius_km`` around ``position``."""

    validate_position(position)

    lat_offset = km_to_latitude(radius_km)
    lon_offset = abs(km_to_longitude(radius_km, position.latitude))

    return SearchArea(
        la_min=f"{position.latitude - lat_offset:.4f}",
        la_max=f"{position.latitude + lat_offset:.4f}",
        lo_min=f"{position.longitude - lon_offset:.4f}",
        lo_max=f"{position.longitude + lon_offset:.4f}",
    )


def build_search_url(host: str, api_auth: ApiAuth, area: SearchArea) -> str:
    """Build the authenticated ``states/all`` URL for ``area``.

    Credentials travel in the URL userinfo; they are percent-encoded but not
    otherwise checked here.
    """

    query = urlencode(
        {
            "lamin": area.la_min,
            "lomin": area.lo_min,
            "lamax": area.la_max,
            "lomax": area.lo_max,
        }
    )
    username = quote(api_auth.username, safe="")
    password = quote(api_auth.password, safe="")
    return f"https://{username}:{password}@{host}{STATES_PATH}?{query}"


def search_url_for_config(config: Config, host: str) -> str:
    """Compute the search area for ``config`` and return its query URL."""

    area = compute_search_area(config.position, config.spot_distance_km)
    logger.info(
        "Search area lat %s..%s lon %s..%s (%s km)",
        area.la_min,
        area.la_max,
        area.lo_min,
        area.lo_max,
        config.spot_distance_km,
    )
    return build_search_url(host, config.api_auth, area)


__all__ = [
    "build_search_url",
    "compute_search_area",
    "km_to_latitude",
    "km_to_longitude",
    "search_url_for_config",
    "validate_position",
]
