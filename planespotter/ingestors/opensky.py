"""OpenSky ``states/all`` client and state-vector parser."""

from __future__ import annotations

import logging
import math
from typing import Any, Optional, Sequence

import httpx

from planespotter.errors import FetchError, ParseError
from planespotter.models.observation import NOT_AVAILABLE, Observation

logger = logging.getLogger("planespotter.ingestors.opensky")

RATE_LIMIT_HEADER = "X-Rate-Limit-Remaining"

# Positions within an OpenSky state vector.
ICAO24_INDEX = 0
CALLSIGN_INDEX = 1
BARO_ALTITUDE_INDEX = 7
ON_GROUND_INDEX = 8
VELOCITY_INDEX = 9
TRUE_TRACK_INDEX = 10


def _field(record: Sequence[Any], index: int) -> Any:
    if index < len(record):
        return record[index]
    return None


def _as_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def _as_float(value: Any) -> Optional[float]:
    # bool is an int subclass but never a measurement
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    return float(value)


def _as_bool(value: Any) -> Optional[bool]:
    return value if isinstance(value, bool) else None


def format_icao24(value: Any) -> str:
    icao24 = _as_str(value)
    return NOT_AVAILABLE if icao24 is None else icao24


def format_callsign(value: Any) -> str:
    """Strip the space padding OpenSky adds to callsigns."""

    callsign = _as_str(value)
    if not callsign:
        return NOT_AVAILABLE
    return callsign.replace(" ", "")


def format_baro_altitude(value: Any) -> str:
    altitude_m = _as_float(value)
    if altitude_m is None:
        return NOT_AVAILABLE
    return f"{int(altitude_m * 3.28084)} ft"


def format_on_ground(value: Any) -> str:
    on_ground = _as_bool(value)
    if on_ground is None:
        return NOT_AVAILABLE
    return "true" if on_ground else "false"


def format_velocity(value: Any) -> str:
    velocity_ms = _as_float(value)
    if velocity_ms is None:
        return NOT_AVAILABLE
    return f"{int(velocity_ms * 1.94384)} kts"


def format_true_track(value: Any) -> str:
    track = _as_float(value)
    if track is None:
        return NOT_AVAILABLE
    return f"{int(track)}°"


def parse_state_vector(record: Any) -> Observation:
    """Build an Observation from one positional OpenSky record.

    Each field is decoded on its own; a field of the wrong type becomes
    ``"N/A"`` without affecting the others. Never raises.
    """

    if not isinstance(record, (list, tuple)):
        return Observation()

    return Observation(
        icao24=format_icao24(_field(record, ICAO24_INDEX)),
        callsign=format_callsign(_field(record, CALLSIGN_INDEX)),
        baro_altitude=format_baro_altitude(_field(record, BARO_ALTITUDE_INDEX)),
        on_ground=format_on_ground(_field(record, ON_GROUND_INDEX)),
        velocity=format_velocity(_field(record, VELOCITY_INDEX)),
        true_track=format_true_track(_field(record, TRUE_TRACK_INDEX)),
    )


class OpenSkyClient:
    """Fetch raw state vectors from OpenSky, one request per call."""

    def __init__(
        self,
        *,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.timeout = timeout
        self.transport = transport
        self.last_rate_limit_remaining: str | None = None

    def fetch_states(self, url: str) -> list[list[Any]]:
        """Return the raw ``states`` records for ``url``.

        Raises FetchError on transport failures and non-success statuses and
        ParseError when the body is not a states document. A null or missing
        ``states`` field means no aircraft are in the area.
        """

        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                response = client.get(url)
        except httpx.RequestError as exc:
            logger.warning("OpenSky request failed: %s", exc)
            raise FetchError(f"error getting response from server: {exc}") from exc

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.warning("OpenSky returned HTTP %s", exc.response.status_code)
            raise FetchError(
                f"error getting response from server: status {exc.response.status_code}"
            ) from exc

        self.last_rate_limit_remaining = response.headers.get(RATE_LIMIT_HEADER)
        logger.info("Remaining API requests today: %s", self.last_rate_limit_remaining)

        try:
            payload = response.json()
        except ValueError as exc:
            logger.warning("Failed to parse OpenSky JSON response: %s", exc)
            raise ParseError(
                f"error parsing response from server: status {response.status_code} | {exc}"
            ) from exc

        if not isinstance(payload, dict):
            raise ParseError("error parsing response from server: expected a JSON object")

        raw_states = payload.get("states")
        if raw_states is None:
            return []
        if not isinstance(raw_states, list) or not all(
            isinstance(entry, list) for entry in raw_states
        ):
            raise ParseError("error parsing response from server: states must be a list of lists")

        logger.debug("Received %s state vectors", len(raw_states))
        return raw_states


__all__ = [
    "OpenSkyClient",
    "RATE_LIMIT_HEADER",
    "format_baro_altitude",
    "format_callsign",
    "format_icao24",
    "format_on_ground",
    "format_true_track",
    "format_velocity",
    "parse_state_vector",
]
