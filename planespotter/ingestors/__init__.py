"""Data ingestors for planespotter."""

from .opensky import OpenSkyClient, parse_state_vector

__all__ = ["OpenSkyClient", "parse_state_vector"]
