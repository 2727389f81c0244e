"""One fetch, parse, filter, notify and persist pass."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

from planespotter import storage
from planespotter.ingestors.opensky import OpenSkyClient, parse_state_vector
from planespotter.models.observation import Observation
from planespotter.models.save_state import SaveState
from planespotter.services.notifier import Notifier

logger = logging.getLogger("planespotter.poll_cycle")

NOTIFICATION_TITLE = "Plane Spotted!"


def format_message(observation: Observation, total_seen: int) -> str:
    """Notification body for a newly spotted aircraft."""

    return (
        f"{observation.callsign} \n"
        f" ↑ {observation.baro_altitude} → {observation.velocity} 🧭 {observation.true_track} \n"
        f"Total seen: {total_seen}"
    )


class PollCycle:
    """Poll OpenSky once and alert on aircraft not seen before."""

    def __init__(
        self,
        save_path: Union[str, Path],
        *,
        client: OpenSkyClient,
        notifier: Notifier,
    ) -> None:
        self.save_path = save_path
        self.client = client
        self.notifier = notifier

    @property
    def last_rate_limit_remaining(self) -> str | None:
        return self.client.last_rate_limit_remaining

    def run(self, search_url: str, state: SaveState) -> int:
        """Run one pass against ``state`` and return the number of new aircraft.

        FetchError and ParseError from the client propagate. Each new
        aircraft is saved before its notification is sent, so a crash loses
        at most the aircraft after the last successful save.
        """

        records = self.client.fetch_states(search_url)
        logger.info("Received %s planes", len(records))

        new_count = 0
        for record in records:
            observation = parse_state_vector(record)
            if not state.registry.record_if_new(observation.callsign):
                continue

            new_count += 1
            self._persist(state)
            self.notifier.notify(
                NOTIFICATION_TITLE,
                format_message(observation, state.registry.seen_count),
            )
            logger.info(
                "Spotted %s (%s), total seen %s",
                observation.callsign,
                observation.icao24,
                state.registry.seen_count,
            )

        return new_count

    def _persist(self, state: SaveState) -> None:
        try:
            storage.save(self.save_path, state)
        except OSError as exc:
            logger.warning("Error saving progress to %s: %s", self.save_path, exc)


__all__ = ["NOTIFICATION_TITLE", "PollCycle", "format_message"]
