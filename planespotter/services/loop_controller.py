"""Background driver that runs a PollCycle on a fixed interval."""

from __future__ import annotations

from datetime import datetime, timezone
import logging
from pathlib import Path
import threading
from typing import Optional, Union

from planespotter import storage
from planespotter.domain import ERROR_TEXT, STARTED_TEXT, STOPPED_TEXT, LoopState
from planespotter.errors import FetchError, ParseError
from planespotter.models.save_state import SaveState
from planespotter.models.spotter import SpotterStatus
from planespotter.services.geofence import search_url_for_config
from planespotter.services.poll_cycle import PollCycle

logger = logging.getLogger("planespotter.loop_controller")


class LoopController:
    """Own the spotting loop: one worker thread, started and stopped on request.

    The worker wakes once per tick, adds the tick to the elapsed time and
    runs the poll cycle once ``check_freq_seconds`` have passed. The first
    poll happens on the first tick. Cancellation is a per-run
    ``threading.Event`` checked at every tick boundary, so a stop request
    never interrupts a fetch in progress.
    """

    def __init__(self, poll_cycle: PollCycle, *, tick_seconds: float = 1.0) -> None:
        self.poll_cycle = poll_cycle
        self.tick_seconds = tick_seconds

        self._lock = threading.Lock()
        self._state = LoopState.STOPPED
        self._message = STOPPED_TEXT
        self._cancel: Optional[threading.Event] = None
        self._worker: Optional[threading.Thread] = None
        self._polls_completed = 0
        self._last_poll_at: Optional[datetime] = None
        self._last_new_count: Optional[int] = None

    @property
    def state(self) -> LoopState:
        with self._lock:
            return self._state

    @property
    def is_running(self) -> bool:
        return self.state == LoopState.RUNNING

    @property
    def worker_alive(self) -> bool:
        worker = self._worker
        return worker is not None and worker.is_alive()

    def start(self, search_url: str, state: SaveState) -> bool:
        """Start polling.

        Returns False when a loop is already running, or when a stopped
        worker is still finishing its last poll. At most one worker thread
        exists at any time.
        """

        with self._lock:
            if self._state == LoopState.RUNNING:
                return False
            if self.worker_alive:
                logger.warning("Previous spotting worker still finishing a poll")
                return False

            cancel = threading.Event()
            self._cancel = cancel
            self._state = LoopState.RUNNING
            self._message = STARTED_TEXT
            self._polls_completed = 0
            self._last_new_count = None
            self._worker = threading.Thread(
                target=self._run,
                args=(search_url, state, cancel),
                daemon=True,
                name="planespotter-loop",
            )
            self._worker.start()

        logger.info("Spotting started")
        return True

    def stop(self) -> bool:
        """Signal the worker to exit. Returns False when nothing was running."""

        with self._lock:
            if self._state != LoopState.RUNNING:
                return False

            if self._cancel is not None:
                self._cancel.set()
            self._state = LoopState.STOPPED
            self._message = STOPPED_TEXT

        logger.info("Spotting stopped")
        return True

    def join(self, timeout: Optional[float] = None) -> bool:
        """Wait for the worker thread to exit. Returns True once it has."""

        worker = self._worker
        if worker is None or worker is threading.current_thread():
            return True
        worker.join(timeout)
        return not worker.is_alive()

    def status(self) -> SpotterStatus:
        with self._lock:
            return SpotterStatus(
                state=self._state,
                message=self._message,
                running=self._state == LoopState.RUNNING,
                polls_completed=self._polls_completed,
                last_poll_at=self._last_poll_at,
                last_new_count=self._last_new_count,
                rate_limit_remaining=self.poll_cycle.last_rate_limit_remaining,
            )

    def _run(self, search_url: str, state: SaveState, cancel: threading.Event) -> None:
        check_freq = state.config.check_freq_seconds
        elapsed = float(check_freq)

        while not cancel.wait(self.tick_seconds):
            elapsed += self.tick_seconds
            if elapsed < check_freq:
                continue

            try:
                new_count = self.poll_cycle.run(search_url, state)
            except (FetchError, ParseError) as exc:
                logger.error("Error updating planes: %s", exc)
                self._fail(cancel, str(exc))
                return
            except Exception as exc:  # pragma: no cover - unexpected failure
                logger.exception("Unexpected error in spotting loop")
                self._fail(cancel, str(exc))
                return

            elapsed = 0.0
            with self._lock:
                if cancel.is_set():
                    break
                self._polls_completed += 1
                self._last_poll_at = datetime.now(tz=timezone.utc)
                self._last_new_count = new_count

        logger.debug("Spotting worker exited")

    def _fail(self, cancel: threading.Event, reason: str) -> None:
        with self._lock:
            # A stop() issued while the failing poll was in flight wins.
            if cancel.is_set():
                return
            cancel.set()
            self._state = LoopState.ERROR
            self._message = f"{ERROR_TEXT} - {reason}"


def start_from_save(controller: LoopController, save_path: Union[str, Path], host: str) -> bool:
    """Load the save file and start ``controller`` against its config.

    Creates a default save file first if none exists. Raises
    InvalidPosition before anything starts when the stored position is out
    of range.
    """

    storage.create_if_absent(save_path)
    state = storage.load(save_path)
    search_url = search_url_for_config(state.config, host)
    return controller.start(search_url, state)


__all__ = ["LoopController", "start_from_save"]
