"""Service-layer helpers for planespotter."""

from .geofence import (
    build_search_url,
    compute_search_area,
    km_to_latitude,
    km_to_longitude,
    search_url_for_config,
    validate_position,
)
from .loop_controller import LoopController, start_from_save
from .notifier import DesktopNotifier, LogNotifier, Notifier, get_notifier
from .poll_cycle import NOTIFICATION_TITLE, PollCycle, format_message

__all__ = [
    "DesktopNotifier",
    "LogNotifier",
    "LoopController",
    "NOTIFICATION_TITLE",
    "Notifier",
    "PollCycle",
    "build_search_url",
    "compute_search_area",
    "format_message",
    "get_notifier",
    "km_to_latitude",
    "km_to_longitude",
    "search_url_for_config",
    "start_from_save",
    "validate_position",
]
