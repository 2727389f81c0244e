"""Spotting loop lifecycle states."""

from __future__ import annotations

from enum import Enum


class LoopState(str, Enum):
    """States of the background spotting loop."""

    STOPPED = "STOPPED"
    RUNNING = "RUNNING"
    ERROR = "ERROR"


STARTED_TEXT = "Spotting 🔭"
STOPPED_TEXT = "Stopped 🛑"
ERROR_TEXT = "Error ⚠️"

__all__ = ["ERROR_TEXT", "LoopState", "STARTED_TEXT", "STOPPED_TEXT"]
