"""Domain enums shared across planespotter."""

from .loop_state import ERROR_TEXT, STARTED_TEXT, STOPPED_TEXT, LoopState

__all__ = ["ERROR_TEXT", "LoopState", "STARTED_TEXT", "STOPPED_TEXT"]
