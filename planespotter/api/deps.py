"""Shared FastAPI dependencies."""

from __future__ import annotations

from fastapi import Request

from planespotter.services.loop_controller import LoopController


def get_controller(request: Request) -> LoopController:
    """Return the loop controller created during app startup."""

    return request.app.state.controller
