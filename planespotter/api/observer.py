"""Observer settings and spotting statistics.

This is the settings form of the desktop app exposed over HTTP: ``GET``
renders the current config and ``PUT`` submits a new one.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from planespotter import storage
from planespotter.api.deps import get_controller
from planespotter.config import settings
from planespotter.errors import InvalidPosition, SaveCorrupted
from planespotter.models.spotter import ConfigUpdate, ConfigView, StatsResponse
from planespotter.services.geofence import validate_position
from planespotter.services.loop_controller import LoopController, start_from_save

router = APIRouter(prefix="/api/v1", tags=["observer"])

logger = logging.getLogger("planespotter.api.observer")


def _load_state():
    storage.create_if_absent(settings.save_path)
    try:
        return storage.load(settings.save_path)
    except SaveCorrupted as exc:
        logger.error("Cannot read save file: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)
        ) from exc


@router.get("/config", response_model=ConfigView, summary="Current observer settings")
def get_config() -> ConfigView:
    return ConfigView.from_config(_load_state().config)


@router.put("/config", response_model=ConfigView, summary="Save observer settings")
def update_config(
    update: ConfigUpdate, controller: LoopController = Depends(get_controller)
) -> ConfigView:
    """Validate and save new settings, then restart spotting with them."""

    config = update.to_config()
    try:
        validate_position(config.position)
    except InvalidPosition as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
        ) from exc

    controller.stop()
    if not controller.join(settings.stop_timeout):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Spotting loop is still finishing a poll; try again",
        )

    saved = storage.save_config(settings.save_path, config)
    start_from_save(controller, settings.save_path, settings.opensky_host)
    return ConfigView.from_config(saved.config)


@router.get("/stats", response_model=StatsResponse, summary="Spotting statistics")
def get_stats() -> StatsResponse:
    registry = _load_state().registry
    return StatsResponse(seen_count=registry.seen_count, callsigns=list(registry.callsigns))
