"""Start, stop and inspect the spotting loop."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from planespotter.api.deps import get_controller
from planespotter.config import settings
from planespotter.errors import InvalidPosition, SaveCorrupted
from planespotter.models.spotter import SpotterStatus
from planespotter.services.loop_controller import LoopController, start_from_save

router = APIRouter(prefix="/api/v1/spotter", tags=["spotter"])

logger = logging.getLogger("planespotter.api.spotter")


@router.get("/status", response_model=SpotterStatus, summary="Loop status")
def get_status(controller: LoopController = Depends(get_controller)) -> SpotterStatus:
    return controller.status()


@router.post("/start", response_model=SpotterStatus, summary="Start spotting")
def start_spotting(controller: LoopController = Depends(get_controller)) -> SpotterStatus:
    """Start the loop from the saved config. A running loop is left as is."""

    try:
        started = start_from_save(controller, settings.save_path, settings.opensky_host)
    except InvalidPosition as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
        ) from exc
    except SaveCorrupted as exc:
        logger.error("Cannot start spotting: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)
        ) from exc
    if not started and not controller.is_running:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Spotting loop is still finishing a poll; try again",
        )
    return controller.status()


@router.post("/stop", response_model=SpotterStatus, summary="Stop spotting")
def stop_spotting(controller: LoopController = Depends(get_controller)) -> SpotterStatus:
    controller.stop()
    return controller.status()
