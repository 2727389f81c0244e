"""Health check endpoint."""

from fastapi import APIRouter, Depends

from planespotter.api.deps import get_controller
from planespotter.config import settings
from planespotter.services.loop_controller import LoopController

router = APIRouter()


@router.get("/healthz", summary="Health check")
def health_check(controller: LoopController = Depends(get_controller)) -> dict[str, str]:
    """Process liveness plus the spotting loop state.

    A loop in ERROR still reports ``ok``: the process is serving and the
    loop can be restarted through the API.
    """
    return {
        "status": "ok",
        "env": settings.planespotter_env,
        "spotter": controller.state.value,
    }
