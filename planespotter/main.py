from __future__ import annotations

import contextlib
import logging
from pathlib import Path
import time

from fastapi import FastAPI, Request

from planespotter import storage
from planespotter.api import api_router
from planespotter.config import Settings, load_env_config, settings
from planespotter.errors import PlanespotterError
from planespotter.ingestors import OpenSkyClient
from planespotter.services import LoopController, PollCycle, get_notifier, start_from_save

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger("planespotter")


def build_controller(config: Settings) -> LoopController:
    """Wire the poll cycle and its collaborators from settings."""

    poll_cycle = PollCycle(
        config.save_path,
        client=OpenSkyClient(timeout=config.opensky_timeout),
        notifier=get_notifier(config.notifier, icon_path=config.icon_path),
    )
    return LoopController(poll_cycle)


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the save file, build the loop controller, optionally autostart."""

    # The environment only seeds a save file that does not exist yet.
    if not Path(settings.save_path).exists():
        storage.create_if_absent(settings.save_path, config=load_env_config())
        logger.info("First run: save file initialised at %s", settings.save_path)

    app.state.controller = build_controller(settings)

    if settings.autostart:
        try:
            start_from_save(app.state.controller, settings.save_path, settings.opensky_host)
        except PlanespotterError as exc:
            logger.warning("Autostart skipped: %s", exc)

    try:
        yield
    finally:
        app.state.controller.stop()
        app.state.controller.join(settings.stop_timeout)


app = FastAPI(title="Planespotter", lifespan=lifespan)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log control requests along with the spotting state they leave behind."""

    started = time.perf_counter()
    response = await call_next(request)
    if request.url.path == "/healthz":
        return response

    controller = getattr(request.app.state, "controller", None)
    logger.info(
        "HTTP %s %s -> %s (%.1f ms) spotter=%s",
        request.method,
        request.url.path,
        response.status_code,
        (time.perf_counter() - started) * 1000,
        controller.state.value if controller is not None else "-",
    )
    return response


app.include_router(api_router)


@app.get("/", summary="Root")
def read_root(request: Request) -> dict[str, str]:
    """Current spotting status line."""

    return {"message": request.app.state.controller.status().message}
