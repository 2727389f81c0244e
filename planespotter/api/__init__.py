"""API routers for planespotter."""

from fastapi import APIRouter

from .health import router as health_router
from .observer import router as observer_router
from .spotter import router as spotter_router

api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(spotter_router)
api_router.include_router(observer_router)

__all__ = ["api_router"]
