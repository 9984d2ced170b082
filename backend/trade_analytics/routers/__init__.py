from fastapi import APIRouter

from .health import router as health_router
from .strategies import router as strategies_router

api_router = APIRouter()

# Mount all sub-routers here. This keeps main.py clean.
api_router.include_router(health_router)
api_router.include_router(strategies_router, prefix="/api/strategies", tags=["strategies"])
