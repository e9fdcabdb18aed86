from fastapi import APIRouter

from .v1.health import health_router
from .v1.router import router as v1_router

api_router = APIRouter()

api_router.include_router(health_router, tags=["Health"])
api_router.include_router(v1_router)
