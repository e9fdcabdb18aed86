"""Health check endpoint for service monitoring."""

from fastapi import APIRouter, Request
from pydantic import BaseModel

from cardwise import __version__

health_router = APIRouter()


class HealthResponse(BaseModel):
    status: str = "healthy"
    version: str
    pending_confirmations: int
    sweeper_running: bool


@health_router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health Check",
    description="Returns the health status of the service.",
)
async def health_check(request: Request) -> HealthResponse:
    state = request.app.state
    return HealthResponse(
        status="healthy",
        version=__version__,
        pending_confirmations=len(state.pending_store),
        sweeper_running=state.sweeper.running,
    )
