"""
Cardwise - Main Application Entry Point

Card billing-cycle advisory and purchase confirmation service. Purchases
arrive over HTTP or Telegram, are held until the user confirms them and
are then appended to the purchases spreadsheet.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from cardwise import __version__
from cardwise.core.config import settings
from cardwise.core.dependencies import init_state
from cardwise.core.logging import setup_logging
from cardwise.core.metrics import get_metrics, get_metrics_content_type
from cardwise.presentation.api import api_router
from cardwise.presentation.middleware import (
    LoggingMiddleware,
    RequestContextMiddleware,
    error_handler_middleware,
)
from cardwise.presentation.telegram import init_bot, shutdown_bot


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Handles startup and shutdown events:
    - Set up logging
    - Start the pending confirmation expiry sweeper
    - Start the Telegram bot when a token is configured
    """
    setup_logging()

    logger = structlog.get_logger(__name__)

    app.state.sweeper.start()
    await init_bot(app.state)
    logger.info(
        "application_started",
        version=__version__,
        cards=len(app.state.catalog),
        telegram_enabled=app.state.telegram_app is not None,
    )

    yield

    await shutdown_bot(app.state)
    await app.state.sweeper.stop()
    logger.info("application_stopped")


app = FastAPI(
    title="Cardwise",
    description="Card Advisory & Purchase Confirmation Service",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    debug=settings.debug,
    lifespan=lifespan,
)

init_state(app.state)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(LoggingMiddleware)
app.add_middleware(RequestContextMiddleware)

error_handler_middleware(app)

app.include_router(api_router)


async def metrics() -> Response:
    """Prometheus metrics endpoint."""
    return Response(
        content=get_metrics(),
        media_type=get_metrics_content_type(),
    )


if settings.metrics_enabled:
    app.add_api_route("/metrics", metrics, methods=["GET"], include_in_schema=False)


@app.get("/", include_in_schema=False)
async def root():
    """Redirect to API documentation."""

    return RedirectResponse(url="/docs")


def run() -> None:
    import uvicorn

    uvicorn.run("cardwise.main:app", host=settings.host, port=settings.port)
