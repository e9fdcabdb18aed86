"""Telegram webhook endpoint."""

import hmac
from typing import Any, Dict

import structlog
from fastapi import APIRouter, Body, HTTPException, Request

from cardwise.core.config import settings
from cardwise.presentation.telegram import handle_update

logger = structlog.get_logger(__name__)

telegram_router = APIRouter(prefix="/telegram")


@telegram_router.post(
    "/webhook/{secret}",
    include_in_schema=False,
)
async def telegram_webhook(
    secret: str,
    request: Request,
    payload: Dict[str, Any] = Body(...),
) -> Dict[str, bool]:
    """Feed a Telegram update to the bot."""
    expected = settings.telegram_webhook_secret
    if not expected or not hmac.compare_digest(secret, expected):
        raise HTTPException(status_code=404, detail="Not Found")

    application = getattr(request.app.state, "telegram_app", None)
    if application is None:
        logger.warning("telegram_update_dropped", reason="bot_not_initialised")
        raise HTTPException(status_code=503, detail="Telegram bot is not initialised")

    await handle_update(application, payload)
    return {"ok": True}
