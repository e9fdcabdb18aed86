from fastapi import APIRouter

from .card import card_router
from .purchase import purchase_router
from .telegram import telegram_router

router = APIRouter(prefix="/v1")

router.include_router(purchase_router, tags=["Purchases"])
router.include_router(card_router, tags=["Cards"])
router.include_router(telegram_router, tags=["Telegram"])
