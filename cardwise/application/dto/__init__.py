"""Data Transfer Objects for application layer."""

from .card import (
    CardWindowResponse,
    PaymentWindowDTO,
    RankedCardDTO,
    RankingResponse,
)
from .purchase import (
    OutcomeResponse,
    PendingResponse,
    PurchaseDTO,
    PurchaseRequest,
)

__all__ = [
    "CardWindowResponse",
    "PaymentWindowDTO",
    "RankedCardDTO",
    "RankingResponse",
    "OutcomeResponse",
    "PendingResponse",
    "PurchaseDTO",
    "PurchaseRequest",
]
