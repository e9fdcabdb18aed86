"""Pydantic schemas for API request/response validation."""

from .card import (
    CardWindowResponseSchema,
    PaymentWindowSchema,
    RankedCardSchema,
    RankingResponseSchema,
)
from .purchase import (
    ConfirmationKeySchema,
    OutcomeResponseSchema,
    PendingResponseSchema,
    PurchaseRequestSchema,
    PurchaseSchema,
)
from .error import ErrorResponseSchema

__all__ = [
    "CardWindowResponseSchema",
    "PaymentWindowSchema",
    "RankedCardSchema",
    "RankingResponseSchema",
    "ConfirmationKeySchema",
    "OutcomeResponseSchema",
    "PendingResponseSchema",
    "PurchaseRequestSchema",
    "PurchaseSchema",
    "ErrorResponseSchema",
]
