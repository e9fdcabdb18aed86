"""Domain Entities - Core business objects."""

from .cycle import CycleConfig, PaymentWindow, RankedCard
from .purchase import PurchaseIntent, PURCHASE_STATUS_ACTIVE
from .confirmation import (
    ConfirmationKey,
    ConfirmationStage,
    ConfirmationOutcome,
    OutcomeStatus,
    PendingConfirmation,
)

__all__ = [
    "CycleConfig",
    "PaymentWindow",
    "RankedCard",
    "PurchaseIntent",
    "PURCHASE_STATUS_ACTIVE",
    "ConfirmationKey",
    "ConfirmationStage",
    "ConfirmationOutcome",
    "OutcomeStatus",
    "PendingConfirmation",
]
