"""Pending confirmation entities and workflow outcomes."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import List, NamedTuple, Optional

from .cycle import PaymentWindow, RankedCard
from .purchase import PurchaseIntent


class ConfirmationKey(NamedTuple):
    """Identifies the requester of a pending confirmation."""

    chat_id: int
    user_id: int


class ConfirmationStage(str, Enum):
    PREVIEW = "preview"
    WARNED = "warned"


@dataclass
class PendingConfirmation:
    """
    A purchase awaiting explicit approval.

    Owned by the pending confirmation store. The only in-place mutation
    allowed is PREVIEW -> WARNED.
    """

    purchase: PurchaseIntent
    created_at: datetime
    stage: ConfirmationStage = ConfirmationStage.PREVIEW

    def is_expired(self, now: datetime, ttl: timedelta) -> bool:
        """True once more than ``ttl`` has elapsed since creation."""
        return now - self.created_at > ttl

    def expires_at(self, ttl: timedelta) -> datetime:
        return self.created_at + ttl


class OutcomeStatus(str, Enum):
    """Result of a workflow step."""

    PREVIEW = "preview"
    WARNED = "warned"
    COMMITTED = "committed"
    CANCELLED = "cancelled"
    EXPIRED = "expired"
    REJECTED = "rejected"


@dataclass(frozen=True)
class ConfirmationOutcome:
    """What the front end renders after a workflow step."""

    status: OutcomeStatus
    message: str
    purchase: Optional[PurchaseIntent] = None
    window: Optional[PaymentWindow] = None
    alternatives: List[RankedCard] = field(default_factory=list)

    @property
    def is_terminal(self) -> bool:
        return self.status not in (OutcomeStatus.PREVIEW, OutcomeStatus.WARNED)
