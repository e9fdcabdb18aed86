"""Data transfer objects for purchase confirmation operations."""

import math
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional

from cardwise.domain.entities import PurchaseIntent

from .card import PaymentWindowDTO, RankedCardDTO

MIN_MONTHS = 1
MAX_MONTHS = 60
DEFAULT_USER_NAME = "SIN_NOMBRE"


@dataclass(frozen=True)
class PurchaseRequest:
    """Input data for previewing a purchase."""

    amount: float
    months: int
    bank: str
    description: str
    user_name: str = ""

    def validate(self) -> List[str]:
        errors = []

        if (
            isinstance(self.amount, bool)
            or not isinstance(self.amount, (int, float))
            or not math.isfinite(self.amount)
        ):
            errors.append("amount must be a finite number")
        elif self.amount <= 0:
            errors.append("amount must be positive")

        if (
            isinstance(self.months, bool)
            or not isinstance(self.months, int)
            or not MIN_MONTHS <= self.months <= MAX_MONTHS
        ):
            errors.append(f"months must be an integer between {MIN_MONTHS} and {MAX_MONTHS}")

        if not self.bank or not self.bank.strip():
            errors.append("bank is required")

        if not self.description or not self.description.strip():
            errors.append("description is required")

        return errors

    def to_intent(self, today: date) -> PurchaseIntent:
        return PurchaseIntent(
            amount=self.amount,
            months=self.months,
            bank=self.bank.strip().upper(),
            description=self.description.strip(),
            user=self.user_name.strip() or DEFAULT_USER_NAME,
            date=today,
        )


@dataclass(frozen=True)
class PurchaseDTO:
    """Purchase fields as shown to the user."""

    amount: float
    months: int
    bank: str
    description: str
    user: str
    date: str

    @classmethod
    def from_entity(cls, purchase: PurchaseIntent) -> "PurchaseDTO":
        return cls(
            amount=purchase.amount,
            months=purchase.months,
            bank=purchase.bank,
            description=purchase.description,
            user=purchase.user,
            date=purchase.formatted_date,
        )


@dataclass(frozen=True)
class OutcomeResponse:
    """Response data for a confirmation workflow step."""

    status: str
    message: str
    purchase: Optional[PurchaseDTO]
    window: Optional[PaymentWindowDTO]
    alternatives: List[RankedCardDTO] = field(default_factory=list)

    @classmethod
    def from_outcome(cls, outcome) -> "OutcomeResponse":
        return cls(
            status=outcome.status.value,
            message=outcome.message,
            purchase=PurchaseDTO.from_entity(outcome.purchase) if outcome.purchase else None,
            window=PaymentWindowDTO.from_entity(outcome.window) if outcome.window else None,
            alternatives=[RankedCardDTO.from_entity(alt) for alt in outcome.alternatives],
        )


@dataclass(frozen=True)
class PendingResponse:
    """Response data for a live pending confirmation."""

    stage: str
    purchase: PurchaseDTO
    created_at: str
    expires_at: str

    @classmethod
    def from_entity(cls, entry, expires_at: datetime) -> "PendingResponse":
        return cls(
            stage=entry.stage.value,
            purchase=PurchaseDTO.from_entity(entry.purchase),
            created_at=entry.created_at.isoformat(),
            expires_at=expires_at.isoformat(),
        )
