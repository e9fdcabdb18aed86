"""Billing-cycle entities: cycle definitions and derived payment windows."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class CycleConfig:
    """
    Billing cycle of a card.

    Attributes:
        cut_day: Day of month the statement closes (1-31)
        due_day: Day of month payment is due (1-31)
        due_offset: 0 if the due date falls in the cut's month, 1 if in the next
    """

    cut_day: int
    due_day: int
    due_offset: int = 1

    def __post_init__(self):
        for name in ("cut_day", "due_day"):
            value = getattr(self, name)
            if not 1 <= value <= 31:
                raise ValueError(f"{name} must be between 1 and 31, got {value}")
        if self.due_offset not in (0, 1):
            raise ValueError(f"due_offset must be 0 or 1, got {self.due_offset}")


@dataclass(frozen=True)
class PaymentWindow:
    """
    Payment window for a purchase made on ``reference_date``.

    Never persisted; recomputed for every query.
    """

    reference_date: date
    cut_date: date
    due_date: date
    days_to_pay: int
    cycle: CycleConfig

    def to_dict(self) -> dict:
        return {
            "reference_date": self.reference_date.isoformat(),
            "cut_date": self.cut_date.isoformat(),
            "due_date": self.due_date.isoformat(),
            "days_to_pay": self.days_to_pay,
        }


@dataclass(frozen=True)
class RankedCard:
    """A card paired with its payment window for a reference date."""

    card_id: str
    window: PaymentWindow

    @property
    def days_to_pay(self) -> int:
        return self.window.days_to_pay
