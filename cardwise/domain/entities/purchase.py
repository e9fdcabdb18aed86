"""Purchase intent entity."""

from dataclasses import dataclass
from datetime import date

PURCHASE_STATUS_ACTIVE = "ACTIVA"
DATE_FORMAT = "%d/%m/%Y"


@dataclass(frozen=True)
class PurchaseIntent:
    """
    A validated purchase waiting to be recorded.

    Attributes:
        amount: Purchase amount (positive, finite)
        months: Number of monthly installments (1-60)
        bank: Card identifier, always upper case
        description: What was bought
        user: Display name of the purchaser
        date: Calendar date the intent was created
    """

    amount: float
    months: int
    bank: str
    description: str
    user: str
    date: date

    @property
    def formatted_date(self) -> str:
        """Creation date as dd/mm/YYYY."""
        return self.date.strftime(DATE_FORMAT)

    def to_dict(self) -> dict:
        return {
            "amount": self.amount,
            "months": self.months,
            "bank": self.bank,
            "description": self.description,
            "user": self.user,
            "date": self.formatted_date,
        }
