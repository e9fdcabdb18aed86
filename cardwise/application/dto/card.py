"""Data transfer objects for card window and ranking queries."""

from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class PaymentWindowDTO:
    """Payment window of a card for a reference date."""

    reference_date: str
    cut_date: str
    due_date: str
    days_to_pay: int

    @classmethod
    def from_entity(cls, window) -> "PaymentWindowDTO":
        return cls(
            reference_date=window.reference_date.isoformat(),
            cut_date=window.cut_date.isoformat(),
            due_date=window.due_date.isoformat(),
            days_to_pay=window.days_to_pay,
        )


@dataclass(frozen=True)
class RankedCardDTO:
    """One entry of a card ranking."""

    card_id: str
    window: PaymentWindowDTO

    @classmethod
    def from_entity(cls, ranked) -> "RankedCardDTO":
        return cls(
            card_id=ranked.card_id,
            window=PaymentWindowDTO.from_entity(ranked.window),
        )


@dataclass(frozen=True)
class CardWindowResponse:
    """Response data for a single card's payment window."""

    card_id: str
    exempt: bool
    window: PaymentWindowDTO


@dataclass(frozen=True)
class RankingResponse:
    """Response data for a card ranking."""

    reference_date: str
    cards: List[RankedCardDTO]

    @classmethod
    def from_entities(cls, reference_date, ranking: list) -> "RankingResponse":
        return cls(
            reference_date=reference_date.isoformat(),
            cards=[RankedCardDTO.from_entity(card) for card in ranking],
        )
