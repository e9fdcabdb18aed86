"""Card Ranking Engine."""

from datetime import date, datetime
from typing import Iterable, List

from cardwise.domain.entities import RankedCard

from .catalog import CycleCatalog, normalize_card_id
from .payment_window import compute_window


def rank_cards(
    reference: date | datetime,
    catalog: CycleCatalog,
    excluded: Iterable[str] = (),
) -> List[RankedCard]:
    """
    Rank every catalog card by days-to-pay, longest window first.

    Cards tied on days-to-pay keep catalog order (the sort is stable).

    Args:
        reference: Purchase date
        catalog: Cycle catalog
        excluded: Card identifiers to leave out (case-insensitive)

    Returns:
        Ranked cards, fully materialized
    """
    skip = {normalize_card_id(card) for card in excluded}

    ranked = []
    for card_id in catalog:
        if card_id in skip:
            continue
        window = compute_window(card_id, reference, catalog)
        if window is None:
            continue
        ranked.append(RankedCard(card_id=card_id, window=window))

    # sorted() is stable with reverse=True, so ties keep catalog order
    return sorted(ranked, key=lambda card: card.days_to_pay, reverse=True)
