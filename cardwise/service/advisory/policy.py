"""
Advisory Decision Policy.

Decides whether the user should be told that another card gives a
longer payment window than the one they picked.
"""

from typing import List, Sequence

from cardwise.domain.entities import PaymentWindow, RankedCard

from .settings import advisory_settings


def should_warn(
    chosen: PaymentWindow,
    ranking: Sequence[RankedCard],
    threshold_days: int = advisory_settings.warning_threshold_days,
) -> bool:
    """
    Warn when the best alternative beats the chosen card by the threshold.

    The boundary is inclusive: an edge of exactly ``threshold_days`` warns.

    Args:
        chosen: Window of the card the user picked
        ranking: Alternatives, best first (chosen card excluded)
        threshold_days: Minimum extra days to pay

    Returns:
        True if a warning should be shown
    """
    if not ranking:
        return False
    return ranking[0].days_to_pay >= chosen.days_to_pay + threshold_days


def top_alternatives(
    ranking: Sequence[RankedCard],
    limit: int = advisory_settings.max_alternatives,
) -> List[RankedCard]:
    """First ``limit`` entries of a ranking, for display."""
    return list(ranking[:limit])
