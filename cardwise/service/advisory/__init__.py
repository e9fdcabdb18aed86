"""
Billing-Cycle Advisory Engine
"""

from .settings import AdvisorySettings, advisory_settings
from .dates import add_months, clamped_date, days_in_month, shift_to_day
from .catalog import CycleCatalog, normalize_card_id
from .payment_window import (
    applicable_cut_date,
    as_calendar_day,
    compute_window,
    due_date_for_cut,
    window_for_cycle,
)
from .ranking import rank_cards
from .policy import should_warn, top_alternatives

__all__ = [
    # Settings
    "AdvisorySettings",
    "advisory_settings",
    # Calendar
    "add_months",
    "clamped_date",
    "days_in_month",
    "shift_to_day",
    # Catalog
    "CycleCatalog",
    "normalize_card_id",
    # Payment Window
    "applicable_cut_date",
    "as_calendar_day",
    "compute_window",
    "due_date_for_cut",
    "window_for_cycle",
    # Ranking
    "rank_cards",
    # Policy
    "should_warn",
    "top_alternatives",
]
