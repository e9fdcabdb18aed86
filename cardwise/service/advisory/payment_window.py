"""
Payment Window Calculator.

Computes, for a card with a known billing cycle, the cut date a purchase
made on the reference date falls into, the matching due date and the
number of days left to pay.

Algorithm:
1. Take this month's cut (configured day, clamped). If the reference is
   on or before it, that is the applicable cut; otherwise next month's.
2. Due date = applicable cut's month + due_offset, configured due day.
3. If the due date is not strictly after the cut, push it one more month.
4. days_to_pay = whole days from reference to due date, floored at 0.
"""

from datetime import date, datetime
from typing import Optional

from cardwise.domain.entities import CycleConfig, PaymentWindow

from .dates import clamped_date, shift_to_day
from .catalog import CycleCatalog


def as_calendar_day(reference: date | datetime) -> date:
    """Strip the time of day so same-day comparisons are exact."""
    if isinstance(reference, datetime):
        return reference.date()
    return reference


def applicable_cut_date(cycle: CycleConfig, reference: date) -> date:
    """Cut date a purchase on ``reference`` is billed in."""
    cut_this_month = clamped_date(reference.year, reference.month, cycle.cut_day)
    if reference <= cut_this_month:
        return cut_this_month
    return shift_to_day(cut_this_month, 1, cycle.cut_day)


def due_date_for_cut(cycle: CycleConfig, cut_date: date) -> date:
    """Due date paired with ``cut_date``; always strictly after it."""
    due = shift_to_day(cut_date, cycle.due_offset, cycle.due_day)
    if due <= cut_date:
        due = shift_to_day(cut_date, cycle.due_offset + 1, cycle.due_day)
    return due


def window_for_cycle(cycle: CycleConfig, reference: date | datetime) -> PaymentWindow:
    """Compute the payment window of ``cycle`` for a purchase on ``reference``."""
    day = as_calendar_day(reference)
    cut = applicable_cut_date(cycle, day)
    due = due_date_for_cut(cycle, cut)

    return PaymentWindow(
        reference_date=day,
        cut_date=cut,
        due_date=due,
        days_to_pay=max(0, (due - day).days),
        cycle=cycle,
    )


def compute_window(
    card_id: str,
    reference: date | datetime,
    catalog: CycleCatalog,
) -> Optional[PaymentWindow]:
    """
    Compute the payment window for a catalog card.

    Args:
        card_id: Card identifier (case-insensitive)
        reference: Purchase date; a datetime is reduced to its date
        catalog: Cycle catalog to look the card up in

    Returns:
        The payment window, or None when the card has no configured cycle
    """
    cycle = catalog.get(card_id)
    if cycle is None:
        return None
    return window_for_cycle(cycle, reference)
