"""
Calendar-safe month arithmetic.

Every month shift used by the payment window calculator goes through
these helpers. A configured day that does not exist in the target month
(e.g. 31 in April) is clamped to that month's last day; it never rolls
over into the following month.
"""

from calendar import monthrange
from datetime import date


def days_in_month(year: int, month: int) -> int:
    return monthrange(year, month)[1]


def clamped_date(year: int, month: int, day: int) -> date:
    """Build a date, clamping ``day`` to the length of the month."""
    return date(year, month, min(day, days_in_month(year, month)))


def add_months(year: int, month: int, months: int) -> tuple[int, int]:
    """Shift a (year, month) pair by ``months`` (may be negative)."""
    index = year * 12 + (month - 1) + months
    return index // 12, index % 12 + 1


def shift_to_day(anchor: date, months: int, day: int) -> date:
    """
    Move ``anchor`` by ``months`` and set the configured ``day``.

    Example:
        shift_to_day(date(2025, 1, 31), 1, 31) == date(2025, 2, 28)
    """
    year, month = add_months(anchor.year, anchor.month, months)
    return clamped_date(year, month, day)
