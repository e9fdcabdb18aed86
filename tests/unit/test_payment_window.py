"""
Unit Tests for the Payment Window Calculator.

These tests verify:
1. Month arithmetic with clamping to the last day of the month
2. Cut date selection, including a reference on the cut day itself
3. Due date selection and the roll-forward when due <= cut
4. The window invariants over a broad grid of cycles and dates
"""

from datetime import date, datetime, timedelta

import pytest

from cardwise.domain.entities import CycleConfig
from cardwise.service.advisory import CycleCatalog, compute_window
from cardwise.service.advisory.dates import (
    add_months,
    clamped_date,
    days_in_month,
    shift_to_day,
)
from cardwise.service.advisory.payment_window import (
    applicable_cut_date,
    due_date_for_cut,
    window_for_cycle,
)


# =============================================================================
# Month Arithmetic
# =============================================================================

class TestMonthArithmetic:
    """Tests for the calendar helpers."""

    def test_days_in_month_handles_leap_years(self):
        assert days_in_month(2024, 2) == 29
        assert days_in_month(2025, 2) == 28
        assert days_in_month(2025, 4) == 30

    def test_clamped_date_clamps_to_month_end(self):
        assert clamped_date(2025, 4, 31) == date(2025, 4, 30)
        assert clamped_date(2025, 2, 30) == date(2025, 2, 28)
        assert clamped_date(2025, 5, 15) == date(2025, 5, 15)

    def test_add_months_crosses_year_boundaries(self):
        assert add_months(2025, 12, 1) == (2026, 1)
        assert add_months(2025, 1, -1) == (2024, 12)
        assert add_months(2025, 11, 2) == (2026, 1)
        assert add_months(2025, 3, 0) == (2025, 3)

    def test_shift_to_day_never_rolls_into_following_month(self):
        assert shift_to_day(date(2025, 1, 31), 1, 31) == date(2025, 2, 28)
        assert shift_to_day(date(2024, 1, 31), 1, 30) == date(2024, 2, 29)


# =============================================================================
# Cycle Configuration
# =============================================================================

class TestCycleConfig:
    """Tests for CycleConfig validation."""

    @pytest.mark.parametrize(
        "cut_day,due_day,due_offset",
        [(0, 10, 1), (32, 10, 1), (10, 0, 1), (10, 32, 0), (10, 20, 2), (10, 20, -1)],
    )
    def test_invalid_cycle_raises(self, cut_day, due_day, due_offset):
        with pytest.raises(ValueError):
            CycleConfig(cut_day=cut_day, due_day=due_day, due_offset=due_offset)

    def test_valid_cycle(self):
        cycle = CycleConfig(cut_day=31, due_day=1, due_offset=0)
        assert cycle.cut_day == 31


# =============================================================================
# Window Computation
# =============================================================================

class TestComputeWindow:
    """Tests for cut/due date selection."""

    def test_purchase_after_cut_bills_next_month(self):
        """{6, 26, 0} on day 10 -> cut on the 6th and due on the 26th of next month."""
        window = window_for_cycle(CycleConfig(6, 26, 0), date(2025, 3, 10))

        assert window.cut_date == date(2025, 4, 6)
        assert window.due_date == date(2025, 4, 26)
        assert window.days_to_pay == 47

    def test_reference_on_cut_day_uses_this_months_cut(self):
        window = window_for_cycle(CycleConfig(6, 26, 0), date(2025, 3, 6))

        assert window.cut_date == date(2025, 3, 6)
        assert window.due_date == date(2025, 3, 26)
        assert window.days_to_pay == 20

    def test_due_offset_one_moves_due_to_next_month(self):
        window = window_for_cycle(CycleConfig(15, 5, 1), date(2025, 3, 10))

        assert window.cut_date == date(2025, 3, 15)
        assert window.due_date == date(2025, 4, 5)
        assert window.days_to_pay == 26

    def test_due_before_cut_rolls_forward(self):
        """Offset 0 with due day before the cut day would land before the cut."""
        cycle = CycleConfig(20, 10, 0)
        cut = applicable_cut_date(cycle, date(2025, 3, 1))

        assert cut == date(2025, 3, 20)
        assert due_date_for_cut(cycle, cut) == date(2025, 4, 10)

    def test_year_rollover(self):
        window = window_for_cycle(CycleConfig(6, 26, 0), date(2025, 12, 10))

        assert window.cut_date == date(2026, 1, 6)
        assert window.due_date == date(2026, 1, 26)
        assert window.days_to_pay == 47

    def test_cut_day_31_clamps_in_february(self):
        window = window_for_cycle(CycleConfig(31, 15, 1), date(2025, 2, 10))

        assert window.cut_date == date(2025, 2, 28)
        assert window.due_date == date(2025, 3, 15)
        assert window.days_to_pay == 33

    def test_cut_after_clamped_month_end(self):
        window = window_for_cycle(CycleConfig(30, 10, 1), date(2025, 1, 31))

        assert window.cut_date == date(2025, 2, 28)
        assert window.due_date == date(2025, 3, 10)
        assert window.days_to_pay == 38

    def test_datetime_reference_uses_its_calendar_day(self):
        catalog = CycleCatalog.from_tuples({"RAPPICARD": (6, 26, 0)})

        late = compute_window("rappicard", datetime(2025, 3, 6, 23, 59), catalog)
        plain = compute_window("RAPPICARD", date(2025, 3, 6), catalog)

        assert late == plain
        assert late.cut_date == date(2025, 3, 6)

    def test_unknown_card_returns_none(self):
        catalog = CycleCatalog.from_tuples({"RAPPICARD": (6, 26, 0)})

        assert compute_window("OXXO", date(2025, 3, 10), catalog) is None

    def test_window_keeps_cycle_reference(self):
        cycle = CycleConfig(6, 26, 0)
        window = window_for_cycle(cycle, date(2025, 3, 10))

        assert window.cycle is cycle
        assert window.to_dict() == {
            "reference_date": "2025-03-10",
            "cut_date": "2025-04-06",
            "due_date": "2025-04-26",
            "days_to_pay": 47,
        }


# =============================================================================
# Invariants
# =============================================================================

class TestWindowInvariants:
    """The window invariants hold for every cycle and reference date."""

    CUT_DAYS = (1, 6, 15, 28, 29, 30, 31)
    DUE_DAYS = (1, 5, 10, 26, 28, 31)

    def test_cut_before_due_and_days_non_negative(self):
        start = date(2024, 1, 1)
        references = [start + timedelta(days=n) for n in range(366 + 31)]

        for cut_day in self.CUT_DAYS:
            for due_day in self.DUE_DAYS:
                for offset in (0, 1):
                    cycle = CycleConfig(cut_day, due_day, offset)
                    for reference in references:
                        window = window_for_cycle(cycle, reference)

                        assert reference <= window.cut_date < window.due_date, (cycle, reference)
                        assert window.days_to_pay >= 0
                        assert window.days_to_pay == (window.due_date - reference).days
