"""
Fixtures for unit tests.

Provides:
- A controllable clock
- A recording purchase ledger client
- A small cycle catalog with known days-to-pay on 2025-03-10
- A confirmation workflow wired to all of the above
"""

from datetime import datetime, timedelta, timezone
from typing import List

import pytest

from cardwise.application.services import ConfirmationWorkflow
from cardwise.domain.entities import PurchaseIntent
from cardwise.domain.exceptions import PersistenceFailureException
from cardwise.domain.interfaces import PurchaseLedgerClient
from cardwise.infrastructure.stores import InMemoryPendingConfirmationStore
from cardwise.service.advisory import AdvisorySettings, CycleCatalog


# =============================================================================
# Test Doubles
# =============================================================================

class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class RecordingLedgerClient(PurchaseLedgerClient):
    """Ledger client that records appended purchases and can be told to fail."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.appended: List[PurchaseIntent] = []
        self.call_count = 0

    async def append_purchase(self, purchase: PurchaseIntent) -> None:
        self.call_count += 1
        if self.fail:
            raise PersistenceFailureException("Sheets API error: backend error", status_code=503)
        self.appended.append(purchase)


# =============================================================================
# Fixtures
# =============================================================================

# Days to pay for a purchase on 2025-03-10 (cut day 10 is still this month's cut):
#   A -> due 2025-03-20, 10 days
#   B -> due 2025-03-26, 16 days
#   C -> due 2025-03-24, 14 days
TEST_CYCLES = {
    "A": (10, 20, 0),
    "B": (10, 26, 0),
    "C": (10, 24, 0),
}


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2025, 3, 10, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def catalog() -> CycleCatalog:
    return CycleCatalog.from_tuples(TEST_CYCLES)


@pytest.fixture
def advisory() -> AdvisorySettings:
    return AdvisorySettings(
        warning_threshold_days=5,
        max_alternatives=3,
        pending_ttl_seconds=300,
        exempt_cards=["debito"],
    )


@pytest.fixture
def store() -> InMemoryPendingConfirmationStore:
    return InMemoryPendingConfirmationStore()


@pytest.fixture
def ledger() -> RecordingLedgerClient:
    return RecordingLedgerClient()


@pytest.fixture
def workflow(store, ledger, catalog, clock, advisory) -> ConfirmationWorkflow:
    return ConfirmationWorkflow(
        store=store,
        ledger_client=ledger,
        catalog=catalog,
        clock=clock,
        settings=advisory,
    )
