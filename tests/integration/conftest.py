"""
Fixtures for integration tests.

Provides:
- Test client for FastAPI app
- Mock purchase ledger client
- A fake clock pinned to 2025-03-10 and a small cycle catalog
- A fresh pending confirmation store per test
"""

from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator, List

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from cardwise.main import app
from cardwise.core.dependencies import (
    get_catalog,
    get_clock,
    get_ledger_client,
    get_pending_store,
)
from cardwise.domain.entities import PurchaseIntent
from cardwise.domain.exceptions import PersistenceFailureException
from cardwise.domain.interfaces import PurchaseLedgerClient
from cardwise.infrastructure.stores import InMemoryPendingConfirmationStore
from cardwise.service.advisory import CycleCatalog


# =============================================================================
# Mock Clients
# =============================================================================

class MockPurchaseLedgerClient(PurchaseLedgerClient):
    """Mock ledger client that tracks appended purchases."""

    def __init__(self, fail_mode: bool = False):
        self.fail_mode = fail_mode
        self.call_count = 0
        self.purchases: List[PurchaseIntent] = []

    async def append_purchase(self, purchase: PurchaseIntent) -> None:
        """Track appends and optionally fail."""
        self.call_count += 1

        if self.fail_mode:
            raise PersistenceFailureException(
                message="Sheets API error: backend error",
                status_code=503,
            )

        self.purchases.append(purchase)


class FakeClock:
    """Clock pinned to a fixed instant; tests move it explicitly."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


# =============================================================================
# Collaborator Fixtures
# =============================================================================

# On 2025-03-10: A -> 10 days, B -> 16 days, C -> 14 days to pay
TEST_CYCLES = {
    "A": (10, 20, 0),
    "B": (10, 26, 0),
    "C": (10, 24, 0),
}


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock(datetime(2025, 3, 10, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def test_catalog() -> CycleCatalog:
    return CycleCatalog.from_tuples(TEST_CYCLES)


@pytest.fixture
def pending_store() -> InMemoryPendingConfirmationStore:
    return InMemoryPendingConfirmationStore()


@pytest.fixture
def mock_ledger_client() -> MockPurchaseLedgerClient:
    """Create a mock ledger client."""
    return MockPurchaseLedgerClient()


@pytest.fixture
def failing_ledger_client() -> MockPurchaseLedgerClient:
    """Create a ledger client that always fails."""
    return MockPurchaseLedgerClient(fail_mode=True)


# =============================================================================
# App Client Fixtures
# =============================================================================

def _override(ledger_client, store, clock, catalog) -> None:
    app.dependency_overrides[get_ledger_client] = lambda: ledger_client
    app.dependency_overrides[get_pending_store] = lambda: store
    app.dependency_overrides[get_clock] = lambda: clock
    app.dependency_overrides[get_catalog] = lambda: catalog


@pytest_asyncio.fixture
async def client(
    mock_ledger_client: MockPurchaseLedgerClient,
    pending_store: InMemoryPendingConfirmationStore,
    fake_clock: FakeClock,
    test_catalog: CycleCatalog,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client with mocked dependencies.

    This client:
    - Uses a fresh in-memory pending store
    - Mocks the spreadsheet ledger client
    - Pins "today" to 2025-03-10
    """
    _override(mock_ledger_client, pending_store, fake_clock, test_catalog)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client_with_failing_ledger(
    failing_ledger_client: MockPurchaseLedgerClient,
    pending_store: InMemoryPendingConfirmationStore,
    fake_clock: FakeClock,
    test_catalog: CycleCatalog,
) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client where the spreadsheet append always fails."""
    _override(failing_ledger_client, pending_store, fake_clock, test_catalog)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# =============================================================================
# Helper Fixtures
# =============================================================================

@pytest.fixture
def key() -> dict:
    return {"chat_id": 1001, "user_id": 42}


@pytest.fixture
def purchase_body(key) -> dict:
    """Request body for a purchase on card A (10 days to pay)."""
    return {
        **key,
        "user_name": "Ana",
        "amount": 9000,
        "months": 12,
        "bank": "a",
        "description": "Pantalla Samsung 85",
    }
