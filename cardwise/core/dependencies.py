"""Dependency injection for FastAPI."""

from typing import Annotated

from fastapi import Depends, Request
from starlette.datastructures import State

from cardwise.core.clock import Clock, make_clock
from cardwise.core.config import settings
from cardwise.domain.interfaces import PendingConfirmationStore, PurchaseLedgerClient
from cardwise.infrastructure.clients import HttpSheetsLedgerClient
from cardwise.infrastructure.stores import InMemoryPendingConfirmationStore
from cardwise.application.services import (
    CardAdvisoryService,
    ConfirmationWorkflow,
    ExpirySweeper,
)
from cardwise.service.advisory import CycleCatalog, advisory_settings


def init_state(state: State) -> None:
    """
    Build the process-wide collaborators once.

    The store, catalog, ledger client and clock are shared by the HTTP
    API, the Telegram front end and the expiry sweeper.
    """
    state.clock = make_clock(settings.timezone)
    state.catalog = CycleCatalog.from_settings(advisory_settings)
    state.pending_store = InMemoryPendingConfirmationStore()
    state.ledger_client = HttpSheetsLedgerClient()
    state.sweeper = ExpirySweeper(state.pending_store, state.clock, advisory_settings)
    state.telegram_app = None


def build_workflow(state: State) -> ConfirmationWorkflow:
    """Workflow wired to the shared collaborators in ``state``."""
    return ConfirmationWorkflow(
        store=state.pending_store,
        ledger_client=state.ledger_client,
        catalog=state.catalog,
        clock=state.clock,
        settings=advisory_settings,
    )


# Shared collaborator dependencies
def get_clock(request: Request) -> Clock:
    """Get the service clock."""
    return request.app.state.clock


def get_catalog(request: Request) -> CycleCatalog:
    """Get the cycle catalog."""
    return request.app.state.catalog


def get_pending_store(request: Request) -> PendingConfirmationStore:
    """Get the pending confirmation store."""
    return request.app.state.pending_store


def get_ledger_client(request: Request) -> PurchaseLedgerClient:
    """Get a PurchaseLedgerClient instance."""
    return request.app.state.ledger_client


# Service dependencies
def get_confirmation_workflow(
    store: Annotated[PendingConfirmationStore, Depends(get_pending_store)],
    ledger_client: Annotated[PurchaseLedgerClient, Depends(get_ledger_client)],
    catalog: Annotated[CycleCatalog, Depends(get_catalog)],
    clock: Annotated[Clock, Depends(get_clock)],
) -> ConfirmationWorkflow:
    """Get a ConfirmationWorkflow instance with all dependencies."""
    return ConfirmationWorkflow(
        store=store,
        ledger_client=ledger_client,
        catalog=catalog,
        clock=clock,
        settings=advisory_settings,
    )


def get_advisory_service(
    catalog: Annotated[CycleCatalog, Depends(get_catalog)],
    clock: Annotated[Clock, Depends(get_clock)],
) -> CardAdvisoryService:
    """Get a CardAdvisoryService instance."""
    return CardAdvisoryService(
        catalog=catalog,
        clock=clock,
        settings=advisory_settings,
    )
