"""Purchase confirmation API endpoints."""

from dataclasses import asdict
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from cardwise.application.dto import OutcomeResponse, PendingResponse, PurchaseRequest
from cardwise.application.services import ConfirmationWorkflow
from cardwise.core.dependencies import get_confirmation_workflow
from cardwise.domain.entities import ConfirmationKey
from cardwise.presentation.schemas import (
    ConfirmationKeySchema,
    ErrorResponseSchema,
    OutcomeResponseSchema,
    PendingResponseSchema,
    PurchaseRequestSchema,
)

purchase_router = APIRouter(
    prefix="/purchases",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid request"},
        503: {"model": ErrorResponseSchema, "description": "Spreadsheet unavailable, retry"},
    },
)


def _outcome_schema(outcome) -> OutcomeResponseSchema:
    return OutcomeResponseSchema.model_validate(asdict(OutcomeResponse.from_outcome(outcome)))


@purchase_router.post(
    "",
    response_model=OutcomeResponseSchema,
    status_code=200,
    summary="Preview Purchase",
    description="""
    Hold a purchase for confirmation and return its preview.

    Any purchase already pending for the same chat and user is replaced.
    Nothing is written to the ledger until the purchase is confirmed.
    """,
)
async def create_purchase(
    request: PurchaseRequestSchema,
    workflow: Annotated[ConfirmationWorkflow, Depends(get_confirmation_workflow)],
) -> OutcomeResponseSchema:
    dto = PurchaseRequest(
        amount=request.amount,
        months=request.months,
        bank=request.bank,
        description=request.description,
        user_name=request.user_name,
    )
    key = ConfirmationKey(request.chat_id, request.user_id)

    outcome = await workflow.start(key, dto)

    return _outcome_schema(outcome)


@purchase_router.post(
    "/confirm",
    response_model=OutcomeResponseSchema,
    summary="Confirm Purchase",
    description="""
    Confirm the pending purchase.

    Returns `warned` with better alternatives the first time a card with a
    clearly longer payment window exists; confirming again commits it.
    """,
)
async def confirm_purchase(
    request: ConfirmationKeySchema,
    workflow: Annotated[ConfirmationWorkflow, Depends(get_confirmation_workflow)],
) -> OutcomeResponseSchema:
    outcome = await workflow.confirm(ConfirmationKey(request.chat_id, request.user_id))
    return _outcome_schema(outcome)


@purchase_router.post(
    "/confirm-anyway",
    response_model=OutcomeResponseSchema,
    summary="Confirm Purchase Despite Warning",
)
async def confirm_purchase_anyway(
    request: ConfirmationKeySchema,
    workflow: Annotated[ConfirmationWorkflow, Depends(get_confirmation_workflow)],
) -> OutcomeResponseSchema:
    outcome = await workflow.confirm_anyway(ConfirmationKey(request.chat_id, request.user_id))
    return _outcome_schema(outcome)


@purchase_router.post(
    "/cancel",
    response_model=OutcomeResponseSchema,
    summary="Cancel Purchase",
)
async def cancel_purchase(
    request: ConfirmationKeySchema,
    workflow: Annotated[ConfirmationWorkflow, Depends(get_confirmation_workflow)],
) -> OutcomeResponseSchema:
    outcome = await workflow.cancel(ConfirmationKey(request.chat_id, request.user_id))
    return _outcome_schema(outcome)


@purchase_router.get(
    "/pending",
    response_model=PendingResponseSchema,
    summary="Get Pending Purchase",
    responses={
        404: {"model": ErrorResponseSchema, "description": "Nothing pending"},
    },
)
async def get_pending_purchase(
    chat_id: Annotated[int, Query(description="Chat the purchase was requested from")],
    user_id: Annotated[int, Query(description="User who requested the purchase")],
    workflow: Annotated[ConfirmationWorkflow, Depends(get_confirmation_workflow)],
) -> PendingResponseSchema:
    entry = await workflow.pending(ConfirmationKey(chat_id, user_id))
    response = PendingResponse.from_entity(entry, workflow.expires_at(entry))
    return PendingResponseSchema.model_validate(asdict(response))
