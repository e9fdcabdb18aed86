"""Card payment window API endpoints."""

from dataclasses import asdict
from datetime import date
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Path, Query

from cardwise.application.services import CardAdvisoryService
from cardwise.core.dependencies import get_advisory_service
from cardwise.presentation.schemas import (
    CardWindowResponseSchema,
    ErrorResponseSchema,
    RankingResponseSchema,
)

card_router = APIRouter(prefix="/cards")


@card_router.get(
    "/ranking",
    response_model=RankingResponseSchema,
    summary="Rank Cards",
    description="""
    Rank every configured card by days to pay for a purchase made on `on`
    (today by default), longest window first. Ties keep catalog order.
    """,
)
async def get_card_ranking(
    advisory_service: Annotated[CardAdvisoryService, Depends(get_advisory_service)],
    on: Annotated[
        Optional[date],
        Query(description="Purchase date (YYYY-MM-DD), defaults to today"),
    ] = None,
    exclude: Annotated[
        list[str],
        Query(description="Card identifiers to leave out of the ranking"),
    ] = [],
) -> RankingResponseSchema:
    response = advisory_service.get_ranking(on=on, exclude=exclude)
    return RankingResponseSchema.model_validate(asdict(response))


@card_router.get(
    "/{card_id}/window",
    response_model=CardWindowResponseSchema,
    summary="Get Card Payment Window",
    responses={
        404: {"model": ErrorResponseSchema, "description": "Card not configured"},
    },
)
async def get_card_window(
    card_id: Annotated[
        str,
        Path(min_length=1, max_length=64, description="Card identifier, case-insensitive"),
    ],
    advisory_service: Annotated[CardAdvisoryService, Depends(get_advisory_service)],
    on: Annotated[
        Optional[date],
        Query(description="Purchase date (YYYY-MM-DD), defaults to today"),
    ] = None,
) -> CardWindowResponseSchema:
    response = advisory_service.get_window(card_id, on=on)
    return CardWindowResponseSchema.model_validate(asdict(response))
