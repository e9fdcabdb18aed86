"""Card window and ranking Pydantic schemas."""

from pydantic import BaseModel, Field


class PaymentWindowSchema(BaseModel):
    """Schema for a card's payment window."""

    reference_date: str = Field(
        ...,
        description="Purchase date the window was computed for (YYYY-MM-DD)",
        examples=["2025-03-10"],
    )
    cut_date: str = Field(
        ...,
        description="Statement cut date the purchase falls into",
        examples=["2025-04-06"],
    )
    due_date: str = Field(
        ...,
        description="Payment due date for that cut",
        examples=["2025-04-26"],
    )
    days_to_pay: int = Field(
        ...,
        ge=0,
        description="Whole days from the purchase date to the due date",
        examples=[47],
    )


class RankedCardSchema(BaseModel):
    """Schema for one entry of a ranking."""

    card_id: str = Field(..., description="Card identifier", examples=["RAPPICARD"])
    window: PaymentWindowSchema


class CardWindowResponseSchema(BaseModel):
    """Schema for GET /v1/cards/{card_id}/window response."""

    card_id: str = Field(..., description="Card identifier", examples=["RAPPICARD"])
    exempt: bool = Field(
        ...,
        description="Whether purchases on this card skip the advisory",
    )
    window: PaymentWindowSchema


class RankingResponseSchema(BaseModel):
    """Schema for GET /v1/cards/ranking response."""

    reference_date: str = Field(
        ...,
        description="Purchase date the ranking was computed for",
        examples=["2025-03-10"],
    )
    cards: list[RankedCardSchema] = Field(
        ...,
        description="Cards ordered by days to pay, longest first",
    )
