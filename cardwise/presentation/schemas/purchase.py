"""Purchase confirmation Pydantic schemas."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .card import PaymentWindowSchema, RankedCardSchema


class ConfirmationKeySchema(BaseModel):
    """Identifies whose pending purchase an action applies to."""

    chat_id: int = Field(..., description="Chat the purchase was requested from")
    user_id: int = Field(..., description="User who requested the purchase")


class PurchaseRequestSchema(ConfirmationKeySchema):
    """Schema for POST /v1/purchases request body."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "chat_id": 1001,
                    "user_id": 42,
                    "user_name": "Ana",
                    "amount": 9000,
                    "months": 12,
                    "bank": "rappicard",
                    "description": "Pantalla Samsung 85",
                }
            ]
        }
    )

    user_name: str = Field(
        "",
        max_length=255,
        description="Display name written to the ledger",
        examples=["Ana"],
    )
    amount: float = Field(
        ...,
        gt=0,
        allow_inf_nan=False,
        description="Purchase amount",
        examples=[9000],
    )
    months: int = Field(
        ...,
        ge=1,
        le=60,
        description="Number of monthly installments",
        examples=[12],
    )
    bank: str = Field(
        ...,
        min_length=1,
        max_length=64,
        description="Card identifier (stored in upper case)",
        examples=["rappicard"],
    )
    description: str = Field(
        ...,
        min_length=1,
        max_length=500,
        description="What was bought",
        examples=["Pantalla Samsung 85"],
    )

    @field_validator("bank", "description")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Ensure text fields are not just whitespace."""
        if not v.strip():
            raise ValueError("cannot be empty or whitespace")
        return v.strip()


class PurchaseSchema(BaseModel):
    """Schema for purchase fields in responses."""

    amount: float
    months: int
    bank: str
    description: str
    user: str
    date: str = Field(..., description="Purchase date as dd/mm/YYYY", examples=["10/03/2025"])


class OutcomeResponseSchema(BaseModel):
    """Schema for purchase workflow responses."""

    status: str = Field(
        ...,
        description="preview, warned, committed, cancelled, expired or rejected",
        examples=["warned"],
    )
    message: str = Field(..., description="Human-readable status")
    purchase: Optional[PurchaseSchema] = None
    window: Optional[PaymentWindowSchema] = Field(
        None,
        description="Window of the chosen card (null for exempt or unknown cards)",
    )
    alternatives: list[RankedCardSchema] = Field(
        default_factory=list,
        description="Better cards, best first (only when warned)",
    )


class PendingResponseSchema(BaseModel):
    """Schema for GET /v1/purchases/pending response."""

    stage: str = Field(..., description="preview or warned", examples=["preview"])
    purchase: PurchaseSchema
    created_at: str
    expires_at: str
