"""Pydantic schema for API error responses."""

from pydantic import BaseModel, Field


class ErrorResponseSchema(BaseModel):
    """Standard error response format for all API errors."""
    error: str = Field(
        ...,
        description="Error code",
        examples=["PERSISTENCE_FAILURE"],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
        examples=["Could not save the purchase. Confirm again to retry."],
    )
    retryable: bool = Field(
        False,
        description="Whether repeating the same request may succeed",
    )
    request_id: str | None = Field(
        None,
        description="Request ID for tracing",
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "error": "PERSISTENCE_FAILURE",
                    "message": "Could not save the purchase. Confirm again to retry.",
                    "retryable": True,
                    "request_id": "abc123",
                }
            ]
        }
    }
