"""Error handling middleware and exception handlers."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import structlog

from cardwise.domain.exceptions import (
    DomainException,
    CardNotConfiguredException,
    CredentialsNotFoundException,
    InvalidPurchaseIntentException,
    PendingConfirmationNotFoundException,
    PersistenceFailureException,
)
from .request_context import get_request_id

logger = structlog.get_logger(__name__)


def _error_response(status_code: int, code: str, message: str, retryable: bool = False) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": code,
            "message": message,
            "retryable": retryable,
            "request_id": get_request_id(),
        },
    )


def error_handler_middleware(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI app.

    Maps domain exceptions to appropriate HTTP responses.
    """

    @app.exception_handler(CardNotConfiguredException)
    async def card_not_configured_handler(
        request: Request,
        exc: CardNotConfiguredException,
    ) -> JSONResponse:
        """Handle unknown card errors."""
        return _error_response(404, exc.code, exc.message)

    @app.exception_handler(PendingConfirmationNotFoundException)
    async def pending_not_found_handler(
        request: Request,
        exc: PendingConfirmationNotFoundException,
    ) -> JSONResponse:
        """Handle lookups with nothing pending."""
        return _error_response(404, exc.code, exc.message)

    @app.exception_handler(InvalidPurchaseIntentException)
    async def invalid_intent_handler(
        request: Request,
        exc: InvalidPurchaseIntentException,
    ) -> JSONResponse:
        """Handle invalid purchase intents."""
        return _error_response(400, exc.code, exc.message)

    @app.exception_handler(CredentialsNotFoundException)
    async def credentials_handler(
        request: Request,
        exc: CredentialsNotFoundException,
    ) -> JSONResponse:
        """Handle missing Google credentials."""
        logger.error(
            "google_credentials_missing",
            request_id=get_request_id(),
            message=exc.message,
        )
        return _error_response(
            503,
            exc.code,
            "Spreadsheet credentials are not configured.",
            retryable=True,
        )

    @app.exception_handler(PersistenceFailureException)
    async def persistence_failure_handler(
        request: Request,
        exc: PersistenceFailureException,
    ) -> JSONResponse:
        """Handle ledger append failures. The purchase is still pending."""
        logger.error(
            "persistence_failure",
            request_id=get_request_id(),
            code=exc.code,
            message=exc.message,
            status_code=exc.status_code,
        )
        return _error_response(
            503,
            exc.code,
            "Could not save the purchase. Confirm again to retry.",
            retryable=exc.retryable,
        )

    @app.exception_handler(DomainException)
    async def domain_exception_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        """Handle generic domain exceptions."""
        logger.warning(
            "domain_exception",
            request_id=get_request_id(),
            code=exc.code,
            message=exc.message,
        )
        return _error_response(400, exc.code, exc.message)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception(
            "unhandled_exception",
            request_id=get_request_id(),
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return _error_response(500, "INTERNAL_ERROR", "An unexpected error occurred.")
