"""Persistence collaborator exceptions."""

from .base import DomainException


class PersistenceFailureException(DomainException):
    """
    Raised when the purchase row could not be appended.

    The pending confirmation is kept, so the user can retry the confirm.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(
            message=message,
            code="PERSISTENCE_FAILURE",
        )
        self.status_code = status_code
        self.retryable = True


class PersistenceTimeoutException(PersistenceFailureException):
    """Raised when the spreadsheet API times out."""

    def __init__(self):
        super().__init__(
            message="Spreadsheet API request timed out",
            status_code=None,
        )
        self.code = "PERSISTENCE_TIMEOUT"


class CredentialsNotFoundException(PersistenceFailureException):
    """Raised when no Google service account credentials can be resolved."""

    def __init__(self, message: str):
        super().__init__(message=message)
        self.code = "CREDENTIALS_NOT_FOUND"
