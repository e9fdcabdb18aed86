"""Purchase and confirmation domain exceptions."""

from .base import DomainException


class InvalidPurchaseIntentException(DomainException):
    """Raised when purchase fields fail validation."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="INVALID_PURCHASE_INTENT",
        )


class PendingConfirmationNotFoundException(DomainException):
    """Raised when looking up a pending confirmation that does not exist."""

    def __init__(self, chat_id: int, user_id: int):
        super().__init__(
            message=f"No pending confirmation for chat {chat_id}, user {user_id}",
            code="NO_PENDING_CONFIRMATION",
        )
        self.chat_id = chat_id
        self.user_id = user_id
