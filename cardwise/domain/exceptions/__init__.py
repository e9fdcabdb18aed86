"""Domain Exceptions - Business rule violations and domain errors."""

from .base import DomainException
from .purchase import (
    InvalidPurchaseIntentException,
    PendingConfirmationNotFoundException,
)
from .card import CardNotConfiguredException
from .persistence import (
    CredentialsNotFoundException,
    PersistenceFailureException,
    PersistenceTimeoutException,
)

__all__ = [
    "DomainException",
    "InvalidPurchaseIntentException",
    "PendingConfirmationNotFoundException",
    "CardNotConfiguredException",
    "CredentialsNotFoundException",
    "PersistenceFailureException",
    "PersistenceTimeoutException",
]
