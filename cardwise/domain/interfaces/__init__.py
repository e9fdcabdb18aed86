"""
Domain Interfaces (Ports)
"""

from .clients import PurchaseLedgerClient
from .stores import PendingConfirmationStore

__all__ = [
    "PurchaseLedgerClient",
    "PendingConfirmationStore",
]
