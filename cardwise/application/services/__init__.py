"""Application services (use cases)."""

from .advisory_service import CardAdvisoryService
from .confirmation_service import ConfirmationWorkflow
from .expiry_sweeper import ExpirySweeper

__all__ = [
    "CardAdvisoryService",
    "ConfirmationWorkflow",
    "ExpirySweeper",
]
