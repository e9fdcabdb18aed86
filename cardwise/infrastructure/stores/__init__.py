"""Store implementations for in-flight state."""

from .memory_store import InMemoryPendingConfirmationStore

__all__ = [
    "InMemoryPendingConfirmationStore",
]
