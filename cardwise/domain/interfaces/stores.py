"""Store interfaces for in-flight state."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from datetime import datetime, timedelta
from typing import Optional

from cardwise.domain.entities import (
    ConfirmationKey,
    PendingConfirmation,
    PurchaseIntent,
)


class PendingConfirmationStore(ABC):
    """
    Abstract registry of purchases awaiting confirmation.

    Holds at most one entry per key. Implementations must make
    ``exclusive()`` the same exclusion ``sweep_expired`` takes.
    """

    @abstractmethod
    def exclusive(self) -> AbstractAsyncContextManager:
        """Mutual exclusion for read-decide-write sequences."""
        ...

    @abstractmethod
    def put(
        self,
        key: ConfirmationKey,
        purchase: PurchaseIntent,
        now: datetime,
    ) -> PendingConfirmation:
        """
        Create or replace the entry for ``key`` in PREVIEW stage.

        Any prior entry for the key is discarded.
        """
        ...

    @abstractmethod
    def get(self, key: ConfirmationKey) -> Optional[PendingConfirmation]:
        """Return the entry for ``key`` without checking its age."""
        ...

    @abstractmethod
    def mark_warned(self, key: ConfirmationKey) -> None:
        """Move the entry to WARNED. No effect if absent or already warned."""
        ...

    @abstractmethod
    def remove(self, key: ConfirmationKey) -> Optional[PendingConfirmation]:
        """Remove and return the entry for ``key``, if any."""
        ...

    @abstractmethod
    def restore(self, key: ConfirmationKey, entry: PendingConfirmation) -> bool:
        """
        Put a removed entry back unless a newer one was stored meanwhile.

        Returns:
            True if the entry was restored
        """
        ...

    @abstractmethod
    async def sweep_expired(self, now: datetime, ttl: timedelta) -> int:
        """
        Remove every entry older than ``ttl``.

        Returns:
            Number of entries removed
        """
        ...

    @abstractmethod
    def __len__(self) -> int:
        ...
