"""In-memory implementation of PendingConfirmationStore."""

import asyncio
from contextlib import AbstractAsyncContextManager
from datetime import datetime, timedelta
from typing import Dict, Optional

import structlog

from cardwise.domain.entities import (
    ConfirmationKey,
    ConfirmationStage,
    PendingConfirmation,
    PurchaseIntent,
)
from cardwise.domain.interfaces import PendingConfirmationStore

logger = structlog.get_logger(__name__)


class InMemoryPendingConfirmationStore(PendingConfirmationStore):
    """
    Process-local store of pending confirmations.

    A single asyncio.Lock guards read-decide-write sequences. The
    sections it protects never await I/O, so requests for different
    keys only ever wait for a few dictionary operations.
    """

    def __init__(self):
        self._entries: Dict[ConfirmationKey, PendingConfirmation] = {}
        self._lock = asyncio.Lock()

    def exclusive(self) -> AbstractAsyncContextManager:
        return self._lock

    def put(
        self,
        key: ConfirmationKey,
        purchase: PurchaseIntent,
        now: datetime,
    ) -> PendingConfirmation:
        entry = PendingConfirmation(purchase=purchase, created_at=now)
        if key in self._entries:
            logger.info(
                "pending_superseded",
                chat_id=key.chat_id,
                user_id=key.user_id,
            )
        self._entries[key] = entry
        return entry

    def get(self, key: ConfirmationKey) -> Optional[PendingConfirmation]:
        return self._entries.get(key)

    def mark_warned(self, key: ConfirmationKey) -> None:
        entry = self._entries.get(key)
        if entry is not None:
            entry.stage = ConfirmationStage.WARNED

    def remove(self, key: ConfirmationKey) -> Optional[PendingConfirmation]:
        return self._entries.pop(key, None)

    def restore(self, key: ConfirmationKey, entry: PendingConfirmation) -> bool:
        if key in self._entries:
            return False
        self._entries[key] = entry
        return True

    async def sweep_expired(self, now: datetime, ttl: timedelta) -> int:
        async with self._lock:
            expired = [
                key
                for key, entry in self._entries.items()
                if entry.is_expired(now, ttl)
            ]
            for key in expired:
                del self._entries[key]

        if expired:
            logger.info("pending_swept", count=len(expired), remaining=len(self._entries))
        return len(expired)

    def __len__(self) -> int:
        return len(self._entries)
