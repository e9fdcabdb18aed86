"""Background sweep of expired pending confirmations."""

import asyncio
import contextlib
from typing import Optional

import structlog

from cardwise.core.clock import Clock
from cardwise.core.metrics import record_swept, set_pending_count
from cardwise.domain.interfaces import PendingConfirmationStore
from cardwise.service.advisory import AdvisorySettings, advisory_settings

logger = structlog.get_logger(__name__)


class ExpirySweeper:
    """
    Periodically removes pending confirmations older than the TTL.

    This only reclaims memory: the workflow checks the TTL itself on
    every action, whether or not a sweep has run.
    """

    def __init__(
        self,
        store: PendingConfirmationStore,
        clock: Clock,
        settings: AdvisorySettings = advisory_settings,
    ):
        self._store = store
        self._clock = clock
        self._ttl = settings.pending_ttl
        self._interval = settings.sweep_interval_seconds
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._run(), name="pending-expiry-sweeper")
        logger.info("expiry_sweeper_started", interval_seconds=self._interval)

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None
        logger.info("expiry_sweeper_stopped")

    async def sweep_once(self) -> int:
        removed = await self._store.sweep_expired(self._clock(), self._ttl)
        record_swept(removed)
        set_pending_count(len(self._store))
        return removed

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            try:
                await self.sweep_once()
            except Exception:
                logger.exception("expiry_sweep_failed")
