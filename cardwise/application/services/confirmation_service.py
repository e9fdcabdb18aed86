"""Confirmation workflow - holds a purchase until the user approves it."""

import asyncio
from datetime import datetime
from typing import Optional

import structlog

from cardwise.core.clock import Clock
from cardwise.core.metrics import (
    record_days_to_pay,
    record_outcome,
    record_purchase_intent,
    record_warning,
    set_pending_count,
)
from cardwise.domain.entities import (
    ConfirmationKey,
    ConfirmationOutcome,
    ConfirmationStage,
    OutcomeStatus,
    PaymentWindow,
    PendingConfirmation,
    PurchaseIntent,
)
from cardwise.domain.exceptions import (
    InvalidPurchaseIntentException,
    PendingConfirmationNotFoundException,
)
from cardwise.domain.interfaces import PendingConfirmationStore, PurchaseLedgerClient
from cardwise.application.dto import PurchaseRequest
from cardwise.service.advisory import (
    AdvisorySettings,
    CycleCatalog,
    advisory_settings,
    compute_window,
    rank_cards,
    should_warn,
    top_alternatives,
)

logger = structlog.get_logger(__name__)


class ConfirmationWorkflow:
    """
    Application service for the purchase confirmation use cases.

    States: PREVIEW -> (WARNED) -> COMMITTED | CANCELLED | EXPIRED.
    The advisory runs at most once per pending purchase; the ledger is
    called outside the store's exclusion, after the entry is removed.
    """

    def __init__(
        self,
        store: PendingConfirmationStore,
        ledger_client: PurchaseLedgerClient,
        catalog: CycleCatalog,
        clock: Clock,
        settings: AdvisorySettings = advisory_settings,
    ):
        self._store = store
        self._ledger_client = ledger_client
        self._catalog = catalog
        self._clock = clock
        self._settings = settings
        self._ttl = settings.pending_ttl

    async def start(
        self,
        key: ConfirmationKey,
        request: PurchaseRequest,
    ) -> ConfirmationOutcome:
        """
        Preview a purchase and hold it for confirmation.

        Replaces any purchase already pending for the same key.

        Raises:
            InvalidPurchaseIntentException: If request validation fails
        """
        errors = request.validate()
        if errors:
            raise InvalidPurchaseIntentException("; ".join(errors))

        now = self._clock()
        purchase = request.to_intent(now.date())

        async with self._store.exclusive():
            self._store.put(key, purchase, now)
        self._sync_pending_gauge()

        window = self._chosen_window(purchase, now)

        record_purchase_intent(purchase.bank)
        logger.info(
            "purchase_previewed",
            chat_id=key.chat_id,
            user_id=key.user_id,
            bank=purchase.bank,
            amount=purchase.amount,
            months=purchase.months,
            days_to_pay=window.days_to_pay if window else None,
        )

        return ConfirmationOutcome(
            status=OutcomeStatus.PREVIEW,
            message="Review the purchase and confirm to save it.",
            purchase=purchase,
            window=window,
        )

    async def confirm(self, key: ConfirmationKey) -> ConfirmationOutcome:
        """
        Confirm the pending purchase.

        From PREVIEW this may stop at WARNED when a better card exists.
        From WARNED it always commits.

        Raises:
            PersistenceFailureException: If the ledger append fails; the
                purchase stays pending so the user can retry
        """
        return await self._confirm(key, action="confirm")

    async def confirm_anyway(self, key: ConfirmationKey) -> ConfirmationOutcome:
        """Confirm after a warning. From PREVIEW it behaves like ``confirm``."""
        return await self._confirm(key, action="confirm_anyway")

    async def cancel(self, key: ConfirmationKey) -> ConfirmationOutcome:
        """Drop the pending purchase without saving it."""
        now = self._clock()
        log = logger.bind(chat_id=key.chat_id, user_id=key.user_id, action="cancel")

        async with self._store.exclusive():
            entry = self._store.get(key)
            if entry is None:
                return self._rejected(log)
            self._store.remove(key)
        self._sync_pending_gauge()

        if entry.is_expired(now, self._ttl):
            return self._expired(entry, log)

        record_outcome(OutcomeStatus.CANCELLED.value)
        log.info("purchase_cancelled", bank=entry.purchase.bank)
        return ConfirmationOutcome(
            status=OutcomeStatus.CANCELLED,
            message="Purchase cancelled.",
            purchase=entry.purchase,
        )

    async def pending(self, key: ConfirmationKey) -> PendingConfirmation:
        """
        Look up the live pending purchase for a key.

        Raises:
            PendingConfirmationNotFoundException: If nothing live is pending
        """
        now = self._clock()
        async with self._store.exclusive():
            entry = self._store.get(key)

        # Expired entries are left for the sweeper
        if entry is None or entry.is_expired(now, self._ttl):
            raise PendingConfirmationNotFoundException(key.chat_id, key.user_id)
        return entry

    def expires_at(self, entry: PendingConfirmation) -> datetime:
        return entry.expires_at(self._ttl)

    async def _confirm(self, key: ConfirmationKey, action: str) -> ConfirmationOutcome:
        now = self._clock()
        log = logger.bind(chat_id=key.chat_id, user_id=key.user_id, action=action)

        async with self._store.exclusive():
            entry = self._store.get(key)
            if entry is None:
                return self._rejected(log)

            if entry.is_expired(now, self._ttl):
                self._store.remove(key)
                self._sync_pending_gauge()
                return self._expired(entry, log)

            if entry.stage is ConfirmationStage.PREVIEW:
                warning = self._evaluate_advisory(entry.purchase, now)
                if warning is not None:
                    self._store.mark_warned(key)
                    log.info(
                        "purchase_warned",
                        bank=entry.purchase.bank,
                        best_card=warning.alternatives[0].card_id,
                        chosen_days=warning.window.days_to_pay,
                        best_days=warning.alternatives[0].days_to_pay,
                    )
                    return warning

            # Removing before the ledger call makes a concurrent confirm see nothing pending
            self._store.remove(key)
        self._sync_pending_gauge()

        return await self._commit(key, entry, now, log)

    async def _commit(
        self,
        key: ConfirmationKey,
        entry: PendingConfirmation,
        now: datetime,
        log,
    ) -> ConfirmationOutcome:
        purchase = entry.purchase

        try:
            await self._ledger_client.append_purchase(purchase)
        except BaseException as e:
            # Any failed append, cancellation included, puts the purchase back
            restored = await self._restore(key, entry)
            log.warning(
                "purchase_commit_failed",
                bank=purchase.bank,
                code=getattr(e, "code", type(e).__name__),
                error=getattr(e, "message", str(e)),
                restored=restored,
            )
            raise

        window = self._chosen_window(purchase, now)
        if window is not None:
            record_days_to_pay(window.days_to_pay)
        record_outcome(OutcomeStatus.COMMITTED.value)
        log.info(
            "purchase_committed",
            bank=purchase.bank,
            amount=purchase.amount,
            months=purchase.months,
            warned=entry.stage is ConfirmationStage.WARNED,
        )

        return ConfirmationOutcome(
            status=OutcomeStatus.COMMITTED,
            message="Purchase saved.",
            purchase=purchase,
            window=window,
        )

    async def _restore(self, key: ConfirmationKey, entry: PendingConfirmation) -> bool:
        # Shielded so a cancelled commit still gets its entry back
        async def restore() -> bool:
            async with self._store.exclusive():
                return self._store.restore(key, entry)

        restored = await asyncio.shield(restore())
        self._sync_pending_gauge()
        return restored

    def _chosen_window(
        self,
        purchase: PurchaseIntent,
        now: datetime,
    ) -> Optional[PaymentWindow]:
        """Window of the purchase's card, None for exempt or unknown cards."""
        if self._settings.is_exempt(purchase.bank):
            return None
        return compute_window(purchase.bank, now, self._catalog)

    def _evaluate_advisory(
        self,
        purchase: PurchaseIntent,
        now: datetime,
    ) -> Optional[ConfirmationOutcome]:
        """Build a WARNED outcome if another card beats the chosen one."""
        chosen = self._chosen_window(purchase, now)
        if chosen is None:
            return None

        ranking = rank_cards(now, self._catalog, excluded=[purchase.bank])
        if not should_warn(chosen, ranking, self._settings.warning_threshold_days):
            return None

        alternatives = top_alternatives(ranking, self._settings.max_alternatives)
        best = alternatives[0]
        record_warning(purchase.bank, best.card_id)
        record_outcome(OutcomeStatus.WARNED.value)

        return ConfirmationOutcome(
            status=OutcomeStatus.WARNED,
            message=(
                f"{best.card_id} gives {best.days_to_pay} days to pay, "
                f"{purchase.bank} gives {chosen.days_to_pay}. Confirm again to keep {purchase.bank}."
            ),
            purchase=purchase,
            window=chosen,
            alternatives=alternatives,
        )

    def _rejected(self, log) -> ConfirmationOutcome:
        record_outcome(OutcomeStatus.REJECTED.value)
        log.info("purchase_action_rejected", reason="nothing_pending")
        return ConfirmationOutcome(
            status=OutcomeStatus.REJECTED,
            message="Nothing pending to confirm.",
        )

    def _expired(self, entry: PendingConfirmation, log) -> ConfirmationOutcome:
        record_outcome(OutcomeStatus.EXPIRED.value)
        log.info(
            "purchase_expired",
            bank=entry.purchase.bank,
            created_at=entry.created_at.isoformat(),
        )
        return ConfirmationOutcome(
            status=OutcomeStatus.EXPIRED,
            message="The confirmation expired. Send the purchase again.",
            purchase=entry.purchase,
        )

    def _sync_pending_gauge(self) -> None:
        set_pending_count(len(self._store))
