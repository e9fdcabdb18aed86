"""
Unit tests for the Telegram handlers.

Updates and contexts are mocks carrying only the attributes the handlers
read; the workflow behind them is real.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from cardwise.domain.entities import ConfirmationKey, ConfirmationStage
from cardwise.presentation.telegram.bot import compra, purchase_callback, start
from cardwise.presentation.telegram.commands import FORMAT_HINT
from cardwise.presentation.telegram.messages import (
    HELP_TEXT,
    PERSISTENCE_FAILURE_TEXT,
    PREVIEW_KEYBOARD,
    WARNING_KEYBOARD,
)

CHAT_ID = 1001
USER_ID = 42


def make_context(workflow, args=None):
    return SimpleNamespace(
        args=args or [],
        application=SimpleNamespace(bot_data={"workflow": workflow}),
    )


def make_message_update(first_name="Ana", username=None):
    update = MagicMock()
    update.message.reply_text = AsyncMock()
    update.effective_chat.id = CHAT_ID
    update.effective_user.id = USER_ID
    update.effective_user.first_name = first_name
    update.effective_user.username = username
    return update


def make_callback_update(data: str):
    update = MagicMock()
    update.callback_query.data = data
    update.callback_query.answer = AsyncMock()
    update.callback_query.edit_message_text = AsyncMock()
    update.effective_chat.id = CHAT_ID
    update.effective_user.id = USER_ID
    return update


class TestStartCommand:
    """Tests for /start."""

    @pytest.mark.asyncio
    async def test_start_replies_with_help(self, workflow):
        update = make_message_update()

        await start(update, make_context(workflow))

        args, kwargs = update.message.reply_text.call_args
        assert args[0] == HELP_TEXT
        assert "/compra <monto> <meses> <banco> <descripción>" in HELP_TEXT


class TestCompraCommand:
    """Tests for /compra."""

    @pytest.mark.asyncio
    async def test_compra_previews_and_holds_purchase(self, workflow, store):
        update = make_message_update()
        context = make_context(workflow, ["9000", "12", "a", "Pantalla"])

        await compra(update, context)

        args, kwargs = update.message.reply_text.call_args
        assert "Revisa la compra" in args[0]
        assert "10 días para pagar" in args[0]
        assert kwargs["reply_markup"] is PREVIEW_KEYBOARD
        entry = store.get(ConfirmationKey(CHAT_ID, USER_ID))
        assert entry.purchase.user == "Ana"
        assert entry.purchase.bank == "A"

    @pytest.mark.asyncio
    async def test_compra_uses_username_without_first_name(self, workflow, store):
        update = make_message_update(first_name=None, username="ana_mx")

        await compra(update, make_context(workflow, ["9000", "12", "a", "Pantalla"]))

        assert store.get(ConfirmationKey(CHAT_ID, USER_ID)).purchase.user == "ana_mx"

    @pytest.mark.asyncio
    async def test_compra_with_bad_format_replies_hint(self, workflow, store):
        update = make_message_update()

        await compra(update, make_context(workflow, ["9000"]))

        update.message.reply_text.assert_awaited_once_with(FORMAT_HINT)
        assert len(store) == 0


class TestPurchaseCallback:
    """Tests for the inline confirmation buttons."""

    async def _preview(self, workflow, bank: str):
        await compra(make_message_update(), make_context(workflow, ["9000", "12", bank, "Pantalla"]))

    @pytest.mark.asyncio
    async def test_confirm_better_card_shows_warning(self, workflow, store, ledger):
        await self._preview(workflow, "a")
        update = make_callback_update("purchase:confirm")

        await purchase_callback(update, make_context(workflow))

        update.callback_query.answer.assert_awaited_once()
        args, kwargs = update.callback_query.edit_message_text.call_args
        assert "Mejores opciones" in args[0]
        assert "1. B: 16 días" in args[0]
        assert kwargs["reply_markup"] is WARNING_KEYBOARD
        assert store.get(ConfirmationKey(CHAT_ID, USER_ID)).stage is ConfirmationStage.WARNED
        assert ledger.call_count == 0

    @pytest.mark.asyncio
    async def test_confirm_anyway_saves(self, workflow, ledger):
        await self._preview(workflow, "a")
        await purchase_callback(make_callback_update("purchase:confirm"), make_context(workflow))
        update = make_callback_update("purchase:confirm_anyway")

        await purchase_callback(update, make_context(workflow))

        args, kwargs = update.callback_query.edit_message_text.call_args
        assert args[0].startswith("✅ Compra guardada")
        assert kwargs["reply_markup"] is None
        assert ledger.call_count == 1

    @pytest.mark.asyncio
    async def test_cancel(self, workflow, store, ledger):
        await self._preview(workflow, "c")
        update = make_callback_update("purchase:cancel")

        await purchase_callback(update, make_context(workflow))

        args, _ = update.callback_query.edit_message_text.call_args
        assert "cancelada" in args[0]
        assert len(store) == 0
        assert ledger.call_count == 0

    @pytest.mark.asyncio
    async def test_persistence_failure_offers_retry(self, workflow, store, ledger):
        await self._preview(workflow, "c")
        ledger.fail = True
        update = make_callback_update("purchase:confirm")

        await purchase_callback(update, make_context(workflow))

        update.callback_query.edit_message_text.assert_awaited_once_with(
            PERSISTENCE_FAILURE_TEXT,
            reply_markup=PREVIEW_KEYBOARD,
        )
        assert store.get(ConfirmationKey(CHAT_ID, USER_ID)) is not None

    @pytest.mark.asyncio
    async def test_unknown_action_is_ignored(self, workflow):
        update = make_callback_update("purchase:explode")

        await purchase_callback(update, make_context(workflow))

        update.callback_query.edit_message_text.assert_not_awaited()
