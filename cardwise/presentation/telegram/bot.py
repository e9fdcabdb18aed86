"""Telegram bot (webhook mode) driving the confirmation workflow."""

import contextlib
from typing import Any, Dict, Optional

import structlog
from starlette.datastructures import State
from telegram import BotCommand, Update
from telegram.constants import ParseMode
from telegram.ext import Application, CallbackQueryHandler, CommandHandler, ContextTypes

from cardwise.application.services import ConfirmationWorkflow
from cardwise.core.config import Settings, settings as app_settings
from cardwise.core.dependencies import build_workflow
from cardwise.domain.entities import ConfirmationKey
from cardwise.domain.exceptions import InvalidPurchaseIntentException, PersistenceFailureException

from .commands import parse_compra_args, resolve_user_name
from .messages import (
    ACTION_CANCEL,
    ACTION_CONFIRM,
    ACTION_CONFIRM_ANYWAY,
    CALLBACK_PREFIX,
    HELP_TEXT,
    PERSISTENCE_FAILURE_TEXT,
    PREVIEW_KEYBOARD,
    render_outcome,
)

logger = structlog.get_logger(__name__)

ALLOWED_UPDATES = ["message", "callback_query"]
WEBHOOK_PATH = "/v1/telegram/webhook/{secret}"


def _workflow(context: ContextTypes.DEFAULT_TYPE) -> ConfirmationWorkflow:
    return context.application.bot_data["workflow"]


def _key(update: Update) -> ConfirmationKey:
    return ConfirmationKey(update.effective_chat.id, update.effective_user.id)


async def start(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    if not update.message:
        return
    await update.message.reply_text(HELP_TEXT, parse_mode=ParseMode.MARKDOWN)


async def compra(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Preview a purchase and ask for confirmation."""
    if not update.message:
        return
    user = update.effective_user
    user_name = resolve_user_name(user.first_name, user.username)

    try:
        request = parse_compra_args(list(context.args or []), user_name)
        outcome = await _workflow(context).start(_key(update), request)
    except InvalidPurchaseIntentException as exc:
        await update.message.reply_text(exc.message)
        return

    text, keyboard = render_outcome(outcome)
    await update.message.reply_text(text, reply_markup=keyboard)


async def purchase_callback(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle the Confirmar / Confirmar de todos modos / Cancelar buttons."""
    query = update.callback_query
    if not query:
        return
    await query.answer()

    workflow = _workflow(context)
    actions = {
        ACTION_CONFIRM: workflow.confirm,
        ACTION_CONFIRM_ANYWAY: workflow.confirm_anyway,
        ACTION_CANCEL: workflow.cancel,
    }
    action = (query.data or "")[len(CALLBACK_PREFIX):]
    handler = actions.get(action)
    if handler is None:
        logger.warning("telegram_unknown_action", callback_data=query.data)
        return

    try:
        outcome = await handler(_key(update))
    except PersistenceFailureException as exc:
        logger.warning("telegram_commit_failed", code=exc.code)
        await query.edit_message_text(PERSISTENCE_FAILURE_TEXT, reply_markup=PREVIEW_KEYBOARD)
        return

    text, keyboard = render_outcome(outcome)
    await query.edit_message_text(text, reply_markup=keyboard)


async def on_error(update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
    logger.error("telegram_handler_failed", exc_info=context.error)


def build_application(token: str, workflow: ConfirmationWorkflow) -> Application:
    application = Application.builder().token(token).updater(None).build()
    application.bot_data["workflow"] = workflow
    application.add_handler(CommandHandler("start", start))
    application.add_handler(CommandHandler("compra", compra))
    application.add_handler(CallbackQueryHandler(purchase_callback, pattern=f"^{CALLBACK_PREFIX}"))
    application.add_error_handler(on_error)
    return application


async def init_bot(state: State, settings: Settings = app_settings) -> Optional[Application]:
    """
    Start the bot and register its webhook.

    The bot shares the workflow collaborators in ``state`` with the HTTP
    API. Returns None, leaving the API running, when the bot is not
    configured or Telegram cannot be reached.
    """
    if not settings.telegram_bot_token:
        logger.info("telegram_bot_disabled", reason="no_token")
        return None

    application = build_application(settings.telegram_bot_token, build_workflow(state))

    try:
        await application.initialize()
        await application.start()
        await application.bot.set_my_commands(
            [
                BotCommand("start", "Ayuda y sintaxis"),
                BotCommand("compra", "Registrar una compra"),
            ]
        )
        if settings.public_base_url and settings.telegram_webhook_secret:
            webhook_url = settings.public_base_url.rstrip("/") + WEBHOOK_PATH.format(
                secret=settings.telegram_webhook_secret
            )
            await application.bot.set_webhook(url=webhook_url, allowed_updates=ALLOWED_UPDATES)
            logger.info("telegram_webhook_configured", base_url=settings.public_base_url)
        else:
            logger.warning("telegram_webhook_skipped", reason="public_base_url_or_secret_missing")
    except Exception:
        logger.exception("telegram_bot_init_failed")
        with contextlib.suppress(Exception):
            await application.stop()
        with contextlib.suppress(Exception):
            await application.shutdown()
        return None

    state.telegram_app = application
    return application


async def handle_update(application: Application, payload: Dict[str, Any]) -> None:
    """Process a Telegram update forwarded by FastAPI."""
    update = Update.de_json(payload, application.bot)
    await application.process_update(update)


async def shutdown_bot(state: State) -> None:
    application = getattr(state, "telegram_app", None)
    if application is None:
        return
    await application.stop()
    await application.shutdown()
    state.telegram_app = None
    logger.info("telegram_bot_stopped")
