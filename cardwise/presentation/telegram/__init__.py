"""Telegram front end: /start, /compra and the confirmation buttons."""

from .bot import build_application, handle_update, init_bot, shutdown_bot
from .commands import parse_compra_args, resolve_user_name
from .messages import render_outcome

__all__ = [
    "build_application",
    "handle_update",
    "init_bot",
    "shutdown_bot",
    "parse_compra_args",
    "resolve_user_name",
    "render_outcome",
]
