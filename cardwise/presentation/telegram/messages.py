"""Spanish rendering of workflow outcomes for Telegram."""

from typing import Optional, Tuple

from telegram import InlineKeyboardButton, InlineKeyboardMarkup

from cardwise.domain.entities import (
    ConfirmationOutcome,
    OutcomeStatus,
    PaymentWindow,
    PurchaseIntent,
)

CALLBACK_PREFIX = "purchase:"
ACTION_CONFIRM = "confirm"
ACTION_CONFIRM_ANYWAY = "confirm_anyway"
ACTION_CANCEL = "cancel"

HELP_TEXT = (
    "🤖 *Bot de Compras activo*\n\n"
    "Sintaxis:\n"
    "/compra <monto> <meses> <banco> <descripción>\n\n"
    "Ejemplo:\n"
    "/compra 9000 12 rappicard Pantalla Samsung 85\n\n"
    "• El banco se guarda en MAYÚSCULAS automáticamente\n"
    "• Antes de guardar te muestro la compra para que la confirmes\n"
    "• Si otra tarjeta te da más días para pagar, te aviso\n"
    "• Fechas/pagos se calculan en Google Sheets"
)

PERSISTENCE_FAILURE_TEXT = (
    "❌ Error guardando la compra\n\n"
    "La compra sigue pendiente, presiona Confirmar para reintentar."
)

DISPLAY_DATE_FORMAT = "%d/%m/%Y"


def _callback(action: str) -> str:
    return f"{CALLBACK_PREFIX}{action}"


PREVIEW_KEYBOARD = InlineKeyboardMarkup(
    [
        [
            InlineKeyboardButton("Confirmar", callback_data=_callback(ACTION_CONFIRM)),
            InlineKeyboardButton("Cancelar", callback_data=_callback(ACTION_CANCEL)),
        ]
    ]
)

WARNING_KEYBOARD = InlineKeyboardMarkup(
    [
        [InlineKeyboardButton("Confirmar de todos modos", callback_data=_callback(ACTION_CONFIRM_ANYWAY))],
        [InlineKeyboardButton("Cancelar", callback_data=_callback(ACTION_CANCEL))],
    ]
)


def format_amount(amount: float) -> str:
    """9000.0 -> '9000', 9000.5 -> '9000.5'."""
    return str(int(amount)) if float(amount).is_integer() else str(amount)


def _purchase_lines(purchase: PurchaseIntent) -> str:
    return (
        f"🛒 {purchase.description}\n"
        f"🏷️ {purchase.bank}\n"
        f"💰 ${format_amount(purchase.amount)}\n"
        f"📆 {purchase.months} meses\n"
        f"👤 {purchase.user}"
    )


def _window_line(window: Optional[PaymentWindow]) -> str:
    if window is None:
        return "🗓️ Sin ciclo de facturación para esta tarjeta"
    return (
        f"🗓️ Corte {window.cut_date.strftime(DISPLAY_DATE_FORMAT)} · "
        f"Pago {window.due_date.strftime(DISPLAY_DATE_FORMAT)} "
        f"({window.days_to_pay} días para pagar)"
    )


def render_preview(outcome: ConfirmationOutcome) -> str:
    return (
        "🧾 Revisa la compra\n\n"
        f"{_purchase_lines(outcome.purchase)}\n"
        f"{_window_line(outcome.window)}"
    )


def render_warning(outcome: ConfirmationOutcome) -> str:
    """Warning text listing the better cards, best first."""
    purchase = outcome.purchase
    lines = [
        "⚠️ Hay una tarjeta con más días para pagar",
        "",
        f"{purchase.bank}: {outcome.window.days_to_pay} días "
        f"(pago {outcome.window.due_date.strftime(DISPLAY_DATE_FORMAT)})",
        "",
        "Mejores opciones:",
    ]
    for position, alternative in enumerate(outcome.alternatives, start=1):
        lines.append(
            f"{position}. {alternative.card_id}: {alternative.days_to_pay} días "
            f"(pago {alternative.window.due_date.strftime(DISPLAY_DATE_FORMAT)})"
        )
    lines.extend(["", f"¿Guardar la compra con {purchase.bank} de todos modos?"])
    return "\n".join(lines)


def render_committed(outcome: ConfirmationOutcome) -> str:
    return f"✅ Compra guardada\n\n{_purchase_lines(outcome.purchase)}"


def render_outcome(
    outcome: ConfirmationOutcome,
) -> Tuple[str, Optional[InlineKeyboardMarkup]]:
    """Message text and buttons for any workflow outcome."""
    if outcome.status is OutcomeStatus.PREVIEW:
        return render_preview(outcome), PREVIEW_KEYBOARD
    if outcome.status is OutcomeStatus.WARNED:
        return render_warning(outcome), WARNING_KEYBOARD
    if outcome.status is OutcomeStatus.COMMITTED:
        return render_committed(outcome), None
    if outcome.status is OutcomeStatus.CANCELLED:
        return "🗑️ Compra cancelada", None
    if outcome.status is OutcomeStatus.EXPIRED:
        return "⌛ La confirmación expiró. Envía la compra de nuevo.", None
    return "ℹ️ No hay ninguna compra pendiente.", None
