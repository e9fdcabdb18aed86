"""
Unit tests for the Telegram /compra command parsing and message rendering.
"""

from datetime import date

import pytest

from cardwise.domain.entities import ConfirmationOutcome, OutcomeStatus, PurchaseIntent
from cardwise.domain.exceptions import InvalidPurchaseIntentException
from cardwise.presentation.telegram import parse_compra_args, render_outcome, resolve_user_name
from cardwise.presentation.telegram.commands import (
    FORMAT_HINT,
    MISSING_DESCRIPTION,
    MONTHS_OUT_OF_RANGE,
    NON_POSITIVE_AMOUNT,
    NOT_NUMBERS,
)
from cardwise.presentation.telegram.messages import (
    PREVIEW_KEYBOARD,
    WARNING_KEYBOARD,
    format_amount,
)


# =============================================================================
# Parsing
# =============================================================================

class TestParseCompraArgs:
    """Tests for parse_compra_args."""

    def test_parses_full_command(self):
        request = parse_compra_args(["9000", "12", "rappicard", "Pantalla", "Samsung", "85"], "Ana")

        assert request.amount == 9000
        assert request.months == 12
        assert request.bank == "RAPPICARD"
        assert request.description == "Pantalla Samsung 85"
        assert request.user_name == "Ana"
        assert request.validate() == []

    def test_decimal_amount(self):
        request = parse_compra_args(["1499.90", "3", "nu", "Audífonos"], "Ana")
        assert request.amount == pytest.approx(1499.9)

    @pytest.mark.parametrize("args", [[], ["9000"], ["9000", "12", "nu"]])
    def test_too_few_arguments(self, args):
        with pytest.raises(InvalidPurchaseIntentException) as exc_info:
            parse_compra_args(args, "Ana")
        assert exc_info.value.message == FORMAT_HINT

    @pytest.mark.parametrize(
        "amount,months",
        [("mil", "12"), ("9000", "doce"), ("nan", "12"), ("9000", "inf")],
    )
    def test_non_numeric_amount_or_months(self, amount, months):
        with pytest.raises(InvalidPurchaseIntentException) as exc_info:
            parse_compra_args([amount, months, "nu", "Pantalla"], "Ana")
        assert exc_info.value.message == NOT_NUMBERS

    def test_non_positive_amount(self):
        with pytest.raises(InvalidPurchaseIntentException) as exc_info:
            parse_compra_args(["0", "12", "nu", "Pantalla"], "Ana")
        assert exc_info.value.message == NON_POSITIVE_AMOUNT

    @pytest.mark.parametrize("months", ["0", "61", "2.5"])
    def test_months_out_of_range(self, months):
        with pytest.raises(InvalidPurchaseIntentException) as exc_info:
            parse_compra_args(["9000", months, "nu", "Pantalla"], "Ana")
        assert exc_info.value.message == MONTHS_OUT_OF_RANGE

    def test_blank_description(self):
        with pytest.raises(InvalidPurchaseIntentException) as exc_info:
            parse_compra_args(["9000", "12", "nu", " "], "Ana")
        assert exc_info.value.message == MISSING_DESCRIPTION


class TestResolveUserName:
    """The ledger name falls back first name -> username -> placeholder."""

    def test_prefers_first_name(self):
        assert resolve_user_name("Ana", "ana_mx") == "Ana"

    def test_falls_back_to_username(self):
        assert resolve_user_name(None, "ana_mx") == "ana_mx"

    def test_falls_back_to_placeholder(self):
        assert resolve_user_name(None, None) == "SIN_NOMBRE"


# =============================================================================
# Rendering
# =============================================================================

PURCHASE = PurchaseIntent(
    amount=9000.0,
    months=12,
    bank="RAPPICARD",
    description="Pantalla Samsung 85",
    user="Ana",
    date=date(2025, 3, 10),
)


class TestRenderOutcome:
    """Tests for render_outcome."""

    def test_format_amount(self):
        assert format_amount(9000.0) == "9000"
        assert format_amount(1499.5) == "1499.5"

    def test_committed_message(self):
        outcome = ConfirmationOutcome(
            status=OutcomeStatus.COMMITTED,
            message="Purchase saved.",
            purchase=PURCHASE,
        )

        text, keyboard = render_outcome(outcome)

        assert text == (
            "✅ Compra guardada\n\n"
            "🛒 Pantalla Samsung 85\n"
            "🏷️ RAPPICARD\n"
            "💰 $9000\n"
            "📆 12 meses\n"
            "👤 Ana"
        )
        assert keyboard is None

    def test_preview_without_window_has_confirm_buttons(self):
        outcome = ConfirmationOutcome(
            status=OutcomeStatus.PREVIEW,
            message="Review the purchase and confirm to save it.",
            purchase=PURCHASE,
        )

        text, keyboard = render_outcome(outcome)

        assert "Revisa la compra" in text
        assert "Sin ciclo de facturación" in text
        assert keyboard is PREVIEW_KEYBOARD
        labels = [button.text for row in keyboard.inline_keyboard for button in row]
        assert labels == ["Confirmar", "Cancelar"]

    def test_warning_keyboard_labels(self):
        labels = [button.text for row in WARNING_KEYBOARD.inline_keyboard for button in row]
        data = [button.callback_data for row in WARNING_KEYBOARD.inline_keyboard for button in row]

        assert labels == ["Confirmar de todos modos", "Cancelar"]
        assert data == ["purchase:confirm_anyway", "purchase:cancel"]

    @pytest.mark.parametrize(
        "status,fragment",
        [
            (OutcomeStatus.CANCELLED, "cancelada"),
            (OutcomeStatus.EXPIRED, "expiró"),
            (OutcomeStatus.REJECTED, "No hay ninguna compra pendiente"),
        ],
    )
    def test_terminal_outcomes(self, status, fragment):
        text, keyboard = render_outcome(ConfirmationOutcome(status=status, message=""))

        assert fragment in text
        assert keyboard is None
