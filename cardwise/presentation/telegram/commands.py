"""Parsing of the /compra command into a purchase request."""

import math
from typing import Optional, Sequence

from cardwise.application.dto import PurchaseRequest
from cardwise.application.dto.purchase import DEFAULT_USER_NAME, MAX_MONTHS, MIN_MONTHS
from cardwise.domain.exceptions import InvalidPurchaseIntentException

FORMAT_HINT = "❌ Formato incorrecto:\n/compra 9000 12 RAPPICARD Descripción"
NOT_NUMBERS = "❌ Monto y meses deben ser números"
MISSING_DESCRIPTION = "❌ Falta descripción"
NON_POSITIVE_AMOUNT = "❌ El monto debe ser mayor a cero"
MONTHS_OUT_OF_RANGE = f"❌ Los meses deben ser un entero entre {MIN_MONTHS} y {MAX_MONTHS}"


def resolve_user_name(first_name: Optional[str], username: Optional[str]) -> str:
    """Name written to the ledger: first name, else username, else a placeholder."""
    return first_name or username or DEFAULT_USER_NAME


def _parse_number(raw: str) -> float:
    value = float(raw)
    if not math.isfinite(value):
        raise ValueError(raw)
    return value


def parse_compra_args(args: Sequence[str], user_name: str) -> PurchaseRequest:
    """
    Turn ``/compra <monto> <meses> <banco> <descripción...>`` arguments into
    a PurchaseRequest.

    Raises:
        InvalidPurchaseIntentException: With the user-facing Spanish message
    """
    if len(args) < 4:
        raise InvalidPurchaseIntentException(FORMAT_HINT)

    try:
        amount = _parse_number(args[0])
        months = _parse_number(args[1])
    except ValueError:
        raise InvalidPurchaseIntentException(NOT_NUMBERS)

    if amount <= 0:
        raise InvalidPurchaseIntentException(NON_POSITIVE_AMOUNT)
    if not months.is_integer() or not MIN_MONTHS <= months <= MAX_MONTHS:
        raise InvalidPurchaseIntentException(MONTHS_OUT_OF_RANGE)

    description = " ".join(args[3:]).strip()
    if not description:
        raise InvalidPurchaseIntentException(MISSING_DESCRIPTION)

    return PurchaseRequest(
        amount=amount,
        months=int(months),
        bank=args[2].upper(),
        description=description,
        user_name=user_name,
    )
