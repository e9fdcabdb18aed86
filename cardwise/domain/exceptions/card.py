"""Card catalog domain exceptions."""

from .base import DomainException


class CardNotConfiguredException(DomainException):
    """Raised when a card has no billing cycle in the catalog."""

    def __init__(self, card_id: str):
        super().__init__(
            message=f"Card has no billing cycle configured: {card_id}",
            code="CARD_NOT_CONFIGURED",
        )
        self.card_id = card_id
