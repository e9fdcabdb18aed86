"""External client interfaces."""

from abc import ABC, abstractmethod

from cardwise.domain.entities import PurchaseIntent


class PurchaseLedgerClient(ABC):
    """
    Abstract client for the purchase ledger (the spreadsheet).

    The ledger derives every financial column (remaining balance,
    monthly payment, start/end dates) on its own side.
    """

    @abstractmethod
    async def append_purchase(self, purchase: PurchaseIntent) -> None:
        """
        Append one purchase row to the ledger.

        Args:
            purchase: The confirmed purchase

        Raises:
            PersistenceFailureException: If the row could not be written
        """
        ...
