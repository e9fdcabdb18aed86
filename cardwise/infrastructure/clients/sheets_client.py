"""Google Sheets implementation of PurchaseLedgerClient."""

import asyncio
from typing import Any, Awaitable, Callable, List
from urllib.parse import quote

import httpx
import structlog
from google.auth.exceptions import GoogleAuthError

from cardwise.core.config import settings
from cardwise.core.metrics import (
    track_sheets_append_latency,
    record_sheets_append_success,
    record_sheets_append_failure,
    record_sheets_retry,
)
from cardwise.domain.entities import PurchaseIntent, PURCHASE_STATUS_ACTIVE
from cardwise.domain.exceptions import (
    CredentialsNotFoundException,
    PersistenceFailureException,
    PersistenceTimeoutException,
)
from cardwise.domain.interfaces import PurchaseLedgerClient

from .google_credentials import ServiceAccountTokenProvider

logger = structlog.get_logger(__name__)

TokenProvider = Callable[[], Awaitable[str]]

SHEET_COLUMNS = "A:H"


def build_purchase_row(purchase: PurchaseIntent) -> List[Any]:
    """
    Lay a purchase out in the ledger's column order.

    Column F is left empty: the sheet fills it with a formula.
    """
    return [
        purchase.description,      # A
        purchase.user,             # B
        purchase.formatted_date,   # C
        PURCHASE_STATUS_ACTIVE,    # D
        purchase.amount,           # E
        "",                        # F
        purchase.months,           # G
        purchase.bank.upper(),     # H
    ]


class HttpSheetsLedgerClient(PurchaseLedgerClient):
    """
    HTTP client for the Google Sheets values.append endpoint.

    Retries timeouts, rate limiting and server errors with exponential
    backoff; other client errors fail immediately.
    """

    def __init__(
        self,
        spreadsheet_id: str | None = None,
        sheet_name: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        token_provider: TokenProvider | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._spreadsheet_id = spreadsheet_id or settings.spreadsheet_id
        self._sheet_name = sheet_name or settings.sheet_name
        self._base_url = (base_url or settings.sheets_api_url).rstrip("/")
        self._timeout = timeout or settings.sheets_timeout
        self._max_retries = max_retries or settings.sheets_max_retries
        self._token_provider = token_provider or ServiceAccountTokenProvider()
        self._transport = transport

    @property
    def append_url(self) -> str:
        target = quote(f"{self._sheet_name}!{SHEET_COLUMNS}", safe="!:")
        return f"{self._base_url}/{self._spreadsheet_id}/values/{target}:append"

    async def append_purchase(self, purchase: PurchaseIntent) -> None:
        """
        Append one purchase row.

        Implements retry logic with exponential backoff.
        """
        if not self._spreadsheet_id:
            record_sheets_append_failure()
            raise PersistenceFailureException("SPREADSHEET_ID is not configured")

        body = {"values": [build_purchase_row(purchase)]}
        params = {
            "valueInputOption": "USER_ENTERED",
            "insertDataOption": "INSERT_ROWS",
        }
        log = logger.bind(bank=purchase.bank, sheet=self._sheet_name)

        last_exception: PersistenceFailureException | None = None

        for attempt in range(self._max_retries):
            try:
                token = await self._token_provider()
                with track_sheets_append_latency():
                    async with httpx.AsyncClient(
                        timeout=self._timeout,
                        transport=self._transport,
                    ) as client:
                        response = await client.post(
                            self.append_url,
                            params=params,
                            json=body,
                            headers={"Authorization": f"Bearer {token}"},
                        )

                if response.status_code < 400:
                    record_sheets_append_success()
                    log.info("sheets_row_appended", attempt=attempt + 1)
                    return

                last_exception = PersistenceFailureException(
                    message=f"Sheets API error: {response.text[:200]}",
                    status_code=response.status_code,
                )
                log.warning(
                    "sheets_append_failed",
                    status_code=response.status_code,
                    attempt=attempt + 1,
                )
                if response.status_code < 500 and response.status_code != 429:
                    break

            except CredentialsNotFoundException:
                record_sheets_append_failure()
                log.error("sheets_credentials_missing")
                raise
            except GoogleAuthError as e:
                last_exception = PersistenceFailureException(
                    message=f"Google auth error: {e}",
                )
                log.warning(
                    "sheets_auth_error",
                    attempt=attempt + 1,
                    error=str(e),
                )
            except httpx.TimeoutException:
                last_exception = PersistenceTimeoutException()
                log.warning(
                    "sheets_append_timeout",
                    attempt=attempt + 1,
                    max_retries=self._max_retries,
                )
            except httpx.HTTPError as e:
                last_exception = PersistenceFailureException(
                    message=f"Sheets API transport error: {e}",
                )
                log.error(
                    "sheets_append_error",
                    attempt=attempt + 1,
                    error=str(e),
                )

            # Exponential backoff
            if attempt < self._max_retries - 1:
                record_sheets_retry()
                await asyncio.sleep(2**attempt * 0.1)

        record_sheets_append_failure()
        log.error("sheets_append_exhausted", max_retries=self._max_retries)
        raise last_exception or PersistenceFailureException("Failed to append purchase row")
