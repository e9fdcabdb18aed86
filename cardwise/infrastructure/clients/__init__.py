"""External API client implementations."""

from .google_credentials import ServiceAccountTokenProvider, load_service_account_info
from .sheets_client import HttpSheetsLedgerClient, build_purchase_row

__all__ = [
    "HttpSheetsLedgerClient",
    "ServiceAccountTokenProvider",
    "build_purchase_row",
    "load_service_account_info",
]
