"""Google service account credentials for the Sheets API."""

import asyncio
import json
import os
from pathlib import Path
from typing import Any, Dict

import google.auth.transport.requests
import structlog
from google.oauth2 import service_account

from cardwise.core.config import Settings, settings as app_settings
from cardwise.domain.exceptions import CredentialsNotFoundException

logger = structlog.get_logger(__name__)

SHEETS_SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]
FALLBACK_CREDENTIALS_FILE = "service-account.json"


def load_service_account_info(settings: Settings = app_settings) -> Dict[str, Any]:
    """
    Resolve the service account key.

    Lookup order:
    1. GOOGLE_APPLICATION_CREDENTIALS, a path (relative to the working dir)
    2. GOOGLE_SA_JSON, the key file contents
    3. ./service-account.json

    Raises:
        CredentialsNotFoundException: If none of them is usable
    """
    path_setting = (settings.google_application_credentials or "").strip()
    if path_setting:
        path = Path(path_setting)
        if not path.is_absolute():
            path = Path(os.getcwd()) / path
        if not path.exists():
            raise CredentialsNotFoundException(
                f"GOOGLE_APPLICATION_CREDENTIALS points to a missing file: {path}"
            )
        logger.debug("google_credentials_resolved", source="file", path=str(path))
        return json.loads(path.read_text(encoding="utf-8"))

    inline = (settings.google_sa_json or "").strip()
    if inline:
        logger.debug("google_credentials_resolved", source="inline_json")
        return json.loads(inline)

    fallback = Path(os.getcwd()) / FALLBACK_CREDENTIALS_FILE
    if fallback.exists():
        logger.debug("google_credentials_resolved", source="fallback", path=str(fallback))
        return json.loads(fallback.read_text(encoding="utf-8"))

    raise CredentialsNotFoundException(
        "Missing Google credentials. Set GOOGLE_APPLICATION_CREDENTIALS (path to the "
        "key file) or GOOGLE_SA_JSON (key file contents), or place "
        f"{FALLBACK_CREDENTIALS_FILE} in the working directory."
    )


class ServiceAccountTokenProvider:
    """
    Hands out OAuth access tokens for the Sheets scope.

    google-auth refreshes synchronously, so the refresh runs in a worker
    thread. Tokens are reused until google-auth reports them invalid.
    """

    def __init__(self, settings: Settings = app_settings):
        self._settings = settings
        self._credentials: service_account.Credentials | None = None
        self._lock = asyncio.Lock()

    async def __call__(self) -> str:
        async with self._lock:
            if self._credentials is None:
                try:
                    info = load_service_account_info(self._settings)
                    self._credentials = service_account.Credentials.from_service_account_info(
                        info,
                        scopes=SHEETS_SCOPES,
                    )
                except ValueError as e:
                    raise CredentialsNotFoundException(
                        f"Invalid service account key: {e}"
                    ) from e

            if not self._credentials.valid:
                await asyncio.to_thread(
                    self._credentials.refresh,
                    google.auth.transport.requests.Request(),
                )
                logger.info("google_token_refreshed")

            return self._credentials.token
