"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables
    or a .env file. Advisory tuning lives in
    ``cardwise.service.advisory.settings`` under the ADVISORY_ prefix.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "cardwise"
    app_version: str = "0.1.0"
    debug: bool = False
    timezone: str = "America/Mexico_City"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # Google Sheets
    spreadsheet_id: str = ""
    sheet_name: str = "LISTADOCOMPRAS"
    sheets_api_url: str = "https://sheets.googleapis.com/v4/spreadsheets"
    sheets_timeout: float = 10.0
    sheets_max_retries: int = 3

    # Google credentials (path first, then inline JSON, then ./service-account.json)
    google_application_credentials: str | None = None
    google_sa_json: str | None = None

    # Telegram
    telegram_bot_token: str | None = None
    telegram_webhook_secret: str | None = None
    public_base_url: str | None = None

    # Metrics
    metrics_enabled: bool = True

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
