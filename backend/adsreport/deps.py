"""Dependency providers and settings management."""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from .services.ads_report_service import GoogleAdsReportService
from .services.google_ads_client import GAdsClient
from .services.google_sheets_client import GSheetsClient
from .services.sheets_report_service import SheetsReportService


class Settings(BaseSettings):
    """Application settings loaded from environment or .env."""

    BACKEND_CORS_ORIGINS: str = "http://localhost:3000"
    LOG_LEVEL: str = "INFO"

    # Google Ads credentials. GOOGLE_ADS_CONFIG_FILE (google-ads.yaml) wins when set.
    GOOGLE_ADS_CONFIG_FILE: Optional[str] = None
    GOOGLE_DEVELOPER_TOKEN: Optional[str] = None
    GOOGLE_CLIENT_ID: Optional[str] = None
    GOOGLE_CLIENT_SECRET: Optional[str] = None
    GOOGLE_REFRESH_TOKEN: Optional[str] = None
    GOOGLE_LOGIN_CUSTOMER_ID: Optional[str] = None

    # Service-account JSON with access to the target spreadsheets
    GOOGLE_SHEETS_CREDENTIALS_FILE: Optional[str] = None

    # Single character
    CSV_DELIMITER: str = ","

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


@lru_cache()
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()  # type: ignore[call-arg]


@lru_cache()
def get_ads_client() -> GAdsClient:
    """Return a process-wide Google Ads client built from settings."""
    return GAdsClient.from_settings(get_settings())


@lru_cache()
def get_sheets_client() -> GSheetsClient:
    """Return a process-wide Google Sheets client built from settings."""
    return GSheetsClient.from_settings(get_settings())


def get_ads_report_service() -> GoogleAdsReportService:
    return GoogleAdsReportService(get_ads_client())


def get_sheets_report_service() -> SheetsReportService:
    return SheetsReportService(get_sheets_client())
