"""
Centralized configuration for the relief inventory service.
Environment variables (or a local .env file) are loaded and validated here.
"""
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


USGS_DEFAULT_URL = "https://earthquake.usgs.gov/fdsnws/event/1/query"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Service-account secrets belong in .env, never in git.
    """

    model_config = SettingsConfigDict(extra="ignore")

    # ═══════════════════════════════════════════
    # INVENTORY FEED
    # ═══════════════════════════════════════════
    FEED_BACKEND: str = Field(default="csv", description="Feed source: 'csv' or 'sheets'")
    FEED_CSV_PATH: str = Field(default="data/inventory_feed.csv", description="CSV feed path")

    GOOGLE_CLIENT_EMAIL: Optional[str] = Field(default=None, description="Service account email")
    GOOGLE_PRIVATE_KEY: Optional[str] = Field(default=None, description="Service account private key")
    SPREADSHEET_ID: Optional[str] = Field(default=None, description="Inventory spreadsheet id")
    SHEET_RANGE: str = Field(default="Sheet1!A:F", description="A1 range holding the feed")

    # ═══════════════════════════════════════════
    # SEVERITY ORACLE
    # ═══════════════════════════════════════════
    SEVERITY_ORACLE_URL: Optional[str] = Field(default=None, description="Severity prediction endpoint")
    SEVERITY_ORACLE_TIMEOUT: float = Field(default=10.0, description="Oracle timeout in seconds")
    DEFAULT_SEVERITY: str = Field(default="Low", description="Severity before any prediction")

    # ═══════════════════════════════════════════
    # EARTHQUAKE FEED
    # ═══════════════════════════════════════════
    USGS_QUERY_URL: str = Field(default=USGS_DEFAULT_URL, description="USGS fdsnws event query")
    USGS_MAX_RADIUS_DEG: float = Field(default=10.0, description="Search radius in degrees")
    USGS_LOOKBACK_DAYS: int = Field(default=7, description="Search window in days")

    # ═══════════════════════════════════════════
    # MISC
    # ═══════════════════════════════════════════
    RANDOM_SEED: Optional[int] = Field(default=None, description="Seed for simulated telemetry")
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")

    @field_validator("FEED_BACKEND")
    @classmethod
    def normalize_backend(cls, v: str) -> str:
        return v.strip().lower()


@lru_cache
def get_settings() -> Settings:
    return Settings()
