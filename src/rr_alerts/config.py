"""Application settings read from the environment and an optional .env file."""
from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from rr_alerts.db.sessions import DEFAULT_DATABASE_URL


class Settings(BaseSettings):
    """Environment variable names match field names, case-insensitively."""

    # Market data
    alpha_vantage_key: str | None = None
    price_source: Literal["alphavantage", "yfinance"] = "alphavantage"

    # Ticker list
    tickers_csv_url: str | None = None
    tickers_file: str | None = None

    # Mail
    resend_api_key: str | None = None
    alert_from: str | None = None
    alert_to: str | None = None
    unsubscribe_secret: str = "dev-secret"
    public_base_url: str = "http://localhost:8000"
    mail_max_concurrency: int = 2
    mail_max_retries: int = 2  # extra attempts after an HTTP 429

    # State
    database_url: str = DEFAULT_DATABASE_URL
    store_backend: Literal["sql", "memory"] = "sql"
    sql_echo: bool = False

    # Batch
    per_run: int = 4
    cooldown_days: int = 7
    request_pacing_seconds: float = 1.0
    check_interval_seconds: float = 0.0  # 0 disables the in-process scheduler

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def missing_batch_settings(self) -> list[str]:
        """Names of absent credentials/connection info the batch cannot run without."""
        missing: list[str] = []
        if self.price_source == "alphavantage" and not self.alpha_vantage_key:
            missing.append("ALPHA_VANTAGE_KEY")
        if not (self.tickers_csv_url or self.tickers_file):
            missing.append("TICKERS_CSV_URL")
        if self.store_backend == "sql" and not self.database_url:
            missing.append("DATABASE_URL")
        return missing


@lru_cache
def get_settings() -> Settings:
    """Settings singleton (cached for the process)."""
    return Settings()
