"""Factories choosing concrete providers from settings."""
from sqlalchemy.engine import Engine

from rr_alerts.config import Settings
from rr_alerts.providers.prices.alphavantage import AlphaVantageProvider
from rr_alerts.providers.prices.price_oracle_abc import PriceOracleABC
from rr_alerts.providers.prices.yfinance import YFinanceProvider
from rr_alerts.providers.tickers import (SheetTickerSource, StaticTickerSource,
                                         TickerSourceABC)
from rr_alerts.store import InMemoryStore, KeyValueStoreABC, SqlKeyValueStore


def create_price_oracle(settings: Settings) -> PriceOracleABC:
    """Alpha Vantage by default; Yahoo Finance when PRICE_SOURCE=yfinance."""
    if settings.price_source == "yfinance":
        return YFinanceProvider()
    return AlphaVantageProvider(api_key=settings.alpha_vantage_key or "")


def create_ticker_source(settings: Settings) -> TickerSourceABC:
    """Sheet CSV when TICKERS_CSV_URL is set, else TICKERS_FILE, else an empty list."""
    if settings.tickers_csv_url:
        return SheetTickerSource(settings.tickers_csv_url)
    if settings.tickers_file:
        return StaticTickerSource.from_json_file(settings.tickers_file)
    return StaticTickerSource([])


def create_kv_store(settings: Settings, engine: Engine) -> KeyValueStoreABC:
    if settings.store_backend == "memory":
        return InMemoryStore()
    return SqlKeyValueStore(engine)
