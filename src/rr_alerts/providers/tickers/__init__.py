"""Ticker list sources."""
from rr_alerts.providers.tickers.sheet_ticker_source import (SheetTickerSource,
                                                            parse_sheet_csv)
from rr_alerts.providers.tickers.static_ticker_source import \
    StaticTickerSource
from rr_alerts.providers.tickers.ticker_source_abc import (TickerSourceABC,
                                                          parse_ticker_rows)

__all__ = [
    "SheetTickerSource",
    "StaticTickerSource",
    "TickerSourceABC",
    "parse_sheet_csv",
    "parse_ticker_rows",
]
