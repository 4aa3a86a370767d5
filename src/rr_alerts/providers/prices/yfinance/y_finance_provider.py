"""Yahoo Finance price oracle for stocks."""
import asyncio
import logging

import yfinance as yf
from yfinance.exceptions import YFRateLimitError

from rr_alerts.providers.core.exceptions import PriceNotFound, RateLimited
from rr_alerts.providers.core.utils import (normalize_stock_symbol,
                                            positive_finite, today_iso)
from rr_alerts.providers.prices.price_oracle_abc import PriceOracleABC
from rr_alerts.schemas import PriceObservation

logger = logging.getLogger(__name__)


class YFinanceProvider(PriceOracleABC):
    """Price oracle via Yahoo Finance.

    Uses yfinance library for daily history; falls back to fast_info when the
    history is empty. No API key required. yfinance is synchronous, so every
    lookup runs in a worker thread.
    """

    name = "yfinance"

    def __init__(self, history_period: str = "5d") -> None:
        """Initialize the YFinance provider.

        Args:
            history_period: yfinance period string for the daily history lookup.
        """
        self._history_period = history_period

    def _resolve_sync(self, symbol: str) -> PriceObservation:
        """Resolve one symbol synchronously (run in thread)."""
        ticker = yf.Ticker(symbol)
        try:
            df = ticker.history(period=self._history_period, interval="1d")
            if not df.empty:
                closes = df["Close"].dropna()
                if not closes.empty:
                    price = positive_finite(closes.iloc[-1])
                    if price is not None:
                        return PriceObservation(
                            symbol=symbol,
                            price=price,
                            as_of_date=closes.index[-1].date().isoformat(),
                            source=self.name,
                        )

            info = getattr(ticker, "fast_info", None)
            price = positive_finite(info.get("lastPrice")) if info else None
            if price is None:
                raise PriceNotFound(symbol, "no history and no last price")
            return PriceObservation(
                symbol=symbol, price=price, as_of_date=today_iso(), source=self.name
            )
        except (PriceNotFound, YFRateLimitError):
            raise
        except Exception as e:
            raise PriceNotFound(symbol, f"yfinance lookup failed: {e}") from e

    async def resolve(self, symbol: str) -> PriceObservation:
        """Resolve the latest daily close for a stock symbol."""
        sym = normalize_stock_symbol(symbol)
        try:
            return await asyncio.to_thread(self._resolve_sync, sym)
        except YFRateLimitError as e:
            logger.info("Yahoo Finance rate-limited for %s", sym)
            raise RateLimited(sym, str(e)) from e
