"""Yahoo Finance price oracle."""
from rr_alerts.providers.prices.yfinance.y_finance_provider import \
    YFinanceProvider

__all__ = ["YFinanceProvider"]
