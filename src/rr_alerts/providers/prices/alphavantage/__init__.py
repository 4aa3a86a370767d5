"""Alpha Vantage price oracle."""
from rr_alerts.providers.prices.alphavantage.alpha_vantage_provider import \
    AlphaVantageProvider

__all__ = ["AlphaVantageProvider"]
