"""Price oracles."""
from rr_alerts.providers.prices.price_oracle_abc import PriceOracleABC

__all__ = ["PriceOracleABC"]
