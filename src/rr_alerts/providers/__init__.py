"""External collaborators consumed by the alerting core.

- prices: price oracles (Alpha Vantage, Yahoo Finance)
- tickers: ticker list sources (published spreadsheet CSV, static list)
- mail: outbound mail transports (Resend)

Each family exposes an ABC in its package; concrete providers are imported
from their own modules so that schemas can depend on providers.core without
import cycles.
"""
