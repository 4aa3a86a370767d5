"""API routers.

Includes routes for:
- /cron - Batch trigger for the zone-crossing check
- /tickers - Ticker status and live price lookup
- /unsubscribe - Signed unsubscribe links
- /alerts - Operational endpoints (test email)
"""
from rr_alerts.routers.alerts import router as alerts_router
from rr_alerts.routers.cron import router as cron_router
from rr_alerts.routers.tickers import router as tickers_router
from rr_alerts.routers.unsubscribe import router as unsubscribe_router

__all__ = ["alerts_router", "cron_router", "tickers_router", "unsubscribe_router"]
