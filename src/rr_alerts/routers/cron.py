"""Batch trigger endpoint for an external scheduler (cron, timer, uptime pinger)."""
import logging

import httpx
from fastapi import APIRouter, Query

from rr_alerts.deps import BatchRunnerDep, SettingsDep
from rr_alerts.providers.core import (ConfigurationError, ErrorMapper,
                                      StateStoreError, TickerSourceError)
from rr_alerts.schemas import BatchSummary

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/cron", tags=["cron"])

_errors = ErrorMapper(resource_name="Ticker", api_name="Ticker sheet")


@router.api_route("/check-crossings", methods=["GET", "POST"], response_model=BatchSummary)
async def check_crossings(
    runner: BatchRunnerDep,
    settings: SettingsDep,
    force_all: bool = Query(
        default=False,
        alias="all",
        description="Process every ticker now, ignoring the cursor and slice size",
    ),
) -> BatchSummary:
    """Run one batch of the zone-crossing check.

    Rate limits and missing prices are reported in the summary; failures that
    keep the batch from loading tickers or persisting state produce an error.
    """
    missing = settings.missing_batch_settings()
    if missing:
        _errors.raise_http(ConfigurationError(missing))
    try:
        return await runner.run(force_all=force_all)
    except (StateStoreError, TickerSourceError, httpx.HTTPError) as e:
        logger.exception("Batch run failed")
        _errors.raise_http(e)
