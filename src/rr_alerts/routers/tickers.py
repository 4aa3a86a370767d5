"""Ticker status and live price lookup."""
import logging

import httpx
from fastapi import APIRouter

from rr_alerts.deps import (AlertStateStoreDep, PriceResolverDep,
                            TickerSourceDep)
from rr_alerts.providers.core import (ErrorMapper, PriceNotFound, RateLimited,
                                      StateStoreError, TickerSourceError)
from rr_alerts.providers.core.utils import normalize_stock_symbol, round2
from rr_alerts.schemas import PriceObservation, TickerStatus
from rr_alerts.scoring import DEFAULT_SCHEME, score, zone_of

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/tickers", tags=["tickers"])

_errors = ErrorMapper(resource_name="Ticker", api_name="Price API")


@router.get("", response_model=list[TickerStatus])
async def list_tickers(
    source: TickerSourceDep,
    store: AlertStateStoreDep,
) -> list[TickerStatus]:
    """Every tracked ticker with its band and the last price seen by the batch."""
    try:
        tickers = await source.list_tickers()
        statuses: list[TickerStatus] = []
        for ticker in tickers:
            state = await store.get(ticker.symbol)
            status = TickerStatus(
                symbol=ticker.symbol,
                low=ticker.low,
                high=ticker.high,
                pick_type=ticker.pick_type,
            )
            if state is not None and state.last_observed_price is not None:
                s = score(state.last_observed_price, ticker.low, ticker.high)
                zone = zone_of(s, DEFAULT_SCHEME)
                status = status.model_copy(
                    update={
                        "last_price": state.last_observed_price,
                        "last_date": state.last_observed_date,
                        "score": round2(s),
                        "zone": zone,
                        "zone_name": DEFAULT_SCHEME.name(zone),
                        "last_email_at": state.last_email_at or None,
                    }
                )
            statuses.append(status)
    except (StateStoreError, TickerSourceError, httpx.HTTPError) as e:
        logger.exception("Failed to list tickers")
        _errors.raise_http(e)
    return statuses


@router.get("/{symbol}/price", response_model=PriceObservation)
async def get_price(symbol: str, resolver: PriceResolverDep) -> PriceObservation:
    """Resolve the latest price from the price oracle (ignores sheet prices)."""
    sym = normalize_stock_symbol(symbol)
    try:
        return await resolver.lookup(sym)
    except (PriceNotFound, RateLimited) as e:
        _errors.raise_http(e, symbol=sym)
