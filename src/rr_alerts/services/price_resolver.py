"""Price resolution with the reference-price fallback chain."""
from rr_alerts.providers.core.utils import today_iso
from rr_alerts.providers.prices.price_oracle_abc import PriceOracleABC
from rr_alerts.schemas import PriceObservation, TickerSpec


class PriceResolver:
    """Resolve a ticker's latest price.

    A finite reference price supplied with the ticker row wins; otherwise the
    oracle is queried. PriceNotFound and RateLimited propagate unchanged so the
    batch runner can tell them apart.
    """

    def __init__(self, oracle: PriceOracleABC) -> None:
        self._oracle = oracle

    async def resolve(self, ticker: TickerSpec) -> PriceObservation:
        if ticker.price is not None:
            return PriceObservation(
                symbol=ticker.symbol,
                price=ticker.price,
                as_of_date=today_iso(),
                source="reference",
            )
        return await self._oracle.resolve(ticker.symbol)

    async def lookup(self, symbol: str) -> PriceObservation:
        """Query the oracle directly, ignoring any reference price."""
        return await self._oracle.resolve(symbol)
