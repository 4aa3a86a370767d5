"""Alpha Vantage price oracle for stocks."""
import logging

import httpx
from pydantic import ValidationError

from rr_alerts.providers.core.exceptions import PriceNotFound, RateLimited
from rr_alerts.providers.core.utils import normalize_stock_symbol, today_iso
from rr_alerts.providers.prices.alphavantage.dto import (AlphaVantageQueryParams,
                                                         DailySeriesDTO,
                                                         GlobalQuoteDTO)
from rr_alerts.providers.prices.price_oracle_abc import PriceOracleABC
from rr_alerts.schemas import PriceObservation

logger = logging.getLogger(__name__)


class AlphaVantageProvider(PriceOracleABC):
    """Price oracle backed by the Alpha Vantage REST API.

    Resolution order for one symbol:
    1. TIME_SERIES_DAILY -> latest daily close.
    2. A throttling note in the response -> RateLimited (no fallback call, it
       would only burn more of the quota).
    3. No series (or an error message) -> one GLOBAL_QUOTE call.
    4. Still nothing -> PriceNotFound.

    The free tier allows about five requests per minute, so callers must not
    fan out requests in parallel.
    """

    name = "alphavantage"
    BASE_URL = "https://www.alphavantage.co"

    def __init__(
        self,
        api_key: str,
        *,
        client: httpx.AsyncClient | None = None,
        timeout: float = 15.0,
    ) -> None:
        """Initialize the Alpha Vantage provider.

        Args:
            api_key: Alpha Vantage API key.
            client: Optional preconfigured client (tests pass a MockTransport client).
            timeout: Request timeout in seconds.
        """
        self._api_key = api_key
        self._client = client or httpx.AsyncClient(base_url=self.BASE_URL, timeout=timeout)

    async def _query(self, symbol: str, params: AlphaVantageQueryParams) -> dict:
        query = params.model_dump(exclude_none=True) | {"apikey": self._api_key}
        try:
            response = await self._client.get("/query", params=query)
            if response.status_code == 429:
                raise RateLimited(symbol, "HTTP 429")
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            raise PriceNotFound(symbol, f"{params.function} request failed: {e}") from e
        except ValueError as e:
            raise PriceNotFound(symbol, f"{params.function} returned invalid JSON") from e
        if not isinstance(data, dict):
            raise PriceNotFound(symbol, f"{params.function} returned unexpected payload")
        return data

    async def _daily_close(self, symbol: str) -> PriceObservation | None:
        data = await self._query(
            symbol,
            AlphaVantageQueryParams(
                function="TIME_SERIES_DAILY", symbol=symbol, outputsize="compact"
            ),
        )
        try:
            dto = DailySeriesDTO.model_validate(data)
        except ValidationError:
            logger.warning("Alpha Vantage daily series for %s did not validate", symbol)
            return None

        latest = dto.latest_close()
        if latest is not None:
            date, close = latest
            return PriceObservation(
                symbol=symbol, price=close, as_of_date=date, source=self.name
            )
        if message := dto.rate_limit_message:
            logger.info("Alpha Vantage rate-limited/info for %s: %.80s", symbol, message)
            raise RateLimited(symbol, message[:120])
        if dto.error_message:
            logger.info("Alpha Vantage error for %s: %.80s", symbol, dto.error_message)
        return None

    async def _global_quote(self, symbol: str) -> PriceObservation | None:
        data = await self._query(
            symbol, AlphaVantageQueryParams(function="GLOBAL_QUOTE", symbol=symbol)
        )
        try:
            dto = GlobalQuoteDTO.model_validate(data)
        except ValidationError:
            logger.warning("Alpha Vantage global quote for %s did not validate", symbol)
            return None

        latest = dto.latest_price()
        if latest is not None:
            date, price = latest
            return PriceObservation(
                symbol=symbol,
                price=price,
                as_of_date=date or today_iso(),
                source=self.name,
            )
        if message := dto.rate_limit_message:
            raise RateLimited(symbol, message[:120])
        return None

    async def resolve(self, symbol: str) -> PriceObservation:
        """Resolve the latest close, falling back to the latest quote."""
        sym = normalize_stock_symbol(symbol)
        observation = await self._daily_close(sym)
        if observation is None:
            observation = await self._global_quote(sym)
        if observation is None:
            raise PriceNotFound(sym, "no daily series and no global quote")
        return observation

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()
