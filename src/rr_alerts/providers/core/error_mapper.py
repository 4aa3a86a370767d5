"""Domain concept for mapping alerting exceptions to HTTP responses."""
import asyncio
from dataclasses import dataclass

import httpx
from fastapi import HTTPException

from rr_alerts.providers.core.exceptions import (ConfigurationError,
                                                 DeliveryFailure,
                                                 InvalidRangeError,
                                                 PriceNotFound, RateLimited,
                                                 StateStoreError,
                                                 TickerSourceError)


@dataclass(frozen=True)
class ErrorMapper:
    """Maps price/mail/store exceptions to HTTP (status_code, detail).

    Routers call raise_http() only for conditions that must reach the caller;
    the batch endpoint reports rate limits and missing prices in its summary.
    """

    resource_name: str = "Ticker"
    api_name: str = "Price API"

    def to_http(
        self,
        exc: Exception,
        symbol: str | None = None,
    ) -> tuple[int, str]:
        """Map an exception to (status_code, detail) for HTTP responses.

        Args:
            exc: The exception raised by a provider, store or service.
            symbol: Optional symbol to include in detail (e.g. "AAPL").

        Returns:
            (status_code, detail) suitable for HTTPException(status_code=..., detail=...).
        """
        if isinstance(exc, ConfigurationError):
            return (500, str(exc))
        if isinstance(exc, StateStoreError):
            return (500, f"State store unavailable: {exc}")
        if isinstance(exc, RateLimited):
            return (429, f"{self.api_name} rate limit reached, retry later")
        if isinstance(exc, PriceNotFound):
            detail = (
                f"{self.resource_name} not found"
                if symbol is None
                else f"No price for {self.resource_name.lower()} '{symbol}'"
            )
            return (404, detail)
        if isinstance(exc, TickerSourceError):
            return (502, f"{self.api_name} unusable: {exc}")
        if isinstance(exc, InvalidRangeError):
            return (422, str(exc))
        if isinstance(exc, DeliveryFailure):
            return (502, str(exc))
        if isinstance(exc, httpx.HTTPStatusError):
            status = exc.response.status_code
            if status >= 500:
                return (502, f"{self.api_name} error")
            return (status, f"{self.api_name} error")
        if isinstance(exc, (asyncio.TimeoutError, TimeoutError, httpx.TimeoutException)):
            detail = "Request timed out"
            if symbol is not None:
                detail = f"Request to {self.api_name} timed out for '{symbol}'"
            return (504, detail)
        if isinstance(exc, httpx.HTTPError):
            return (502, f"{self.api_name} unreachable")
        return (500, "Internal server error")

    def raise_http(
        self,
        exc: Exception,
        symbol: str | None = None,
    ) -> None:
        """Map exception to HTTP and raise HTTPException. Never returns."""
        status_code, detail = self.to_http(exc, symbol=symbol)
        raise HTTPException(status_code=status_code, detail=detail) from exc
