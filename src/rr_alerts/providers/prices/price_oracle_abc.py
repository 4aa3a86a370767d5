"""Abstract base class for price oracles."""
from abc import ABC, abstractmethod

from rr_alerts.schemas import PriceObservation


class PriceOracleABC(ABC):
    """Base interface for market data sources that resolve a latest price.

    Implementations must tell a rate-limit refusal apart from missing data:
    callers stop a batch on RateLimited but merely skip a symbol on PriceNotFound.
    """

    name: str = "oracle"

    @abstractmethod
    async def resolve(self, symbol: str) -> PriceObservation:
        """Resolve the latest price for a symbol.

        Args:
            symbol: Normalized stock ticker (e.g. "AAPL").

        Returns:
            PriceObservation with price and as-of date.

        Raises:
            RateLimited: The source refused the request because of its rate limit.
            PriceNotFound: The source has no usable price for the symbol.
        """

    async def close(self) -> None:
        """Clean up resources (connections, clients).

        Override in subclasses if cleanup is needed.
        """

    async def __aenter__(self) -> "PriceOracleABC":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        """Async context manager exit - calls close()."""
        await self.close()
