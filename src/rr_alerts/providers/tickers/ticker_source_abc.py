"""Abstract base class for ticker list sources."""
import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping

from pydantic import ValidationError

from rr_alerts.schemas import TickerSpec

logger = logging.getLogger(__name__)


def parse_ticker_rows(rows: Iterable[Mapping[str, object]]) -> list[TickerSpec]:
    """Validate raw rows into TickerSpecs; invalid rows are logged and dropped.

    The first occurrence of a symbol wins so that the list order, which the
    batch cursor indexes into, stays deterministic.
    """
    tickers: list[TickerSpec] = []
    seen: set[str] = set()
    for row in rows:
        try:
            ticker = TickerSpec.model_validate(row)
        except ValidationError as e:
            logger.warning(
                "Dropping ticker row %s: %s", row.get("symbol"), e.errors()[0]["msg"]
            )
            continue
        if ticker.symbol in seen:
            continue
        seen.add(ticker.symbol)
        tickers.append(ticker)
    return tickers


class TickerSourceABC(ABC):
    """Ordered, authoritative list of tracked tickers and their bands."""

    @abstractmethod
    async def list_tickers(self) -> list[TickerSpec]:
        """Return the ordered ticker list. Order must be stable between calls."""

    async def close(self) -> None:
        """Clean up resources. Override in subclasses if cleanup is needed."""
