"""Ticker list read from a published spreadsheet exported as CSV."""
import csv
import io
import re

import httpx

from rr_alerts.providers.core.exceptions import TickerSourceError
from rr_alerts.providers.tickers.ticker_source_abc import (TickerSourceABC,
                                                          parse_ticker_rows)
from rr_alerts.schemas import TickerSpec

# Header patterns for the sheet columns, e.g. "LONGS | Green L | Red L | PICK TYPE".
_COLUMNS: dict[str, re.Pattern[str]] = {
    "symbol": re.compile(r"longs|ticker|symbol", re.I),
    "low": re.compile(r"green|low", re.I),
    "high": re.compile(r"red|high", re.I),
    "pick_type": re.compile(r"pick", re.I),
    "price": re.compile(r"price|last", re.I),
}


def _pick_rank(pick_type: str) -> int:
    if pick_type == "OFFICIAL":
        return 0
    if "OFFICIAL" in pick_type:
        return 1
    return 2


def parse_sheet_csv(text: str) -> list[TickerSpec]:
    """Parse the sheet CSV: OFFICIAL picks first, then alphabetical by symbol.

    Raises:
        TickerSourceError: the header has no ticker, low or high column.
    """
    reader = csv.reader(io.StringIO(text.strip()))
    header = next(reader, None)
    if not header:
        return []

    index: dict[str, int] = {}
    for field, pattern in _COLUMNS.items():
        for i, name in enumerate(header):
            if i not in index.values() and pattern.search(name):
                index[field] = i
                break
    if not {"symbol", "low", "high"} <= index.keys():
        raise TickerSourceError(f"Sheet header lacks ticker/low/high columns: {header}")

    def cell(row: list[str], field: str) -> str | None:
        i = index.get(field)
        return row[i].strip() if i is not None and i < len(row) else None

    rows = [
        {
            "symbol": cell(row, "symbol"),
            "low": cell(row, "low"),
            "high": cell(row, "high"),
            "price": cell(row, "price"),
            "pick_type": (cell(row, "pick_type") or "").upper(),
        }
        for row in reader
        if any(c.strip() for c in row)
    ]
    tickers = parse_ticker_rows(rows)
    tickers.sort(key=lambda t: (_pick_rank(t.pick_type), t.symbol))
    return tickers


class SheetTickerSource(TickerSourceABC):
    """Fetches the ticker sheet over HTTP on every call (no caching)."""

    def __init__(
        self,
        csv_url: str,
        *,
        client: httpx.AsyncClient | None = None,
        timeout: float = 15.0,
    ) -> None:
        self._csv_url = csv_url
        self._client = client or httpx.AsyncClient(timeout=timeout, follow_redirects=True)

    async def list_tickers(self) -> list[TickerSpec]:
        response = await self._client.get(self._csv_url)
        response.raise_for_status()
        return parse_sheet_csv(response.text)

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()
