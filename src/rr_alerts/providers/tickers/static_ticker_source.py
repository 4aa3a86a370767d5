"""Ticker list held in memory or loaded from a JSON file."""
import json
from collections.abc import Iterable, Mapping
from pathlib import Path

from rr_alerts.providers.tickers.ticker_source_abc import (TickerSourceABC,
                                                          parse_ticker_rows)
from rr_alerts.schemas import TickerSpec


class StaticTickerSource(TickerSourceABC):
    """Serves a fixed ticker list in the given order."""

    def __init__(self, tickers: Iterable[TickerSpec | Mapping[str, object]]) -> None:
        rows = [t.model_dump() if isinstance(t, TickerSpec) else t for t in tickers]
        self._tickers = parse_ticker_rows(rows)

    @classmethod
    def from_json_file(cls, path: str | Path) -> "StaticTickerSource":
        """Load `[{"symbol": ..., "low": ..., "high": ...}, ...]` or `{"items": [...]}`."""
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        if isinstance(data, dict):
            data = data.get("items", [])
        return cls(data)

    async def list_tickers(self) -> list[TickerSpec]:
        return list(self._tickers)
