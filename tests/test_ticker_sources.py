import json

import httpx
import pytest

from rr_alerts.providers.core.exceptions import TickerSourceError
from rr_alerts.providers.tickers import (SheetTickerSource, StaticTickerSource,
                                         parse_sheet_csv)

SHEET = """LONGS,Green L,Red L,PICK TYPE,Last Price
msft,300,450,community,
AAPL,150,240,OFFICIAL,190.5
NVDA,80,160,official - swing,
BAD,50,40,OFFICIAL,
AAPL,1,2,,
,,,,
"""


def test_sheet_orders_official_picks_first():
    tickers = parse_sheet_csv(SHEET)
    assert [t.symbol for t in tickers] == ["AAPL", "NVDA", "MSFT"]


def test_sheet_row_details():
    aapl = parse_sheet_csv(SHEET)[0]
    assert (aapl.low, aapl.high, aapl.price, aapl.pick_type) == (150, 240, 190.5, "OFFICIAL")
    msft = parse_sheet_csv(SHEET)[2]
    assert msft.price is None


def test_sheet_without_band_columns_is_rejected():
    with pytest.raises(TickerSourceError):
        parse_sheet_csv("Ticker,Notes\nAAPL,hello\n")


def test_empty_sheet():
    assert parse_sheet_csv("") == []


async def test_sheet_source_fetches_csv():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/sheet.csv"
        return httpx.Response(200, text=SHEET)

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    source = SheetTickerSource("https://sheets.example.com/sheet.csv", client=client)
    try:
        tickers = await source.list_tickers()
    finally:
        await source.close()
    assert len(tickers) == 3


async def test_static_source_keeps_order_and_drops_invalid():
    source = StaticTickerSource(
        [
            {"symbol": "zzz", "low": 1, "high": 2},
            {"symbol": "AAA", "low": 5, "high": 5},
            {"symbol": "BBB", "low": 3, "high": 9, "price": "nan"},
        ]
    )
    tickers = await source.list_tickers()
    assert [t.symbol for t in tickers] == ["ZZZ", "BBB"]
    assert tickers[1].price is None


async def test_static_source_from_json_file(tmp_path):
    path = tmp_path / "tickers.json"
    path.write_text(json.dumps({"items": [{"symbol": "XYZ", "low": 10, "high": 20}]}))
    tickers = await StaticTickerSource.from_json_file(path).list_tickers()
    assert tickers[0].symbol == "XYZ"
