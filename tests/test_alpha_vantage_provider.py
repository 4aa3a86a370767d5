import httpx
import pytest

from rr_alerts.providers.core.exceptions import PriceNotFound, RateLimited
from rr_alerts.providers.prices.alphavantage import AlphaVantageProvider

DAILY = {
    "Meta Data": {"2. Symbol": "AAPL"},
    "Time Series (Daily)": {
        "2026-10-15": {"4. close": "180.10"},
        "2026-10-16": {"4. close": "182.50"},
    },
}
QUOTE = {"Global Quote": {"05. price": "99.90", "07. latest trading day": "2026-10-16"}}
NOTE = {"Note": "Thank you for using Alpha Vantage! Our standard API rate limit is 5 per minute."}


def make_provider(responses: dict[str, httpx.Response], seen: list[str]) -> AlphaVantageProvider:
    def handler(request: httpx.Request) -> httpx.Response:
        function = request.url.params["function"]
        seen.append(function)
        assert request.url.params["apikey"] == "demo"
        return responses[function]

    client = httpx.AsyncClient(
        base_url=AlphaVantageProvider.BASE_URL, transport=httpx.MockTransport(handler)
    )
    return AlphaVantageProvider("demo", client=client)


async def test_latest_daily_close():
    seen: list[str] = []
    async with make_provider({"TIME_SERIES_DAILY": httpx.Response(200, json=DAILY)}, seen) as p:
        obs = await p.resolve("aapl")
    assert obs.symbol == "AAPL"
    assert obs.price == 182.50
    assert obs.as_of_date == "2026-10-16"
    assert seen == ["TIME_SERIES_DAILY"]


async def test_rate_limit_note_stops_without_fallback():
    seen: list[str] = []
    async with make_provider({"TIME_SERIES_DAILY": httpx.Response(200, json=NOTE)}, seen) as p:
        with pytest.raises(RateLimited):
            await p.resolve("AAPL")
    assert seen == ["TIME_SERIES_DAILY"]


async def test_information_key_is_a_rate_limit():
    seen: list[str] = []
    info = {"Information": "Please consider a premium plan."}
    async with make_provider({"TIME_SERIES_DAILY": httpx.Response(200, json=info)}, seen) as p:
        with pytest.raises(RateLimited):
            await p.resolve("AAPL")


async def test_error_message_falls_back_to_global_quote():
    seen: list[str] = []
    responses = {
        "TIME_SERIES_DAILY": httpx.Response(200, json={"Error Message": "Invalid API call."}),
        "GLOBAL_QUOTE": httpx.Response(200, json=QUOTE),
    }
    async with make_provider(responses, seen) as p:
        obs = await p.resolve("XYZ")
    assert obs.price == 99.90
    assert obs.as_of_date == "2026-10-16"
    assert seen == ["TIME_SERIES_DAILY", "GLOBAL_QUOTE"]


async def test_nothing_anywhere_is_price_not_found():
    seen: list[str] = []
    responses = {
        "TIME_SERIES_DAILY": httpx.Response(200, json={}),
        "GLOBAL_QUOTE": httpx.Response(200, json={"Global Quote": {}}),
    }
    async with make_provider(responses, seen) as p:
        with pytest.raises(PriceNotFound):
            await p.resolve("NOPE")


async def test_http_429_is_rate_limited():
    seen: list[str] = []
    async with make_provider({"TIME_SERIES_DAILY": httpx.Response(429)}, seen) as p:
        with pytest.raises(RateLimited):
            await p.resolve("AAPL")


async def test_server_error_is_price_not_found():
    seen: list[str] = []
    async with make_provider({"TIME_SERIES_DAILY": httpx.Response(503)}, seen) as p:
        with pytest.raises(PriceNotFound):
            await p.resolve("AAPL")
