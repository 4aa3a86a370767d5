import asyncio

import pytest
from conftest import NOW

from rr_alerts.providers.core.exceptions import RateLimited, StateStoreError
from rr_alerts.schemas import AlertState
from rr_alerts.scoring import DEFAULT_SCHEME
from rr_alerts.services.batch_runner import plan_slice
from rr_alerts.store import CURSOR_KEY


def tickers(n: int) -> list[dict]:
    return [{"symbol": f"T{i}", "low": 10, "high": 20} for i in range(n)]


class TestPlanSlice:
    def test_wraps_around_the_list(self):
        plan = plan_slice(total=10, cursor=8, per_run=4)
        assert plan.indices == (8, 9, 0, 1)
        assert plan.next_cursor == 2

    def test_slice_never_exceeds_total(self):
        plan = plan_slice(total=3, cursor=1, per_run=4)
        assert plan.indices == (1, 2, 0)
        assert plan.next_cursor == 1

    def test_stale_cursor_is_reduced_modulo_total(self):
        assert plan_slice(total=5, cursor=12, per_run=2).indices == (2, 3)

    def test_force_all_keeps_cursor(self):
        plan = plan_slice(total=5, cursor=3, per_run=2, force_all=True)
        assert plan.indices == (0, 1, 2, 3, 4)
        assert plan.next_cursor == 3

    def test_empty_list(self):
        assert plan_slice(total=0, cursor=4, per_run=4).indices == ()


async def test_run_covers_the_slice_and_advances_cursor(make_runner, oracle, kv):
    oracle.prices = {f"T{i}": 15.0 for i in range(10)}
    await kv.set(CURSOR_KEY, 8)

    summary = await make_runner(tickers(10)).run()

    assert oracle.calls == ["T8", "T9", "T0", "T1"]
    assert summary.processed == 4
    assert summary.total == 10
    assert summary.next_cursor == 2
    assert not summary.rate_limited
    assert await kv.get(CURSOR_KEY) == 2


async def test_rate_limit_freezes_cursor(make_runner, oracle, kv, state_store):
    oracle.prices = {f"T{i}": 15.0 for i in range(10)}
    oracle.prices["T5"] = RateLimited("T5", "Note")
    await kv.set(CURSOR_KEY, 3)

    summary = await make_runner(tickers(10)).run()

    assert summary.rate_limited
    assert summary.processed == 2
    assert summary.next_cursor == 3
    assert await kv.get(CURSOR_KEY) == 3
    assert await state_store.get("T3") is not None
    assert await state_store.get("T5") is None


async def test_first_sighting_seeds_state_without_email(make_runner, oracle, subscribers, transport, state_store):
    await subscribers.add("a@example.com")
    oracle.prices = {"XYZ": 13.2}

    summary = await make_runner([{"symbol": "XYZ", "low": 10, "high": 20}]).run()

    assert summary.sent == 0
    assert transport.sent == []
    state = await state_store.get("XYZ")
    assert state.last_zone == 2
    assert state.zone_scheme == DEFAULT_SCHEME.scheme_id
    assert state.last_observed_price == 13.2


async def test_zone_crossing_sends_and_persists(make_runner, oracle, subscribers, transport, state_store):
    await subscribers.add("a@example.com")
    await state_store.set(
        "XYZ", AlertState(last_zone=1, zone_scheme=DEFAULT_SCHEME.scheme_id)
    )
    # score(13.2, 10, 20) is about 6, inside zone 2
    oracle.prices = {"XYZ": 13.2}

    summary = await make_runner([{"symbol": "XYZ", "low": 10, "high": 20}]).run()

    assert summary.sent == 1
    assert len(transport.sent) == 1
    assert "5-line" in transport.sent[0].html
    state = await state_store.get("XYZ")
    assert state.last_zone == 2
    assert state.last_email_at == NOW


async def test_cooldown_still_moves_zone(make_runner, oracle, subscribers, transport, state_store):
    await subscribers.add("a@example.com")
    await state_store.set(
        "XYZ",
        AlertState(last_zone=1, last_email_at=NOW - 3600, zone_scheme=DEFAULT_SCHEME.scheme_id),
    )
    oracle.prices = {"XYZ": 13.2}

    summary = await make_runner([{"symbol": "XYZ", "low": 10, "high": 20}]).run()

    assert summary.sent == 0
    assert transport.sent == []
    state = await state_store.get("XYZ")
    assert state.last_zone == 2
    assert state.last_email_at == NOW - 3600


async def test_state_from_another_scheme_is_reseeded(make_runner, oracle, subscribers, transport, state_store):
    await subscribers.add("a@example.com")
    await state_store.set("XYZ", AlertState(last_zone=0, zone_scheme="legacy"))
    oracle.prices = {"XYZ": 13.2}

    summary = await make_runner([{"symbol": "XYZ", "low": 10, "high": 20}]).run()

    assert summary.sent == 0
    state = await state_store.get("XYZ")
    assert state.last_zone == 2
    assert state.zone_scheme == DEFAULT_SCHEME.scheme_id


async def test_missing_price_is_skipped(make_runner, oracle, state_store):
    oracle.prices = {"T0": 15.0}

    summary = await make_runner(tickers(3)).run()

    assert summary.processed == 3
    assert summary.skipped == 2
    assert summary.next_cursor == 0
    assert await state_store.get("T1") is None


async def test_reference_price_skips_the_oracle(make_runner, oracle, state_store):
    summary = await make_runner([{"symbol": "XYZ", "low": 10, "high": 20, "price": 19}]).run()

    assert summary.processed == 1
    assert oracle.calls == []
    assert (await state_store.get("XYZ")).last_zone == 0


async def test_force_all_processes_everything(make_runner, oracle, kv):
    oracle.prices = {f"T{i}": 15.0 for i in range(6)}
    await kv.set(CURSOR_KEY, 4)

    summary = await make_runner(tickers(6), per_run=2).run(force_all=True)

    assert summary.processed == 6
    assert summary.next_cursor == 4
    assert len(oracle.calls) == 6


async def test_empty_ticker_list(make_runner, kv):
    summary = await make_runner([]).run()
    assert summary.model_dump(by_alias=True) == {
        "processed": 0,
        "total": 0,
        "sent": 0,
        "skipped": 0,
        "nextCursor": 0,
        "rateLimited": False,
    }
    assert await kv.get(CURSOR_KEY) is None


async def test_stop_event_cancels_before_next_ticker(make_runner, oracle, kv):
    oracle.prices = {f"T{i}": 15.0 for i in range(5)}
    stop = asyncio.Event()
    stop.set()

    summary = await make_runner(tickers(5)).run(stop_event=stop)

    assert summary.processed == 0
    assert summary.next_cursor == 0
    assert oracle.calls == []


async def test_stop_mid_run_resumes_after_the_last_checked_ticker(
    make_runner, oracle, kv, monkeypatch
):
    oracle.prices = {f"T{i}": 15.0 for i in range(10)}
    await kv.set(CURSOR_KEY, 3)
    stop = asyncio.Event()
    resolve = oracle.resolve

    async def resolve_then_stop(symbol):
        observation = await resolve(symbol)
        if len(oracle.calls) == 2:
            stop.set()
        return observation

    monkeypatch.setattr(oracle, "resolve", resolve_then_stop)
    summary = await make_runner(tickers(10)).run(stop_event=stop)

    assert oracle.calls == ["T3", "T4"]
    assert summary.processed == 2
    assert summary.next_cursor == 5
    assert await kv.get(CURSOR_KEY) == 5


async def test_store_failure_propagates(make_runner, oracle, kv, monkeypatch):
    oracle.prices = {"T0": 15.0}

    async def broken_get(key):
        raise OSError("disk gone")

    monkeypatch.setattr(kv, "get", broken_get)
    with pytest.raises(StateStoreError):
        await make_runner(tickers(1)).run()
