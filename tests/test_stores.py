from typing import get_type_hints

import pytest

from rr_alerts.db.models import KVEntry
from rr_alerts.db.sessions import create_db_engine, get_session
from rr_alerts.providers.core.exceptions import StateStoreError
from rr_alerts.schemas import AlertState
from rr_alerts.store import (CURSOR_KEY, AlertStateStore, InMemoryStore,
                             KeyValueStoreABC, SqlKeyValueStore, alert_key)


@pytest.fixture(params=["memory", "sql"])
async def any_kv(request):
    if request.param == "memory":
        store = InMemoryStore()
    else:
        store = SqlKeyValueStore(create_db_engine("sqlite://"))
    yield store
    await store.close()


async def test_values_and_sets(any_kv):
    assert await any_kv.get("missing") is None
    await any_kv.set("k", {"a": 1})
    await any_kv.set("k", {"a": 2})
    assert await any_kv.get("k") == {"a": 2}

    await any_kv.sadd("s", "x")
    await any_kv.sadd("s", "x")
    await any_kv.sadd("s", "y")
    await any_kv.srem("s", "y")
    await any_kv.srem("s", "never-added")
    assert await any_kv.smembers("s") == {"x"}
    assert await any_kv.sismember("s", "x")
    assert not await any_kv.sismember("s", "y")


async def test_alert_state_round_trip(any_kv):
    store = AlertStateStore(any_kv)
    state = AlertState(
        last_zone=2,
        last_email_at=1_700_000_000.0,
        last_observed_price=13.2,
        last_observed_date="2026-10-16",
        zone_scheme="log4-2-5-7",
    )
    await store.set("XYZ", state)
    assert await store.get("XYZ") == state
    assert await store.get("ABC") is None


async def test_cursor_defaults_and_persists(any_kv):
    store = AlertStateStore(any_kv)
    assert await store.get_cursor() == 0
    await store.set_cursor(7)
    assert await store.get_cursor() == 7


async def test_unreadable_records_are_treated_as_absent(kv, state_store):
    await kv.set(alert_key("XYZ"), {"last_zone": "not-a-number"})
    await kv.set(CURSOR_KEY, "garbage")
    assert await state_store.get("XYZ") is None
    assert await state_store.get_cursor() == 0


async def test_backend_errors_become_state_store_errors(kv, state_store, monkeypatch):
    async def broken_set(key, value):
        raise ConnectionError("store offline")

    monkeypatch.setattr(kv, "set", broken_set)
    with pytest.raises(StateStoreError):
        await state_store.set_cursor(1)


async def test_memory_store_copies_values():
    kv = InMemoryStore()
    value = {"items": [1]}
    await kv.set("k", value)
    value["items"].append(2)
    assert await kv.get("k") == {"items": [1]}


def test_set_annotations_resolve_to_the_builtin():
    for cls in (KeyValueStoreABC, InMemoryStore, SqlKeyValueStore):
        assert get_type_hints(cls.smembers)["return"] == set[str]


async def test_undecodable_sql_value_is_treated_as_absent():
    engine = create_db_engine("sqlite://")
    kv = SqlKeyValueStore(engine)
    with get_session(engine) as session:
        session.add(KVEntry(key=alert_key("XYZ"), value="{not json"))

    assert await kv.get(alert_key("XYZ")) is None
    assert await AlertStateStore(kv).get("XYZ") is None
    await kv.close()
