"""Key/value store persisted through SQLModel."""
from __future__ import annotations

import asyncio
import json
import logging
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select

from rr_alerts.db.models import KVEntry, KVSetMember
from rr_alerts.db.sessions import get_session, init_db
from rr_alerts.providers.core.exceptions import StateStoreError
from rr_alerts.store.kv_store_abc import KeyValueStoreABC

logger = logging.getLogger(__name__)


class SqlKeyValueStore(KeyValueStoreABC):
    """Stores values in kv_entry and set members in kv_set_member.

    SQLModel sessions are synchronous; every operation runs in a worker thread
    so the event loop is never blocked on the database.
    """

    def __init__(self, engine: Engine, *, create_tables: bool = True) -> None:
        self._engine = engine
        if create_tables:
            init_db(engine)

    async def _run(self, op: str, fn, *args):  # noqa: ANN001
        try:
            return await asyncio.to_thread(fn, *args)
        except SQLAlchemyError as e:
            raise StateStoreError(f"{op} failed: {e}") from e

    def _get_sync(self, key: str) -> Any | None:
        with get_session(self._engine) as session:
            entry = session.get(KVEntry, key)
            raw = entry.value if entry is not None else None
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning("Discarding undecodable value under %s: %.80r", key, raw)
            return None

    def _set_sync(self, key: str, value: Any) -> None:
        encoded = json.dumps(value)
        with get_session(self._engine) as session:
            entry = session.get(KVEntry, key)
            if entry is None:
                entry = KVEntry(key=key, value=encoded)
            else:
                entry.value = encoded
                entry.updated_at = datetime.now(timezone.utc)
            session.add(entry)

    def _sadd_sync(self, key: str, member: str) -> None:
        with get_session(self._engine) as session:
            if session.get(KVSetMember, (key, member)) is None:
                session.add(KVSetMember(key=key, member=member))

    def _srem_sync(self, key: str, member: str) -> None:
        with get_session(self._engine) as session:
            row = session.get(KVSetMember, (key, member))
            if row is not None:
                session.delete(row)

    def _smembers_sync(self, key: str) -> set[str]:
        with get_session(self._engine) as session:
            rows = session.exec(select(KVSetMember.member).where(KVSetMember.key == key))
            return set(rows.all())

    async def get(self, key: str) -> Any | None:
        return await self._run(f"get {key}", self._get_sync, key)

    async def set(self, key: str, value: Any) -> None:
        await self._run(f"set {key}", self._set_sync, key, value)

    async def sadd(self, key: str, member: str) -> None:
        await self._run(f"sadd {key}", self._sadd_sync, key, member)

    async def srem(self, key: str, member: str) -> None:
        await self._run(f"srem {key}", self._srem_sync, key, member)

    async def smembers(self, key: str) -> set[str]:
        return await self._run(f"smembers {key}", self._smembers_sync, key)

    async def close(self) -> None:
        """Dispose of the engine's connection pool."""
        self._engine.dispose()
