"""Process-local key/value store."""
from __future__ import annotations

import copy
from typing import Any

from rr_alerts.store.kv_store_abc import KeyValueStoreABC


class InMemoryStore(KeyValueStoreABC):
    """Dict-backed store for tests and single-process development runs."""

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}
        self._sets: dict[str, set[str]] = {}

    async def get(self, key: str) -> Any | None:
        return copy.deepcopy(self._values.get(key))

    async def set(self, key: str, value: Any) -> None:
        self._values[key] = copy.deepcopy(value)

    async def sadd(self, key: str, member: str) -> None:
        self._sets.setdefault(key, set()).add(member)

    async def srem(self, key: str, member: str) -> None:
        self._sets.get(key, set()).discard(member)

    async def smembers(self, key: str) -> set[str]:
        return set(self._sets.get(key, set()))
