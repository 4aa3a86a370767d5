"""Abstract base class for the key/value state store."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class KeyValueStoreABC(ABC):
    """Keyed JSON values plus named string sets.

    Only single-key read-after-write consistency is required; nothing in the
    alerting core depends on atomicity across keys. Backend failures raise
    StateStoreError.
    """

    @abstractmethod
    async def get(self, key: str) -> Any | None:
        """Return the decoded value under key, or None when absent."""

    @abstractmethod
    async def set(self, key: str, value: Any) -> None:
        """Store a JSON-serialisable value under key (last write wins)."""

    @abstractmethod
    async def sadd(self, key: str, member: str) -> None:
        """Add a member to the set under key."""

    @abstractmethod
    async def srem(self, key: str, member: str) -> None:
        """Remove a member from the set under key (no-op when absent)."""

    @abstractmethod
    async def smembers(self, key: str) -> set[str]:
        """Return all members of the set under key."""

    async def sismember(self, key: str, member: str) -> bool:
        """Return True when member is in the set under key."""
        return member in await self.smembers(key)

    async def close(self) -> None:
        """Release backend resources. Override in subclasses if cleanup is needed."""
