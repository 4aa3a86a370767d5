"""Subscriber directory kept as two sets in the key/value store."""
from rr_alerts.providers.core.utils import EMAIL_RE, normalize_email
from rr_alerts.store.kv_store_abc import KeyValueStoreABC

KEY_ACTIVE = "subs:active"
KEY_UNSUB = "subs:unsubscribed"


def _valid(email: str) -> str:
    normalized = normalize_email(email)
    if not EMAIL_RE.match(normalized):
        raise ValueError(f"Invalid email: {email!r}")
    return normalized


class SubscriberDirectory:
    """Active subscribers minus opt-outs.

    The active set is fed by subscription management; the unsubscribed set
    records opt-outs so that an address stays excluded even if it is re-added
    to the active set by mistake.
    """

    def __init__(self, kv: KeyValueStoreABC) -> None:
        self._kv = kv

    async def list_active(self) -> list[str]:
        """Normalized, deduplicated, sorted addresses eligible for alerts."""
        active = await self._kv.smembers(KEY_ACTIVE)
        unsubscribed = {normalize_email(e) for e in await self._kv.smembers(KEY_UNSUB)}
        eligible = {normalize_email(e) for e in active} - unsubscribed
        eligible.discard("")
        return sorted(eligible)

    async def add(self, email: str) -> str:
        """Add a subscriber; a returning subscriber is removed from the opt-out set."""
        e = _valid(email)
        await self._kv.sadd(KEY_ACTIVE, e)
        await self._kv.srem(KEY_UNSUB, e)
        return e

    async def remove(self, email: str) -> str:
        """Remove from the active set without recording an opt-out."""
        e = normalize_email(email)
        await self._kv.srem(KEY_ACTIVE, e)
        return e

    async def unsubscribe(self, email: str) -> str:
        """Record an opt-out and remove from the active set."""
        e = _valid(email)
        await self._kv.sadd(KEY_UNSUB, e)
        await self._kv.srem(KEY_ACTIVE, e)
        return e

    async def resubscribe(self, email: str) -> str:
        """Undo an opt-out."""
        e = _valid(email)
        await self._kv.srem(KEY_UNSUB, e)
        await self._kv.sadd(KEY_ACTIVE, e)
        return e

    async def is_unsubscribed(self, email: str) -> bool:
        return await self._kv.sismember(KEY_UNSUB, normalize_email(email))
