"""Database models backing the key/value state store.

The alerting core only needs a keyed store: JSON values under string keys
(alert state, cursor) and string sets (subscriber lists). Market prices are
fetched on demand and are not stored here beyond the per-ticker alert state.
"""
from datetime import datetime, timezone

from sqlmodel import Field, SQLModel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class KVEntry(SQLModel, table=True):
    """One JSON value under a string key (e.g. "alert:AAPL", "alert:cursor")."""

    __tablename__ = "kv_entry"

    key: str = Field(primary_key=True)
    value: str  # JSON-encoded
    updated_at: datetime = Field(default_factory=_utcnow)


class KVSetMember(SQLModel, table=True):
    """One member of a named string set (e.g. "subs:active")."""

    __tablename__ = "kv_set_member"

    key: str = Field(primary_key=True)
    member: str = Field(primary_key=True)
