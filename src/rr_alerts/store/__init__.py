"""State persistence: key/value backends and the alert state store."""
from rr_alerts.store.alert_state_store import (CURSOR_KEY, AlertStateStore,
                                               alert_key)
from rr_alerts.store.kv_store_abc import KeyValueStoreABC
from rr_alerts.store.memory_store import InMemoryStore
from rr_alerts.store.sql_store import SqlKeyValueStore

__all__ = [
    "AlertStateStore",
    "CURSOR_KEY",
    "InMemoryStore",
    "KeyValueStoreABC",
    "SqlKeyValueStore",
    "alert_key",
]
