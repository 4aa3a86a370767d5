"""Database package: models and session management."""
from rr_alerts.db.models import KVEntry, KVSetMember
from rr_alerts.db.sessions import create_db_engine, get_session, init_db

__all__ = ["KVEntry", "KVSetMember", "create_db_engine", "get_session", "init_db"]
