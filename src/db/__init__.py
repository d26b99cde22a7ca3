"""
Database package for the feed sync service.

Structure:
- models.py: SQLAlchemy ORM models (Entry, TimestampMixin)
- database.py: Engine creation, session factory and get_db_session()
- store.py: EntryStore, the read-all / append-one interface used by the sync

Usage:
    from src.db import EntryStore, get_db_session
"""

from .models import Base, Entry, TimestampMixin
from .database import (
    create_db_engine,
    make_session_factory,
    get_engine,
    get_session_factory,
    get_db_session,
    check_database_connection,
    init_database,
    get_database_info,
)
from .store import EntryStore

__all__ = [
    # Models
    "Base",
    "Entry",
    "TimestampMixin",
    # Database utilities
    "create_db_engine",
    "make_session_factory",
    "get_engine",
    "get_session_factory",
    "get_db_session",
    "check_database_connection",
    "init_database",
    "get_database_info",
    # Store
    "EntryStore",
]
