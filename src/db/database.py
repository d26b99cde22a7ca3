"""
Database engine and session management for the feed sync service.

This module provides:
- Engine creation from a DATABASE_URL (SQLite by default, any SQLAlchemy URL accepted)
- Session-per-operation pattern through the get_db_session() context manager
- SQLite tuning (WAL mode, foreign keys, busy timeout) applied on connect
- A lazily created process-wide engine, so importing the package has no side effects
"""

import os
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import ArgumentError, SQLAlchemyError, OperationalError
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import NullPool, StaticPool

from .models import Base
from src.ingestion.config import SyncConfig
from src.logger import setup_logging, log_function


db_logger = setup_logging(
    logger_name="database",
    log_file="logs/database.log",
    verbose=False,
)


# Process-wide engines and session factories, keyed by database URL
_engines: dict[str, Engine] = {}
_session_factories: dict[str, sessionmaker] = {}


def validate_database_url(url: Optional[str]) -> tuple[bool, str]:
    """Validate the database URL; returns (ok, sqlite file path or backend name or error)."""
    if not url:
        return False, "DATABASE_URL is not set"
    try:
        parsed = make_url(url)
    except ArgumentError as e:
        return False, f"Invalid database URL format: {e}"

    if parsed.get_backend_name() != "sqlite":
        return True, parsed.get_backend_name()

    db_path = parsed.database or ""
    if db_path in ("", ":memory:"):
        return True, ":memory:"
    return True, db_path


def optimize_sqlite_connection(dbapi_connection, connection_record):
    """Apply SQLite-specific settings when a connection is created."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA busy_timeout=30000")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.execute("PRAGMA synchronous=NORMAL")
    cursor.close()


def create_db_engine(database_url: str) -> Engine:
    """
    Create an engine for the given URL.

    SQLite files get NullPool (one connection per session, avoids locking
    issues) and their parent directory is created if missing. In-memory
    SQLite uses a single shared connection so the schema survives between
    sessions.

    Raises:
        ValueError: If the URL cannot be parsed.
    """
    is_valid, db_info = validate_database_url(database_url)
    if not is_valid:
        db_logger.error(f"Database configuration error: {db_info}")
        raise ValueError(f"Database configuration error: {db_info}")

    if make_url(database_url).get_backend_name() != "sqlite":
        engine = create_engine(database_url, pool_pre_ping=True, echo=False)
        db_logger.info(f"Database engine created for backend {db_info}")
        return engine

    if db_info == ":memory:":
        engine = create_engine(
            database_url,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    else:
        Path(db_info).parent.mkdir(parents=True, exist_ok=True)
        engine = create_engine(
            database_url,
            poolclass=NullPool,
            echo=False,
            connect_args={"check_same_thread": False, "timeout": 30},
        )
    event.listen(engine, "connect", optimize_sqlite_connection)
    db_logger.info(f"Database engine created for SQLite file {db_info}")
    return engine


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_engine(database_url: Optional[str] = None) -> Engine:
    """Return the shared engine for database_url (default: DATABASE_URL), creating it on first use."""
    url = database_url or SyncConfig.from_env().database_url
    if url not in _engines:
        _engines[url] = create_db_engine(url)
    return _engines[url]


def get_session_factory(database_url: Optional[str] = None) -> sessionmaker:
    """Return the shared session factory bound to get_engine(database_url)."""
    url = database_url or SyncConfig.from_env().database_url
    if url not in _session_factories:
        _session_factories[url] = make_session_factory(get_engine(url))
    return _session_factories[url]


@contextmanager
def get_db_session(
    session_factory: Optional[sessionmaker] = None,
) -> Generator[Session, None, None]:
    """
    Context manager for database sessions (session-per-operation pattern).

    Rolls back and re-raises on any error, always closes the session.

    Usage:
        with get_db_session() as session:
            session.add(Entry(guid="g1", link="https://...", title="", task_id="t1"))
            session.commit()
    """
    factory = session_factory or get_session_factory()
    session = factory()
    try:
        db_logger.debug("Database session created")
        yield session

    except OperationalError as e:
        db_logger.error(f"Database operational error: {e}")
        session.rollback()

        error_msg = str(e.orig) if getattr(e, "orig", None) is not None else str(e)
        if "no such table" in error_msg.lower():
            db_logger.error(
                "Database table does not exist. Run `alembic upgrade head` "
                "or `python -m src.ingestion --init-db` first."
            )
        raise

    except SQLAlchemyError as e:
        db_logger.error(f"Database error: {e}")
        session.rollback()
        raise

    except Exception as e:
        db_logger.error(f"Unexpected database error: {e}")
        session.rollback()
        raise

    finally:
        session.close()
        db_logger.debug("Database session closed")


@log_function(logger_name="database", log_execution_time=True)
def check_database_connection(session_factory: Optional[sessionmaker] = None) -> bool:
    """
    Check if database connection is working.

    Returns:
        bool: True if connection is successful, False otherwise
    """
    try:
        with get_db_session(session_factory) as session:
            session.execute(text("SELECT 1"))
            db_logger.info("Database connection test successful")
            return True

    except Exception as e:
        db_logger.error(f"Database connection test failed: {e}")
        return False


@log_function(logger_name="database", log_execution_time=True)
def init_database(engine: Optional[Engine] = None) -> None:
    """
    Create all tables defined in models (no-op for tables that already exist).

    Note: This does not run Alembic migrations. Use alembic commands for migrations.
    """
    Base.metadata.create_all(bind=engine or get_engine())
    db_logger.info("Database tables created successfully")


def get_database_info(engine: Optional[Engine] = None) -> dict:
    """
    Get information about the database.

    Returns:
        dict: Backend name, pool class and, for SQLite files, file size.
    """
    engine = engine or get_engine()
    url = engine.url
    info = {
        "database_url": url.render_as_string(hide_password=True),
        "backend": url.get_backend_name(),
        "engine_pool_class": engine.pool.__class__.__name__,
    }

    if info["backend"] == "sqlite" and url.database and url.database != ":memory:":
        if os.path.exists(url.database):
            file_stats = os.stat(url.database)
            info.update(
                {
                    "file_exists": True,
                    "file_size_bytes": file_stats.st_size,
                    "file_size_mb": round(file_stats.st_size / (1024 * 1024), 2),
                    "last_modified": file_stats.st_mtime,
                }
            )
        else:
            info["file_exists"] = False

    return info
