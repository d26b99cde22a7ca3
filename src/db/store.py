"""
Entry store: the durable baseline of already ingested feed entries.

The store only ever reads the whole table or appends one row. The primary key
on guid is what stops two overlapping sync runs from recording the same entry
twice; the loser of that race gets a StoreWriteError.
"""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from .database import get_db_session
from .models import Entry
from src.ingestion.entries import FeedEntry, PersistedEntry
from src.ingestion.errors import StoreReadError, StoreWriteError


logger = logging.getLogger("database")


class EntryStore:
    """Reads and appends rows of the entries table."""

    def __init__(self, session_factory: Optional[sessionmaker] = None):
        # None means the process-wide session factory from DATABASE_URL
        self._session_factory = session_factory

    def list_all(self) -> list[PersistedEntry]:
        """
        Return every persisted entry.

        Raises:
            StoreReadError: On any database failure.
        """
        try:
            with get_db_session(self._session_factory) as session:
                rows = session.query(Entry).all()
                entries = [
                    PersistedEntry(
                        guid=row.guid,
                        link=row.link,
                        title=row.title,
                        task_id=row.task_id,
                    )
                    for row in rows
                ]
        except SQLAlchemyError as e:
            raise StoreReadError(f"Failed to read existing entries: {e}") from e

        logger.info(f"Read {len(entries)} existing entries from database")
        return entries

    def save(self, entry: FeedEntry, task_id: str) -> PersistedEntry:
        """
        Persist one newly ingested entry with its ingestion task id.

        Raises:
            StoreWriteError: If the row is rejected (duplicate guid) or the
                database is unreachable.
        """
        logger.info(f"Adding entry {entry.guid} to database")
        try:
            with get_db_session(self._session_factory) as session:
                session.add(
                    Entry(
                        guid=entry.guid,
                        link=entry.link,
                        title=entry.title,
                        task_id=task_id,
                    )
                )
                session.commit()
        except IntegrityError as e:
            if "unique" in str(e.orig).lower():
                message = f"Entry {entry.guid} already exists in database"
            else:
                message = f"Entry {entry.guid} rejected by database: {e.orig}"
            raise StoreWriteError(message, guid=entry.guid) from e
        except SQLAlchemyError as e:
            raise StoreWriteError(
                f"Failed to add entry {entry.guid} to database: {e}", guid=entry.guid
            ) from e

        return PersistedEntry(
            guid=entry.guid, link=entry.link, title=entry.title, task_id=task_id
        )
