"""Shared fixtures: temporary SQLite database and in-memory fakes."""

import os
import tempfile

# Keep log files out of the working tree during tests
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="rss-sync-logs-"))

import pytest

from src.db import EntryStore, create_db_engine, init_database, make_session_factory
from src.ingestion.entries import FeedEntry, PersistedEntry
from src.ingestion.errors import FetchError, IngestionError, StoreWriteError


@pytest.fixture
def session_factory(tmp_path):
    engine = create_db_engine(f"sqlite:///{tmp_path / 'entries.db'}")
    init_database(engine)
    yield make_session_factory(engine)
    engine.dispose()


@pytest.fixture
def entry_store(session_factory):
    return EntryStore(session_factory)


class FakeStore:
    """In-memory store; save() fails for guids listed in fail_on."""

    def __init__(self, existing=None, fail_on=()):
        self.rows = {e.guid: e for e in existing or []}
        self.fail_on = set(fail_on)
        self.saved = []

    def list_all(self):
        return list(self.rows.values())

    def save(self, entry, task_id):
        if entry.guid in self.fail_on or entry.guid in self.rows:
            raise StoreWriteError(f"cannot save {entry.guid}", guid=entry.guid)
        persisted = PersistedEntry(entry.guid, entry.link, entry.title, task_id)
        self.rows[entry.guid] = persisted
        self.saved.append(entry.guid)
        return persisted


class FakeFeed:
    def __init__(self, entries=None, error=None):
        self.entries = list(entries or [])
        self.error = error

    def fetch_entries(self):
        if self.error:
            raise self.error
        return list(self.entries)


class FakeIngestion:
    """Returns task-<guid>; raises for guids listed in fail_on."""

    def __init__(self, fail_on=(), calls=None):
        self.fail_on = set(fail_on)
        self.calls = calls if calls is not None else []

    def register(self, entry):
        self.calls.append(entry.guid)
        if entry.guid in self.fail_on:
            raise IngestionError(
                f"Failed to add entry {entry.guid} to Mendable",
                guid=entry.guid,
                status_code=500,
                body="internal error",
            )
        return f"task-{entry.guid}"


def make_entry(guid, title=None):
    return FeedEntry(guid=guid, link=f"https://example.com/{guid}", title=title or guid)


@pytest.fixture
def fetch_error():
    return FetchError("feed unreachable")
