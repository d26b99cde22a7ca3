"""Tests for the SQLAlchemy backed entry store."""

import pytest

from src.db import EntryStore, create_db_engine, make_session_factory
from src.ingestion.entries import FeedEntry
from src.ingestion.errors import StoreReadError, StoreWriteError

from .conftest import make_entry


def test_list_all_on_empty_table(entry_store):
    assert entry_store.list_all() == []


def test_save_then_list_all(entry_store):
    saved = entry_store.save(make_entry("g1", title="Hello"), "task-1")

    entries = entry_store.list_all()

    assert entries == [saved]
    assert entries[0].guid == "g1"
    assert entries[0].link == "https://example.com/g1"
    assert entries[0].title == "Hello"
    assert entries[0].task_id == "task-1"


def test_duplicate_guid_is_rejected(entry_store):
    entry_store.save(make_entry("g1"), "task-1")

    with pytest.raises(StoreWriteError) as excinfo:
        entry_store.save(make_entry("g1", title="again"), "task-2")

    assert excinfo.value.guid == "g1"
    # The original row is left untouched
    assert [e.task_id for e in entry_store.list_all()] == ["task-1"]


def test_missing_table_raises_read_and_write_errors(tmp_path):
    engine = create_db_engine(f"sqlite:///{tmp_path / 'empty.db'}")
    store = EntryStore(make_session_factory(engine))

    with pytest.raises(StoreReadError):
        store.list_all()
    with pytest.raises(StoreWriteError):
        store.save(make_entry("g1"), "task-1")

    engine.dispose()


def test_not_null_violation_is_not_reported_as_duplicate(entry_store):
    entry = FeedEntry(guid="g1", link=None, title="no link")

    with pytest.raises(StoreWriteError) as excinfo:
        entry_store.save(entry, "task-1")

    assert "already exists" not in str(excinfo.value)
    assert "rejected by database" in str(excinfo.value)
    assert entry_store.list_all() == []
