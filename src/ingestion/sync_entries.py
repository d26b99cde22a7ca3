"""
Feed to Mendable + database sync.

Determines which feed entries are new relative to the entries table and, for
each of them in feed order, registers the link with Mendable and then records
the entry together with the returned task id.

Processing is strictly sequential and fail-fast: the first error stops the
run and propagates. Entries handled before the failure stay recorded, so the
next run picks up from the first entry still missing in the database.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from src.db import EntryStore, get_session_factory
from src.logger import log_function
from .config import SyncConfig
from .entries import FeedEntry
from .errors import ConfigError
from .feed_reader import FeedReader
from .mendable import MendableClient


logger = logging.getLogger("sync_entries")


@dataclass
class SyncResult:
    """Outcome of a successful sync run."""

    inserted_count: int
    pending: list[str] = field(default_factory=list)
    dry_run: bool = False

    @property
    def message(self) -> str:
        if self.dry_run:
            return f"Would insert {len(self.pending)} new entries."
        return f"Inserted {self.inserted_count} new entries."


def compute_pending(
    entries: Iterable[FeedEntry], existing_guids: set[str]
) -> list[FeedEntry]:
    """
    Return the feed entries whose guid is not in existing_guids.

    Matching is exact guid equality. Feed order is kept and a guid repeated
    within the feed is only returned once (first occurrence).
    """
    seen = set(existing_guids)
    pending = []
    for entry in entries:
        if entry.guid in seen:
            continue
        seen.add(entry.guid)
        pending.append(entry)
    return pending


class SyncOrchestrator:
    """
    Drives one sync run over injected collaborators.

    Args:
        store: Object with list_all() and save(entry, task_id)
        feed_reader: Object with fetch_entries()
        ingestion_client: Object with register(entry) returning a task id.
            May be None for dry runs only.
    """

    def __init__(self, store, feed_reader, ingestion_client=None):
        self.store = store
        self.feed_reader = feed_reader
        self.ingestion_client = ingestion_client

    @log_function(logger_name="sync_entries", log_execution_time=True)
    def sync(self, dry_run: bool = False) -> SyncResult:
        """
        Run the sync once.

        Args:
            dry_run: Compute and report the pending entries without calling
                Mendable or writing to the database.

        Returns:
            SyncResult with the number of entries ingested and recorded.

        Raises:
            StoreReadError, FetchError, IngestionError, StoreWriteError: The
                first failure encountered; remaining entries are not attempted.
        """
        # Baseline first: without it every feed entry would look new
        existing = {entry.guid for entry in self.store.list_all()}
        entries = self.feed_reader.fetch_entries()
        pending = compute_pending(entries, existing)
        logger.info(
            f"{len(pending)} pending of {len(entries)} feed entries "
            f"({len(existing)} already in database)"
        )

        if dry_run:
            for entry in pending:
                logger.info(f"DRY RUN - would add entry {entry.guid}: {entry.title[:60]}")
            return SyncResult(
                inserted_count=0, pending=[e.guid for e in pending], dry_run=True
            )

        if pending and self.ingestion_client is None:
            raise ConfigError("No ingestion client configured")

        inserted = 0
        for entry in pending:
            try:
                task_id = self.ingestion_client.register(entry)
                self.store.save(entry, task_id)
            except Exception:
                logger.error(
                    f"Sync stopped at entry {entry.guid} after {inserted} of "
                    f"{len(pending)} entries were inserted"
                )
                raise
            inserted += 1

        return SyncResult(inserted_count=inserted, pending=[e.guid for e in pending])


def build_orchestrator(
    config: Optional[SyncConfig] = None, dry_run: bool = False
) -> SyncOrchestrator:
    """
    Wire the production collaborators from configuration.

    Raises:
        ConfigError: If the configuration is incomplete.
    """
    config = config or SyncConfig.from_env()
    errors = config.validate(require_api_key=not dry_run)
    if errors:
        raise ConfigError("; ".join(errors))

    ingestion_client = None
    if config.mendable_api_key:
        ingestion_client = MendableClient(
            config.mendable_api_key,
            ingest_url=config.mendable_ingest_url,
            timeout=config.http_timeout,
        )

    return SyncOrchestrator(
        store=EntryStore(get_session_factory(config.database_url)),
        feed_reader=FeedReader(config.feed_url, timeout=config.http_timeout),
        ingestion_client=ingestion_client,
    )
