"""Value objects passed between the feed reader, the store and the sync."""

from dataclasses import dataclass


@dataclass(frozen=True)
class FeedEntry:
    """One item of the remote feed, as fetched for the current invocation."""

    guid: str
    link: str
    title: str


@dataclass(frozen=True)
class PersistedEntry:
    """An entry already registered with the ingestion service and stored."""

    guid: str
    link: str
    title: str
    task_id: str
