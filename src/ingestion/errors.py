"""
Error taxonomy for the feed sync workflow.

Every failure of a sync invocation is raised as a subclass of SyncError and
aborts the rest of that invocation. None of them is retried in-process; the
next invocation recovers by recomputing the pending set.
"""

from typing import Optional


class SyncError(Exception):
    """Base class for errors that abort a sync invocation."""


class ConfigError(SyncError):
    """Required configuration (API key, database URL, ...) is missing or invalid."""


class FetchError(SyncError):
    """The feed could not be downloaded or is not a parsable RSS document."""


class StoreReadError(SyncError):
    """The baseline of persisted entries could not be read."""


class StoreWriteError(SyncError):
    """A newly ingested entry could not be persisted."""

    def __init__(self, message: str, guid: Optional[str] = None):
        super().__init__(message)
        self.guid = guid


class IngestionError(SyncError):
    """The ingestion service refused or failed to register an entry."""

    def __init__(
        self,
        message: str,
        guid: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ):
        super().__init__(message)
        self.guid = guid
        self.status_code = status_code
        self.body = body

    def __str__(self) -> str:
        msg = super().__str__()
        if self.status_code is not None:
            msg += f" (status {self.status_code})"
        if self.body:
            msg += f": {self.body[:500]}"
        return msg
