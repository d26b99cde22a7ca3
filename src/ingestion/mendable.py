"""
Client for the Mendable ingestion API.

Each call submits one URL as a content-ingestion request and returns the task
id Mendable assigns to it. There is no retry: a failure is raised to the
caller, which stops the current sync.
"""

import logging
from typing import Optional

import requests

from .config import DEFAULT_INGEST_URL
from .entries import FeedEntry
from .errors import ConfigError, IngestionError


logger = logging.getLogger("sync_entries")


class MendableClient:
    """Registers feed entries with Mendable's ingestData endpoint."""

    def __init__(
        self,
        api_key: Optional[str],
        ingest_url: str = DEFAULT_INGEST_URL,
        timeout: Optional[float] = None,
    ):
        if not api_key:
            raise ConfigError("MENDABLE_API_KEY not found in environment")
        self.api_key = api_key
        self.ingest_url = ingest_url
        self.timeout = timeout

    def register(self, entry: FeedEntry) -> str:
        """
        Submit the entry's link for ingestion.

        Returns:
            The task id returned by Mendable.

        Raises:
            IngestionError: On transport failure, non-2xx status, or a response
                without a task id.
        """
        logger.info(f"Adding entry {entry.guid} to Mendable")
        try:
            response = requests.post(
                self.ingest_url,
                headers={"Content-Type": "application/json"},
                json={"api_key": self.api_key, "url": entry.link, "type": "url"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise IngestionError(
                f"Failed to add entry {entry.guid} to Mendable: {e}", guid=entry.guid
            ) from e

        if not response.ok:
            raise IngestionError(
                f"Failed to add entry {entry.guid} to Mendable",
                guid=entry.guid,
                status_code=response.status_code,
                body=response.text,
            )

        try:
            task_id = response.json()["task_id"]
            if task_id is None or str(task_id).strip() == "":
                raise KeyError("task_id")
        except (ValueError, KeyError, TypeError) as e:
            raise IngestionError(
                f"Mendable response for entry {entry.guid} has no task_id",
                guid=entry.guid,
                status_code=response.status_code,
                body=response.text,
            ) from e

        logger.info(f"Added entry {entry.guid} to Mendable (task {task_id})")
        return str(task_id)
