"""
Configuration settings for the feed sync service.

SyncConfig gathers every setting the sync needs. Values come from the process
environment, after loading a local .env file when one exists.
"""

import os
from dataclasses import dataclass
from typing import List, Optional

from dotenv import load_dotenv

from .errors import ConfigError


DEFAULT_FEED_URL = "https://folklore-cms.vercel.app/entries.rss"
DEFAULT_INGEST_URL = "https://api.mendable.ai/v0/ingestData"
DEFAULT_DATABASE_URL = "sqlite:///data/entries.db"


def _parse_timeout(raw: Optional[str]) -> Optional[float]:
    if raw is None or raw.strip() == "":
        return None
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigError(f"HTTP_TIMEOUT must be a number, got {raw!r}") from e


@dataclass
class SyncConfig:
    """Configuration for one sync invocation"""

    database_url: str = DEFAULT_DATABASE_URL
    feed_url: str = DEFAULT_FEED_URL

    # Mendable ingestion service
    mendable_api_key: Optional[str] = None
    mendable_ingest_url: str = DEFAULT_INGEST_URL

    # Seconds; None keeps the transport default (no timeout)
    http_timeout: Optional[float] = None

    @classmethod
    def from_env(cls) -> "SyncConfig":
        """Build a config from environment variables (and .env if present)."""
        load_dotenv()
        return cls(
            database_url=os.getenv("DATABASE_URL") or DEFAULT_DATABASE_URL,
            feed_url=os.getenv("FEED_URL") or DEFAULT_FEED_URL,
            mendable_api_key=os.getenv("MENDABLE_API_KEY"),
            mendable_ingest_url=os.getenv("MENDABLE_INGEST_URL") or DEFAULT_INGEST_URL,
            http_timeout=_parse_timeout(os.getenv("HTTP_TIMEOUT")),
        )

    def validate(self, require_api_key: bool = True) -> List[str]:
        """
        Validate configuration and return any error messages.

        Args:
            require_api_key: Dry runs never call the ingestion service and may
                skip the API key check.

        Returns:
            List of human readable problems; empty when the config is usable.
        """
        errors = []
        if not self.database_url:
            errors.append("DATABASE_URL is empty")
        if not self.feed_url:
            errors.append("FEED_URL is empty")
        if require_api_key and not self.mendable_api_key:
            errors.append("MENDABLE_API_KEY not found in environment")
        if self.http_timeout is not None and self.http_timeout <= 0:
            errors.append(f"HTTP_TIMEOUT must be positive, got {self.http_timeout}")
        return errors
