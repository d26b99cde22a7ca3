"""Tests for SyncConfig."""

import pytest

from src.ingestion.config import (
    DEFAULT_DATABASE_URL,
    DEFAULT_FEED_URL,
    DEFAULT_INGEST_URL,
    SyncConfig,
)
from src.ingestion.errors import ConfigError


ENV_VARS = [
    "DATABASE_URL",
    "FEED_URL",
    "MENDABLE_API_KEY",
    "MENDABLE_INGEST_URL",
    "HTTP_TIMEOUT",
]


@pytest.fixture
def clean_env(monkeypatch):
    monkeypatch.setattr("src.ingestion.config.load_dotenv", lambda: False)
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    config = SyncConfig.from_env()

    assert config.database_url == DEFAULT_DATABASE_URL
    assert config.feed_url == DEFAULT_FEED_URL
    assert config.mendable_ingest_url == DEFAULT_INGEST_URL
    assert config.mendable_api_key is None
    assert config.http_timeout is None
    assert config.validate() == ["MENDABLE_API_KEY not found in environment"]
    assert config.validate(require_api_key=False) == []


def test_values_from_environment(clean_env):
    clean_env.setenv("DATABASE_URL", "sqlite:///tmp/test.db")
    clean_env.setenv("FEED_URL", "https://feeds.example.com/rss")
    clean_env.setenv("MENDABLE_API_KEY", "key")
    clean_env.setenv("HTTP_TIMEOUT", "12.5")

    config = SyncConfig.from_env()

    assert config.database_url == "sqlite:///tmp/test.db"
    assert config.feed_url == "https://feeds.example.com/rss"
    assert config.mendable_api_key == "key"
    assert config.http_timeout == 12.5
    assert config.validate() == []


def test_invalid_timeout(clean_env):
    clean_env.setenv("HTTP_TIMEOUT", "soon")
    with pytest.raises(ConfigError):
        SyncConfig.from_env()

    assert SyncConfig(mendable_api_key="k", http_timeout=-1).validate() != []
