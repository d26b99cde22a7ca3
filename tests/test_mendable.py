"""Tests for the Mendable ingestion client."""

from unittest.mock import MagicMock, patch

import pytest
import requests

from src.ingestion.errors import ConfigError, IngestionError
from src.ingestion.mendable import MendableClient

from .conftest import make_entry


INGEST_URL = "https://api.mendable.example/v0/ingestData"


def fake_response(status_code=200, payload=None, text=""):
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.text = text
    if isinstance(payload, Exception):
        response.json.side_effect = payload
    else:
        response.json.return_value = payload
    return response


@pytest.fixture
def client():
    return MendableClient("secret-key", ingest_url=INGEST_URL, timeout=10)


def test_register_posts_link_and_returns_task_id(client):
    with patch("src.ingestion.mendable.requests.post") as mock_post:
        mock_post.return_value = fake_response(payload={"task_id": 42})
        task_id = client.register(make_entry("g1"))

    assert task_id == "42"
    mock_post.assert_called_once_with(
        INGEST_URL,
        headers={"Content-Type": "application/json"},
        json={"api_key": "secret-key", "url": "https://example.com/g1", "type": "url"},
        timeout=10,
    )


def test_register_non_success_status(client):
    with patch("src.ingestion.mendable.requests.post") as mock_post:
        mock_post.return_value = fake_response(status_code=500, text="boom")
        with pytest.raises(IngestionError) as excinfo:
            client.register(make_entry("g1"))

    error = excinfo.value
    assert error.guid == "g1"
    assert error.status_code == 500
    assert error.body == "boom"
    assert "g1" in str(error)
    assert "boom" in str(error)


def test_register_response_without_task_id(client):
    with patch("src.ingestion.mendable.requests.post") as mock_post:
        mock_post.return_value = fake_response(payload={"status": "queued"})
        with pytest.raises(IngestionError):
            client.register(make_entry("g1"))


def test_register_response_with_empty_task_id(client):
    with patch("src.ingestion.mendable.requests.post") as mock_post:
        mock_post.return_value = fake_response(payload={"task_id": "  "})
        with pytest.raises(IngestionError) as excinfo:
            client.register(make_entry("g1"))

    assert excinfo.value.guid == "g1"


def test_register_response_not_json(client):
    with patch("src.ingestion.mendable.requests.post") as mock_post:
        mock_post.return_value = fake_response(payload=ValueError("no json"), text="<html>")
        with pytest.raises(IngestionError):
            client.register(make_entry("g1"))


def test_register_transport_failure(client):
    with patch("src.ingestion.mendable.requests.post") as mock_post:
        mock_post.side_effect = requests.ConnectionError("refused")
        with pytest.raises(IngestionError) as excinfo:
            client.register(make_entry("g1"))

    assert excinfo.value.status_code is None


def test_missing_api_key():
    with pytest.raises(ConfigError):
        MendableClient(None)
