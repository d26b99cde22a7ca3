"""
RSS feed reader.

Downloads the whole feed on every call and turns each <item> into a FeedEntry
carrying only the three fields the sync needs: guid, link and title.
"""

import logging
from typing import Optional

import requests
from bs4 import BeautifulSoup

from src.logger import log_function
from .config import DEFAULT_FEED_URL
from .entries import FeedEntry
from .errors import FetchError


logger = logging.getLogger("sync_entries")


def _tag_text(item, name: str) -> str:
    tag = item.find(name)
    if tag is None:
        return ""
    return tag.get_text(strip=True)


def parse_feed(content: bytes) -> list[FeedEntry]:
    """
    Parse an RSS 2.0 or RSS 1.0 (RDF) document into feed entries, in document order.

    RSS 1.0 places <item> elements beside <channel> rather than inside it, so
    items are collected from the whole document. Items without a guid use their
    rdf:about or link as identifier; items with none of these are skipped
    because they cannot be deduplicated.

    Raises:
        FetchError: If the document has no RSS channel.
    """
    soup = BeautifulSoup(content, "xml")
    channel = soup.find("channel")
    if channel is None:
        raise FetchError("Feed document has no <channel> element, not an RSS feed")

    entries = []
    for item in soup.find_all("item"):
        link = _tag_text(item, "link")
        guid = _tag_text(item, "guid") or item.get("rdf:about", "") or link
        if not guid:
            logger.warning("Skipping feed item without guid or link")
            continue
        entries.append(FeedEntry(guid=guid, link=link, title=_tag_text(item, "title")))

    return entries


class FeedReader:
    """Fetches the configured RSS feed."""

    def __init__(self, feed_url: str = DEFAULT_FEED_URL, timeout: Optional[float] = None):
        self.feed_url = feed_url
        self.timeout = timeout

    @log_function(logger_name="sync_entries", log_execution_time=True)
    def fetch_entries(self) -> list[FeedEntry]:
        """
        Fetch and parse the feed.

        Returns:
            Feed entries in the order the feed lists them.

        Raises:
            FetchError: If the request fails, returns a non-2xx status, or the
                body is not an RSS document.
        """
        logger.info(f"Fetching feed from {self.feed_url}...")
        try:
            response = requests.get(self.feed_url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise FetchError(f"Error fetching feed {self.feed_url}: {e}") from e

        entries = parse_feed(response.content)
        logger.info(f"Found {len(entries)} entries in feed")
        return entries
