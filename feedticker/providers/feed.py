"""RSS/Atom feed provider backed by requests and feedparser.

Each fetch downloads the feed body with ``requests`` (so timeouts and HTTP
status codes are under our control), hands the bytes to ``feedparser`` and
normalizes the first ``limit`` entries into :class:`Article` records.
"""

from datetime import datetime
from typing import Any, Optional

import feedparser
import requests

from feedticker.core.errors import FeedFetchError
from feedticker.core.logger import logger
from feedticker.core.retry import with_retries
from feedticker.models.datatypes import Article, FeedResult
from feedticker.providers.base import FeedProvider

_PUBLISHED_FMT = "%Y-%m-%d %H:%M"
_USER_AGENT = "Mozilla/5.0 (compatible; feedticker/0.1; +https://pypi.org/project/feedticker/)"

DEFAULT_FEED_TITLE = "Untitled Feed"
DEFAULT_ARTICLE_TITLE = "Untitled"


class RSSFeedProvider(FeedProvider):
    """Fetches RSS and Atom feeds over HTTP.

    Args:
        limit: Maximum number of entries kept per feed, in feed order.
        timeout: Per-request timeout in seconds.
        session: Optional ``requests.Session`` to reuse connections.
    """

    def __init__(
        self,
        limit: int = 10,
        timeout: float = 15,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.limit = limit
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": _USER_AGENT})

    def fetch_feed(self, url: str) -> FeedResult:
        """Download and parse ``url``.

        Raises:
            FeedFetchError: On network errors, HTTP errors, or an unparsable body.
        """
        logger.info(f"RSSFeedProvider: fetching {url}")
        try:
            body = self._download(url)
        except requests.RequestException as exc:
            logger.error(f"RSSFeedProvider: INFRA_FAILURE for {url}: {exc}")
            raise FeedFetchError(f"Could not download feed: {exc}", url=url) from exc

        result = parse_feed(body, url, limit=self.limit)
        logger.info(f"RSSFeedProvider: {len(result.articles)} articles from {url}")
        return result

    @with_retries(max_retries=2, initial_delay=1, exceptions=(requests.ConnectionError, requests.Timeout))
    def _download(self, url: str) -> bytes:
        resp = self.session.get(url, timeout=self.timeout)
        resp.raise_for_status()
        return resp.content


def parse_feed(body: bytes | str, url: str = "", limit: int = 10) -> FeedResult:
    """Parse a raw feed document into a :class:`FeedResult`.

    Raises:
        FeedFetchError: If feedparser cannot make sense of the document at all.
    """
    feed = feedparser.parse(body)

    if feed.bozo and not feed.entries and not feed.feed.get("title"):
        exc = getattr(feed, "bozo_exception", None)
        logger.error(f"parse_feed: unparsable feed {url}: {exc}")
        raise FeedFetchError(f"Could not parse feed: {exc}", url=url)

    if feed.bozo:
        logger.warning(f"parse_feed: feed parse warning for {url}: {getattr(feed, 'bozo_exception', '')}")

    title = (feed.feed.get("title") or "").strip() or DEFAULT_FEED_TITLE
    articles = [_to_article(entry) for entry in feed.entries[:limit]]
    return FeedResult(title=title, articles=articles)


def _to_article(entry: Any) -> Article:
    """Normalize one feedparser entry. Empty strings become ``None``."""
    title = (entry.get("title") or "").strip() or DEFAULT_ARTICLE_TITLE
    link = (entry.get("link") or "").strip() or None

    parsed = entry.get("published_parsed") or entry.get("updated_parsed")
    published = datetime(*parsed[:6]).strftime(_PUBLISHED_FMT) if parsed else None

    content: Optional[str] = None
    for block in entry.get("content") or []:
        value = (block.get("value") or "").strip()
        if value:
            content = value
            break
    if content is None:
        content = (entry.get("summary") or "").strip() or None

    return Article(title=title, link=link, published=published, content=content)
