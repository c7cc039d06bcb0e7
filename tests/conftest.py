"""Pytest configuration and fixtures."""

import os
import tempfile

# Keep the log file out of the working tree; must run before feedticker is imported.
os.environ.setdefault(
    "FEEDTICKER_LOG_FILE", os.path.join(tempfile.gettempdir(), "feedticker-tests.log")
)

from pathlib import Path  # noqa: E402
from typing import List  # noqa: E402

import pytest  # noqa: E402

from feedticker.core.errors import FeedFetchError, MarketDataError  # noqa: E402
from feedticker.models.datatypes import (  # noqa: E402
    Article,
    DailyPrice,
    FeedResult,
    Investment,
    PriceHistory,
    StockQuote,
    Watchlist,
)
from feedticker.providers.base import FeedProvider, MarketDataProvider  # noqa: E402


class FakeFeedProvider(FeedProvider):
    """Serves canned feeds; URLs mapped to an exception raise it."""

    def __init__(self, feeds: dict) -> None:
        self.feeds = feeds
        self.calls: List[str] = []

    def fetch_feed(self, url: str) -> FeedResult:
        self.calls.append(url)
        value = self.feeds[url]
        if isinstance(value, Exception):
            raise value
        return value


class FakeMarketProvider(MarketDataProvider):
    """Serves canned price histories keyed by ticker."""

    def __init__(self, histories: dict, quote: StockQuote | None = None) -> None:
        self.histories = histories
        self.quote = quote
        self.history_calls: List[tuple] = []

    def fetch_quote(self, ticker: str) -> StockQuote:
        if self.quote is None:
            raise MarketDataError(f"No data returned for ticker {ticker}", ticker=ticker)
        return self.quote

    def fetch_history(self, ticker: str, days: int = 30) -> PriceHistory:
        self.history_calls.append((ticker, days))
        prices = self.histories.get(ticker)
        if prices is None:
            raise MarketDataError(f"No data returned for ticker {ticker}", ticker=ticker)
        return PriceHistory(ticker=ticker, prices=prices)


@pytest.fixture
def articles() -> List[Article]:
    return [
        Article(
            title="Apple shares surge after record iPhone sales",
            link="https://news.example.com/apple-surge",
            published="2024-03-01 09:00",
            content="AAPL closed at a record high.",
        ),
        Article(
            title="Tesla deliveries drop as demand weakens",
            link="https://news.example.com/tesla-drop",
            published="2024-03-02 14:30",
            content=None,
        ),
        Article(
            title="Markets quiet ahead of Fed meeting",
            published="2024-03-02 16:00",
            content="Investors waited for guidance.",
        ),
    ]


@pytest.fixture
def investments() -> List[Investment]:
    return [
        Investment(ticker="AAPL", name="Apple"),
        Investment(ticker="TSLA", name="Tesla"),
    ]


@pytest.fixture
def prices() -> List[DailyPrice]:
    return [
        DailyPrice(date="2024-02-29", close=50.0),
        DailyPrice(date="2024-03-01", close=55.0),
        DailyPrice(date="2024-03-04", close=44.0),
    ]


@pytest.fixture
def watchlist(investments) -> Watchlist:
    return Watchlist(
        feeds=["https://a.example.com/rss", "https://b.example.com/rss"],
        investments=list(investments),
    )


@pytest.fixture
def fake_feeds(articles) -> FakeFeedProvider:
    return FakeFeedProvider({
        "https://a.example.com/rss": FeedResult(title="A", articles=articles[:2]),
        "https://b.example.com/rss": FeedResult(title="B", articles=articles[2:]),
    })


@pytest.fixture
def broken_feed() -> FeedFetchError:
    return FeedFetchError("Could not download feed: 503", url="https://bad.example.com/rss")


@pytest.fixture
def watchlist_path(tmp_path: Path) -> Path:
    return tmp_path / "config" / "watchlist.yaml"
