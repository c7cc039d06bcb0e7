"""Data structures shared by the providers, the analysis pipeline and the CLI."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class Article:
    """
    A single feed entry, immutable once fetched.
    """
    title: str
    link: Optional[str] = None
    published: Optional[str] = None  # "YYYY-MM-DD HH:MM"
    content: Optional[str] = None


@dataclass
class FeedResult:
    """Title of a feed plus its most recent articles."""
    title: str
    articles: List[Article] = field(default_factory=list)


@dataclass(frozen=True)
class Investment:
    """
    A tracked stock. ``name`` is an optional company name used as an
    alternate match target when the ticker itself is not mentioned.
    """
    ticker: str
    name: Optional[str] = None

    @property
    def display(self) -> str:
        return f"{self.ticker} ({self.name})" if self.name else self.ticker


@dataclass
class Watchlist:
    """Subscribed feed URLs and tracked investments."""
    feeds: List[str] = field(default_factory=list)
    investments: List[Investment] = field(default_factory=list)

    def add_feed(self, url: str) -> bool:
        if url in self.feeds:
            return False
        self.feeds.append(url)
        return True

    def remove_feed(self, url: str) -> bool:
        if url not in self.feeds:
            return False
        self.feeds.remove(url)
        return True

    def add_investment(self, ticker: str, name: Optional[str] = None) -> bool:
        """Track ``ticker`` (uppercased). Returns False if it is already tracked."""
        if self.find_investment(ticker) is not None:
            return False
        self.investments.append(Investment(ticker=ticker.upper(), name=name or None))
        return True

    def remove_investment(self, ticker: str) -> bool:
        investment = self.find_investment(ticker)
        if investment is None:
            return False
        self.investments.remove(investment)
        return True

    def find_investment(self, ticker: str) -> Optional[Investment]:
        ticker_upper = ticker.upper()
        for investment in self.investments:
            if investment.ticker == ticker_upper:
                return investment
        return None


@dataclass(frozen=True)
class DailyPrice:
    """Closing price for one trading day."""
    date: str  # YYYY-MM-DD
    close: float


@dataclass
class PriceHistory:
    """Daily closes for one ticker, ascending by date."""
    ticker: str
    prices: List[DailyPrice] = field(default_factory=list)


@dataclass
class StockQuote:
    """Latest price with the change against the previous close."""
    ticker: str
    price: float
    change: float
    change_percent: float
    date: str


class Sentiment(str, Enum):
    """Three-way tone label assigned to an article."""
    POSITIVE = "Positive"
    NEGATIVE = "Negative"
    NEUTRAL = "Neutral"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ArticleMention:
    """An article that references a tracked ticker, with the article's tone."""
    article: Article
    ticker: str
    sentiment: Sentiment


@dataclass
class Correlation:
    """
    One report row pairing a mention's sentiment with the closing price on
    the article's publish date and the percent change from the prior
    trading day.
    """
    date: str
    article_title: str
    sentiment: Sentiment
    price: Optional[float] = None
    price_change: Optional[float] = None


@dataclass
class AnalysisResult:
    """Everything produced by analysing one ticker."""
    ticker: str
    prices: List[DailyPrice] = field(default_factory=list)
    mentions: List[ArticleMention] = field(default_factory=list)
    correlations: List[Correlation] = field(default_factory=list)
    feed_errors: List[Tuple[str, str]] = field(default_factory=list)
    price_error: Optional[str] = None


@dataclass
class ScanResult:
    """Mentions found across all subscribed feeds, plus the feeds that failed."""
    articles: List[Article] = field(default_factory=list)
    mentions: List[ArticleMention] = field(default_factory=list)
    feed_errors: List[Tuple[str, str]] = field(default_factory=list)
