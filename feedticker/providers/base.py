"""Abstract base classes for data providers."""

from abc import ABC, abstractmethod

from feedticker.models.datatypes import FeedResult, PriceHistory, Sentiment, StockQuote


class FeedProvider(ABC):
    """Abstract interface for fetching the recent articles of a feed."""

    @abstractmethod
    def fetch_feed(self, url: str) -> FeedResult:
        """
        Fetch a feed and return its title and most recent articles.

        Args:
            url (str): Address of an RSS or Atom feed.

        Returns:
            FeedResult: Feed title plus at most the provider's article limit.

        Raises:
            FeedFetchError: If the feed cannot be downloaded or parsed.
        """
        pass


class MarketDataProvider(ABC):
    """Abstract interface for fetching stock quotes and daily price history."""

    @abstractmethod
    def fetch_quote(self, ticker: str) -> StockQuote:
        """
        Fetch the latest price for a ticker.

        Args:
            ticker (str): The ticker symbol.

        Returns:
            StockQuote: Price and change against the previous close.

        Raises:
            MarketDataError: If the source reports an error or has no data.
        """
        pass

    @abstractmethod
    def fetch_history(self, ticker: str, days: int = 30) -> PriceHistory:
        """
        Fetch daily closing prices covering roughly the last ``days`` days.

        Args:
            ticker (str): The ticker symbol.
            days (int): Requested lookback. Providers may round up to a coarser range.

        Returns:
            PriceHistory: Daily closes ordered by date ascending.

        Raises:
            MarketDataError: If the source reports an error or has no data.
        """
        pass


class SentimentProvider(ABC):
    """Abstract interface for classifying the tone of financial text."""

    @abstractmethod
    def analyze(self, text: str) -> Sentiment:
        """
        Classify the sentiment of a given text.

        Args:
            text (str): The text to analyze.

        Returns:
            Sentiment: Positive, Negative or Neutral.
        """
        pass
