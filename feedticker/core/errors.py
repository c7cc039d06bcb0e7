"""Exception hierarchy for feed, market-data and configuration failures.

The analysis core never raises: these errors only come out of the
collaborators (network, parsing, files) and the engine that sequences them.
"""

from typing import Optional


class FeedTickerError(Exception):
    """Base exception for all feedticker errors."""

    pass


class FeedFetchError(FeedTickerError):
    """Raised when a feed cannot be downloaded or parsed."""

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url


class MarketDataError(FeedTickerError):
    """Raised when the market-data source reports an error or returns no rows."""

    def __init__(self, message: str, ticker: Optional[str] = None):
        super().__init__(message)
        self.ticker = ticker


class ConfigError(FeedTickerError):
    """Raised when a settings or watchlist file is unreadable or malformed."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class UntrackedTickerError(FeedTickerError):
    """Raised when an operation needs a ticker that is not in the watchlist."""

    def __init__(self, ticker: str):
        super().__init__(f"Ticker {ticker} is not being tracked")
        self.ticker = ticker
