"""Scan engine: sequences feed fetching, mention matching and price correlation.

Flow for ``scan``:
  1. Feeds: fetch every subscribed feed (failures logged and skipped)
  2. Mentions: MentionMatcher over all articles × all investments

Flow for ``analyze(ticker)``:
  1. Market: fetch_history (failure → empty price series)
  2. Feeds: as above
  3. Mentions: MentionMatcher over all articles × the one investment
  4. Correlate: join mentions to the price series

A single bad feed never aborts the run; the engine always continues with the
next URL and reports the failures alongside the results.
"""

from typing import List, Optional, Sequence, Tuple

from feedticker.core.errors import FeedFetchError, MarketDataError, UntrackedTickerError
from feedticker.core.logger import logger
from feedticker.models.datatypes import AnalysisResult, Article, ScanResult, Watchlist
from feedticker.pipeline.correlation import correlate
from feedticker.pipeline.mentions import MentionMatcher
from feedticker.providers.base import FeedProvider, MarketDataProvider, SentimentProvider


class ScanEngine:
    """Runs scans and per-ticker analyses against a watchlist.

    Args:
        watchlist: Feeds and investments to work with (passed in, not re-loaded).
        feeds: Feed collaborator.
        market: Market-data collaborator. Only needed by :meth:`analyze`.
        sentiment: Classifier for matching articles. Defaults to the lexicon one.
    """

    def __init__(
        self,
        watchlist: Watchlist,
        feeds: FeedProvider,
        market: Optional[MarketDataProvider] = None,
        sentiment: Optional[SentimentProvider] = None,
    ) -> None:
        self.watchlist = watchlist
        self.feeds = feeds
        self.market = market
        self.matcher = MentionMatcher(sentiment)

    # ── public ────────────────────────────────────────────────────────────────

    def collect_articles(
        self,
        urls: Optional[Sequence[str]] = None,
    ) -> Tuple[List[Article], List[Tuple[str, str]]]:
        """Fetch ``urls`` (default: all subscribed feeds) in order.

        Returns:
            ``(articles, failures)`` where failures are ``(url, message)`` pairs.
        """
        urls = self.watchlist.feeds if urls is None else urls
        articles: List[Article] = []
        failures: List[Tuple[str, str]] = []

        for url in urls:
            try:
                result = self.feeds.fetch_feed(url)
            except FeedFetchError as exc:
                logger.warning(f"ScanEngine: skipping feed {url}: {exc}")
                failures.append((url, str(exc)))
                continue
            articles.extend(result.articles)

        logger.info(
            f"ScanEngine: {len(articles)} articles from {len(urls) - len(failures)}/{len(urls)} feeds"
        )
        return articles, failures

    def scan(self) -> ScanResult:
        """Find mentions of every tracked investment across every feed."""
        articles, failures = self.collect_articles()
        mentions = self.matcher.find_mentions(articles, self.watchlist.investments)
        return ScanResult(articles=articles, mentions=mentions, feed_errors=failures)

    def analyze(self, ticker: str, days: int = 30) -> AnalysisResult:
        """Correlate news about ``ticker`` with its recent closing prices.

        Raises:
            UntrackedTickerError: If ``ticker`` is not in the watchlist.
            ValueError: If the engine was built without a market provider.
        """
        investment = self.watchlist.find_investment(ticker)
        if investment is None:
            raise UntrackedTickerError(ticker.upper())
        if self.market is None:
            raise ValueError("ScanEngine.analyze requires a market data provider")

        result = AnalysisResult(ticker=investment.ticker)

        try:
            result.prices = self.market.fetch_history(investment.ticker, days).prices
        except MarketDataError as exc:
            logger.error(f"ScanEngine: price history failed for {investment.ticker}: {exc}")
            result.price_error = str(exc)

        articles, result.feed_errors = self.collect_articles()
        result.mentions = self.matcher.find_mentions(articles, [investment])
        result.correlations = correlate(result.mentions, result.prices)

        logger.info(
            f"ScanEngine: {investment.ticker}: {len(result.prices)} prices, "
            f"{len(result.mentions)} mentions, {len(result.correlations)} correlations"
        )
        return result
