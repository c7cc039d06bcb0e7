"""feedticker command-line entry point.

Usage:
    feedticker add https://example.com/rss
    feedticker fetch
    feedticker stock add AAPL --name Apple
    feedticker stock quote AAPL
    feedticker scan
    feedticker analyze AAPL --days 30

Every command loads the watchlist fresh, does its work and saves it back if
it changed. Returns 0 on success and 1 on failure.
"""

import argparse
import sys
from typing import Any, Dict, List, Optional

from feedticker.core.config import load_settings
from feedticker.core.errors import (
    ConfigError,
    FeedFetchError,
    MarketDataError,
    UntrackedTickerError,
)
from feedticker.core.logger import logger
from feedticker.core.storage import WatchlistStore
from feedticker.models.datatypes import Watchlist
from feedticker.pipeline.engine import ScanEngine
from feedticker.pipeline.report import (
    NO_DATE,
    render_correlation_table,
    render_mention_digest,
    render_recent_prices,
)
from feedticker.providers.base import FeedProvider, MarketDataProvider
from feedticker.providers.feed import RSSFeedProvider
from feedticker.providers.market import YFinanceProvider

NO_FEEDS_HINT = "No feeds subscribed. Use 'feedticker add <url>' to add a feed."
NO_INVESTMENTS_HINT = "No investments tracked. Use 'feedticker stock add <ticker>' to add one."


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="feedticker",
        description="Read RSS feeds and correlate news about tracked stocks with their prices",
    )
    parser.add_argument("--watchlist", metavar="PATH", default=None,
                        help="Watchlist file (default: ~/.config/feedticker/watchlist.yaml)")
    parser.add_argument("--settings", metavar="PATH", default=None,
                        help="Settings YAML file (default: ./config.yaml)")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("add", help="Add a new feed URL")
    p.add_argument("url")
    p = sub.add_parser("remove", help="Remove a feed URL")
    p.add_argument("url")
    sub.add_parser("list", help="List all subscribed feeds")
    p = sub.add_parser("fetch", help="Fetch and display recent articles")
    p.add_argument("url", nargs="?", default=None, help="Fetch from this feed URL only")

    stock = sub.add_parser("stock", help="Manage tracked stock investments")
    actions = stock.add_subparsers(dest="action", required=True)
    p = actions.add_parser("add", help="Add a stock ticker to track")
    p.add_argument("ticker")
    p.add_argument("-n", "--name", default=None, help="Company name for better matching")
    p = actions.add_parser("remove", help="Remove a tracked ticker")
    p.add_argument("ticker")
    actions.add_parser("list", help="List all tracked investments")
    p = actions.add_parser("quote", help="Get current quote for a ticker")
    p.add_argument("ticker")

    sub.add_parser("scan", help="Scan feeds for mentions of tracked investments")
    p = sub.add_parser("analyze", help="Analyze news and price correlation for a ticker")
    p.add_argument("ticker")
    p.add_argument("--days", type=int, default=None, help="Days of price history to fetch")
    return parser


# Provider factories are module-level so tests can substitute fakes.

def make_feed_provider(settings: Dict[str, Any]) -> FeedProvider:
    return RSSFeedProvider(limit=settings["feed_limit"], timeout=settings["request_timeout"])


def make_market_provider(settings: Dict[str, Any]) -> MarketDataProvider:
    return YFinanceProvider()


# ── feed commands ─────────────────────────────────────────────────────────────

def cmd_add(store: WatchlistStore, watchlist: Watchlist, url: str) -> int:
    if not watchlist.add_feed(url):
        print(f"Feed already exists: {url}")
        return 0
    store.save(watchlist)
    print(f"Added feed: {url}")
    return 0


def cmd_remove(store: WatchlistStore, watchlist: Watchlist, url: str) -> int:
    if not watchlist.remove_feed(url):
        print(f"Feed not found: {url}")
        return 0
    store.save(watchlist)
    print(f"Removed feed: {url}")
    return 0


def cmd_list(watchlist: Watchlist) -> int:
    if not watchlist.feeds:
        print(NO_FEEDS_HINT)
        return 0
    print("Subscribed feeds:")
    for i, url in enumerate(watchlist.feeds, start=1):
        print(f"  {i}. {url}")
    return 0


def cmd_fetch(watchlist: Watchlist, feeds: FeedProvider, url: Optional[str]) -> int:
    urls = [url] if url else watchlist.feeds
    if not urls:
        print(NO_FEEDS_HINT)
        return 0

    failed = 0
    for feed_url in urls:
        print(f"\nFetching: {feed_url}")
        try:
            result = feeds.fetch_feed(feed_url)
        except FeedFetchError as exc:
            print(f"Error fetching {feed_url}: {exc}", file=sys.stderr)
            failed += 1
            continue

        print(f"== {result.title} ==")
        if not result.articles:
            print("  No articles found.")
        for article in result.articles:
            print(f"\n  [{article.published or NO_DATE}]")
            print(f"  {article.title}")
            if article.link:
                print(f"  {article.link}")

    return 1 if failed == len(urls) else 0


# ── stock commands ────────────────────────────────────────────────────────────

def cmd_stock(args: argparse.Namespace, store: WatchlistStore, watchlist: Watchlist,
              settings: Dict[str, Any]) -> int:
    ticker = (getattr(args, "ticker", None) or "").upper()

    if args.action == "add":
        if not watchlist.add_investment(ticker, args.name):
            print(f"Investment already tracked: {ticker}")
            return 0
        store.save(watchlist)
        print(f"Added investment: {watchlist.find_investment(ticker).display}")
        return 0

    if args.action == "remove":
        if not watchlist.remove_investment(ticker):
            print(f"Investment not found: {ticker}")
            return 0
        store.save(watchlist)
        print(f"Removed investment: {ticker}")
        return 0

    if args.action == "list":
        if not watchlist.investments:
            print(NO_INVESTMENTS_HINT)
            return 0
        print("Tracked investments:")
        for i, investment in enumerate(watchlist.investments, start=1):
            print(f"  {i}. {investment.display}")
        return 0

    print(f"Fetching quote for {ticker}...")
    try:
        quote = make_market_provider(settings).fetch_quote(ticker)
    except MarketDataError as exc:
        print(f"Error fetching quote: {exc}", file=sys.stderr)
        return 1
    sign = "+" if quote.change >= 0 else ""
    print(
        f"\n{quote.ticker}: ${quote.price:.2f} "
        f"({sign}{quote.change:.2f}, {sign}{quote.change_percent:.2f}%)"
    )
    return 0


# ── analysis commands ─────────────────────────────────────────────────────────

def cmd_scan(watchlist: Watchlist, settings: Dict[str, Any]) -> int:
    if not watchlist.investments:
        print(NO_INVESTMENTS_HINT)
        return 0
    if not watchlist.feeds:
        print(NO_FEEDS_HINT)
        return 0

    print("Scanning feeds for investment mentions...\n")
    engine = ScanEngine(watchlist, make_feed_provider(settings))
    result = engine.scan()
    _print_feed_errors(result.feed_errors)

    if not result.mentions:
        print("No mentions found for tracked investments.")
        return 0

    print(f"Found {len(result.mentions)} mentions:\n")
    for line in render_mention_digest(result.mentions):
        print(line)
    return 0


def cmd_analyze(watchlist: Watchlist, settings: Dict[str, Any], ticker: str,
                days: Optional[int]) -> int:
    ticker = ticker.upper()
    engine = ScanEngine(
        watchlist,
        make_feed_provider(settings),
        market=make_market_provider(settings),
    )
    try:
        result = engine.analyze(ticker, days or settings["history_days"])
    except UntrackedTickerError:
        print(f"Ticker {ticker} is not being tracked. Use 'feedticker stock add {ticker}' first.")
        return 1

    print(f"Analyzing {ticker} ...\n")
    if result.price_error:
        print(f"Error fetching price history: {result.price_error}", file=sys.stderr)
    else:
        print(f"Got {len(result.prices)} days of price data.\n")
    recent = render_recent_prices(result.prices, settings["recent_prices"])
    if recent:
        print("\n".join(recent) + "\n")

    if not watchlist.feeds:
        print("No feeds to scan. Add some feeds with 'feedticker add <url>'.")
        return 0

    _print_feed_errors(result.feed_errors)
    if not result.mentions:
        print(f"No recent news mentions found for {ticker}.")
        return 0

    print(f"Found {len(result.mentions)} mentions.\n")
    for line in render_correlation_table(result.correlations):
        print(line)
    return 0


def _print_feed_errors(errors: List) -> None:
    for url, message in errors:
        print(f"Error fetching {url}: {message}", file=sys.stderr)


# ── entry point ───────────────────────────────────────────────────────────────

def main(argv: Optional[List[str]] = None) -> int:
    """Run one command. Returns 0 on success, 1 on failure."""
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(args.settings)
        store = WatchlistStore(args.watchlist or settings["watchlist_path"])
        watchlist = store.load()
    except ConfigError as exc:
        logger.error(f"cli: failed to load configuration: {exc}")
        print(f"Error loading configuration: {exc}", file=sys.stderr)
        return 1

    try:
        if args.command == "add":
            return cmd_add(store, watchlist, args.url)
        if args.command == "remove":
            return cmd_remove(store, watchlist, args.url)
        if args.command == "list":
            return cmd_list(watchlist)
        if args.command == "fetch":
            return cmd_fetch(watchlist, make_feed_provider(settings), args.url)
        if args.command == "stock":
            return cmd_stock(args, store, watchlist, settings)
        if args.command == "scan":
            return cmd_scan(watchlist, settings)
        return cmd_analyze(watchlist, settings, args.ticker, args.days)
    except ConfigError as exc:
        logger.error(f"cli: failed to save configuration: {exc}")
        print(f"Error saving config: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
