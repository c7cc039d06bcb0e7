"""Market data integration via yfinance."""

from datetime import datetime
from typing import List

import pandas as pd
import yfinance as yf

from feedticker.core.errors import MarketDataError
from feedticker.core.logger import logger
from feedticker.core.retry import with_retries
from feedticker.models.datatypes import DailyPrice, PriceHistory, StockQuote
from feedticker.providers.base import MarketDataProvider


def history_period(days: int) -> str:
    """Map a requested lookback in days onto a Yahoo Finance range bucket."""
    if days <= 5:
        return "5d"
    if days <= 30:
        return "1mo"
    if days <= 90:
        return "3mo"
    return "6mo"


class YFinanceProvider(MarketDataProvider):
    """Yahoo Finance implementation for quotes and daily closing prices."""

    @with_retries(max_retries=2, initial_delay=2)
    def _download(self, symbol: str, period: str) -> pd.DataFrame:
        return yf.Ticker(symbol).history(period=period, interval="1d")

    def fetch_history(self, ticker: str, days: int = 30) -> PriceHistory:
        """
        Fetch daily closes for ``ticker`` over the range bucket covering ``days``.

        Rows without a close are dropped. Dates are formatted ``YYYY-MM-DD`` and
        kept in the ascending order yfinance returns.

        Args:
            ticker (str): The ticker symbol.
            days (int): Requested lookback in days.

        Returns:
            PriceHistory: The ticker (uppercased) and its daily closes.
        """
        symbol = ticker.upper()
        period = history_period(days)
        logger.info(f"Fetching {period} price history for {symbol}")

        hist = self._fetch_frame(symbol, period)
        prices = _to_daily_prices(hist)
        if not prices:
            logger.warning(f"No closing prices returned for {symbol}")
            raise MarketDataError(f"No data returned for ticker {symbol}", ticker=symbol)

        logger.info(f"Got {len(prices)} daily closes for {symbol}")
        return PriceHistory(ticker=symbol, prices=prices)

    def fetch_quote(self, ticker: str) -> StockQuote:
        """
        Fetch the latest close and its change against the previous close.

        The percent change is 0.0 when the previous close is not positive.
        """
        symbol = ticker.upper()
        logger.info(f"Fetching quote for {symbol}")

        prices = _to_daily_prices(self._fetch_frame(symbol, "5d"))
        if not prices:
            raise MarketDataError(f"No data returned for ticker {symbol}", ticker=symbol)

        price = prices[-1].close
        previous_close = prices[-2].close if len(prices) > 1 else price
        change = price - previous_close
        change_percent = (change / previous_close) * 100.0 if previous_close > 0 else 0.0

        return StockQuote(
            ticker=symbol,
            price=price,
            change=change,
            change_percent=change_percent,
            date=datetime.now().strftime("%Y-%m-%d"),
        )

    def _fetch_frame(self, symbol: str, period: str) -> pd.DataFrame:
        try:
            hist = self._download(symbol, period)
        except Exception as exc:
            logger.error(f"Yahoo Finance error for {symbol}: {exc}")
            raise MarketDataError(f"Yahoo Finance error: {exc}", ticker=symbol) from exc

        if hist is None or hist.empty:
            logger.warning(f"No price data returned for {symbol}")
            raise MarketDataError(f"No data returned for ticker {symbol}", ticker=symbol)
        return hist


def _to_daily_prices(hist: pd.DataFrame) -> List[DailyPrice]:
    """Convert a yfinance history frame (DatetimeIndex, ``Close`` column) to DailyPrice rows."""
    if "Close" not in hist.columns:
        return []

    closes = pd.to_numeric(hist["Close"], errors="coerce").dropna()
    index = pd.to_datetime(closes.index)
    # In yfinance, the index is often timezone-aware. Drop the tz before formatting.
    if index.tz is not None:
        index = index.tz_localize(None)

    return [
        DailyPrice(date=ts.strftime("%Y-%m-%d"), close=float(close))
        for ts, close in zip(index, closes.to_numpy())
    ]
