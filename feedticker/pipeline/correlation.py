"""Join mentions to a daily price series on the article's publish date."""

from typing import Dict, List, Optional, Sequence, Tuple

from feedticker.core.logger import logger
from feedticker.models.datatypes import ArticleMention, Correlation, DailyPrice


def published_day(published: Optional[str]) -> str:
    """First whitespace-delimited token of a publish timestamp, or ``""``."""
    if not published:
        return ""
    parts = published.split()
    return parts[0] if parts else ""


def percent_change(close: float, previous_close: float) -> Optional[float]:
    """Percent change from ``previous_close``; ``None`` when it is not positive."""
    if previous_close <= 0:
        return None
    return (close - previous_close) / previous_close * 100.0


def correlate(
    mentions: Sequence[ArticleMention],
    prices: Sequence[DailyPrice],
) -> List[Correlation]:
    """
    Build one :class:`Correlation` per mention, in mention order.

    The price series is assumed to be ascending by date. "Previous day" is the
    immediately preceding entry in the list, not the previous calendar date,
    so weekend and holiday gaps are bridged naturally.

    Args:
        mentions: Mentions of one ticker.
        prices: That ticker's daily closes.

    Returns:
        List[Correlation]: Price and percent change are ``None`` when the
        publish date has no price, and the change is ``None`` for the first
        entry in the series.
    """
    # First occurrence wins when a date repeats.
    index_by_date: Dict[str, int] = {}
    for i, price in enumerate(prices):
        index_by_date.setdefault(price.date, i)

    correlations: List[Correlation] = []
    matched = 0
    for mention in mentions:
        day = published_day(mention.article.published)
        price, change = _lookup(day, prices, index_by_date)
        if price is not None:
            matched += 1
        correlations.append(
            Correlation(
                date=day,
                article_title=mention.article.title,
                sentiment=mention.sentiment,
                price=price,
                price_change=change,
            )
        )

    logger.info(
        f"correlate: {matched}/{len(correlations)} mentions matched a trading day "
        f"in {len(prices)} prices"
    )
    return correlations


def _lookup(
    day: str,
    prices: Sequence[DailyPrice],
    index_by_date: Dict[str, int],
) -> Tuple[Optional[float], Optional[float]]:
    idx = index_by_date.get(day)
    if idx is None:
        return None, None
    close = prices[idx].close
    if idx == 0:
        return close, None
    return close, percent_change(close, prices[idx - 1].close)
