"""Presentation helpers for mention digests and correlation tables."""

from typing import Dict, Iterable, List, Optional, Sequence

from feedticker.models.datatypes import ArticleMention, Correlation, DailyPrice, Sentiment

_MARKERS = {
    Sentiment.POSITIVE: "+",
    Sentiment.NEGATIVE: "-",
    Sentiment.NEUTRAL: "~",
}

NO_DATE = "No date"
TABLE_RULE = "-" * 80


def sentiment_marker(sentiment: Sentiment) -> str:
    """``+``, ``-`` or ``~`` for Positive, Negative or Neutral."""
    return _MARKERS[sentiment]


def format_price_change(price: Optional[float], change: Optional[float]) -> str:
    """``$P.PP (+X.X%)``, ``$P.PP`` without a change, ``N/A`` without a price."""
    if price is None:
        return "N/A"
    if change is None:
        return f"${price:.2f}"
    sign = "+" if change >= 0 else ""
    return f"${price:.2f} ({sign}{change:.1f}%)"


def order_by_date(correlations: Iterable[Correlation]) -> List[Correlation]:
    """Stable ascending sort by date. Undated rows go last."""
    return sorted(correlations, key=lambda c: (c.date == "", c.date))


def group_by_ticker(mentions: Iterable[ArticleMention]) -> Dict[str, List[ArticleMention]]:
    """Tickers in first-seen order, each with its mentions in original order."""
    groups: Dict[str, List[ArticleMention]] = {}
    for mention in mentions:
        groups.setdefault(mention.ticker, []).append(mention)
    return groups


def render_mention_digest(mentions: Sequence[ArticleMention]) -> List[str]:
    """Lines of ``[TICKER] ± [date] title`` with the link indented beneath."""
    lines: List[str] = []
    for ticker, group in group_by_ticker(mentions).items():
        for mention in group:
            article = mention.article
            lines.append(
                f"[{ticker}] {sentiment_marker(mention.sentiment)} "
                f"[{article.published or NO_DATE}] {article.title}"
            )
            if article.link:
                lines.append(f"    {article.link}")
    return lines


def render_correlation_table(correlations: Iterable[Correlation]) -> List[str]:
    """Date-ordered table of sentiment, price change and headline."""
    lines = ["News & Price Correlation:", TABLE_RULE]
    for corr in order_by_date(correlations):
        lines.append(
            f"[{corr.date or NO_DATE}] {corr.sentiment.value:<8} | "
            f"{format_price_change(corr.price, corr.price_change)} | {corr.article_title}"
        )
    return lines


def render_recent_prices(prices: Sequence[DailyPrice], count: int = 5) -> List[str]:
    """The last ``count`` closes, oldest first."""
    if not prices or count <= 0:
        return []
    lines = ["Recent prices:"]
    lines.extend(f"  {p.date}: ${p.close:.2f}" for p in prices[-count:])
    return lines
