"""Detect articles that mention tracked investments.

For every (article, investment) pair, articles outer and investments inner:

  1. Uppercase ``title + " " + content`` once per article.
  2. Whole-word match of the ticker against that text.
  3. Otherwise, whole-word match of the uppercased company name, if any.
  4. On a match, classify the original-case text and emit an ArticleMention.

Tickers and names are literal strings: regex metacharacters (``BRK.B``,
``S&P``) are escaped before the word boundaries are added.
"""

import re
from typing import Dict, Iterable, List, Optional, Pattern, Sequence

from feedticker.core.logger import logger
from feedticker.models.datatypes import Article, ArticleMention, Investment
from feedticker.providers.base import SentimentProvider
from feedticker.providers.sentiment import LexiconSentimentProvider


def boundary_pattern(phrase: str) -> Pattern[str]:
    """Compile a pattern matching ``phrase`` literally as a whole word."""
    return re.compile(r"\b" + re.escape(phrase) + r"\b")


def article_text(article: Article) -> str:
    """Title and content joined by a space, content treated as empty when absent."""
    return f"{article.title} {article.content or ''}"


class MentionMatcher:
    """Finds mentions of tracked investments in a batch of articles.

    Args:
        sentiment: Classifier applied to each matching article. Defaults to
            the lexicon classifier.
    """

    def __init__(self, sentiment: Optional[SentimentProvider] = None) -> None:
        self.sentiment = sentiment or LexiconSentimentProvider()

    def find_mentions(
        self,
        articles: Iterable[Article],
        investments: Sequence[Investment],
    ) -> List[ArticleMention]:
        """Return one mention per matching (article, investment) pair, article-major."""
        # Patterns are data-dependent, so they only live for this pass.
        patterns: Dict[str, Pattern[str]] = {}

        def matches(phrase: str, text: str) -> bool:
            pattern = patterns.get(phrase)
            if pattern is None:
                pattern = patterns[phrase] = boundary_pattern(phrase)
            return pattern.search(text) is not None

        mentions: List[ArticleMention] = []
        article_count = 0
        for article in articles:
            article_count += 1
            full_text = article_text(article)
            search_text = full_text.upper()
            sentiment = None

            for investment in investments:
                found = matches(investment.ticker.upper(), search_text)
                if not found and investment.name:
                    found = matches(investment.name.upper(), search_text)
                if not found:
                    continue

                if sentiment is None:
                    sentiment = self.sentiment.analyze(full_text)
                mentions.append(
                    ArticleMention(article=article, ticker=investment.ticker, sentiment=sentiment)
                )

        logger.info(
            f"MentionMatcher: {len(mentions)} mentions across {article_count} articles "
            f"and {len(investments)} investments"
        )
        return mentions


def find_mentions(
    articles: Iterable[Article],
    investments: Sequence[Investment],
    sentiment: Optional[SentimentProvider] = None,
) -> List[ArticleMention]:
    """Convenience wrapper around :meth:`MentionMatcher.find_mentions`."""
    return MentionMatcher(sentiment).find_mentions(articles, investments)
