"""Lexicon-based sentiment for market news.

Pipeline:
    text (str) → LexiconSentimentProvider.analyze() → Sentiment

Scoring:
    Each lexicon word counts once if it appears in the lowercased text as a
    whole word ("high" does not hit inside "highway"). Repeats of the same
    word do not add weight.

Decision:
    positive hits > negative hits → Positive
    negative hits > positive hits → Negative
    otherwise                     → Neutral  (includes 0 / 0)
"""

import re
from typing import Iterable, List, Pattern, Tuple

from feedticker.models.datatypes import Sentiment
from feedticker.providers.base import SentimentProvider

POSITIVE_WORDS: Tuple[str, ...] = (
    "gain", "gains", "surge", "surges", "surging", "rise", "rises", "rising",
    "profit", "profits", "beat", "beats", "bullish", "growth", "growing",
    "rally", "rallies", "soar", "soars", "soaring", "jump", "jumps",
    "record", "high", "upgrade", "upgrades", "strong", "success", "win",
)

NEGATIVE_WORDS: Tuple[str, ...] = (
    "fall", "falls", "falling", "drop", "drops", "dropping", "loss", "losses",
    "miss", "misses", "bearish", "decline", "declines", "declining", "crash",
    "crashes", "plunge", "plunges", "plunging", "sink", "sinks", "sinking",
    "low", "downgrade", "downgrades", "weak", "fail", "fails", "cut", "cuts",
)


def _compile(words: Iterable[str]) -> List[Pattern[str]]:
    return [re.compile(r"\b" + re.escape(word.lower()) + r"\b") for word in words]


class LexiconSentimentProvider(SentimentProvider):
    """Counts whole-word hits against fixed positive and negative word lists.

    Patterns are compiled once per instance. Custom lexicons may be passed in;
    they are matched case-insensitively like the defaults.

    Args:
        positive_words: Words signalling a positive tone.
        negative_words: Words signalling a negative tone.
    """

    def __init__(
        self,
        positive_words: Iterable[str] = POSITIVE_WORDS,
        negative_words: Iterable[str] = NEGATIVE_WORDS,
    ) -> None:
        self._positive = _compile(positive_words)
        self._negative = _compile(negative_words)

    def analyze(self, text: str) -> Sentiment:
        """Return the sentiment label for ``text``. Empty text is Neutral."""
        positive, negative = self.count_hits(text)
        if positive > negative:
            return Sentiment.POSITIVE
        if negative > positive:
            return Sentiment.NEGATIVE
        return Sentiment.NEUTRAL

    def count_hits(self, text: str) -> Tuple[int, int]:
        """Return ``(positive_hits, negative_hits)`` for ``text``."""
        lower = (text or "").lower()
        if not lower:
            return 0, 0
        positive = sum(1 for pattern in self._positive if pattern.search(lower))
        negative = sum(1 for pattern in self._negative if pattern.search(lower))
        return positive, negative


_default_provider = LexiconSentimentProvider()


def classify(text: str) -> Sentiment:
    """Classify ``text`` with the default lexicons."""
    return _default_provider.analyze(text)
