"""Tests for the lexicon sentiment classifier."""

import pytest

from feedticker.models.datatypes import Sentiment
from feedticker.providers.sentiment import (
    NEGATIVE_WORDS,
    POSITIVE_WORDS,
    LexiconSentimentProvider,
    classify,
)


class TestClassify:
    """Decision rule for the default lexicons."""

    def test_empty_text_is_neutral(self):
        assert classify("") == Sentiment.NEUTRAL

    def test_none_text_is_neutral(self):
        assert classify(None) == Sentiment.NEUTRAL

    def test_no_lexicon_words_is_neutral(self):
        assert classify("The board met on Tuesday") == Sentiment.NEUTRAL

    def test_positive(self):
        assert classify("Shares surge on strong earnings") == Sentiment.POSITIVE

    def test_negative(self):
        assert classify("Stock plunges after guidance cut") == Sentiment.NEGATIVE

    def test_tie_is_neutral(self):
        # one positive (gains), one negative (losses)
        assert classify("Early gains gave way to losses") == Sentiment.NEUTRAL

    def test_case_insensitive(self):
        assert classify("RECORD PROFITS") == Sentiment.POSITIVE

    @pytest.mark.parametrize("text", ["Prices were LOWER today", "A new highway opens", "Cutting-edge? no, Cutler"])
    def test_substrings_do_not_count(self, text):
        assert classify(text) == Sentiment.NEUTRAL

    def test_punctuation_counts_as_boundary(self):
        assert classify("Rally! Then a crash, then a rally.") == Sentiment.NEUTRAL

    def test_repeated_word_counts_once(self):
        # "surge" three times vs two distinct negatives
        text = "surge surge surge, but a drop and a loss"
        assert classify(text) == Sentiment.NEGATIVE


class TestLexiconSentimentProvider:
    """Custom lexicons and hit counting."""

    def test_count_hits(self):
        provider = LexiconSentimentProvider()
        assert provider.count_hits("Strong growth despite weak demand") == (2, 1)

    def test_custom_lexicon(self):
        provider = LexiconSentimentProvider(positive_words=["Moon"], negative_words=["dump"])
        assert provider.analyze("to the moon") == Sentiment.POSITIVE
        assert provider.analyze("big dump") == Sentiment.NEGATIVE

    def test_lexicons_do_not_overlap(self):
        assert not set(POSITIVE_WORDS) & set(NEGATIVE_WORDS)

    def test_sentiment_str(self):
        assert str(Sentiment.POSITIVE) == "Positive"
