"""Tests for the local fallback classifier."""

import pytest

from moodscope.core.models import Provenance, Sentiment
from moodscope.services.fallback import FallbackClassifier, extract_keywords


class TestFallbackClassifier:
    """Test the lexicon-based decision rule."""

    def setup_method(self):
        self.classifier = FallbackClassifier()

    def test_single_positive_hit(self):
        result = self.classifier.classify("I love this!")
        assert result.label is Sentiment.POSITIVE
        assert result.confidence == pytest.approx(0.75)
        assert result.provenance is Provenance.FALLBACK

    def test_negative_wins(self):
        result = self.classifier.classify("awful service and terrible food but good view")
        assert result.label is Sentiment.NEGATIVE
        assert result.confidence == pytest.approx(0.80)

    def test_tie_is_neutral(self):
        result = self.classifier.classify("good and bad")
        assert result.label is Sentiment.NEUTRAL
        assert result.confidence == 0.75

    def test_no_hits_is_neutral(self):
        result = self.classifier.classify("the meeting is on tuesday")
        assert result.label is Sentiment.NEUTRAL
        assert result.scores.neutral == 0.75

    def test_confidence_is_capped(self):
        text = "love great good excellent amazing happy fantastic wonderful best perfect"
        result = self.classifier.classify(text)
        assert result.label is Sentiment.POSITIVE
        assert result.confidence == pytest.approx(0.95)

    def test_counts_substrings(self):
        # "badge" contains "bad"
        assert self.classifier.label_for("my new badge")[0] is Sentiment.NEGATIVE

    @pytest.mark.parametrize("text", [
        "I love this",
        "worst day ever",
        "nothing to see here",
        "",
        "GREAT great GrEaT and sad",
    ])
    def test_scores_sum_to_one(self, text):
        scores = self.classifier.classify(text).scores
        assert abs(scores.positive + scores.negative + scores.neutral - 1.0) < 1e-9

    def test_losing_labels_share_remainder(self):
        scores = self.classifier.classify("I love this").scores
        assert scores.positive == pytest.approx(0.75)
        assert scores.negative == pytest.approx(0.125)
        assert scores.neutral == pytest.approx(0.125)

    def test_deterministic(self):
        first = self.classifier.classify("a happy but sad story")
        second = self.classifier.classify("a happy but sad story")
        assert first.label == second.label
        assert first.scores == second.scores
        assert first.keywords == second.keywords

    def test_result_shape(self):
        result = self.classifier.classify("I hate waiting in line")
        assert result.sentence_breakdown == ()
        assert result.explanation == "Analysis based on keyword matching. The text seems to be negative."
        assert result.text == "I hate waiting in line"
        assert result.timestamp.tzinfo is not None


class TestExtractKeywords:
    """Test standalone keyword extraction."""

    def test_orders_by_frequency(self):
        text = "coffee tastes great, coffee smells great, coffee rules"
        assert extract_keywords(text) == ["coffee", "great", "tastes", "smells", "rules"]

    def test_ties_keep_first_seen_order(self):
        assert extract_keywords("zebra apple mango") == ["zebra", "apple", "mango"]

    def test_drops_short_and_stop_words(self):
        assert extract_keywords("I am on it, so we go to the zoo") == ["zoo"]

    def test_limit_of_five(self):
        words = extract_keywords("one two three four five six seven eight nine")
        assert len(words) == 5

    def test_punctuation_becomes_whitespace(self):
        assert extract_keywords("rain!rain?sun") == ["rain", "sun"]

    def test_empty_text(self):
        assert extract_keywords("") == []
