"""Local keyword-based sentiment classifier used when the backend fails."""

import logging
import re
from collections import Counter
from typing import List, Sequence

from ..core.constants import LexiconConstants, MessageConstants
from ..core.models import AnalysisResult, Provenance, Sentiment, SentimentScores

logger = logging.getLogger(__name__)

_NON_WORD = re.compile(r"[^\w\s]")


def extract_keywords(text: str, limit: int = LexiconConstants.MAX_KEYWORDS) -> List[str]:
    """Most frequent non-stop-word tokens, ties kept in first-seen order."""
    words = _NON_WORD.sub(" ", text.lower()).split()
    words = [
        w for w in words
        if len(w) >= LexiconConstants.MIN_KEYWORD_LENGTH and w not in LexiconConstants.STOP_WORDS
    ]
    return [word for word, _ in Counter(words).most_common(limit)]


def _count_hits(text_lower: str, lexicon: Sequence[str]) -> int:
    return sum(1 for word in lexicon if word in text_lower)


class FallbackClassifier:
    """Deterministic classifier built on two fixed lexicons."""

    def __init__(
        self,
        positive_words: Sequence[str] = LexiconConstants.POSITIVE_WORDS,
        negative_words: Sequence[str] = LexiconConstants.NEGATIVE_WORDS,
    ):
        self.positive_words = tuple(positive_words)
        self.negative_words = tuple(negative_words)

    def label_for(self, text: str):
        """Return ``(label, confidence)`` for ``text``."""
        text_lower = text.lower()
        pos_count = _count_hits(text_lower, self.positive_words)
        neg_count = _count_hits(text_lower, self.negative_words)

        if pos_count > neg_count:
            return Sentiment.POSITIVE, self._confidence(pos_count)
        if neg_count > pos_count:
            return Sentiment.NEGATIVE, self._confidence(neg_count)
        return Sentiment.NEUTRAL, LexiconConstants.NEUTRAL_CONFIDENCE

    @staticmethod
    def _confidence(hits: int) -> float:
        return min(
            LexiconConstants.MAX_CONFIDENCE,
            LexiconConstants.BASE_CONFIDENCE + hits * LexiconConstants.CONFIDENCE_STEP,
        )

    @staticmethod
    def scores_for(label: Sentiment, confidence: float) -> SentimentScores:
        rest = (1 - confidence) / 2
        return SentimentScores(
            positive=confidence if label is Sentiment.POSITIVE else rest,
            negative=confidence if label is Sentiment.NEGATIVE else rest,
            neutral=confidence if label is Sentiment.NEUTRAL else rest,
        )

    def classify(self, text: str) -> AnalysisResult:
        """Classify ``text``; never fails for string input."""
        logger.warning("Using fallback sentiment analysis")
        label, confidence = self.label_for(text)
        return AnalysisResult(
            text=text,
            label=label,
            confidence=confidence,
            scores=self.scores_for(label, confidence),
            keywords=tuple(extract_keywords(text)),
            explanation=MessageConstants.FALLBACK_EXPLANATION.format(label=label.value),
            provenance=Provenance.FALLBACK,
        )
