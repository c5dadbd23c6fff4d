"""Data models for MoodScope."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, Tuple, Any


class Sentiment(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


class Provenance(str, Enum):
    BACKEND = "backend"
    FALLBACK = "fallback"


class EntityType(str, Enum):
    PERSON = "PERSON"
    ORGANIZATION = "ORGANIZATION"
    LOCATION = "LOCATION"
    EVENT = "EVENT"
    OTHER = "OTHER"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class SentimentScores:
    """Per-label scores; backend values are not renormalized."""
    positive: float
    negative: float
    neutral: float

    def get(self, label: Sentiment) -> float:
        return getattr(self, Sentiment(label).value)

    def as_dict(self) -> Dict[str, float]:
        return {
            Sentiment.POSITIVE.value: self.positive,
            Sentiment.NEGATIVE.value: self.negative,
            Sentiment.NEUTRAL.value: self.neutral,
        }


@dataclass(frozen=True)
class SentenceSentiment:
    """Sentiment of one sentence within an analyzed text."""
    sentence: str
    label: Sentiment
    score: float


@dataclass(frozen=True)
class AnalysisResult:
    """Outcome of a single-text sentiment analysis."""
    text: str
    label: Sentiment
    confidence: float
    scores: SentimentScores
    keywords: Tuple[str, ...]
    explanation: str
    provenance: Provenance
    sentence_breakdown: Tuple[SentenceSentiment, ...] = ()
    timestamp: datetime = field(default_factory=utc_now)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "sentiment": self.label.value,
            "confidence": self.confidence,
            "scores": self.scores.as_dict(),
            "keywords": list(self.keywords),
            "explanation": self.explanation,
            "sentence_breakdown": [
                {"sentence": s.sentence, "sentiment": s.label.value, "score": s.score}
                for s in self.sentence_breakdown
            ],
            "timestamp": self.timestamp.isoformat(),
            "provenance": self.provenance.value,
        }


@dataclass(frozen=True)
class Emotion:
    name: str
    score: float


@dataclass(frozen=True)
class Entity:
    text: str
    type: EntityType


@dataclass(frozen=True)
class AdvancedAnalysis:
    """Emotions, tones and named entities found in a text."""
    emotions: Tuple[Emotion, ...]
    tones: Tuple[str, ...]
    entities: Tuple[Entity, ...]
    summary: str


@dataclass(frozen=True)
class TextSentiment:
    """Sentiment of one side of a comparison."""
    label: Sentiment
    confidence: float
    scores: SentimentScores


@dataclass(frozen=True)
class ComparativeResult:
    """Side-by-side sentiment comparison of texts ``A`` and ``B``."""
    summary: str
    per_text: Dict[str, TextSentiment]
    shared_keywords: Tuple[str, ...]
    unique_keywords: Dict[str, Tuple[str, ...]]
    emotional_contrast: str


@dataclass(frozen=True)
class Playlist:
    name: str
    url: str


@dataclass(frozen=True)
class MoodEnhancement:
    """A quote and playlist matching the mood of an analyzed text."""
    quote: str
    playlist: Playlist


@dataclass(frozen=True)
class QuotaState:
    """Snapshot of session usage."""
    used: int
    limit: int

    @property
    def remaining(self) -> int:
        return max(0, self.limit - self.used)
