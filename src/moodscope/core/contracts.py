"""Output contracts that backend responses must satisfy.

Each analysis kind has a pydantic model describing the exact JSON document the
backend is asked to produce. The same model supplies the response schema sent
with the request and validates what comes back; anything that does not fit is
a contract violation, with one exception: score-like numbers are clamped into
[0, 1].
"""

import copy
import json
import math
import re
from enum import Enum
from functools import lru_cache
from typing import Annotated, Any, Dict, List, Type

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from .errors import MoodScopeError
from .models import EntityType, Sentiment


class AnalysisKind(str, Enum):
    SENTIMENT = "sentiment"
    ADVANCED = "advanced"
    MOOD = "mood"
    COMPARATIVE = "comparative"


class ContractViolation(MoodScopeError):
    """A backend payload did not match the contract for its kind."""

    def __init__(self, kind: AnalysisKind, reason: str):
        self.kind = kind
        self.reason = reason
        super().__init__(f"{kind.value} payload rejected: {reason}")


def _clamp_unit(value: Any) -> float:
    """Clamp a numeric score into [0, 1]; non-numbers are rejected."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError("expected a number")
    try:
        number = float(value)
    except OverflowError:
        raise ValueError("expected a finite number") from None
    if not math.isfinite(number):
        raise ValueError("expected a finite number")
    return min(1.0, max(0.0, number))


UnitScore = Annotated[float, BeforeValidator(_clamp_unit)]


class _Contract(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ScoresPayload(_Contract):
    positive: UnitScore = Field(description="Positive score from 0.0 to 1.0")
    negative: UnitScore = Field(description="Negative score from 0.0 to 1.0")
    neutral: UnitScore = Field(description="Neutral score from 0.0 to 1.0")


class SentencePayload(_Contract):
    sentence: str = Field(description="The sentence text.")
    sentiment: Sentiment = Field(description="The sentiment of the sentence.")
    score: UnitScore = Field(description="Confidence score for the sentence's sentiment, from 0.0 to 1.0.")


class SentimentPayload(_Contract):
    sentiment: Sentiment = Field(description="The overall sentiment. Must be 'positive', 'negative', or 'neutral'.")
    confidence: UnitScore = Field(description="A score from 0.0 to 1.0 indicating the confidence in the analysis.")
    scores: ScoresPayload
    keywords: List[str] = Field(description="An array of 3-5 most relevant keywords or key phrases from the text.")
    explanation: str = Field(description="A brief, one-sentence explanation for the sentiment classification.")
    sentence_breakdown: List[SentencePayload] = Field(
        default_factory=list,
        description="An analysis of each individual sentence in the text.",
    )

    @field_validator("sentence_breakdown", mode="before")
    @classmethod
    def missing_breakdown(cls, v):
        if v is None:
            return []
        return v


class EmotionPayload(_Contract):
    name: str = Field(description="Emotion name (e.g., Joy, Sadness, Anger, Surprise, Fear).")
    score: UnitScore = Field(description="Confidence score from 0.0 to 1.0.")


class EntityPayload(_Contract):
    text: str = Field(description="The entity text.")
    type: EntityType = Field(description="The entity type.")


class AdvancedPayload(_Contract):
    summary: str = Field(description="A two-sentence summary of the deeper emotional and topical content of the text.")
    emotions: List[EmotionPayload] = Field(description="Top 3-5 detected emotions with confidence scores.")
    tones: List[str] = Field(description="2-4 adjectives describing the tone (e.g., Formal, Casual, Optimistic).")
    entities: List[EntityPayload] = Field(description="Named entities found in the text.")


class PlaylistPayload(_Contract):
    name: str = Field(description="The name of the playlist.")
    url: str = Field(description="A direct search URL for the playlist on YouTube Music or Spotify.")


class MoodPayload(_Contract):
    quote: str = Field(description="A short, single-sentence quote or poetic line.")
    playlist: PlaylistPayload


class SideSentimentPayload(_Contract):
    sentiment: Sentiment
    confidence: UnitScore
    scores: ScoresPayload


class SidesPayload(_Contract):
    text_a: SideSentimentPayload
    text_b: SideSentimentPayload


class UniqueKeywordsPayload(_Contract):
    text_a: List[str] = Field(description="Keywords unique to Text A.")
    text_b: List[str] = Field(description="Keywords unique to Text B.")


class ComparativePayload(_Contract):
    summary: str = Field(description="A one-sentence summary comparing the overall sentiment of the two texts.")
    comparison: SidesPayload
    shared_keywords: List[str] = Field(description="Keywords present in both texts.")
    unique_keywords: UniqueKeywordsPayload
    emotional_contrast: str = Field(description="A brief description of the difference in emotional tone or intensity.")


CONTRACTS: Dict[AnalysisKind, Type[_Contract]] = {
    AnalysisKind.SENTIMENT: SentimentPayload,
    AnalysisKind.ADVANCED: AdvancedPayload,
    AnalysisKind.MOOD: MoodPayload,
    AnalysisKind.COMPARATIVE: ComparativePayload,
}


@lru_cache(maxsize=None)
def _cached_schema(kind: AnalysisKind) -> Dict[str, Any]:
    return CONTRACTS[kind].model_json_schema(by_alias=True)


def schema_for(kind: AnalysisKind) -> Dict[str, Any]:
    """JSON schema the backend must conform to for ``kind``."""
    return copy.deepcopy(_cached_schema(AnalysisKind(kind)))


def _strip_code_fences(s: str) -> str:
    s = s.strip()
    return re.sub(r"^```(?:json)?|```$", "", s, flags=re.IGNORECASE | re.MULTILINE).strip()


def validate_payload(kind: AnalysisKind, raw: str) -> _Contract:
    """Parse ``raw`` as JSON and validate it against the contract for ``kind``."""
    kind = AnalysisKind(kind)
    if not isinstance(raw, str) or not raw.strip():
        raise ContractViolation(kind, "empty response")

    try:
        data = json.loads(_strip_code_fences(raw))
    except ValueError as e:
        reason = e.msg if isinstance(e, json.JSONDecodeError) else str(e)
        raise ContractViolation(kind, f"response is not valid JSON: {reason}") from e

    if not isinstance(data, dict):
        raise ContractViolation(kind, f"expected a JSON object, got {type(data).__name__}")

    try:
        return CONTRACTS[kind].model_validate(data)
    except PydanticValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}" for err in e.errors()
        )
        raise ContractViolation(kind, problems) from e
