"""Deterministic request construction for every analysis kind."""

from dataclasses import dataclass
from textwrap import dedent
from typing import Any, Dict, Optional, Tuple

from ..core.constants import PromptConstants
from ..core.contracts import AnalysisKind, schema_for
from ..core.models import Sentiment

SENTIMENT_PROMPT = dedent("""
Analyze the sentiment of the following text, and also provide a breakdown of sentiment for each sentence.
Text: "{text}"
""").strip()

ADVANCED_PROMPT = dedent("""
Perform an advanced analysis of the following text, extracting key emotions, tones, and named entities.
Text: "{text}"
""").strip()

MOOD_PROMPT = dedent("""
The user's text has been analyzed with a '{sentiment}' sentiment.
Based on this, provide:
1. A short, single-sentence quote or poetic line that resonates with this mood.
2. A music playlist suggestion (e.g., "Uplifting Pop Hits") with a direct search URL for YouTube Music or Spotify.

User's text for context: "{text}..."
""").strip()

COMPARATIVE_PROMPT = dedent("""
Perform a comparative sentiment analysis on the following two texts.
Text A: "{text_a}"
Text B: "{text_b}"
Analyze sentiment, confidence, scores, keywords (shared and unique), and provide a summary and emotional contrast.
""").strip()


@dataclass(frozen=True)
class OutputSchema:
    """Named JSON schema the backend response must follow."""
    name: str
    schema: Dict[str, Any]


@dataclass(frozen=True)
class BackendRequest:
    """Backend-agnostic description of one structured generation call."""
    kind: AnalysisKind
    messages: Tuple[Dict[str, str], ...]
    output_schema: OutputSchema

    @property
    def prompt(self) -> str:
        return self.messages[-1]["content"]


def escape_for_prompt(text: str) -> str:
    """Neutralize characters that could close the quoted text envelope."""
    return text.replace("\\", "\\\\").replace('"', '\\"')


def _request(kind: AnalysisKind, user: str) -> BackendRequest:
    messages = (
        {"role": "system", "content": PromptConstants.SYSTEM_PROMPT},
        {"role": "user", "content": user},
    )
    schema = OutputSchema(name=f"{kind.value}_analysis", schema=schema_for(kind))
    return BackendRequest(kind=kind, messages=messages, output_schema=schema)


def sentiment_request(text: str) -> BackendRequest:
    return _request(AnalysisKind.SENTIMENT, SENTIMENT_PROMPT.format(text=escape_for_prompt(text)))


def advanced_request(text: str) -> BackendRequest:
    return _request(AnalysisKind.ADVANCED, ADVANCED_PROMPT.format(text=escape_for_prompt(text)))


def mood_request(
    sentiment: Sentiment,
    text: str,
    context_chars: int = PromptConstants.MOOD_CONTEXT_CHARS,
) -> BackendRequest:
    """Mood suggestions only need the opening of the text, so it is truncated."""
    context = escape_for_prompt(text[:context_chars])
    user = MOOD_PROMPT.format(sentiment=Sentiment(sentiment).value, text=context)
    return _request(AnalysisKind.MOOD, user)


def comparison_request(text_a: str, text_b: str) -> BackendRequest:
    user = COMPARATIVE_PROMPT.format(
        text_a=escape_for_prompt(text_a),
        text_b=escape_for_prompt(text_b),
    )
    return _request(AnalysisKind.COMPARATIVE, user)


def build_request(kind: AnalysisKind, *texts: str, sentiment: Optional[Sentiment] = None, **options) -> BackendRequest:
    """Build the request for ``kind`` from its input text(s).

    SENTIMENT and ADVANCED take one text, COMPARATIVE takes two and MOOD takes
    one text plus the ``sentiment`` it was classified with.
    """
    kind = AnalysisKind(kind)
    expected = 2 if kind is AnalysisKind.COMPARATIVE else 1
    if len(texts) != expected:
        raise ValueError(f"{kind.value} requests take {expected} text(s), got {len(texts)}")

    if kind is AnalysisKind.SENTIMENT:
        return sentiment_request(texts[0])
    if kind is AnalysisKind.ADVANCED:
        return advanced_request(texts[0])
    if kind is AnalysisKind.COMPARATIVE:
        return comparison_request(texts[0], texts[1])
    if sentiment is None:
        raise ValueError("mood requests need the sentiment of the analyzed text")
    return mood_request(sentiment, texts[0], **options)
