"""Coordinates single, batch, comparison, deeper and mood workflows.

Every public operation walks a small state machine
(idle, validating, admitting, executing, degrading, then a terminal state)
tracked per call by a :class:`RequestTrace`. The quota guard is the only
state shared between calls.
"""

import itertools
import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from contextlib import contextmanager
from enum import Enum
from typing import Callable, Iterator, List, Optional, Sequence, Tuple, Union

from ..core.config import Settings, settings as default_settings
from ..core.constants import LexiconConstants, MessageConstants, MoodConstants, PromptConstants, ResultConstants
from ..core.contracts import AdvancedPayload, ComparativePayload, MoodPayload, ScoresPayload, SentimentPayload
from ..core.errors import QuotaExceeded, UnsupportedOperation, ValidationError
from ..core.models import (
    AdvancedAnalysis,
    AnalysisResult,
    ComparativeResult,
    Emotion,
    Entity,
    MoodEnhancement,
    Playlist,
    Provenance,
    QuotaState,
    SentenceSentiment,
    Sentiment,
    SentimentScores,
    TextSentiment,
)
from ..core.quota import QuotaGuard
from ..core.validation import validate_text, validate_texts
from .backend import create_backend
from .client import Err, StructuredClient
from .fallback import FallbackClassifier
from .prompts import advanced_request, comparison_request, mood_request, sentiment_request

logger = logging.getLogger(__name__)


class RequestState(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    ADMITTING = "admitting"
    EXECUTING = "executing"
    DEGRADING = "degrading"
    COMPLETED = "completed"
    REJECTED = "rejected"
    FAILED = "failed"


TERMINAL_STATES = frozenset({RequestState.COMPLETED, RequestState.REJECTED, RequestState.FAILED})


class RequestTrace:
    """States visited by one in-flight request."""

    _ids = itertools.count(1)

    def __init__(self, operation: str):
        self.id = next(self._ids)
        self.operation = operation
        self.states: List[RequestState] = [RequestState.IDLE]

    @property
    def state(self) -> RequestState:
        return self.states[-1]

    @property
    def degraded(self) -> bool:
        return RequestState.DEGRADING in self.states

    def advance(self, state: RequestState) -> None:
        if self.state in TERMINAL_STATES:
            raise RuntimeError(f"{self.operation}#{self.id} already finished as {self.state.value}")
        self.states.append(state)
        logger.debug(f"[{self.operation}#{self.id}] -> {state.value}")


def default_mood_enhancement(label: Sentiment) -> MoodEnhancement:
    entry = MoodConstants.DEFAULTS[Sentiment(label).value]
    return MoodEnhancement(quote=entry["quote"], playlist=Playlist(**entry["playlist"]))


def _scores(payload: ScoresPayload) -> SentimentScores:
    return SentimentScores(positive=payload.positive, negative=payload.negative, neutral=payload.neutral)


def _unique(items: Sequence[str]) -> Tuple[str, ...]:
    return tuple(dict.fromkeys(items))


class AnalysisOrchestrator:
    """Entry point for every analysis the application performs."""

    def __init__(
        self,
        client: StructuredClient,
        quota: QuotaGuard,
        fallback: Optional[FallbackClassifier] = None,
        history: Optional[List[AnalysisResult]] = None,
        max_batch_size: int = 10,
        mood_context_chars: int = PromptConstants.MOOD_CONTEXT_CHARS,
        observer: Optional[Callable[[RequestTrace], None]] = None,
    ):
        self.client = client
        self.quota = quota
        self.fallback = fallback or FallbackClassifier()
        self.history = history if history is not None else []
        self.max_batch_size = max_batch_size
        self.mood_context_chars = mood_context_chars
        self.observer = observer
        self._history_lock = threading.Lock()

    @property
    def quota_state(self) -> QuotaState:
        return self.quota.state

    @contextmanager
    def _tracked(self, operation: str) -> Iterator[RequestTrace]:
        trace = RequestTrace(operation)
        try:
            yield trace
        except (ValidationError, QuotaExceeded):
            self._finish(trace, RequestState.REJECTED)
            raise
        except Exception:
            self._finish(trace, RequestState.FAILED)
            raise
        self._finish(trace, RequestState.COMPLETED)

    def _finish(self, trace: RequestTrace, state: RequestState) -> None:
        trace.advance(state)
        if self.observer:
            self.observer(trace)

    def _record(self, results: List[AnalysisResult]) -> None:
        # Newest first, batch items kept in input order.
        with self._history_lock:
            self.history[:0] = results

    # ---- single text ----

    def _analyze_one(self, text: str) -> AnalysisResult:
        outcome = self.client.invoke(sentiment_request(text))
        if isinstance(outcome, Err):
            return self.fallback.classify(text)
        return self._result_from_payload(text, outcome.payload)

    def analyze(self, text: str) -> AnalysisResult:
        """Analyze one text; backend failures degrade to the local classifier."""
        with self._tracked("analyze") as trace:
            trace.advance(RequestState.VALIDATING)
            validate_text(text)
            trace.advance(RequestState.ADMITTING)
            with self.quota.transaction(1) as charge:
                trace.advance(RequestState.EXECUTING)
                result = self._analyze_one(text)
                if result.provenance is Provenance.FALLBACK:
                    trace.advance(RequestState.DEGRADING)
                charge.commit(1)
                self._record([result])
        return result

    def analyze_with_mood(self, text: str) -> Tuple[AnalysisResult, MoodEnhancement]:
        """Analyze one text, then fetch mood suggestions on a best-effort basis."""
        result = self.analyze(text)
        return result, self.mood_enhancement(result.label, result.text)

    # ---- batch ----

    def analyze_batch(self, texts: Sequence[str]) -> List[AnalysisResult]:
        """Analyze up to ``max_batch_size`` texts concurrently.

        Extra texts are dropped. Items that raise unexpectedly are left out of
        the result and are not charged against the quota.
        """
        texts = list(texts)
        if len(texts) > self.max_batch_size:
            logger.debug(f"Batch truncated from {len(texts)} to {self.max_batch_size} texts")
            texts = texts[: self.max_batch_size]

        with self._tracked("analyze_batch") as trace:
            trace.advance(RequestState.VALIDATING)
            validate_texts(texts)
            trace.advance(RequestState.ADMITTING)
            with self.quota.transaction(len(texts)) as charge:
                trace.advance(RequestState.EXECUTING)
                results = self._run_batch(texts)
                if any(r.provenance is Provenance.FALLBACK for r in results):
                    trace.advance(RequestState.DEGRADING)
                charge.commit(len(results))
                self._record(results)
        logger.info(f"Analysis complete for {len(results)} of {len(texts)} text(s)")
        return results

    def _run_batch(self, texts: List[str]) -> List[AnalysisResult]:
        slots: List[Optional[AnalysisResult]] = [None] * len(texts)
        with ThreadPoolExecutor(max_workers=len(texts)) as executor:
            future_to_index = {
                executor.submit(self._analyze_one, text): i
                for i, text in enumerate(texts)
            }
            for future in as_completed(future_to_index):
                i = future_to_index[future]
                try:
                    slots[i] = future.result()
                except Exception as e:
                    logger.error(f"Batch item {i + 1} failed with error: {e}")
        return [result for result in slots if result is not None]

    # ---- comparison ----

    def compare(self, text_a: str, text_b: str) -> ComparativeResult:
        """Compare two texts; there is no local fallback for this operation."""
        with self._tracked("compare") as trace:
            trace.advance(RequestState.VALIDATING)
            validate_text(text_a, subject="Text A")
            validate_text(text_b, subject="Text B")
            trace.advance(RequestState.ADMITTING)
            with self.quota.transaction(1, MessageConstants.COMPARISON_QUOTA) as charge:
                trace.advance(RequestState.EXECUTING)
                outcome = self.client.invoke(comparison_request(text_a, text_b))
                if isinstance(outcome, Err):
                    raise UnsupportedOperation(MessageConstants.COMPARISON_FAILED) from outcome.failure
                result = self._comparison_from_payload(outcome.payload)
                charge.commit(1)
        return result

    # ---- deeper analysis ----

    def deeper_analysis(self, source: Union[str, AnalysisResult]) -> AdvancedAnalysis:
        """Emotions, tones and entities for a text. Not quota-metered."""
        text = source.text if isinstance(source, AnalysisResult) else source
        with self._tracked("deeper_analysis") as trace:
            trace.advance(RequestState.VALIDATING)
            validate_text(text)
            trace.advance(RequestState.EXECUTING)
            outcome = self.client.invoke(advanced_request(text))
            if isinstance(outcome, Err):
                raise UnsupportedOperation(MessageConstants.DEEPER_ANALYSIS_FAILED) from outcome.failure
            result = self._advanced_from_payload(outcome.payload)
        return result

    # ---- mood ----

    def mood_enhancement(self, label: Sentiment, text: str) -> MoodEnhancement:
        """Quote and playlist for ``label``; falls back to a fixed default."""
        try:
            outcome = self.client.invoke(mood_request(label, text, self.mood_context_chars))
        except Exception as e:
            logger.error(f"Could not fetch mood enhancers: {e}")
            return default_mood_enhancement(label)
        if isinstance(outcome, Err):
            logger.warning(f"Mood enhancement unavailable, using default for {Sentiment(label).value}")
            return default_mood_enhancement(label)
        return self._mood_from_payload(outcome.payload)

    # ---- payload mapping ----

    @staticmethod
    def _result_from_payload(text: str, payload: SentimentPayload) -> AnalysisResult:
        return AnalysisResult(
            text=text,
            label=payload.sentiment,
            confidence=payload.confidence,
            scores=_scores(payload.scores),
            keywords=tuple(payload.keywords[: LexiconConstants.MAX_KEYWORDS]),
            explanation=payload.explanation,
            provenance=Provenance.BACKEND,
            sentence_breakdown=tuple(
                SentenceSentiment(sentence=s.sentence, label=s.sentiment, score=s.score)
                for s in payload.sentence_breakdown
            ),
        )

    @staticmethod
    def _advanced_from_payload(payload: AdvancedPayload) -> AdvancedAnalysis:
        emotions = sorted(payload.emotions, key=lambda e: e.score, reverse=True)
        return AdvancedAnalysis(
            emotions=tuple(Emotion(name=e.name, score=e.score) for e in emotions[: ResultConstants.MAX_EMOTIONS]),
            tones=tuple(payload.tones[: ResultConstants.MAX_TONES]),
            entities=tuple(Entity(text=e.text, type=e.type) for e in payload.entities),
            summary=payload.summary,
        )

    @staticmethod
    def _comparison_from_payload(payload: ComparativePayload) -> ComparativeResult:
        sides = {"A": payload.comparison.text_a, "B": payload.comparison.text_b}
        return ComparativeResult(
            summary=payload.summary,
            per_text={
                key: TextSentiment(label=side.sentiment, confidence=side.confidence, scores=_scores(side.scores))
                for key, side in sides.items()
            },
            shared_keywords=_unique(payload.shared_keywords),
            unique_keywords={
                "A": _unique(payload.unique_keywords.text_a),
                "B": _unique(payload.unique_keywords.text_b),
            },
            emotional_contrast=payload.emotional_contrast,
        )

    @staticmethod
    def _mood_from_payload(payload: MoodPayload) -> MoodEnhancement:
        return MoodEnhancement(
            quote=payload.quote,
            playlist=Playlist(name=payload.playlist.name, url=payload.playlist.url),
        )


def build_orchestrator(
    config: Optional[Settings] = None,
    offline: bool = False,
    history: Optional[List[AnalysisResult]] = None,
) -> AnalysisOrchestrator:
    """Wire an orchestrator from settings; fails fast when no API key is set."""
    config = config or default_settings
    backend = create_backend(config, offline=offline)
    return AnalysisOrchestrator(
        client=StructuredClient(backend),
        quota=QuotaGuard(limit=config.max_analyses),
        history=history,
        max_batch_size=config.max_batch_size,
        mood_context_chars=config.mood_context_chars,
    )
