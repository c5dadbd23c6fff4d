"""Shared fixtures for MoodScope tests."""

import json
import threading

import pytest

from moodscope.core.contracts import AnalysisKind
from moodscope.core.errors import BackendError
from moodscope.core.quota import QuotaGuard
from moodscope.services.backend import GenerativeBackend
from moodscope.services.client import StructuredClient
from moodscope.services.orchestrator import AnalysisOrchestrator

SENTIMENT_PAYLOAD = {
    "sentiment": "positive",
    "confidence": 0.91,
    "scores": {"positive": 0.91, "negative": 0.04, "neutral": 0.05},
    "keywords": ["sunny", "walk", "park"],
    "explanation": "The text describes an enjoyable day.",
    "sentenceBreakdown": [
        {"sentence": "What a sunny day", "sentiment": "positive", "score": 0.9},
    ],
}

ADVANCED_PAYLOAD = {
    "summary": "The writer is delighted. The outing went well.",
    "emotions": [
        {"name": "Surprise", "score": 0.3},
        {"name": "Joy", "score": 0.9},
        {"name": "Calm", "score": 0.5},
    ],
    "tones": ["Casual", "Optimistic"],
    "entities": [{"text": "Golden Gate Park", "type": "LOCATION"}],
}

MOOD_PAYLOAD = {
    "quote": "Happiness is a warm afternoon.",
    "playlist": {"name": "Sunny Pop", "url": "https://music.youtube.com/search?q=sunny+pop"},
}

COMPARATIVE_PAYLOAD = {
    "summary": "Text A is upbeat while Text B is gloomy.",
    "comparison": {
        "textA": {
            "sentiment": "positive",
            "confidence": 0.9,
            "scores": {"positive": 0.9, "negative": 0.05, "neutral": 0.05},
        },
        "textB": {
            "sentiment": "negative",
            "confidence": 0.8,
            "scores": {"positive": 0.1, "negative": 0.8, "neutral": 0.1},
        },
    },
    "sharedKeywords": ["weather", "weather", "day"],
    "uniqueKeywords": {"textA": ["sunny"], "textB": ["rain"]},
    "emotionalContrast": "Joy against disappointment.",
}

PAYLOADS = {
    AnalysisKind.SENTIMENT: SENTIMENT_PAYLOAD,
    AnalysisKind.ADVANCED: ADVANCED_PAYLOAD,
    AnalysisKind.MOOD: MOOD_PAYLOAD,
    AnalysisKind.COMPARATIVE: COMPARATIVE_PAYLOAD,
}


class FakeBackend(GenerativeBackend):
    """Backend returning canned payloads per analysis kind.

    ``overrides`` maps a kind to a raw string, a dict, an exception instance
    or a callable taking the user prompt.
    """

    def __init__(self, overrides=None):
        self.overrides = dict(overrides or {})
        self.calls = []
        self._lock = threading.Lock()

    def generate(self, messages, output_schema):
        kind = AnalysisKind(output_schema.name[: -len("_analysis")])
        prompt = messages[-1]["content"]
        with self._lock:
            self.calls.append((kind, prompt))
        response = self.overrides.get(kind, PAYLOADS[kind])
        if callable(response):
            response = response(prompt)
        if isinstance(response, BaseException):
            raise response
        if isinstance(response, dict):
            return json.dumps(response)
        return response

    def kinds(self):
        return [kind for kind, _ in self.calls]


class DownBackend(GenerativeBackend):
    """Backend whose every call fails like a network outage."""

    def __init__(self):
        self.calls = 0

    def generate(self, messages, output_schema):
        self.calls += 1
        raise BackendError("connection refused")


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def quota():
    return QuotaGuard(limit=15)


@pytest.fixture
def orchestrator(backend, quota):
    return AnalysisOrchestrator(StructuredClient(backend), quota)


@pytest.fixture
def offline_orchestrator(quota):
    return AnalysisOrchestrator(StructuredClient(DownBackend()), quota)
