"""Core modules for MoodScope."""

from .models import *
from .config import settings
from .errors import (
    BackendError,
    BackendFailure,
    ConfigurationError,
    MoodScopeError,
    QuotaExceeded,
    UnsupportedOperation,
    ValidationError,
)
from .quota import QuotaGuard

__all__ = [
    "settings",
    "Sentiment",
    "Provenance",
    "SentimentScores",
    "AnalysisResult",
    "AdvancedAnalysis",
    "ComparativeResult",
    "MoodEnhancement",
    "QuotaState",
    "QuotaGuard",
    "MoodScopeError",
    "ConfigurationError",
    "ValidationError",
    "QuotaExceeded",
    "BackendError",
    "BackendFailure",
    "UnsupportedOperation",
]
