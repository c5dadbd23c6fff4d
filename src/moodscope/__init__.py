"""MoodScope - sentiment analysis with graceful local fallback."""

__version__ = "0.1.0"

from .core.models import *
from .core.config import settings
from .services.orchestrator import AnalysisOrchestrator, build_orchestrator

__all__ = [
    "settings",
    "AnalysisOrchestrator",
    "build_orchestrator",
]
