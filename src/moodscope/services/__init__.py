"""Services for MoodScope."""

from .backend import GenerativeBackend, OpenAIBackend, OfflineBackend, create_backend
from .client import StructuredClient
from .fallback import FallbackClassifier, extract_keywords
from .orchestrator import AnalysisOrchestrator, build_orchestrator

__all__ = [
    "GenerativeBackend",
    "OpenAIBackend",
    "OfflineBackend",
    "create_backend",
    "StructuredClient",
    "FallbackClassifier",
    "extract_keywords",
    "AnalysisOrchestrator",
    "build_orchestrator",
]
