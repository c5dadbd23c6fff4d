"""Error taxonomy for MoodScope."""

from typing import Optional


class MoodScopeError(Exception):
    """Base class for every error raised by MoodScope."""


class ConfigurationError(MoodScopeError):
    """Raised at startup when required configuration is missing."""


class ValidationError(MoodScopeError):
    """Input text was rejected before reaching the backend.

    ``subject`` names the offending text for multi-text requests
    (``"Text A"``, ``"Text #3"``) and is ``None`` for single analyses.
    """

    def __init__(self, message: str, subject: Optional[str] = None):
        self.reason = message
        self.subject = subject
        super().__init__(f"{subject}: {message}" if subject else message)


class QuotaExceeded(MoodScopeError):
    """The session-wide analysis allowance cannot cover the request."""

    def __init__(self, remaining: int, message: Optional[str] = None):
        self.remaining = remaining
        super().__init__(message or self.default_message(remaining))

    @staticmethod
    def default_message(remaining: int) -> str:
        allowance = remaining if remaining > 0 else "no"
        noun = "analysis" if remaining == 1 else "analyses"
        return (
            "You've reached your usage limit for this session. "
            f"You can perform {allowance} more {noun}."
        )


class BackendError(MoodScopeError):
    """Raised by a backend when a generation request fails."""


class BackendFailure(MoodScopeError):
    """A failed structured call, carried as a value rather than raised."""

    def __init__(self, kind, reason: str, cause: Optional[BaseException] = None):
        self.kind = kind
        self.reason = reason
        self.cause = cause
        super().__init__(f"{kind.value} request failed: {reason}")


class UnsupportedOperation(MoodScopeError):
    """An analysis with no local fallback could not be completed."""
