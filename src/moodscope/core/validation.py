"""Input text rules applied before any backend call."""

import re
from typing import Optional, Sequence

from .constants import MessageConstants
from .errors import ValidationError

_HAS_LETTER = re.compile(r"[a-zA-Z]")
_FORBIDDEN = re.compile(r"[.'\"]")


def check_text(text: str) -> Optional[str]:
    """Return the reason ``text`` is rejected, or ``None`` if it is acceptable."""
    if not isinstance(text, str) or not _HAS_LETTER.search(text):
        return MessageConstants.NO_LETTERS
    if _FORBIDDEN.search(text):
        return MessageConstants.FORBIDDEN_PUNCTUATION
    return None


def validate_text(text: str, subject: Optional[str] = None) -> str:
    reason = check_text(text)
    if reason:
        raise ValidationError(reason, subject)
    return text


def validate_texts(texts: Sequence[str]) -> None:
    """Validate a batch, naming the first offending text by its 1-based position."""
    if not texts:
        raise ValidationError(MessageConstants.EMPTY_BATCH)
    for i, text in enumerate(texts, 1):
        validate_text(text, subject=f"Text #{i}")
