"""Tests for input validation rules."""

import pytest

from moodscope.core.constants import MessageConstants
from moodscope.core.errors import ValidationError
from moodscope.core.validation import check_text, validate_text, validate_texts


@pytest.mark.parametrize("text", ["1234", "!!!", "", "   ", "42 - 7"])
def test_rejects_text_without_letters(text):
    assert check_text(text) == MessageConstants.NO_LETTERS


@pytest.mark.parametrize("text", ["This is awful.", "it's fine", 'say "hi"'])
def test_rejects_forbidden_punctuation(text):
    assert check_text(text) == MessageConstants.FORBIDDEN_PUNCTUATION


def test_accepts_plain_text():
    assert check_text("I love this!") is None
    assert validate_text("Great job, team") == "Great job, team"


def test_single_error_has_no_subject():
    with pytest.raises(ValidationError) as exc:
        validate_text("1234")
    assert exc.value.subject is None
    assert str(exc.value) == MessageConstants.NO_LETTERS


def test_batch_error_names_position():
    with pytest.raises(ValidationError) as exc:
        validate_texts(["fine text", "bad text."])
    assert exc.value.subject == "Text #2"
    assert str(exc.value).startswith("Text #2: ")


def test_empty_batch_rejected():
    with pytest.raises(ValidationError):
        validate_texts([])
