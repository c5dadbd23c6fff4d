"""Constants and configuration values for MoodScope."""


# Fallback Classifier Constants
class LexiconConstants:
    """Word lists used by the local keyword classifier."""

    POSITIVE_WORDS = (
        "love", "great", "good", "excellent", "amazing",
        "happy", "fantastic", "wonderful", "best", "perfect",
    )
    NEGATIVE_WORDS = (
        "hate", "terrible", "bad", "awful", "horrible",
        "sad", "worst", "disappointing", "poor",
    )

    STOP_WORDS = frozenset({
        "a", "an", "the", "and", "or", "but", "in", "on", "at", "to", "for", "of", "with", "by",
        "is", "are", "was", "were", "be", "been", "have", "has", "had", "do", "does", "did",
        "will", "would", "could", "should", "may", "might", "must", "can", "this", "that",
        "these", "those", "i", "you", "he", "she", "it", "we", "they", "me", "him", "her", "us", "them",
    })

    BASE_CONFIDENCE = 0.70
    CONFIDENCE_STEP = 0.05
    MAX_CONFIDENCE = 0.95
    NEUTRAL_CONFIDENCE = 0.75

    MAX_KEYWORDS = 5
    MIN_KEYWORD_LENGTH = 3


# Result Shape Limits
class ResultConstants:
    """Caps applied to backend-sourced result collections."""

    MAX_EMOTIONS = 5
    MAX_TONES = 4


# Prompt Constants
class PromptConstants:
    """Constants for backend prompts."""

    MOOD_CONTEXT_CHARS = 500  # chars of text sent as mood context

    SYSTEM_PROMPT = (
        "You are a sentiment analysis engine. Respond ONLY with JSON that matches the supplied schema."
    )


# User-facing messages
class MessageConstants:
    """Messages surfaced to the caller."""

    NO_LETTERS = "Invalid input. Please enter text that includes letters, not just numbers or symbols."
    FORBIDDEN_PUNCTUATION = "Invalid input. The input must not include full stops and inverted commas."
    EMPTY_BATCH = "Invalid input. Please provide at least one text to analyze."

    COMPARISON_QUOTA = "You've reached your usage limit for this session, so a comparison can't be run."
    COMPARISON_FAILED = (
        "We couldn't compare the texts right now. This might be due to the complexity of the text "
        "or a temporary connection issue. Please try again with different text."
    )
    DEEPER_ANALYSIS_FAILED = "We couldn't generate the deeper analysis at this moment. Please try again."

    FALLBACK_EXPLANATION = "Analysis based on keyword matching. The text seems to be {label}."


# Mood Enhancement Defaults
class MoodConstants:
    """Per-label suggestions used when the backend cannot provide one."""

    DEFAULTS = {
        "negative": {
            "quote": "Even the darkest night will end and the sun will rise. - Victor Hugo",
            "playlist": {
                "name": "Hopeful Instrumentals",
                "url": "https://music.youtube.com/search?q=hopeful+instrumentals",
            },
        },
        "positive": {
            "quote": "Keep your face always toward the sunshine and shadows will fall behind you. - Walt Whitman",
            "playlist": {
                "name": "Feel-Good Indie Rock",
                "url": "https://music.youtube.com/search?q=feel+good+indie+rock",
            },
        },
        "neutral": {
            "quote": "The universe is under no obligation to make sense to you. - Neil deGrasse Tyson",
            "playlist": {
                "name": "Focus & Ambient",
                "url": "https://music.youtube.com/search?q=focus+ambient",
            },
        },
    }
