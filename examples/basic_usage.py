"""Basic usage examples for MoodScope."""

import os
from moodscope import build_orchestrator
from moodscope.core.errors import UnsupportedOperation
from moodscope.utils import export_to_json, prepare_export

# Without an API key everything runs on the local keyword classifier
OFFLINE = not (os.getenv("OPENAI_API_KEY") or os.getenv("API_KEY"))


def example_single_analysis(orchestrator):
    """Example: Single text with mood suggestions."""
    print("🔍 Analyzing: I love this new coffee place")

    result, mood = orchestrator.analyze_with_mood("I love this new coffee place")
    print(f"🎯 {result.label.value} ({result.confidence:.0%}, {result.provenance.value})")
    print(f"📋 Keywords: {', '.join(result.keywords)}")
    print(f"🎵 {mood.playlist.name}: {mood.playlist.url}")

    try:
        deeper = orchestrator.deeper_analysis(result)
        print(f"🤖 Emotions: {', '.join(e.name for e in deeper.emotions)}")
    except UnsupportedOperation as e:
        print(f"⚠️ {e}")


def example_batch(orchestrator):
    """Example: Batch analysis and export."""
    texts = [
        "The service was excellent",
        "Delivery took forever and the box was damaged",
        "The store opens at nine",
    ]
    results = orchestrator.analyze_batch(texts)
    print(f"\n📊 Analyzed {len(results)} texts")
    for r in results:
        print(f"  {r.label.value:>8}  {r.text}")

    export_to_json(prepare_export(orchestrator.history, orchestrator.quota_state), "moodscope_results.json")
    print("💾 Exported to moodscope_results.json")


def example_comparison(orchestrator):
    """Example: Comparing two texts."""
    try:
        result = orchestrator.compare("I adore rainy afternoons", "Rain ruins my whole day")
        print(f"\n⚖️ {result.summary}")
        print(f"   Contrast: {result.emotional_contrast}")
    except UnsupportedOperation as e:
        print(f"\n⚠️ {e}")


if __name__ == "__main__":
    orchestrator = build_orchestrator(offline=OFFLINE)
    example_single_analysis(orchestrator)
    example_batch(orchestrator)
    example_comparison(orchestrator)
    print(f"\n✅ Used {orchestrator.quota_state.used} of {orchestrator.quota_state.limit} analyses")
