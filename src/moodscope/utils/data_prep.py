"""Data preparation for export."""

import csv
import datetime
import json
from typing import Any, Dict, List, Optional, Sequence

from ..core.models import AnalysisResult, Provenance, QuotaState, Sentiment

CSV_HEADER = [
    "timestamp", "text", "sentiment", "confidence",
    "positive_score", "negative_score", "neutral_score",
    "keywords", "explanation",
]


def summarize_results(results: Sequence[AnalysisResult]) -> Dict[str, Any]:
    """Per-label counts and average confidence across ``results``."""
    counts = {label.value: 0 for label in Sentiment}
    for r in results:
        counts[r.label.value] += 1
    total = len(results)
    return {
        "total": total,
        "positive": counts[Sentiment.POSITIVE.value],
        "negative": counts[Sentiment.NEGATIVE.value],
        "neutral": counts[Sentiment.NEUTRAL.value],
        "average_confidence": round(sum(r.confidence for r in results) / total, 4) if total else 0.0,
        "fallback_count": sum(1 for r in results if r.provenance is Provenance.FALLBACK),
    }


def prepare_export(results: Sequence[AnalysisResult], quota: Optional[QuotaState] = None) -> Dict[str, Any]:
    """Prepare data for JSON export."""
    export_data = {
        "summary": summarize_results(results),
        "results": [r.to_dict() for r in results],
        "metadata": {
            "export_timestamp": None,  # Will be set by caller
            "version": "0.1.0",
        },
    }
    if quota is not None:
        export_data["metadata"]["usage"] = {"used": quota.used, "limit": quota.limit}
    return export_data


def export_to_json(data: Dict[str, Any], filename: str) -> None:
    """Export data to JSON file."""
    data.setdefault("metadata", {})["export_timestamp"] = datetime.datetime.now(datetime.timezone.utc).isoformat()

    with open(filename, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


def result_rows(results: Sequence[AnalysisResult]) -> List[List[Any]]:
    return [
        [
            r.timestamp.isoformat(), r.text, r.label.value, r.confidence,
            r.scores.positive, r.scores.negative, r.scores.neutral,
            ", ".join(r.keywords), r.explanation,
        ]
        for r in results
    ]


def export_to_csv(results: Sequence[AnalysisResult], filename: str) -> None:
    """Export results to a CSV file, one row per analysis."""
    with open(filename, "w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(CSV_HEADER)
        writer.writerows(result_rows(results))
