"""Utility modules for MoodScope."""

from .data_prep import export_to_csv, export_to_json, prepare_export, summarize_results

__all__ = [
    "export_to_csv",
    "export_to_json",
    "prepare_export",
    "summarize_results",
]
