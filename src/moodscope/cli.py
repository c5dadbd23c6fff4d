"""Command-line interface for MoodScope."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List

from .core.config import settings
from .core.errors import MoodScopeError
from .core.models import AdvancedAnalysis, AnalysisResult, ComparativeResult, MoodEnhancement
from .services.orchestrator import AnalysisOrchestrator, build_orchestrator
from .utils.data_prep import export_to_csv, export_to_json, prepare_export

logger = logging.getLogger(__name__)


def setup_logging():
    """Setup logging configuration."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def print_result(result: AnalysisResult):
    print(f"Sentiment: {result.label.value} ({result.confidence:.0%} confidence, via {result.provenance.value})")
    scores = ", ".join(f"{k} {v:.2f}" for k, v in result.scores.as_dict().items())
    print(f"Scores: {scores}")
    if result.keywords:
        print(f"Keywords: {', '.join(result.keywords)}")
    print(f"Explanation: {result.explanation}")
    for s in result.sentence_breakdown:
        print(f"  [{s.label.value} {s.score:.2f}] {s.sentence}")


def print_advanced(analysis: AdvancedAnalysis):
    print(f"\nDeeper analysis: {analysis.summary}")
    for emotion in analysis.emotions:
        print(f"  {emotion.name}: {emotion.score:.0%}")
    if analysis.tones:
        print(f"Tones: {', '.join(analysis.tones)}")
    for entity in analysis.entities:
        print(f"  {entity.text} ({entity.type.value})")


def print_mood(mood: MoodEnhancement):
    print(f"\nQuote: {mood.quote}")
    print(f"Playlist: {mood.playlist.name} - {mood.playlist.url}")


def print_comparison(result: ComparativeResult):
    print(f"Summary: {result.summary}")
    for key, side in result.per_text.items():
        print(f"Text {key}: {side.label.value} ({side.confidence:.0%} confidence)")
    print(f"Shared keywords: {', '.join(result.shared_keywords) or '-'}")
    for key, words in result.unique_keywords.items():
        print(f"Unique to {key}: {', '.join(words) or '-'}")
    print(f"Emotional contrast: {result.emotional_contrast}")


def write_output(orchestrator: AnalysisOrchestrator, results: List[AnalysisResult], out: str, fmt: str):
    if fmt == "csv":
        export_to_csv(results, out)
    else:
        export_to_json(prepare_export(results, orchestrator.quota_state), out)
    print(f"Results exported to {out}")


def cmd_analyze(orchestrator: AnalysisOrchestrator, args):
    """Analyze command."""
    if args.mood:
        result, mood = orchestrator.analyze_with_mood(args.text)
    else:
        result, mood = orchestrator.analyze(args.text), None
    print_result(result)
    if mood:
        print_mood(mood)
    if args.deeper:
        print_advanced(orchestrator.deeper_analysis(result))
    if args.out:
        write_output(orchestrator, [result], args.out, args.format)


def read_texts(args) -> List[str]:
    texts = list(args.texts or [])
    if args.file:
        lines = Path(args.file).read_text(encoding="utf-8").splitlines()
        texts.extend(line.strip() for line in lines if line.strip())
    return texts


def cmd_batch(orchestrator: AnalysisOrchestrator, args):
    """Batch command."""
    texts = read_texts(args)
    print(f"Analyzing {len(texts)} text(s)...")
    results = orchestrator.analyze_batch(texts)
    for i, result in enumerate(results, 1):
        print(f"\n[{i}] {result.text[:80]}")
        print_result(result)
    if args.out:
        write_output(orchestrator, results, args.out, args.format)


def cmd_compare(orchestrator: AnalysisOrchestrator, args):
    """Compare command."""
    print_comparison(orchestrator.compare(args.text_a, args.text_b))


def cmd_deeper(orchestrator: AnalysisOrchestrator, args):
    """Deeper analysis command."""
    print_advanced(orchestrator.deeper_analysis(args.text))


COMMANDS = {
    "analyze": cmd_analyze,
    "batch": cmd_batch,
    "compare": cmd_compare,
    "deeper": cmd_deeper,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="MoodScope - Sentiment Analysis")
    parser.add_argument('--offline', action='store_true', help='Skip the remote backend and use the local classifier')
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Analyze command
    analyze_parser = subparsers.add_parser('analyze', help='Analyze a single text')
    analyze_parser.add_argument('text', help='Text to analyze')
    analyze_parser.add_argument('--mood', action='store_true', help='Suggest a quote and playlist for the mood')
    analyze_parser.add_argument('--deeper', action='store_true', help='Also extract emotions, tones and entities')
    analyze_parser.add_argument('--out', help='Output file')
    analyze_parser.add_argument('--format', choices=['json', 'csv'], default='json', help='Output file format')

    # Batch command
    batch_parser = subparsers.add_parser('batch', help=f'Analyze up to {settings.max_batch_size} texts')
    batch_parser.add_argument('texts', nargs='*', help='Texts to analyze')
    batch_parser.add_argument('--file', help='File with one text per line')
    batch_parser.add_argument('--out', help='Output file')
    batch_parser.add_argument('--format', choices=['json', 'csv'], default='json', help='Output file format')

    # Compare command
    compare_parser = subparsers.add_parser('compare', help='Compare the sentiment of two texts')
    compare_parser.add_argument('text_a', help='First text')
    compare_parser.add_argument('text_b', help='Second text')

    # Deeper analysis command
    deeper_parser = subparsers.add_parser('deeper', help='Extract emotions, tones and entities')
    deeper_parser.add_argument('text', help='Text to analyze')

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    setup_logging()

    try:
        orchestrator = build_orchestrator(offline=args.offline)
        COMMANDS[args.command](orchestrator, args)
    except MoodScopeError as e:
        print(str(e), file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Could not read input: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nOperation cancelled by user")
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
