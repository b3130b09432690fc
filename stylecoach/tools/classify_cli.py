#!/usr/bin/env python
"""
Headless command line front end for stylecoach.

Usage:
    python -m stylecoach classify conversation.json
    python -m stylecoach classify chat-export.md --subject alice --engagement
    python -m stylecoach report profiles.json --days 30
    python -m stylecoach lexicon --lexicon-version v1

Exit codes:
    0: success
    1: invalid input, configuration or lexicon
    2: not enough style signal to classify
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections import defaultdict
from dataclasses import replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from stylecoach.common.errors import InsufficientDataError, MalformedConversationError, StyleCoachError
from stylecoach.common.lexicon import load_lexicon
from stylecoach.common.typed_config import ClassifierConfig, load_config_file
from stylecoach.core.analysis.engagement import analyze_engagement
from stylecoach.core.analysis.models import Message, StyleProfile, parse_timestamp
from stylecoach.core.analysis.recommendations import generate_style_insights
from stylecoach.core.analysis.user_aggregate import ReportWindow, report
from stylecoach.core.classifier import StyleClassifier
from stylecoach.core.transcript import parse_transcript, user_messages

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INSUFFICIENT_DATA = 2

TRANSCRIPT_SUFFIXES = (".md", ".markdown", ".txt")


# ---------------------------------------------------------------------------
# Input loading
# ---------------------------------------------------------------------------


def _read_records(path: Path) -> list[Any]:
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".jsonl":
        return [json.loads(line) for line in text.splitlines() if line.strip()]
    data = json.loads(text)
    if isinstance(data, dict) and "messages" in data:
        data = data["messages"]
    if not isinstance(data, list):
        raise MalformedConversationError(f"{path.name}: expected a list of message records")
    return data


def load_messages(path: Path, subject_id: str | None = None) -> list[Message]:
    """Load the user message stream from a JSON, JSONL or transcript file.

    Raises:
        MalformedConversationError: If a record is invalid.
        OSError: If the file cannot be read.
        ValueError: If a JSON file cannot be decoded.
    """
    if path.suffix.lower() in TRANSCRIPT_SUFFIXES:
        started_at = datetime.fromtimestamp(path.stat().st_mtime, tz=timezone.utc).replace(microsecond=0)
        messages = parse_transcript(
            path.read_text(encoding="utf-8"),
            subject_id=subject_id or path.stem,
            conversation_id=path.stem,
            started_at=started_at,
        )
    else:
        messages = [Message.from_dict(record) for record in _read_records(path)]
    return user_messages(messages)


def load_profiles(path: Path) -> list[StyleProfile]:
    """Load StyleProfile records (a list, or a single profile object)."""
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("profiles", [data])
    if not isinstance(data, list):
        raise MalformedConversationError(f"{path.name}: expected a list of profile records")
    return [StyleProfile.from_dict(record) for record in data]


def _dump(payload: Any) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False))


# ---------------------------------------------------------------------------
# Subcommands
# ---------------------------------------------------------------------------


def cmd_classify(args: argparse.Namespace) -> int:
    config = load_config_file(args.config) if args.config else ClassifierConfig()
    if args.lexicon_version:
        config = replace(config, lexicon_version=args.lexicon_version)

    classifier = StyleClassifier(config)
    messages = load_messages(Path(args.input), subject_id=args.subject)
    profile = classifier.classify(messages, subject_id=args.subject)

    payload = profile.to_dict()
    payload["insights"] = generate_style_insights(profile, classifier.lexicon)
    if args.engagement:
        payload["engagement"] = analyze_engagement(messages, classifier.lexicon).to_dict()
    _dump(payload)
    return EXIT_OK


def cmd_report(args: argparse.Namespace) -> int:
    profiles = load_profiles(Path(args.profiles))
    end = parse_timestamp(args.end) if args.end else None
    if args.days is not None:
        window = ReportWindow.trailing(args.days, end)
    else:
        window = ReportWindow(end=end)

    by_subject: dict[str, list[StyleProfile]] = defaultdict(list)
    for profile in profiles:
        by_subject[profile.subject_id].append(profile)
    if args.subject:
        by_subject = {args.subject: by_subject.get(args.subject, [])}

    summaries = [report(subject, subject_profiles, window).to_dict() for subject, subject_profiles in by_subject.items()]
    _dump(summaries[0] if args.subject else summaries)
    return EXIT_OK


def cmd_lexicon(args: argparse.Namespace) -> int:
    lexicon = load_lexicon(args.lexicon_version)
    print(f"Lexicon {lexicon.version}: {lexicon.description}")
    for definition in lexicon.category_definitions:
        print(f"  {definition.id:<24} {len(definition.rules):>3} rules  {lexicon.label_for(definition.id)}")
    print(f"  {'(signals)':<24} {len(lexicon.signals):>3} rules")
    return EXIT_OK


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stylecoach",
        description="Classify developer interaction styles and generate coaching guidance",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Classify a JSON list of message records
    stylecoach classify conversation.json

    # Classify a markdown chat export with engagement metrics
    stylecoach classify chat-export.md --subject alice --engagement

    # Summarize the last 30 days of stored profiles
    stylecoach report profiles.json --days 30
""",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    classify_parser = subparsers.add_parser("classify", help="Classify one subject's messages")
    classify_parser.add_argument("input", help="JSON/JSONL message records or a .md/.txt transcript")
    classify_parser.add_argument("--subject", default=None, help="Expected subject id")
    classify_parser.add_argument("--config", default=None, help="JSON config file with a 'classifier' section")
    classify_parser.add_argument("--lexicon-version", default=None, help="Lexicon version (overrides config)")
    classify_parser.add_argument("--engagement", action="store_true", help="Include engagement metrics")
    classify_parser.set_defaults(func=cmd_classify)

    report_parser = subparsers.add_parser("report", help="Summarize stored profiles per developer")
    report_parser.add_argument("profiles", help="JSON file with a list of profile records")
    report_parser.add_argument("--subject", default=None, help="Only report this subject")
    report_parser.add_argument("--days", type=float, default=None, help="Trailing window length in days")
    report_parser.add_argument("--end", default=None, help="Window end (ISO-8601, default: now)")
    report_parser.set_defaults(func=cmd_report)

    lexicon_parser = subparsers.add_parser("lexicon", help="Show lexicon categories and rule counts")
    lexicon_parser.add_argument("--lexicon-version", default=None, help="Lexicon version")
    lexicon_parser.set_defaults(func=cmd_lexicon)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        return args.func(args)
    except InsufficientDataError as e:
        print(f"Insufficient data: {e.user_message}", file=sys.stderr)
        return EXIT_INSUFFICIENT_DATA
    except StyleCoachError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
