"""Byline commands: clean candidates, check site-name redundancy and URLs."""

from __future__ import annotations

import argparse
import json
import sys
from collections import Counter
from pathlib import Path

from byline_normalizer.config import BYLINE_TELEMETRY_ENABLED
from byline_normalizer.telemetry.store import get_store
from byline_normalizer.utils.byline_cleaner import BylineCleaner
from byline_normalizer.utils.byline_telemetry import BylineCleaningTelemetry
from byline_normalizer.utils.logging_config import get_logger
from byline_normalizer.utils.redundancy import is_byline_redundant_with_site_name
from byline_normalizer.utils.url_utils import is_probable_url

logger = get_logger(__name__)


def add_clean_parser(subparsers) -> argparse.ArgumentParser:
    """Add byline cleaning command parser to CLI."""
    clean_parser = subparsers.add_parser(
        "clean",
        help="Clean byline candidates and report the outcome of each",
    )
    clean_parser.add_argument(
        "bylines",
        nargs="*",
        help="Raw byline strings (default: read blocks from --file or stdin)",
    )
    clean_parser.add_argument(
        "--file",
        type=Path,
        default=None,
        help="File of bylines separated by blank lines",
    )
    clean_parser.add_argument(
        "--json",
        action="store_true",
        help="Print one JSON object per byline",
    )
    clean_parser.add_argument(
        "--telemetry",
        action="store_true",
        default=BYLINE_TELEMETRY_ENABLED,
        help="Persist cleaning decisions to the telemetry database",
    )
    return clean_parser


def add_redundant_parser(subparsers) -> argparse.ArgumentParser:
    parser = subparsers.add_parser(
        "redundant",
        help="Check whether a byline is already credited in the site name",
    )
    parser.add_argument("byline")
    parser.add_argument("site_name")
    return parser


def add_check_url_parser(subparsers) -> argparse.ArgumentParser:
    parser = subparsers.add_parser(
        "check-url",
        help="Report whether each argument is a syntactically valid URL",
    )
    parser.add_argument("values", nargs="+")
    return parser


def split_blocks(raw: str) -> list[str]:
    """Split text into bylines on blank lines, keeping in-block newlines."""
    blocks: list[str] = []
    current: list[str] = []

    for line in raw.splitlines():
        if line.strip():
            current.append(line)
        elif current:
            blocks.append("\n".join(current))
            current = []

    if current:
        blocks.append("\n".join(current))
    return blocks


def _input_source(args) -> str:
    if args.bylines:
        return "arguments"
    if args.file is not None:
        return "file"
    return "stdin"


def _read_bylines(args) -> list[str] | None:
    if args.bylines:
        return list(args.bylines)

    if args.file is not None:
        try:
            raw = args.file.read_text(encoding="utf-8")
        except OSError as exc:
            print(f"Error: cannot read {args.file}: {exc}", file=sys.stderr)
            return None
        return split_blocks(raw)

    return split_blocks(sys.stdin.read())


def handle_clean_command(args) -> int:
    """Execute byline cleaning command logic."""
    bylines = _read_bylines(args)
    if bylines is None:
        return 1

    telemetry = None
    if getattr(args, "telemetry", False):
        telemetry = BylineCleaningTelemetry(store=get_store())

    cleaner = BylineCleaner(telemetry=telemetry)
    outcomes = cleaner.clean_bulk_bylines(bylines)

    for raw, outcome in zip(bylines, outcomes):
        if args.json:
            payload = {"input": raw, **outcome.to_dict()}
            print(json.dumps(payload, ensure_ascii=False))
        elif outcome.is_accepted:
            print(f"ACCEPTED\t{outcome.text!r}")
        else:
            print(f"{outcome.kind.name}\t{outcome.reason}\t{raw!r}")

    counts = Counter(outcome.kind.value for outcome in outcomes)
    logger.info(
        "bylines_cleaned",
        source=_input_source(args),
        total=len(outcomes),
        **counts,
    )

    if telemetry is not None:
        telemetry.flush()
        logger.info("telemetry_flushed", outcomes=telemetry.outcome_counts())

    return 0


def handle_redundant_command(args) -> int:
    redundant = is_byline_redundant_with_site_name(args.byline, args.site_name)
    print("true" if redundant else "false")
    return 0


def handle_check_url_command(args) -> int:
    for value in args.values:
        print(f"{value}\t{'true' if is_probable_url(value) else 'false'}")
    return 0
