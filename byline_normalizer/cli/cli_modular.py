"""Command-line interface with modular command structure."""

from __future__ import annotations

import argparse
from collections.abc import Callable, Sequence

from byline_normalizer.config import LOG_LEVEL
from byline_normalizer.utils.logging_config import command_context, setup_logging

from .commands.bylines import (
    add_check_url_parser,
    add_clean_parser,
    add_redundant_parser,
    handle_check_url_command,
    handle_clean_command,
    handle_redundant_command,
)

SERVICE_NAME = "byline-normalizer"

CommandHandler = Callable[[argparse.Namespace], int]

COMMAND_HANDLERS: dict[str, CommandHandler] = {
    "clean": handle_clean_command,
    "redundant": handle_redundant_command,
    "check-url": handle_check_url_command,
}


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="byline-normalizer",
        description="Clean and classify article byline candidates",
    )

    parser.add_argument(
        "--log-level",
        default=LOG_LEVEL,
        help="Logging level (e.g. INFO, DEBUG)",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        help="Available commands",
        required=False,
    )

    add_clean_parser(subparsers)
    add_redundant_parser(subparsers)
    add_check_url_parser(subparsers)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    setup_logging(level=args.log_level, service_name=SERVICE_NAME)

    handler = COMMAND_HANDLERS[args.command]
    with command_context(args.command):
        return handler(args)
