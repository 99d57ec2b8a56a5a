"""Command-line entrypoint: parse an article body and print its HTML and summary."""
from __future__ import annotations

import argparse
import logging
import os
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from bodyparser.config.settings import (
    DEFAULT_SETTINGS_PATH,
    ENV_SETTINGS_PATH,
    AppSettings,
    SettingsError,
    load_settings,
    validate_summary,
)
from bodyparser.parser.body import MARKUP_HINT, BodyParser
from bodyparser.telemetry import configure_logging, configure_metrics_from_env

logger = logging.getLogger(__name__)

EXIT_USAGE = 2


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="bodyparser",
        description="Convert scraped article HTML (or plain text) into clean HTML and a summary",
    )
    p.add_argument("file", help="Input file, or '-' to read standard input")
    p.add_argument("--settings", type=Path, default=None, help="YAML settings file")
    p.add_argument("--min-length", type=int, default=None, help="Summary length that ends collection")
    p.add_argument("--max-length", type=int, default=None, help="Hard upper bound on summary length")
    output = p.add_mutually_exclusive_group()
    output.add_argument("--body-only", action="store_true", help="Only print the body HTML")
    output.add_argument("--summary-only", action="store_true", help="Only print the summary")
    p.add_argument("--debug", action="store_true", help="Log every parsed element")
    return p


def _resolve_settings(path: Optional[Path]) -> AppSettings:
    if path is None and not os.environ.get(ENV_SETTINGS_PATH) and not DEFAULT_SETTINGS_PATH.exists():
        return AppSettings()
    return load_settings(path)


def _read_input(name: str) -> str:
    if name == "-":
        return sys.stdin.read()
    return Path(name).read_text(encoding="utf-8")


def main(argv: Optional[List[str]] = None) -> int:
    ns = build_arg_parser().parse_args(argv)
    configure_logging(level="DEBUG" if ns.debug else None)
    configure_metrics_from_env()

    try:
        settings = _resolve_settings(ns.settings)
        summary = settings.summary
        if ns.min_length is not None or ns.max_length is not None:
            summary = validate_summary(
                replace(
                    summary,
                    min_length=summary.min_length if ns.min_length is None else ns.min_length,
                    max_length=summary.max_length if ns.max_length is None else ns.max_length,
                )
            )
    except SettingsError as exc:
        print(f"bodyparser: {exc}", file=sys.stderr)
        return EXIT_USAGE

    try:
        text = _read_input(ns.file)
    except OSError as exc:
        print(f"bodyparser: cannot read {ns.file}: {exc}", file=sys.stderr)
        return EXIT_USAGE
    if not text.strip():
        print(f"bodyparser: {ns.file} is empty", file=sys.stderr)
        return EXIT_USAGE

    debug = ns.debug or settings.debug
    parser = BodyParser(excludes=settings.excludes, filters=settings.filters, debug=debug)
    try:
        if MARKUP_HINT in text:
            parser.parse_html(text)
        else:
            parser.parse_text(text)
    except ValueError as exc:
        print(f"bodyparser: {exc}", file=sys.stderr)
        return EXIT_USAGE

    logger.info(
        "Parsed %s into %d elements",
        ns.file,
        parser.num_elements,
        extra={"event": "cli.parsed", "elements": parser.num_elements, "converted": parser.converted},
    )

    if not ns.summary_only:
        print(parser.format_body())
    if not ns.body_only:
        if not ns.summary_only:
            print()
        print(parser.format_summary_for(summary))
    return 0


if __name__ == "__main__":
    sys.exit(main())
