# ==============================================
# CLI — Command Line Entry Point
# ==============================================
#
# PURPOSE:
#   Provides the command-line interface to run a conversion.
#
# USAGE:
# ------
#   scripture-db
#   python -m scripture_db.cli --source-dir ./data --output-dir ./databases
#
#   All arguments are optional and override the environment / .env
#   configuration (SOURCE_DIR, OUTPUT_DIR, BATCH_SIZE, LOG_LEVEL).
#
# EXIT STATUS:
# ------------
#   0 → conversion complete
#   1 → no Bible JSON files found
#   2 → invalid arguments or configuration (usage message)
#
# ==============================================

import argparse
import logging
import sys
from dataclasses import replace
from typing import Optional, Sequence

from scripture_db.config import AppConfig, get_config
from scripture_db.converter import CorpusConverter, RunSummary
from scripture_db.discovery.source_finder import SourceFinder
from scripture_db.errors import NoSourcesFound
from scripture_db.targets.mappings import DEFAULT_TARGETS

logger = logging.getLogger("scripture_db")

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be positive, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scripture-db",
        description="Convert Bible and Catechism JSON files to SQLite databases with FTS5 search.",
    )
    parser.add_argument("--source-dir", help="directory holding the JSON corpora")
    parser.add_argument("--output-dir", help="directory the databases are written to")
    parser.add_argument("--batch-size", type=positive_int, help="records per write transaction")
    parser.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS, help="logging verbosity")
    return parser


def apply_overrides(config: AppConfig, args: argparse.Namespace) -> AppConfig:
    source = config.source
    output = config.output
    if args.source_dir:
        source = replace(source, source_dir=args.source_dir)
    if args.output_dir:
        output = replace(output, output_dir=args.output_dir)
    if args.batch_size is not None:
        output = replace(output, batch_size=args.batch_size)
    log_level = args.log_level or config.log_level
    return replace(config, source=source, output=output, log_level=log_level)


def configure_logging(level: str) -> None:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.handlers[:] = [handler]
    logger.setLevel(level)
    logger.propagate = False


def print_report(summary: RunSummary) -> None:
    print(f"\nDatabases ({len(summary.stores)}):")
    for name, path in summary.stores.items():
        result = summary.results[name]
        print(f"  - {path} ({result.items_written} records)")
    if summary.skipped_targets:
        print(f"\nSkipped: {', '.join(summary.skipped_targets)}")
    if summary.errors:
        print(f"\n✗ {len(summary.errors)} error(s):")
        for error in summary.errors:
            print(f"  - {error}")
    print("\nAll databases include:")
    print("  - FTS5 full-text search support")
    print("  - Metadata fields: identities, locations, cross_references")


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = apply_overrides(get_config(), args)
    except ValueError as e:
        parser.error(str(e))
    if config.log_level not in LOG_LEVELS:
        parser.error(f"invalid LOG_LEVEL: {config.log_level!r}")
    configure_logging(config.log_level)

    finder = SourceFinder.from_config(config.source)
    try:
        sources = finder.discover_sources()
    except NoSourcesFound as e:
        logger.error("✗ %s", e)
        return 1

    converter = CorpusConverter.from_config(config)
    summary = converter.run(sources, DEFAULT_TARGETS)
    print_report(summary)
    return 0


if __name__ == "__main__":
    sys.exit(main())
