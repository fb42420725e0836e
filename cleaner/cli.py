#!/usr/bin/env python3
"""
clean-files - tidy and merge file catalogs.

Usage:
    clean-files ./X ./Y1 ./Y2 --catalog ./X --duplicates --empty --copy --default
    clean-files ./Y1 --move                     # interactive conflicts on /dev/tty
    clean-files ./Y1 --tricky --config my.yaml  # custom tricky characters

Operations always run in this order, whatever the order of the flags:
duplicates, empty, temporary, same-name, access, tricky, move, copy, rename.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

import structlog

from cleaner.config.cleanup_config import Operation, RunSettings, load_cleanup_config
from cleaner.config.exceptions import (
    CleanerError,
    ConfigError,
    InvalidResponseError,
    UsageError,
)
from cleaner.config.logging import configure_logging
from cleaner.core.prompts import build_provider
from cleaner.operations import run_operations

logger = structlog.get_logger(__name__)

PROG = "clean-files"

EPILOG = f"""\
Example:
    {PROG} ./X ./Y1 ./Y2 ./Y3 --catalog ./X --duplicates --empty --temporary \\
        --same-name --access --copy --tricky --default
"""

# (short flag, long flag, operation, help)
OPERATION_FLAGS = (
    ("-d", "--duplicates", Operation.duplicates, "Remove duplicate files (files with same content)"),
    ("-e", "--empty", Operation.empty, "Remove empty files"),
    ("-t", "--temporary", Operation.temporary, "Remove temporary files"),
    ("-s", "--same-name", Operation.same_name, "Remove older files with same names"),
    ("-a", "--access", Operation.access, "Change access permissions to default"),
    ("-k", "--tricky", Operation.tricky, "Replace tricky letters in filenames with default"),
    ("-m", "--move", Operation.move, "Move files to the destination catalog"),
    ("-c", "--copy", Operation.copy, "Copy files to the destination catalog"),
    ("-r", "--rename", Operation.rename, "Rename files interactively"),
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        usage=f"{PROG} [CATALOGS_PATHS]... [OPTIONS]...",
        description="Scan catalogs and clean up or merge the files they contain.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("catalogs", nargs="*", metavar="CATALOG", help="Input catalogs")
    parser.add_argument(
        "-x",
        "--catalog",
        dest="destination",
        default="./X",
        metavar="PATH",
        help="Destination catalog path (default: ./X)",
    )
    parser.add_argument(
        "--default",
        dest="automatic",
        action="store_true",
        help="Use default decisions, never prompt",
    )
    parser.add_argument(
        "--config",
        metavar="PATH",
        help="Configuration file (default: ./.clean_files.yaml if present)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging on stderr")

    for short, long, operation, help_text in OPERATION_FLAGS:
        parser.add_argument(
            short,
            long,
            dest="operations",
            action="append_const",
            const=operation,
            help=help_text,
        )

    return parser


def wrong_usage(message: Optional[str] = None) -> int:
    if message:
        print(f"{PROG}: {message}", file=sys.stderr)
    print(f"{PROG}: wrong usage", file=sys.stderr)
    print(f"Try '{PROG} --help' for more information.", file=sys.stderr)
    return 1


def parse_settings(argv: Optional[Sequence[str]] = None) -> RunSettings:
    """
    Parse the command line and load the configuration file.

    Raises:
        SystemExit: --help (code 0), unknown option (code 2)
        UsageError: No catalog given
        ConfigError: Configuration file missing or invalid
    """
    parser = build_parser()
    args = parser.parse_intermixed_args(argv)

    if args.verbose:
        configure_logging(level="DEBUG")

    if not args.catalogs:
        raise UsageError("no catalog given")

    config = load_cleanup_config(args.config)

    return RunSettings(
        catalogs=[Path(c) for c in args.catalogs],
        destination=Path(args.destination),
        automatic=args.automatic,
        operations=set(args.operations or ()),
        config=config,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    configure_logging()

    if argv is None:
        argv = sys.argv[1:]
    if not argv:
        return wrong_usage()

    try:
        settings = parse_settings(argv)
    except UsageError as e:
        return wrong_usage(str(e))
    except ConfigError as e:
        print(f"{PROG}: {e}", file=sys.stderr)
        return 1

    provider = build_provider(settings.automatic)
    logger.info(
        "run_started",
        catalogs=[str(c) for c in settings.catalogs],
        destination=str(settings.destination),
        automatic=settings.automatic,
        operations=[op.value for op in settings.ordered_operations()],
    )

    try:
        run_operations(settings, provider)
    except InvalidResponseError as e:
        return wrong_usage(str(e))
    except CleanerError as e:
        print(f"{PROG}: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print(f"\n{PROG}: interrupted", file=sys.stderr)
        return 130
    finally:
        provider.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
