#!/usr/bin/env python3
"""
Command-line interface for the THPT ranking estimator.

Usage:
    thpt-ranking init                                   # Apply database migrations
    thpt-ranking years                                  # List available years
    thpt-ranking combinations                           # List combinations
    thpt-ranking estimate -e 2024:A00:8.5 -e 2023:D01:7,25
    thpt-ranking normalize "7,5"                        # Show how a score box reads input
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Any

from dotenv import load_dotenv

from .core.config import configure_logging

logger = logging.getLogger("thpt_ranking.cli")


def parse_entry(text: str) -> dict[str, Any]:
    """
    Parse ``YEAR:COMBINATION:SCORE`` into a raw form entry.

    The score goes through the same normalization as the score box, so
    ``7,5`` becomes 7.5 and ``15`` stays a partial string until validation.
    """
    from .form import normalize_score_input

    parts = text.split(":", 2)
    while len(parts) < 3:
        parts.append("")
    year_text, combination, score_text = (part.strip() for part in parts)

    year: Any = int(year_text) if year_text.isdigit() else (year_text or None)
    return {
        "year": year,
        "combination": combination or None,
        "score": normalize_score_input(score_text),
    }


async def _with_provider(func):
    from .pg_async import close_async_db, get_async_db
    from .queries import LookupProvider

    db = await get_async_db()
    try:
        return await func(LookupProvider(db))
    finally:
        await close_async_db()


def cmd_init(args: argparse.Namespace) -> int:
    """Apply database migrations."""
    from .pg_async import close_async_db, get_async_db
    from .schema import run_migrations

    async def run() -> int:
        db = await get_async_db()
        try:
            return await run_migrations(db, force=args.force)
        finally:
            await close_async_db()

    try:
        applied = asyncio.run(run())
    except Exception as e:
        logger.error("Failed to initialize database: %s", e)
        return 1

    logger.info("Database initialized (%d migration(s) applied)", applied)
    return 0


def cmd_years(args: argparse.Namespace) -> int:
    """List distinct years, newest first."""
    try:
        years = asyncio.run(_with_provider(lambda provider: provider.get_unique_years()))
    except Exception as e:
        logger.error("Failed to load years: %s", e)
        return 1

    for option in years:
        print(option.label)
    return 0


def cmd_combinations(args: argparse.Namespace) -> int:
    """List distinct combinations."""
    try:
        combinations = asyncio.run(
            _with_provider(lambda provider: provider.get_unique_combinations())
        )
    except Exception as e:
        logger.error("Failed to load combinations: %s", e)
        return 1

    for option in combinations:
        print(option.label)
    return 0


def cmd_estimate(args: argparse.Namespace) -> int:
    """Estimate rankings for one or more entries."""
    from .form import EmptyBatchError, SubmissionError, complete_entries, validate_submission
    from .services.ranking import RankingService

    payload = {"entries": [parse_entry(text) for text in args.entry or []]}

    try:
        entries = validate_submission(payload)
        complete_entries(entries)
    except SubmissionError as e:
        print("Validation Error", file=sys.stderr)
        print(e.description, file=sys.stderr)
        return 1
    except EmptyBatchError as e:
        print(e.message, file=sys.stderr)
        return 1

    try:
        batch = asyncio.run(
            _with_provider(lambda provider: RankingService(provider).resolve(entries))
        )
    except Exception as e:
        logger.error("Failed to estimate rankings: %s", e)
        return 1

    if args.json:
        print(json.dumps(batch.model_dump(), indent=2, default=str))
        return 0

    if not batch.results:
        print("No results")
        return 0

    for year, results in batch.by_year.items():
        print(f"\n{year}")
        print("=" * 40)
        for result in results:
            print(f"  {result.combination:<8} {result.score:>6.2f}  ->  {result.percentage:,.2f}")

    return 0


def cmd_normalize(args: argparse.Namespace) -> int:
    """Show the field value a sequence of keystrokes produces."""
    from .form import display_score, normalize_score_input

    value = None
    for raw in args.raw:
        value = normalize_score_input(raw, current=value)
        print(f"{raw!r:>12} -> {value!r:<10} (shown as {display_score(value)!r})")
    return 0


def main() -> int:
    """Main entry point."""
    load_dotenv()
    configure_logging()

    parser = argparse.ArgumentParser(
        description="THPT ranking estimator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    init_parser = subparsers.add_parser("init", help="Apply database migrations")
    init_parser.add_argument("--force", action="store_true", help="Re-apply every migration")

    subparsers.add_parser("years", help="List available years")
    subparsers.add_parser("combinations", help="List available combinations")

    estimate_parser = subparsers.add_parser("estimate", help="Estimate rankings")
    estimate_parser.add_argument(
        "-e",
        "--entry",
        action="append",
        metavar="YEAR:COMBINATION:SCORE",
        help="Entry to estimate (repeatable)",
    )
    estimate_parser.add_argument("--json", action="store_true", help="Print JSON output")

    normalize_parser = subparsers.add_parser(
        "normalize", help="Replay score box input, one argument per keystroke state"
    )
    normalize_parser.add_argument("raw", nargs="+", help="Box contents after each edit")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 0

    commands = {
        "init": cmd_init,
        "years": cmd_years,
        "combinations": cmd_combinations,
        "estimate": cmd_estimate,
        "normalize": cmd_normalize,
    }

    cmd_func = commands.get(args.command)
    if cmd_func:
        return cmd_func(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
