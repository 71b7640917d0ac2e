"""CLI entry point for Violeta."""

import argparse
import asyncio
import sys

from pydantic import ValidationError

from violeta.config import Settings
from violeta.core.exceptions import ConfigurationError
from violeta.core.logging import get_logger, setup_logging
from violeta.processing.scanner import run_scan

logger = get_logger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Violeta - scan market news and rank trade setups"
    )
    parser.add_argument(
        "--strategy",
        choices=["discovery", "watchlist"],
        help="Ticker source (overrides SCAN_STRATEGY)",
    )
    parser.add_argument(
        "--watchlist",
        help="Comma-separated symbols for the watchlist strategy (overrides WATCHLIST)",
    )
    parser.add_argument("--max-tickers", type=int, help="Max tickers to analyze")
    parser.add_argument(
        "--min-conviction", type=int, help="Minimum conviction for a TRADE plan (1-10)"
    )
    parser.add_argument(
        "--no-delay",
        action="store_true",
        help="Disable pacing between provider calls (paid API tiers only)",
    )
    args = parser.parse_args(argv)

    overrides: dict[str, object] = {}
    if args.strategy:
        overrides["scan_strategy"] = args.strategy
    if args.watchlist:
        overrides["watchlist"] = args.watchlist
    if args.max_tickers is not None:
        overrides["max_tickers"] = args.max_tickers
    if args.min_conviction is not None:
        overrides["min_conviction"] = args.min_conviction
    if args.no_delay:
        overrides["ticker_delay_seconds"] = 0.0
        overrides["query_delay_seconds"] = 0.0

    try:
        settings = Settings(**overrides)  # type: ignore[arg-type]
    except ValidationError as e:
        print(f"Invalid configuration:\n{e}", file=sys.stderr)
        return 2

    setup_logging(settings)

    try:
        result = asyncio.run(run_scan(settings))
    except ConfigurationError as e:
        print(f"Configuration error: {e.message}", file=sys.stderr)
        return 2

    logger.info(
        "Scan written",
        signals=len(result.signals),
        trades=len(result.trades),
    )
    # stdout carries only the JSON document
    print(result.model_dump_json(indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
