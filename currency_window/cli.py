"""Command line entry point."""

import argparse
import logging
import sys

from currency_window.config import Settings
from currency_window.errors import RateReportError
from currency_window.pipeline import RateWindowCollector
from currency_window.ui import render_report


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Min/max/average of CBR exchange rates over a rolling window"
    )
    parser.add_argument(
        "--days",
        type=int,
        help="Lookback period in days (default: CBR_PERIOD_DAYS or 90)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        help="Concurrent requests (default: CBR_MAX_WORKERS or 4)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Abort on the first failed day instead of skipping it",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Debug logging, including HTTP requests",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the window report."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    if not args.verbose:
        logging.getLogger("httpx").setLevel(logging.WARNING)

    try:
        settings = Settings()
        if args.days is not None:
            settings.period_days = args.days
        if args.workers is not None:
            settings.max_workers = args.workers
        if args.strict:
            settings.strict = True
        settings.validate()
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)

    collector = RateWindowCollector(settings)
    try:
        with collector.fetcher:
            report = collector.collect()
    except RateReportError as e:
        logger.error(f"Run aborted: {e}")
        sys.exit(1)

    print(render_report(report))


if __name__ == "__main__":
    main()
