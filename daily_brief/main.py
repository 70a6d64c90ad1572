"""Daily brief entrypoint."""

from __future__ import annotations

import argparse
import re
from datetime import datetime
from typing import List, Optional, Sequence

from daily_brief.application.pipeline import ANALYSIS_LOOKBACK_DAYS, BriefPipeline
from daily_brief.application.reporting.rendering import console_summary
from daily_brief.config import load_settings
from daily_brief.errors import BriefConfigError
from daily_brief.infrastructure.report_exporter import save_daily_brief
from daily_brief.infrastructure.text_generator import AnthropicTextGenerator
from daily_brief.utils.logger import configure_logging, log

DEFAULT_ANALYSIS_DATE = "2024-03-15"
DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _is_valid_date(value: str) -> bool:
    if not DATE_PATTERN.match(value):
        return False
    try:
        datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        return False
    return True


def historical_days_notice(historical_days: int) -> Optional[str]:
    if historical_days == ANALYSIS_LOOKBACK_DAYS:
        return None
    return (
        f"HISTORICAL_DAYS={historical_days} is not used; "
        f"the previous period is always the {ANALYSIS_LOOKBACK_DAYS} days before the analysis date"
    )


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="daily-brief",
        description="Generate the daily marketing brief for one analysis date.",
    )
    parser.add_argument("date", nargs="?", default=None, help="analysis date (YYYY-MM-DD)")
    parser.add_argument("-d", "--date", dest="date_option", default=None, help="analysis date (YYYY-MM-DD)")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    args = parser.parse_args(argv)

    args.date = args.date_option or args.date or DEFAULT_ANALYSIS_DATE
    if not _is_valid_date(args.date):
        parser.error(f"Invalid date format: {args.date!r}. Please use YYYY-MM-DD format.")
    return args


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(verbose=args.verbose)

    try:
        settings = load_settings()
    except BriefConfigError as exc:
        log.error(f"Configuration error: {exc}")
        return 1

    configure_logging(verbose=args.verbose or settings.verbose, log_dir=settings.log_dir)
    log.info(f"Generating daily brief for {args.date}")
    notice = historical_days_notice(settings.historical_days)
    if notice:
        log.debug(notice)

    generator = AnthropicTextGenerator(
        api_key=settings.anthropic_api_key,
        model=settings.llm_model,
        max_tokens=settings.llm_max_tokens,
    )
    pipeline = BriefPipeline.from_settings(settings, text_generator=generator)
    state = pipeline.run(args.date, settings.data_dir)

    if state.error is not None or state.daily_brief is None:
        log.error(f"Failed to generate daily brief: {state.error}")
        return 1

    output_path = save_daily_brief(settings.output_dir, state.daily_brief)
    log.info(f"Daily brief saved to {output_path}")
    print(console_summary(state.daily_brief))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
