from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from collections.abc import Sequence
from pathlib import Path

from ride_log_triage.core.config import AnalysisConfig, resolve_analysis_config
from ride_log_triage.core.log_service import analyze_log_file
from ride_log_triage.core.report import build_report, render_report, write_report_files

LOG_LEVEL_ENV = "RIDE_LOG_TRIAGE_LOG_LEVEL"


def _parse_list(s: str) -> tuple[str, ...]:
    return tuple(part.strip() for part in s.split(",") if part.strip())


def _non_negative(s: str) -> int:
    try:
        value = int(s)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"expected an integer, got {s!r}") from e
    if value < 0:
        raise argparse.ArgumentTypeError("value must be >= 0")
    return value


def configure_logging() -> None:
    level_name = os.getenv(LOG_LEVEL_ENV, "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_parser(defaults: AnalysisConfig | None = None) -> argparse.ArgumentParser:
    """Build the CLI parser; tunable flags default to ``defaults`` (env-resolved in main)."""
    defaults = defaults or AnalysisConfig()
    p = argparse.ArgumentParser(
        description="Diagnose connectivity problems in a cycling-app session log."
    )
    p.add_argument("log_path")
    p.add_argument(
        "--devices",
        type=_parse_list,
        default=(),
        help="Comma-separated device names (literal substrings). Default: auto-detect",
    )
    p.add_argument(
        "--exclude",
        type=_parse_list,
        default=(),
        help="Comma-separated names to drop from auto-detected devices",
    )
    p.add_argument("--output-dir", default=None, help="Write filtered/excluded/report files here")
    p.add_argument(
        "--seamless-threshold",
        type=_non_negative,
        default=defaults.seamless_threshold_sec,
        help=f"Max seconds for an imperceptible server reconnect (default: {defaults.seamless_threshold_sec})",
    )
    p.add_argument("--context-before", type=_non_negative, default=defaults.context_before)
    p.add_argument("--context-after", type=_non_negative, default=defaults.context_after)
    p.add_argument(
        "--proximity",
        type=_non_negative,
        default=defaults.problem_proximity_sec,
        help="Seconds around the first error in which seamless reconnects are reported",
    )
    p.add_argument("--max-error-len", type=_non_negative, default=defaults.max_error_detail_len)
    p.add_argument("--json", action="store_true", help="Print the JSON report instead of text")
    return p


def main(argv: Sequence[str] | None = None) -> None:
    configure_logging()
    try:
        defaults = resolve_analysis_config(None)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(2)
    args = build_parser(defaults).parse_args(argv)
    path = Path(args.log_path)

    config = AnalysisConfig(
        device_patterns=args.devices,
        exclude_patterns=args.exclude,
        seamless_threshold_sec=args.seamless_threshold,
        context_before=args.context_before,
        context_after=args.context_after,
        problem_proximity_sec=args.proximity,
        max_error_detail_len=args.max_error_len,
    )

    try:
        analysis = asyncio.run(analyze_log_file(path, config))
    except FileNotFoundError as e:
        print(str(e), file=sys.stderr)
        raise SystemExit(2)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(2)

    if args.json:
        print(build_report(analysis).model_dump_json(indent=2))
    else:
        print(render_report(analysis, title=f"Session connectivity report: {path.name}"), end="")

    if args.output_dir:
        written = write_report_files(analysis, args.output_dir, stem=path.stem)
        for role, p in written.items():
            print(f"Wrote {role}: {p}", file=sys.stderr)


if __name__ == "__main__":
    main()
