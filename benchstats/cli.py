from __future__ import annotations

import argparse
import logging
import sys

import yaml

from benchstats.analysis.reports import (
    generate_json_report,
    generate_markdown_report,
    generate_text_report,
    summarize_samples,
)
from benchstats.infra.config import resolve_config
from benchstats.infra.io import load_samples
from benchstats.infra.logging import configure_logging


logger = logging.getLogger(__name__)

_REPORT_WRITERS = {
    "markdown": generate_markdown_report,
    "json": generate_json_report,
    "text": generate_text_report,
}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="benchstats")
    parser.add_argument("--log-level")
    subparsers = parser.add_subparsers(dest="command", required=True)

    summarize_parser = subparsers.add_parser("summarize")
    summarize_parser.add_argument("--samples", required=True)
    summarize_parser.add_argument("--config")
    summarize_parser.add_argument("--set", action="append", dest="overrides")
    summarize_parser.add_argument("--format", choices=sorted(_REPORT_WRITERS))

    config_parser = subparsers.add_parser("show-config")
    config_parser.add_argument("--config")
    config_parser.add_argument("--set", action="append", dest="overrides")
    return parser


def _summarize_command(args: argparse.Namespace) -> int:
    try:
        config = resolve_config(config_path=args.config, cli_overrides=args.overrides)
        sample_sets = load_samples(args.samples)
    except ValueError as exc:
        print(f"Summarize failed: {exc}")
        return 2

    histogram_cfg = config["histogram"]
    summaries = [
        summarize_samples(
            name,
            values,
            bins=histogram_cfg["bins"],
            count_thresh_frac=float(histogram_cfg["count_thresh_frac"]),
            percentiles=config["percentiles"],
        )
        for name, values in sample_sets.items()
    ]
    logger.info("summarized %d sample set(s) from %s", len(summaries), args.samples)

    report_format = args.format or config["report"]["format"]
    sys.stdout.write(_REPORT_WRITERS[report_format](summaries))
    return 0


def _show_config_command(args: argparse.Namespace) -> int:
    try:
        config = resolve_config(config_path=args.config, cli_overrides=args.overrides)
    except ValueError as exc:
        print(f"Config check failed: {exc}")
        return 2
    print(yaml.safe_dump(config, sort_keys=True), end="")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if args.command == "summarize":
        return _summarize_command(args)
    if args.command == "show-config":
        return _show_config_command(args)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
