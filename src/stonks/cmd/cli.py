"""
Compute the effective cost basis of positions from a TD Ameritrade transaction
export, folding the P/L of options into their underlying stock.

This module acts as the CLI orchestrator, delegating to:
- Configuration: stonks.config
- Parsing/Model: stonks.model
- Grouping, relationships, cost basis, statistics: stonks.reporting
- Output writing: stonks.reporting.report_sink

Usage
-----
    # Read the file named in config.json (or transactions.csv)
    python -m stonks.cmd.cli

    # Explicit input, JSON output
    python -m stonks.cmd.cli --format json --output out.json /path/to/transactions.csv

Config file schema:
    {"transactionsFile": "transactions.csv"}
"""

from __future__ import annotations

import argparse
import logging
from decimal import ROUND_HALF_UP, getcontext
from pathlib import Path

from stonks.config import DEFAULT_CONFIG_FILE, Config, default_config, load_config
from stonks.errors import ConfigLoadError, FileAccessError
from stonks.logging import configure_logging
from stonks.model import TdaTransactionCsvParser
from stonks.reporting import (
    ConsoleReportSink,
    ExcelReportSink,
    JsonReportSink,
    ReportSink,
    build_report,
)

# Monetary precision and rounding
getcontext().prec = 28
getcontext().rounding = ROUND_HALF_UP

DEFAULT_XLSX_OUTPUT = "cost_basis.xlsx"

logger = logging.getLogger(__name__)


def resolve_config(args: argparse.Namespace) -> Config:
    try:
        config = load_config(args.config)
    except ConfigLoadError as e:
        logger.warning("%s", e)
        logger.warning("Using default configuration")
        config = default_config()

    if args.input:
        config = Config(transactions_file=args.input)
    return config


def make_sink(args: argparse.Namespace) -> ReportSink:
    if args.format == "console":
        return ConsoleReportSink()
    if args.format == "json":
        return JsonReportSink(out_path=Path(args.output) if args.output else None)
    if args.format == "xlsx":
        return ExcelReportSink(out_path=Path(args.output or DEFAULT_XLSX_OUTPUT))
    raise ValueError(f"Unknown output format: {args.format}")


def process_file(args: argparse.Namespace) -> None:
    config = resolve_config(args)
    logger.info("Reading %s", config.transactions_file)

    parser = TdaTransactionCsvParser()
    trades, report = parser.parse_file(config.transactions_file)
    report.log_with(logger)
    logger.info(
        "Parsed %d trades (%d rows dropped)", len(trades), report.dropped_rows
    )

    result = build_report(trades)

    out_path = make_sink(args).write(result)
    if out_path is not None:
        logger.info("Wrote %s report to %s", args.format, out_path)


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        description=(
            "Effective cost basis of positions from a TD Ameritrade transactions CSV"
        )
    )
    p.add_argument(
        "input",
        type=str,
        nargs="?",
        default=None,
        help="Transactions CSV path (overrides transactionsFile from the config)",
    )
    p.add_argument(
        "--config",
        type=str,
        default=DEFAULT_CONFIG_FILE,
        help="JSON config file; defaults apply if it is missing or invalid",
    )
    p.add_argument(
        "--format",
        type=str,
        default="console",
        choices=["console", "json", "xlsx"],
        help="Output format",
    )
    p.add_argument(
        "--output",
        type=str,
        default=None,
        help=(
            "Output filename for json/xlsx. JSON goes to stdout if omitted; "
            f"xlsx defaults to {DEFAULT_XLSX_OUTPUT}"
        ),
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity: -v (INFO), -vv (DEBUG)",
    )
    return p


def main(argv: list[str] | None = None) -> None:
    parser = build_argparser()
    args = parser.parse_args(argv)

    verbosity_map = {
        0: logging.WARNING,
        1: logging.INFO,
        2: logging.DEBUG,
    }
    level = verbosity_map.get(min(args.verbose, 2), logging.WARNING)
    configure_logging(level=level)

    try:
        process_file(args)
    except FileAccessError as e:
        logger.error("Error loading transactions: %s", e)
        raise SystemExit(1) from e


if __name__ == "__main__":
    main()
