"""
Beth Yw? command line: import Welsh statistics and print a report.

Usage:
    python -m scripts.cli [--dir DIR] [-d DATASETS] [-a AREAS] [-m MEASURES]
                          [-y YEARS] [-j] [--log-level LEVEL]

Examples:
    # Every dataset, every area, as tables
    python -m scripts.cli

    # Population density for two authorities over a decade, as JSON
    python -m scripts.cli -d popden -a W06000011,W06000010 -y 2000-2010 -j

Diagnostics are written to stderr as JSON lines; the report goes to stdout.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence, TextIO
from uuid import uuid4

from bethyw_config import get_catalog
from bethyw_ingestion.services import ImportService
from bethyw_kernel.domain.areas import AreaStore
from bethyw_kernel.exceptions import DatasetNotFoundError
from bethyw_kernel.logging_config import LogContext, configure_logging, get_logger
from scripts.cli.args import (
    parse_areas_arg,
    parse_datasets_arg,
    parse_measures_arg,
    parse_years_arg,
)

logger = get_logger("cli")

DEFAULT_DIR = "datasets"
EXIT_OK = 0
EXIT_USAGE = 2

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bethyw",
        description="Import Welsh statistics datasets and report them by area.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--dir",
        default=DEFAULT_DIR,
        help=f"Directory holding the dataset files (default: {DEFAULT_DIR}).",
    )
    parser.add_argument(
        "-d",
        "--datasets",
        action="append",
        help="Comma-separated dataset codes, or 'all' (default: all).",
    )
    parser.add_argument(
        "-a",
        "--areas",
        action="append",
        help="Comma-separated area codes or name fragments, or 'all'.",
    )
    parser.add_argument(
        "-m",
        "--measures",
        action="append",
        help="Comma-separated measure codes, or 'all'.",
    )
    parser.add_argument(
        "-y",
        "--years",
        default=None,
        help="Year or range: 0, 0-0, YYYY or YYYY-ZZZZ (default: all years).",
    )
    parser.add_argument(
        "-j",
        "--json",
        action="store_true",
        help="Print the report as JSON instead of tables.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=_LOG_LEVELS,
        type=str.upper,
        help="Diagnostic log level on stderr (default: WARNING).",
    )
    return parser


def run(
    argv: Sequence[str] | None = None,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> int:
    out = stdout or sys.stdout
    err = stderr or sys.stderr

    args = build_parser().parse_args(argv)
    configure_logging(level=getattr(logging, args.log_level), stream=err)

    catalog = get_catalog()
    try:
        datasets = parse_datasets_arg(args.datasets, catalog)
        years = parse_years_arg(args.years)
    except (DatasetNotFoundError, ValueError) as exc:
        print(str(exc), file=err)
        return EXIT_USAGE
    areas = parse_areas_arg(args.areas)
    measures = parse_measures_arg(args.measures)

    store = AreaStore()
    service = ImportService(catalog)
    with LogContext.bind(run_id=uuid4().hex):
        logger.info(
            "run_started",
            extra={"dir": args.dir, "datasets": [d.code for d in datasets]},
        )
        report = service.load_areas(store, args.dir, area_filter=areas)
        report = report.merge(
            service.load_datasets(
                store,
                args.dir,
                datasets,
                area_filter=areas,
                measure_filter=measures,
                year_filter=years,
            )
        )
        logger.info(
            "run_completed",
            extra={
                "areas": store.size(),
                "succeeded": len(report.succeeded),
                "failed": len(report.failures),
            },
        )

    for failure in report.failures:
        print(f"Error importing dataset: {failure.file}", file=err)
        print(failure.message, file=err)

    if args.json:
        print(store.to_json(), file=out)
    else:
        print(store.format_table(), end="", file=out)
    return EXIT_OK


def main() -> int:
    return run()
