"""Command line interface for batching contact spreadsheets."""
from __future__ import annotations

import argparse
import json
import logging
import sys

from .config import SHEET_FORMATS, ConfigurationError, load_settings
from .ingestion.exporters import PackagingError
from .ingestion.loaders import RowSourceError, UnsupportedFileTypeError
from .orchestrator import process_file

LOGGER = logging.getLogger(__name__)


def build_parser(prog: str | None = None) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=prog,
        description="Deduplicate contact leads by mobile number and split them into batches",
    )
    parser.add_argument("input", help="Path to the input spreadsheet (CSV or XLSX)")
    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory where the ZIP archive is written (default: outputs)",
    )
    parser.add_argument(
        "--batch-size",
        default=None,
        help="Number of leads per output file, clamped to 1-100000 (default: 1000)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Optional configuration file (YAML or JSON)",
    )
    parser.add_argument(
        "--sheet-format",
        choices=SHEET_FORMATS,
        default=None,
        help="File format of each batch inside the archive",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING)",
    )
    return parser


def parse_args(argv: list[str] | None = None, *, prog: str | None = None) -> argparse.Namespace:
    return build_parser(prog=prog).parse_args(argv)


def main(argv: list[str] | None = None, *, prog: str | None = None) -> int:
    args = parse_args(argv, prog=prog)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))

    try:
        settings = load_settings(
            args.config,
            batch_size=args.batch_size,
            output_dir=args.output_dir,
            sheet_format=args.sheet_format,
        )
        result = process_file(
            args.input,
            batch_size=settings.batch_size,
            output_dir=settings.output_dir,
            sheet_format=settings.sheet_format,
            sheet_name=settings.sheet_name,
        )
    except (ConfigurationError, UnsupportedFileTypeError, RowSourceError, PackagingError) as exc:
        LOGGER.error("Processing failed: %s", exc)
        return 1

    if not result.has_leads:
        LOGGER.warning("No valid leads were produced; see rejected.json in %s", result.archive_name)
    LOGGER.info(
        "Processed %s rows: %s leads, %s rejected, %s batches",
        result.stats.total_rows,
        result.stats.valid_lead_count,
        result.stats.rejected_count,
        result.stats.batch_count,
    )
    print(json.dumps(result.as_dict()))
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
