#!/usr/bin/env python3
"""Export a loan schedule or statement from saved API responses.

Reads ``<loan-dir>/<loan_id>.json`` and writes the rendered file to the
output directory.
"""

import argparse
import logging
import sys
from pathlib import Path

from loan_export.config import LoanExportConfig
from loan_export.exceptions import LoanExportError
from loan_export.exporter import LoanExporter
from loan_export.logging import setup_logging
from loan_export.models import ExportFormat, ExportType
from loan_export.sources import JsonFileLoanSource

logger = logging.getLogger(__name__)


def main() -> int:
    """Main entry point."""
    config = LoanExportConfig.from_env()

    parser = argparse.ArgumentParser(description="Export a loan schedule or statement")
    parser.add_argument("loan_id", help="Loan id (name of the JSON file without extension)")
    parser.add_argument(
        "--type",
        dest="export_type",
        choices=[t.value for t in ExportType],
        default=ExportType.SCHEDULE.value,
        help="Export type (default: schedule)",
    )
    parser.add_argument(
        "--format",
        dest="export_format",
        choices=[f.value for f in ExportFormat],
        default=ExportFormat.CSV.value,
        help="Output format (default: csv)",
    )
    parser.add_argument(
        "--loan-dir",
        type=Path,
        default=config.loan_dir,
        help=f"Directory with loan JSON files (default: {config.loan_dir})",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=config.output_dir,
        help=f"Directory for exported files (default: {config.output_dir})",
    )
    parser.add_argument(
        "--log-level",
        default=config.log_level,
        help=f"Log level (default: {config.log_level})",
    )
    args = parser.parse_args()

    setup_logging(args.log_level, config.log_format)

    exporter = LoanExporter(JsonFileLoanSource(args.loan_dir), config.export)
    try:
        result = exporter.export(args.loan_id, args.export_type, args.export_format)
    except LoanExportError as exc:
        logger.error("Export failed: %s", exc)
        return 1

    args.output_dir.mkdir(parents=True, exist_ok=True)
    target = args.output_dir / result.filename
    target.write_bytes(result.buffer)
    logger.info("Wrote %s (%d bytes)", target, len(result.buffer))
    return 0


if __name__ == "__main__":
    sys.exit(main())
