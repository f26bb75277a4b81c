#!/usr/bin/env python3
"""Generate sample loan JSON files for manual export checks.

Each file has the shape of the API's loan response with the repayment
schedule, transactions and charges associations.
"""

import argparse
import json
import logging
from pathlib import Path

from loan_export.config import LoanExportConfig
from loan_export.generators import LoanAggregateGenerator
from loan_export.logging import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    """Main entry point."""
    config = LoanExportConfig.from_env()

    parser = argparse.ArgumentParser(description="Generate sample loan JSON files")
    parser.add_argument(
        "--count",
        type=int,
        default=5,
        help="Number of loans to generate (default: 5)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Random seed for reproducibility (default: 42)",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=config.loan_dir,
        help=f"Directory for loan JSON files (default: {config.loan_dir})",
    )
    args = parser.parse_args()

    setup_logging(config.log_level, config.log_format)
    args.output_dir.mkdir(parents=True, exist_ok=True)

    generator = LoanAggregateGenerator(seed=args.seed)
    for loan_id in range(1, args.count + 1):
        loan = generator.generate(loan_id=loan_id, with_reversal=loan_id % 2 == 0)
        path = args.output_dir / f"{loan_id}.json"
        with open(path, "w", encoding="utf-8") as f:
            json.dump(loan, f, indent=2, ensure_ascii=False)
        logger.info("Saved loan %d to %s", loan_id, path)


if __name__ == "__main__":
    main()
