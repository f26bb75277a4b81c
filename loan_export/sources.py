"""Loan sources: where export callers obtain loan aggregates."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Protocol

from loan_export.exceptions import LoanNotFoundError, LoanSourceError
from loan_export.models.loan import Loan

logger = logging.getLogger(__name__)

LOAN_ASSOCIATIONS = "repaymentSchedule,transactions,charges"


def loan_fetch_path(loan_id: int | str) -> str:
    """API path returning a loan with everything an export needs."""
    return f"/v1/loans/{loan_id}?associations={LOAN_ASSOCIATIONS}"


class LoanSource(Protocol):
    """Anything that can deliver a loan aggregate by id."""

    def fetch(self, loan_id: int | str) -> Loan: ...


class JsonFileLoanSource:
    """Read loan aggregates saved as API JSON responses.

    Parameters
    ----------
    path : str | Path
        Directory holding ``<loan_id>.json`` files, or a single JSON file
        returned for any id.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def fetch(self, loan_id: int | str) -> Loan:
        file_path = self.path if self.path.is_file() else self.path / f"{loan_id}.json"
        if not file_path.exists():
            raise LoanNotFoundError(f"Loan {loan_id} not found at {file_path}")

        try:
            with open(file_path, encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise LoanSourceError(f"Invalid loan JSON in {file_path}: {exc}") from exc
        except OSError as exc:
            raise LoanSourceError(f"Cannot read {file_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise LoanSourceError(f"Expected a JSON object in {file_path}")

        logger.debug("Loaded loan %s from %s", loan_id, file_path)
        return Loan.from_dict(data)
