"""Loan aggregate and export models."""

from loan_export.models.enums import ExportFormat, ExportType
from loan_export.models.export import (
    DisbursementSummary,
    ExportResult,
    LoanMetadata,
    ScheduleRow,
    ScheduleTotals,
    StatementRow,
    UpfrontFeeItem,
)
from loan_export.models.loan import (
    Charge,
    Currency,
    EnumOption,
    Loan,
    LoanTransaction,
    RepaymentPeriod,
    Timeline,
)

__all__ = [
    "Charge",
    "Currency",
    "DisbursementSummary",
    "EnumOption",
    "ExportFormat",
    "ExportResult",
    "ExportType",
    "Loan",
    "LoanMetadata",
    "LoanTransaction",
    "RepaymentPeriod",
    "ScheduleRow",
    "ScheduleTotals",
    "StatementRow",
    "Timeline",
    "UpfrontFeeItem",
]
