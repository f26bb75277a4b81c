"""Loan schedule and statement exports in CSV, XLSX and PDF."""

from loan_export.classifier import is_upfront_charge
from loan_export.exporter import LoanExporter, build_filename, generate_export
from loan_export.models import ExportFormat, ExportResult, ExportType, Loan
from loan_export.projectors import build_schedule_rows, build_statement_rows
from loan_export.summary import compute_disbursement_summary, extract_loan_metadata

__all__ = [
    "ExportFormat",
    "ExportResult",
    "ExportType",
    "Loan",
    "LoanExporter",
    "build_filename",
    "build_schedule_rows",
    "build_statement_rows",
    "compute_disbursement_summary",
    "extract_loan_metadata",
    "generate_export",
    "is_upfront_charge",
]
