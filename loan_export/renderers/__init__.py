"""Output renderers for loan exports."""

from loan_export.renderers.base import (
    LAYOUTS,
    SCHEDULE_LAYOUT,
    STATEMENT_LAYOUT,
    Column,
    Renderer,
    ReportLayout,
)
from loan_export.renderers.csv_renderer import CsvRenderer
from loan_export.renderers.pdf_renderer import PdfRenderer
from loan_export.renderers.xlsx_renderer import XlsxRenderer

__all__ = [
    "LAYOUTS",
    "SCHEDULE_LAYOUT",
    "STATEMENT_LAYOUT",
    "Column",
    "CsvRenderer",
    "PdfRenderer",
    "Renderer",
    "ReportLayout",
    "XlsxRenderer",
]
