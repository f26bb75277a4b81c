"""Spreadsheet renderer built on openpyxl."""

from __future__ import annotations

import io
from typing import Any, Sequence

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from loan_export.config import XlsxConfig
from loan_export.models.enums import ExportFormat, ExportType
from loan_export.models.export import DisbursementSummary, LoanMetadata
from loan_export.projectors import schedule_totals
from loan_export.renderers.base import AMOUNT, INT, LOAN_DETAIL_FIELDS, ReportLayout, Renderer

HEADER_FILL = PatternFill(start_color="4472C4", end_color="4472C4", fill_type="solid")
HEADER_FONT = Font(bold=True, color="FFFFFF")
SECTION_FILL = PatternFill(start_color="E7E6E6", end_color="E7E6E6", fill_type="solid")
SECTION_FONT = Font(bold=True, size=11)
TITLE_FONT = Font(bold=True, size=14)
BOLD_FONT = Font(bold=True)
NET_PAID_FONT = Font(bold=True, color="008000")

# Widths of the two leading (non-currency) columns
LEADING_COLUMN_WIDTHS = {
    ExportType.SCHEDULE: (12, 15),
    ExportType.STATEMENT: (15, 20),
}


class XlsxRenderer(Renderer):
    """Render exports as a single-sheet workbook with native numeric cells."""

    format = ExportFormat.XLSX
    content_type = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    extension = "xlsx"

    def __init__(self, config: XlsxConfig | None = None) -> None:
        self.config = config or XlsxConfig()

    def render(
        self,
        layout: ReportLayout,
        metadata: LoanMetadata,
        summary: DisbursementSummary,
        rows: Sequence[Any],
    ) -> bytes:
        wb = Workbook()
        wb.properties.creator = self.config.creator
        ws = wb.active
        ws.title = layout.sheet_title
        ws.page_setup.orientation = ws.ORIENTATION_LANDSCAPE

        width = len(layout.columns)

        ws.append([layout.title])
        ws.cell(row=ws.max_row, column=1).font = TITLE_FONT
        self._merge(ws, width)
        ws.append([])

        self._section(ws, "LOAN DETAILS")
        for label, attr in LOAN_DETAIL_FIELDS:
            ws.append([f"{label}:", getattr(metadata, attr) or None])
        ws.append([])

        self._write_summary(ws, summary)
        ws.append([])
        ws.append([])

        self._section(ws, layout.table_heading, span=width)
        ws.append([column.label for column in layout.columns])
        for cell in ws[ws.max_row]:
            cell.font = HEADER_FONT
            cell.fill = HEADER_FILL
            cell.alignment = Alignment(horizontal="center", vertical="center")

        for row in rows:
            ws.append([self._cell(column.kind, column.value(row)) for column in layout.columns])
            self._format_amounts(ws, layout)

        if layout.with_totals:
            totals = schedule_totals(rows)
            values: list[Any] = []
            for index, column in enumerate(layout.columns):
                if index == 0:
                    values.append("TOTAL")
                elif column.total_attr:
                    values.append(getattr(totals, column.total_attr))
                else:
                    values.append(None)
            ws.append(values)
            for cell in ws[ws.max_row]:
                cell.font = BOLD_FONT
            self._format_amounts(ws, layout)

        first, second = LEADING_COLUMN_WIDTHS[layout.export_type]
        ws.column_dimensions["A"].width = first
        ws.column_dimensions["B"].width = second
        for index, column in enumerate(layout.columns, start=1):
            if column.kind == AMOUNT:
                ws.column_dimensions[get_column_letter(index)].width = self.config.currency_column_width

        buffer = io.BytesIO()
        wb.save(buffer)
        return buffer.getvalue()

    def _write_summary(self, ws: Worksheet, summary: DisbursementSummary) -> None:
        """Write the disbursement summary block."""
        self._section(ws, "DISBURSEMENT SUMMARY")
        self._amount_line(ws, "Approved Amount:", summary.approved_amount)

        if summary.upfront_fee_items:
            ws.append(["Upfront Fees Deducted:"])
            for fee in summary.upfront_fee_items:
                self._amount_line(ws, f"  {fee.name}:", fee.amount)
            self._amount_line(ws, "Total Upfront Fees:", summary.upfront_fees_total)

        net_cell = self._amount_line(ws, "Net Paid to Client:", summary.net_paid_to_client)
        ws.cell(row=net_cell.row, column=1).font = BOLD_FONT
        net_cell.font = NET_PAID_FONT

        ws.append(["Disbursement Date:", summary.disbursement_date])

    def _amount_line(self, ws: Worksheet, label: str, amount: Any) -> Any:
        ws.append([label, amount])
        cell = ws.cell(row=ws.max_row, column=2)
        cell.number_format = self.config.currency_number_format
        return cell

    def _section(self, ws: Worksheet, title: str, span: int = 2) -> None:
        ws.append([title])
        row = ws.max_row
        for column in range(1, span + 1):
            cell = ws.cell(row=row, column=column)
            cell.fill = SECTION_FILL
            cell.font = SECTION_FONT
        self._merge(ws, span)

    def _format_amounts(self, ws: Worksheet, layout: ReportLayout) -> None:
        row = ws.max_row
        for index, column in enumerate(layout.columns, start=1):
            if column.kind == AMOUNT:
                ws.cell(row=row, column=index).number_format = self.config.currency_number_format

    @staticmethod
    def _merge(ws: Worksheet, span: int) -> None:
        row = ws.max_row
        ws.merge_cells(start_row=row, start_column=1, end_row=row, end_column=span)

    @staticmethod
    def _cell(kind: str, value: Any) -> Any:
        if kind in (AMOUNT, INT):
            return value or 0
        return value or None
