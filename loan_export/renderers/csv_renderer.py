"""Delimited text renderer."""

import csv
import io
from typing import Any, Sequence

from loan_export.models.enums import ExportFormat
from loan_export.models.export import DisbursementSummary, LoanMetadata
from loan_export.projectors import schedule_totals
from loan_export.renderers.base import AMOUNT, LOAN_DETAIL_FIELDS, INT, ReportLayout, Renderer
from loan_export.renderers.formatting import format_amount


class CsvRenderer(Renderer):
    """Render exports as CSV.

    Amounts are written with two decimals and no thousands separator so the
    file stays machine readable. Output is byte-for-byte deterministic.
    """

    format = ExportFormat.CSV
    content_type = "text/csv; charset=utf-8"
    extension = "csv"

    def __init__(self, delimiter: str = ",") -> None:
        self.delimiter = delimiter

    def render(
        self,
        layout: ReportLayout,
        metadata: LoanMetadata,
        summary: DisbursementSummary,
        rows: Sequence[Any],
    ) -> bytes:
        output = io.StringIO()
        writer = csv.writer(
            output,
            delimiter=self.delimiter,
            quoting=csv.QUOTE_MINIMAL,
            lineterminator="\n",
        )

        writer.writerow([layout.title])
        writer.writerow([])
        for label, attr in LOAN_DETAIL_FIELDS:
            writer.writerow([label, getattr(metadata, attr)])
        writer.writerow([])

        self._write_summary(writer, summary)
        writer.writerow([])

        writer.writerow([layout.table_heading])
        writer.writerow([column.label for column in layout.columns])
        for row in rows:
            writer.writerow([self._cell(column.kind, column.value(row)) for column in layout.columns])

        if layout.with_totals:
            totals = schedule_totals(rows)
            total_row = []
            for index, column in enumerate(layout.columns):
                if index == 0:
                    total_row.append("TOTAL")
                elif column.total_attr:
                    total_row.append(format_amount(getattr(totals, column.total_attr)))
                else:
                    total_row.append("")
            writer.writerow(total_row)

        return output.getvalue().encode("utf-8")

    def _write_summary(self, writer: Any, summary: DisbursementSummary) -> None:
        """Write the disbursement summary block."""
        writer.writerow(["DISBURSEMENT SUMMARY"])
        writer.writerow(["Approved Amount", format_amount(summary.approved_amount)])

        if summary.upfront_fee_items:
            writer.writerow(["Upfront Fees Deducted:"])
            for fee in summary.upfront_fee_items:
                writer.writerow([f"  {fee.name}", format_amount(fee.amount)])
            writer.writerow(["Total Upfront Fees", format_amount(summary.upfront_fees_total)])

        writer.writerow(["Net Paid to Client", format_amount(summary.net_paid_to_client)])
        writer.writerow(["Disbursement Date", summary.disbursement_date or ""])

    @staticmethod
    def _cell(kind: str, value: Any) -> str:
        if kind == AMOUNT:
            return format_amount(value)
        if kind == INT:
            return str(value or 0)
        return "" if value is None else str(value)
