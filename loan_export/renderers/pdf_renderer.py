"""Paginated document renderer built on reportlab."""

from __future__ import annotations

import io
from datetime import datetime
from typing import Any, Callable, Sequence

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from loan_export.config import PdfConfig
from loan_export.models.enums import ExportFormat
from loan_export.models.export import DisbursementSummary, LoanMetadata
from loan_export.projectors import schedule_totals
from loan_export.renderers.base import AMOUNT, INT, LOAN_DETAIL_FIELDS, ReportLayout, Renderer
from loan_export.renderers.formatting import format_display_amount

PLACEHOLDER = "—"
PAGE_SIZE = landscape(A4)
MARGIN = 30

HEADER_BLUE = colors.HexColor("#4472C4")
SECTION_GRAY = colors.HexColor("#E2E8F0")
STRIPE = colors.HexColor("#F7FAFC")
TOTAL_GRAY = colors.HexColor("#EDF2F7")
LABEL_GRAY = colors.HexColor("#4A5568")
FEE_ORANGE = colors.HexColor("#C05621")
NET_GREEN = colors.HexColor("#22543D")
FOOTER_GRAY = colors.HexColor("#718096")


class PdfRenderer(Renderer):
    """Render exports as a landscape A4 document.

    The page footer carries the generation date taken from ``clock``; with
    a fixed clock and invariant mode the output is byte-stable.
    """

    format = ExportFormat.PDF
    content_type = "application/pdf"
    extension = "pdf"

    def __init__(
        self,
        config: PdfConfig | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.config = config or PdfConfig()
        self.clock = clock

        styles = getSampleStyleSheet()
        self.title_style = ParagraphStyle(
            "ExportTitle",
            parent=styles["Heading1"],
            fontName="Helvetica-Bold",
            fontSize=16,
            textColor=colors.HexColor("#1A365D"),
            alignment=TA_CENTER,
            spaceAfter=15,
        )
        self.section_style = ParagraphStyle(
            "ExportSection",
            parent=styles["Normal"],
            fontName="Helvetica-Bold",
            fontSize=11,
            backColor=SECTION_GRAY,
            borderPadding=6,
            spaceBefore=15,
            spaceAfter=10,
        )

    def render(
        self,
        layout: ReportLayout,
        metadata: LoanMetadata,
        summary: DisbursementSummary,
        rows: Sequence[Any],
    ) -> bytes:
        buffer = io.BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=PAGE_SIZE,
            rightMargin=MARGIN,
            leftMargin=MARGIN,
            topMargin=MARGIN,
            bottomMargin=MARGIN + 15,
            title=layout.title,
            creator=self.config.footer_label,
            invariant=1 if self.config.invariant else 0,
        )

        footer = f"Generated on {self.clock().strftime('%d/%m/%Y')} | {self.config.footer_label}"

        def draw_footer(canvas: Any, _doc: Any) -> None:
            canvas.saveState()
            canvas.setFont("Helvetica", 8)
            canvas.setFillColor(FOOTER_GRAY)
            canvas.drawCentredString(PAGE_SIZE[0] / 2, 20, footer)
            canvas.restoreState()

        doc.build(
            self.build_story(layout, metadata, summary, rows),
            onFirstPage=draw_footer,
            onLaterPages=draw_footer,
        )
        return buffer.getvalue()

    def build_story(
        self,
        layout: ReportLayout,
        metadata: LoanMetadata,
        summary: DisbursementSummary,
        rows: Sequence[Any],
    ) -> list[Any]:
        """Flowables for the three report sections."""
        story: list[Any] = [Paragraph(layout.title, self.title_style)]

        story.append(Paragraph("LOAN DETAILS", self.section_style))
        details = [
            [f"{label}:", getattr(metadata, attr) or PLACEHOLDER]
            for label, attr in LOAN_DETAIL_FIELDS
        ]
        story.append(self._key_value_table(details))

        story.append(Paragraph("DISBURSEMENT SUMMARY", self.section_style))
        story.append(self._summary_table(summary, metadata.currency))

        story.append(Paragraph(layout.table_heading, self.section_style))
        story.append(Spacer(1, 4))
        story.append(self._data_table(layout, rows))
        return story

    def table_data(self, layout: ReportLayout, rows: Sequence[Any]) -> list[list[str]]:
        """Header, body and (schedule only) TOTAL rows as display strings."""
        data = [[column.pdf_label for column in layout.columns]]
        for row in rows:
            data.append([self._cell(column.kind, column.value(row)) for column in layout.columns])

        if layout.with_totals:
            totals = schedule_totals(rows)
            total_row = []
            for index, column in enumerate(layout.columns):
                if index == 0:
                    total_row.append("TOTAL")
                elif column.total_attr:
                    total_row.append(format_display_amount(getattr(totals, column.total_attr)))
                else:
                    total_row.append("")
            data.append(total_row)
        return data

    def _data_table(self, layout: ReportLayout, rows: Sequence[Any]) -> Table:
        available = PAGE_SIZE[0] - 2 * MARGIN
        table = Table(
            self.table_data(layout, rows),
            colWidths=[column.width * available for column in layout.columns],
            repeatRows=1,
        )

        commands: list[tuple] = [
            ("BACKGROUND", (0, 0), (-1, 0), HEADER_BLUE),
            ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
            ("FONTNAME", (0, 1), (-1, -1), "Helvetica"),
            ("FONTSIZE", (0, 0), (-1, -1), 8),
            ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
            ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
        ]
        for index, column in enumerate(layout.columns):
            if column.kind == AMOUNT:
                commands.append(("ALIGN", (index, 0), (index, -1), "RIGHT"))

        last_body = len(rows)
        if last_body:
            commands.append(
                ("ROWBACKGROUNDS", (0, 1), (-1, last_body), [colors.white, STRIPE])
            )
        if layout.with_totals:
            commands.extend(
                [
                    ("BACKGROUND", (0, -1), (-1, -1), TOTAL_GRAY),
                    ("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold"),
                ]
            )

        table.setStyle(TableStyle(commands))
        return table

    def _summary_table(self, summary: DisbursementSummary, currency: str) -> Table:
        data = [["Approved Amount:", f"{currency} {format_display_amount(summary.approved_amount)}"]]
        fee_rows: list[int] = []

        if summary.upfront_fee_items:
            data.append(["Upfront Fees Deducted:", ""])
            for fee in summary.upfront_fee_items:
                fee_rows.append(len(data))
                data.append([f"    {fee.name}:", f"- {currency} {format_display_amount(fee.amount)}"])
            fee_rows.append(len(data))
            data.append(
                ["Total Upfront Fees:", f"- {currency} {format_display_amount(summary.upfront_fees_total)}"]
            )

        net_row = len(data)
        data.append(["Net Paid to Client:", f"{currency} {format_display_amount(summary.net_paid_to_client)}"])
        data.append(["Disbursement Date:", summary.disbursement_date or PLACEHOLDER])

        table = self._key_value_table(data)
        commands: list[tuple] = [
            ("LINEABOVE", (0, net_row), (-1, net_row), 1, SECTION_GRAY),
            ("FONTNAME", (0, net_row), (-1, net_row), "Helvetica-Bold"),
            ("TEXTCOLOR", (1, net_row), (1, net_row), NET_GREEN),
        ]
        for index in fee_rows:
            commands.append(("TEXTCOLOR", (1, index), (1, index), FEE_ORANGE))
        table.setStyle(TableStyle(commands))
        return table

    @staticmethod
    def _key_value_table(data: list[list[str]]) -> Table:
        available = PAGE_SIZE[0] - 2 * MARGIN
        table = Table(data, colWidths=[0.4 * available, 0.6 * available], hAlign="LEFT")
        table.setStyle(
            TableStyle(
                [
                    ("FONTNAME", (0, 0), (0, -1), "Helvetica"),
                    ("FONTNAME", (1, 0), (1, -1), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, -1), 9),
                    ("TEXTCOLOR", (0, 0), (0, -1), LABEL_GRAY),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 2),
                    ("TOPPADDING", (0, 0), (-1, -1), 2),
                ]
            )
        )
        return table

    @staticmethod
    def _cell(kind: str, value: Any) -> str:
        if kind == AMOUNT:
            return format_display_amount(value)
        if kind == INT:
            return str(value or 0)
        return str(value) if value else PLACEHOLDER
