"""Renderer interface and the report layouts every format shares."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Sequence

from loan_export.models.enums import ExportFormat, ExportType
from loan_export.models.export import (
    DisbursementSummary,
    LoanMetadata,
    ScheduleRow,
    StatementRow,
)

INT = "int"
TEXT = "text"
AMOUNT = "amount"

# (label, LoanMetadata attribute) for the loan details block
LOAN_DETAIL_FIELDS = (
    ("Loan Account", "account_no"),
    ("Client Name", "client_name"),
    ("Product", "product_name"),
    ("Status", "status"),
    ("Currency", "currency"),
)


@dataclass(frozen=True)
class Column:
    """Table column of a report."""

    label: str
    attr: str
    kind: str = TEXT
    short_label: str = ""  # Narrow header used by the PDF table
    width: float = 0.125  # Share of the PDF table width
    total_attr: str | None = None  # ScheduleTotals attribute summed into the TOTAL row

    @property
    def pdf_label(self) -> str:
        return self.short_label or self.label

    def value(self, row: Any) -> Any:
        return getattr(row, self.attr)


@dataclass(frozen=True)
class ReportLayout:
    """Description of one report: title, table heading, columns, totals."""

    export_type: ExportType
    title: str
    sheet_title: str
    table_heading: str
    columns: tuple[Column, ...]
    with_totals: bool = False


SCHEDULE_LAYOUT = ReportLayout(
    export_type=ExportType.SCHEDULE,
    title="LOAN SCHEDULE REPORT",
    sheet_title="Loan Schedule",
    table_heading="REPAYMENT SCHEDULE",
    columns=(
        Column("Installment", "installment_number", INT, "#", 0.08),
        Column("Due Date", "due_date", TEXT, width=0.12),
        Column("Principal Due", "principal_due", AMOUNT, "Principal", 0.13, "principal"),
        Column("Interest Due", "interest_due", AMOUNT, "Interest", 0.13, "interest"),
        Column("Fees Due", "fees_due", AMOUNT, "Fees", 0.12, "fees"),
        Column("Penalties Due", "penalties_due", AMOUNT, "Penalties", 0.12, "penalties"),
        Column("Total Due", "total_due", AMOUNT, width=0.14, total_attr="total"),
        Column("Principal Outstanding", "principal_outstanding", AMOUNT, "Outstanding", 0.16),
    ),
    with_totals=True,
)

STATEMENT_LAYOUT = ReportLayout(
    export_type=ExportType.STATEMENT,
    title="LOAN TRANSACTION STATEMENT",
    sheet_title="Transaction Statement",
    table_heading="TRANSACTION HISTORY",
    columns=(
        Column("Date", "date", TEXT, width=0.12),
        Column("Type", "type", TEXT, width=0.18),
        Column("Amount", "amount", AMOUNT, width=0.12),
        Column("Principal", "principal_portion", AMOUNT, width=0.12),
        Column("Interest", "interest_portion", AMOUNT, width=0.12),
        Column("Fees", "fees_portion", AMOUNT, width=0.10),
        Column("Penalties", "penalties_portion", AMOUNT, width=0.10),
        Column("Principal Outstanding", "principal_outstanding", AMOUNT, "Outstanding", 0.14),
    ),
)

LAYOUTS = {
    ExportType.SCHEDULE: SCHEDULE_LAYOUT,
    ExportType.STATEMENT: STATEMENT_LAYOUT,
}


class Renderer(ABC):
    """Turns the intermediate export model into a file buffer.

    Implementations are pure: no network or disk I/O, and identical inputs
    produce identical content.
    """

    format: ExportFormat
    content_type: str
    extension: str

    @abstractmethod
    def render(
        self,
        layout: ReportLayout,
        metadata: LoanMetadata,
        summary: DisbursementSummary,
        rows: Sequence[Any],
    ) -> bytes:
        """Render a report described by ``layout``."""

    def render_schedule(
        self,
        metadata: LoanMetadata,
        summary: DisbursementSummary,
        rows: Sequence[ScheduleRow],
    ) -> bytes:
        """Render the repayment schedule report."""
        return self.render(SCHEDULE_LAYOUT, metadata, summary, rows)

    def render_statement(
        self,
        metadata: LoanMetadata,
        summary: DisbursementSummary,
        rows: Sequence[StatementRow],
    ) -> bytes:
        """Render the transaction statement report."""
        return self.render(STATEMENT_LAYOUT, metadata, summary, rows)
