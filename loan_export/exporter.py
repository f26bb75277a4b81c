"""Export orchestration: model building, renderer dispatch, file naming."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Mapping, TypeVar

from loan_export.config import ExportConfig
from loan_export.exceptions import UnsupportedExportError
from loan_export.models.enums import ExportFormat, ExportType
from loan_export.models.export import ExportResult
from loan_export.models.loan import Loan
from loan_export.projectors import build_schedule_rows, build_statement_rows
from loan_export.renderers import LAYOUTS, CsvRenderer, PdfRenderer, Renderer, ReportLayout, XlsxRenderer
from loan_export.sources import LoanSource
from loan_export.summary import compute_disbursement_summary, extract_loan_metadata

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)

RenderTable = dict[tuple[ExportType, ExportFormat], tuple[Renderer, ReportLayout]]


def default_renderers(config: ExportConfig | None = None) -> dict[ExportFormat, Renderer]:
    """One renderer per output format."""
    config = config or ExportConfig()
    return {
        ExportFormat.CSV: CsvRenderer(),
        ExportFormat.XLSX: XlsxRenderer(config.xlsx),
        ExportFormat.PDF: PdfRenderer(config.pdf),
    }


def build_render_table(renderers: Mapping[ExportFormat, Renderer]) -> RenderTable:
    """Map every (export type, format) pair to its renderer and layout."""
    return {
        (export_type, export_format): (renderer, LAYOUTS[export_type])
        for export_format, renderer in renderers.items()
        for export_type in ExportType
    }


def build_filename(loan: Loan, export_type: ExportType, extension: str) -> str:
    """``loan-{accountNo or id}-{type}.{extension}``."""
    key = loan.account_no or ("" if loan.id is None else loan.id)
    return f"loan-{key}-{export_type.value}.{extension}"


def _coerce(enum_cls: type[E], value: E | str, what: str) -> E:
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise UnsupportedExportError(f"Unsupported export {what}: {value!r} (expected one of {allowed})")


def generate_export(
    loan: Loan,
    export_type: ExportType | str,
    export_format: ExportFormat | str,
    *,
    config: ExportConfig | None = None,
    render_table: RenderTable | None = None,
) -> ExportResult:
    """Render a loan schedule or statement.

    Parameters
    ----------
    loan : Loan
        Loan aggregate with schedule, transactions and charges.
    export_type : ExportType | str
        ``schedule`` or ``statement``.
    export_format : ExportFormat | str
        ``csv``, ``xlsx`` or ``pdf``.
    config : ExportConfig | None
        Export settings; defaults apply when omitted.
    render_table : RenderTable | None
        Renderer lookup table; built from :func:`default_renderers` when
        omitted.

    Returns
    -------
    ExportResult
        Buffer, content type and filename.

    Raises
    ------
    UnsupportedExportError
        If the export type or format is unknown. Renderer errors propagate
        unchanged.
    """
    export_type = _coerce(ExportType, export_type, "type")
    export_format = _coerce(ExportFormat, export_format, "format")
    config = config or ExportConfig()
    if render_table is None:
        render_table = build_render_table(default_renderers(config))

    try:
        renderer, layout = render_table[(export_type, export_format)]
    except KeyError:
        raise UnsupportedExportError(
            f"No renderer registered for {export_type.value}/{export_format.value}"
        )

    metadata = extract_loan_metadata(loan, config.default_currency, config.date_display_format)
    summary = compute_disbursement_summary(loan, loan.charges)

    if export_type == ExportType.SCHEDULE:
        rows = build_schedule_rows(loan.repayment_periods, config.date_display_format)
    else:
        rows = build_statement_rows(
            loan.transactions, summary.approved_amount, config.date_display_format
        )

    buffer = renderer.render(layout, metadata, summary, rows)
    result = ExportResult(
        buffer=buffer,
        content_type=renderer.content_type,
        filename=build_filename(loan, export_type, renderer.extension),
    )

    logger.info(
        "Exported loan %s: %s/%s, %d rows, %d bytes",
        metadata.loan_id,
        export_type.value,
        export_format.value,
        len(rows),
        len(buffer),
        extra={
            "extra": {
                "loan_id": metadata.loan_id,
                "export_type": export_type.value,
                "export_format": export_format.value,
                "bytes": len(buffer),
            }
        },
    )
    return result


class LoanExporter:
    """Fetch a loan from a source and render it.

    Parameters
    ----------
    source : LoanSource
        Where loan aggregates come from.
    config : ExportConfig | None
        Export settings shared by every call.
    renderers : Mapping[ExportFormat, Renderer] | None
        Renderer per format; :func:`default_renderers` when omitted.
    """

    def __init__(
        self,
        source: LoanSource,
        config: ExportConfig | None = None,
        renderers: Mapping[ExportFormat, Renderer] | None = None,
    ) -> None:
        self.source = source
        self.config = config or ExportConfig()
        self.render_table = build_render_table(renderers or default_renderers(self.config))

    def export(
        self,
        loan_id: int | str,
        export_type: ExportType | str,
        export_format: ExportFormat | str,
    ) -> ExportResult:
        """Fetch ``loan_id`` and render the requested export."""
        loan = self.source.fetch(loan_id)
        return generate_export(
            loan,
            export_type,
            export_format,
            config=self.config,
            render_table=self.render_table,
        )
