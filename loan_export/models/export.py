"""Intermediate export models shared by all renderers."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

ZERO = Decimal("0")


@dataclass(frozen=True)
class LoanMetadata:
    """Header fields for an exported loan report."""

    loan_id: str
    account_no: str
    client_name: str
    product_name: str
    status: str
    currency: str
    disbursement_date: str  # Display formatted, empty when absent
    maturity_date: str


@dataclass(frozen=True)
class UpfrontFeeItem:
    """Fee deducted from the principal at disbursement."""

    name: str
    amount: Decimal


@dataclass(frozen=True)
class DisbursementSummary:
    """Approved amount, upfront deductions and net payout to the client."""

    approved_amount: Decimal
    upfront_fee_items: tuple[UpfrontFeeItem, ...]
    upfront_fees_total: Decimal
    net_paid_to_client: Decimal  # Source figure when supplied, may differ from derived_net_paid
    disbursement_date: str | None  # YYYY-MM-DD

    @property
    def derived_net_paid(self) -> Decimal:
        """Net payout recomputed locally from approved amount and fees."""
        return self.approved_amount - self.upfront_fees_total


@dataclass(frozen=True)
class ScheduleRow:
    """Repayment schedule installment."""

    installment_number: int
    due_date: str
    principal_due: Decimal
    interest_due: Decimal
    fees_due: Decimal
    penalties_due: Decimal
    total_due: Decimal
    principal_outstanding: Decimal


@dataclass(frozen=True)
class StatementRow:
    """Transaction statement line."""

    date: str
    type: str
    amount: Decimal
    principal_portion: Decimal
    interest_portion: Decimal
    fees_portion: Decimal
    penalties_portion: Decimal
    principal_outstanding: Decimal


@dataclass(frozen=True)
class ScheduleTotals:
    """Column sums for the schedule TOTAL row."""

    principal: Decimal = ZERO
    interest: Decimal = ZERO
    fees: Decimal = ZERO
    penalties: Decimal = ZERO
    total: Decimal = ZERO


@dataclass(frozen=True)
class ExportResult:
    """Rendered export with transport metadata."""

    buffer: bytes
    content_type: str
    filename: str

    def headers(self) -> dict[str, str]:
        """HTTP headers for returning the export as a file download."""
        return {
            "Content-Type": self.content_type,
            "Content-Disposition": f'attachment; filename="{self.filename}"',
            "Content-Length": str(len(self.buffer)),
        }
