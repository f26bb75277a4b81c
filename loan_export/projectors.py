"""Projection of schedule periods and transactions into display rows."""

import logging
from decimal import Decimal
from typing import Iterable

from loan_export.dates import DISPLAY_FORMAT, format_date_for_display, to_iso_date
from loan_export.models.export import ZERO, ScheduleRow, ScheduleTotals, StatementRow
from loan_export.models.loan import EnumOption, LoanTransaction, RepaymentPeriod

logger = logging.getLogger(__name__)

# Checked in order; the first matching fragment of the type code wins
TRANSACTION_TYPE_LABELS = (
    (("repaymentatdisbursement",), "Fee Deduction (Net-off)"),
    (("disbursement",), "Disbursement"),
    (("repayment",), "Repayment"),
    (("writeoff", "write_off"), "Write Off"),
    (("waiver", "waive"), "Waiver"),
    (("charge",), "Charge"),
    (("accrual",), "Accrual"),
)


def build_schedule_rows(
    periods: Iterable[RepaymentPeriod],
    date_format: str = DISPLAY_FORMAT,
) -> list[ScheduleRow]:
    """Build schedule rows, skipping the disbursement period.

    Parameters
    ----------
    periods : Iterable[RepaymentPeriod]
        Repayment schedule periods in source order.
    date_format : str
        strftime format for the due date column.

    Returns
    -------
    list[ScheduleRow]
        One row per installment with ``period > 0``, order preserved.
    """
    rows: list[ScheduleRow] = []

    for period in periods:
        if period.period is None or period.period <= 0:
            continue

        rows.append(
            ScheduleRow(
                installment_number=period.period,
                due_date=format_date_for_display(period.due_date, date_format),
                principal_due=period.principal_due or ZERO,
                interest_due=period.interest_due or ZERO,
                fees_due=period.fee_charges_due or ZERO,
                penalties_due=period.penalty_charges_due or ZERO,
                total_due=period.total_due_for_period or ZERO,
                principal_outstanding=period.principal_loan_balance_outstanding or ZERO,
            )
        )

    return rows


def schedule_totals(rows: Iterable[ScheduleRow]) -> ScheduleTotals:
    """Sum the due columns of the schedule."""
    principal = interest = fees = penalties = total = ZERO
    for row in rows:
        principal += row.principal_due
        interest += row.interest_due
        fees += row.fees_due
        penalties += row.penalties_due
        total += row.total_due
    return ScheduleTotals(
        principal=principal,
        interest=interest,
        fees=fees,
        penalties=penalties,
        total=total,
    )


def transaction_type_label(transaction_type: EnumOption | None) -> str:
    """Human label for a transaction type."""
    if transaction_type is None:
        return "Unknown"

    code = transaction_type.code.lower()
    for fragments, label in TRANSACTION_TYPE_LABELS:
        if any(fragment in code for fragment in fragments):
            return label

    return transaction_type.description or transaction_type.value or transaction_type.code or "Unknown"


def build_statement_rows(
    transactions: Iterable[LoanTransaction],
    approved_principal: Decimal,
    date_format: str = DISPLAY_FORMAT,
) -> list[StatementRow]:
    """Build statement rows with a reconstructed principal balance.

    Reversed transactions are dropped before the replay. The remaining ones
    are replayed oldest first (same-day entries keep their source order).
    A row shows the source's outstanding balance when the transaction
    carries one, and the replayed balance otherwise.
    """
    transactions = list(transactions)
    active = [tx for tx in transactions if not tx.manually_reversed]
    ordered = sorted(active, key=lambda tx: to_iso_date(tx.date) or "")

    rows: list[StatementRow] = []
    running_principal_outstanding = ZERO

    for tx in ordered:
        tx_type = tx.type_code
        principal_portion = tx.principal_portion or ZERO

        if "disbursement" in tx_type and "repayment" not in tx_type:
            running_principal_outstanding = tx.amount or approved_principal
        elif "repayment" in tx_type or "writeoff" in tx_type:
            running_principal_outstanding = max(
                ZERO, running_principal_outstanding - principal_portion
            )

        if tx.outstanding_loan_balance is not None:
            principal_outstanding = tx.outstanding_loan_balance
        else:
            principal_outstanding = running_principal_outstanding

        rows.append(
            StatementRow(
                date=format_date_for_display(tx.date, date_format),
                type=transaction_type_label(tx.type),
                amount=tx.amount or ZERO,
                principal_portion=principal_portion,
                interest_portion=tx.interest_portion or ZERO,
                fees_portion=tx.fee_charges_portion or ZERO,
                penalties_portion=tx.penalty_charges_portion or ZERO,
                principal_outstanding=principal_outstanding,
            )
        )

    logger.debug(
        "Statement built: %d rows, %d reversed transactions skipped",
        len(rows),
        len(transactions) - len(active),
    )
    return rows
