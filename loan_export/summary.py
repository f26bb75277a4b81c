"""Disbursement summary and header metadata for loan exports."""

import logging
from decimal import Decimal
from typing import Iterable

from loan_export.classifier import is_upfront_charge
from loan_export.dates import DISPLAY_FORMAT, format_date_for_display, to_iso_date
from loan_export.models.export import ZERO, DisbursementSummary, LoanMetadata, UpfrontFeeItem
from loan_export.models.loan import Charge, Loan

logger = logging.getLogger(__name__)


def approved_amount_for(loan: Loan) -> Decimal:
    """Approved principal, falling back to the requested principal."""
    return loan.approved_principal or loan.principal or ZERO


def compute_disbursement_summary(loan: Loan, charges: Iterable[Charge]) -> DisbursementSummary:
    """Compute approved amount, upfront fees and net payout for a loan.

    Parameters
    ----------
    loan : Loan
        Loan aggregate.
    charges : Iterable[Charge]
        Charges to classify, usually ``loan.charges``.

    Returns
    -------
    DisbursementSummary
        Summary with fee items in input order. A source-supplied net
        disbursal amount is used as-is; otherwise the net is derived and
        may be negative.
    """
    approved_amount = approved_amount_for(loan)

    upfront_fee_items = tuple(
        UpfrontFeeItem(name=charge.name or "Fee", amount=charge.amount or ZERO)
        for charge in charges
        if is_upfront_charge(charge)
    )
    upfront_fees_total = sum((item.amount for item in upfront_fee_items), ZERO)

    if loan.net_disbursal_amount is not None:
        net_paid_to_client = loan.net_disbursal_amount
    else:
        net_paid_to_client = approved_amount - upfront_fees_total

    if net_paid_to_client < 0:
        logger.warning(
            "Loan %s: net paid to client is negative (%s)", loan.id, net_paid_to_client
        )

    return DisbursementSummary(
        approved_amount=approved_amount,
        upfront_fee_items=upfront_fee_items,
        upfront_fees_total=upfront_fees_total,
        net_paid_to_client=net_paid_to_client,
        disbursement_date=to_iso_date(loan.timeline.actual_disbursement_date),
    )


def extract_loan_metadata(
    loan: Loan,
    default_currency: str = "KES",
    date_format: str = DISPLAY_FORMAT,
) -> LoanMetadata:
    """Extract the header fields shown at the top of every export."""
    status = ""
    if loan.status is not None:
        status = loan.status.description or loan.status.value or loan.status.code

    currency = default_currency
    if loan.currency is not None:
        currency = loan.currency.display_symbol or loan.currency.code or default_currency

    return LoanMetadata(
        loan_id=str(loan.id) if loan.id is not None else "",
        account_no=loan.account_no,
        client_name=loan.client_name,
        product_name=loan.loan_product_name,
        status=status,
        currency=currency,
        disbursement_date=format_date_for_display(
            loan.timeline.actual_disbursement_date, date_format
        ),
        maturity_date=format_date_for_display(loan.timeline.expected_maturity_date, date_format),
    )
