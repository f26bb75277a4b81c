"""Loan aggregate models as returned by the banking API."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any

from loan_export.dates import to_iso_date


def to_decimal(value: Any) -> Decimal | None:
    """Convert an API number to Decimal.

    Absent, unparseable and non-finite (``NaN``, ``Infinity``) values become
    ``None``.
    """
    if value is None or value == "":
        return None
    if isinstance(value, Decimal):
        return value if value.is_finite() else None
    try:
        result = Decimal(str(value))
    except InvalidOperation:
        return None
    if not result.is_finite():
        return None
    return result


@dataclass(frozen=True)
class EnumOption:
    """Code/label pair used by the API for statuses and types."""

    id: int | None = None
    code: str = ""
    value: str = ""
    description: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> EnumOption | None:
        if not data:
            return None
        return cls(
            id=data.get("id"),
            code=data.get("code") or "",
            value=data.get("value") or "",
            description=data.get("description") or "",
        )


@dataclass(frozen=True)
class Currency:
    """Loan currency descriptor.

    The API also sends ``decimalPlaces``; exports always show two places.
    """

    code: str = ""
    display_symbol: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Currency | None:
        if not data:
            return None
        return cls(
            code=data.get("code") or "",
            display_symbol=data.get("displaySymbol") or "",
        )


@dataclass(frozen=True)
class Timeline:
    """Loan lifecycle dates, normalized to ISO strings."""

    actual_disbursement_date: str | None = None
    expected_maturity_date: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Timeline:
        data = data or {}
        return cls(
            actual_disbursement_date=to_iso_date(data.get("actualDisbursementDate")),
            expected_maturity_date=to_iso_date(data.get("expectedMaturityDate")),
        )


@dataclass(frozen=True)
class Charge:
    """Charge attached to a loan."""

    name: str = ""
    amount: Decimal | None = None
    charge_time_type: EnumOption | None = None
    deducted_from_disbursement: bool = False
    is_paid_at_disbursement: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Charge:
        return cls(
            name=data.get("name") or "",
            amount=to_decimal(data.get("amount")),
            charge_time_type=EnumOption.from_dict(data.get("chargeTimeType")),
            deducted_from_disbursement=bool(data.get("deductedFromDisbursement")),
            is_paid_at_disbursement=bool(data.get("isPaidAtDisbursement")),
        )


@dataclass(frozen=True)
class RepaymentPeriod:
    """One period of the repayment schedule (period 0 is the disbursement)."""

    period: int | None = None
    due_date: str | None = None
    principal_due: Decimal | None = None
    interest_due: Decimal | None = None
    fee_charges_due: Decimal | None = None
    penalty_charges_due: Decimal | None = None
    total_due_for_period: Decimal | None = None
    principal_loan_balance_outstanding: Decimal | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RepaymentPeriod:
        return cls(
            period=data.get("period"),
            due_date=to_iso_date(data.get("dueDate")),
            principal_due=to_decimal(data.get("principalDue")),
            interest_due=to_decimal(data.get("interestDue")),
            fee_charges_due=to_decimal(data.get("feeChargesDue")),
            penalty_charges_due=to_decimal(data.get("penaltyChargesDue")),
            total_due_for_period=to_decimal(data.get("totalDueForPeriod")),
            principal_loan_balance_outstanding=to_decimal(
                data.get("principalLoanBalanceOutstanding")
            ),
        )


@dataclass(frozen=True)
class LoanTransaction:
    """Entry of the loan transaction ledger."""

    date: str | None = None
    type: EnumOption | None = None
    amount: Decimal | None = None
    principal_portion: Decimal | None = None
    interest_portion: Decimal | None = None
    fee_charges_portion: Decimal | None = None
    penalty_charges_portion: Decimal | None = None
    outstanding_loan_balance: Decimal | None = None
    manually_reversed: bool = False

    @property
    def type_code(self) -> str:
        """Lower-cased transaction type code."""
        return self.type.code.lower() if self.type else ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LoanTransaction:
        return cls(
            date=to_iso_date(data.get("date")),
            type=EnumOption.from_dict(data.get("type")),
            amount=to_decimal(data.get("amount")),
            principal_portion=to_decimal(data.get("principalPortion")),
            interest_portion=to_decimal(data.get("interestPortion")),
            fee_charges_portion=to_decimal(data.get("feeChargesPortion")),
            penalty_charges_portion=to_decimal(data.get("penaltyChargesPortion")),
            outstanding_loan_balance=to_decimal(data.get("outstandingLoanBalance")),
            manually_reversed=bool(data.get("manuallyReversed")),
        )


@dataclass(frozen=True)
class Loan:
    """Loan aggregate with schedule, transactions and charges."""

    id: int | str | None = None
    account_no: str = ""
    client_name: str = ""
    loan_product_name: str = ""
    status: EnumOption | None = None
    currency: Currency | None = None
    principal: Decimal | None = None
    approved_principal: Decimal | None = None
    net_disbursal_amount: Decimal | None = None
    timeline: Timeline = field(default_factory=Timeline)
    charges: tuple[Charge, ...] = ()
    repayment_periods: tuple[RepaymentPeriod, ...] = ()
    transactions: tuple[LoanTransaction, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Loan:
        """Build a loan from the API's ``GET /loans/{id}`` response body.

        Parameters
        ----------
        data : dict[str, Any]
            Response fetched with the ``repaymentSchedule``, ``transactions``
            and ``charges`` associations.

        Returns
        -------
        Loan
            Parsed loan aggregate.
        """
        schedule = data.get("repaymentSchedule") or {}
        return cls(
            id=data.get("id"),
            account_no=data.get("accountNo") or "",
            client_name=data.get("clientName") or "",
            loan_product_name=data.get("loanProductName") or "",
            status=EnumOption.from_dict(data.get("status")),
            currency=Currency.from_dict(data.get("currency")),
            principal=to_decimal(data.get("principal")),
            approved_principal=to_decimal(data.get("approvedPrincipal")),
            net_disbursal_amount=to_decimal(data.get("netDisbursalAmount")),
            timeline=Timeline.from_dict(data.get("timeline")),
            charges=tuple(Charge.from_dict(c) for c in data.get("charges") or []),
            repayment_periods=tuple(
                RepaymentPeriod.from_dict(p) for p in schedule.get("periods") or []
            ),
            transactions=tuple(
                LoanTransaction.from_dict(t) for t in data.get("transactions") or []
            ),
        )
