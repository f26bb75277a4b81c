"""Tests for schedule and statement row projection."""

import logging
from decimal import Decimal

import pytest

from loan_export.models import EnumOption, Loan, LoanTransaction, RepaymentPeriod
from loan_export.projectors import (
    build_schedule_rows,
    build_statement_rows,
    schedule_totals,
    transaction_type_label,
)


def _tx(code: str, day: str, amount: str, principal: str = "0", **kwargs: object) -> LoanTransaction:
    return LoanTransaction(
        date=day,
        type=EnumOption(code=f"loanTransactionType.{code}", value=code.title()),
        amount=Decimal(amount),
        principal_portion=Decimal(principal),
        **kwargs,
    )


class TestBuildScheduleRows:
    """Tests for build_schedule_rows."""

    def test_disbursement_period_skipped(self, sample_loan: Loan) -> None:
        rows = build_schedule_rows(sample_loan.repayment_periods)

        assert [row.installment_number for row in rows] == [1, 2]

    def test_non_positive_periods_skipped(self) -> None:
        periods = [RepaymentPeriod(period=0), RepaymentPeriod(period=-1), RepaymentPeriod(period=3)]
        assert [row.installment_number for row in build_schedule_rows(periods)] == [3]

    def test_order_preserved(self) -> None:
        periods = [RepaymentPeriod(period=2), RepaymentPeriod(period=1)]
        assert [row.installment_number for row in build_schedule_rows(periods)] == [2, 1]

    def test_row_values(self, sample_loan: Loan) -> None:
        row = build_schedule_rows(sample_loan.repayment_periods)[1]

        assert row.due_date == "01 Mar 2024"
        assert row.principal_due == Decimal("50000")
        assert row.interest_due == Decimal("750.25")
        assert row.fees_due == Decimal("250")
        assert row.penalties_due == Decimal("100")
        assert row.total_due == Decimal("51100.25")
        assert row.principal_outstanding == Decimal("0")

    def test_missing_amounts_are_zero(self) -> None:
        row = build_schedule_rows([RepaymentPeriod(period=1)])[0]

        assert row.due_date == ""
        assert row.principal_due == Decimal("0")
        assert row.total_due == Decimal("0")

    def test_custom_date_format(self, sample_loan: Loan) -> None:
        rows = build_schedule_rows(sample_loan.repayment_periods, "%Y/%m/%d")
        assert rows[0].due_date == "2024/02/01"


class TestScheduleTotals:
    """Tests for schedule_totals."""

    def test_sums(self, sample_loan: Loan) -> None:
        totals = schedule_totals(build_schedule_rows(sample_loan.repayment_periods))

        assert totals.principal == Decimal("100000")
        assert totals.interest == Decimal("2250.75")
        assert totals.fees == Decimal("500")
        assert totals.penalties == Decimal("100")
        assert totals.total == Decimal("102850.75")

    def test_empty(self) -> None:
        assert schedule_totals([]).total == Decimal("0")


class TestTransactionTypeLabel:
    """Tests for transaction_type_label."""

    @pytest.mark.parametrize(
        "code, label",
        [
            ("loanTransactionType.disbursement", "Disbursement"),
            ("loanTransactionType.repayment", "Repayment"),
            ("loanTransactionType.repaymentAtDisbursement", "Fee Deduction (Net-off)"),
            ("loanTransactionType.writeOff", "Write Off"),
            ("loanTransactionType.waiveInterest", "Waiver"),
            ("loanTransactionType.chargePayment", "Charge"),
            ("loanTransactionType.accrual", "Accrual"),
        ],
    )
    def test_known_codes(self, code: str, label: str) -> None:
        assert transaction_type_label(EnumOption(code=code)) == label

    def test_unknown_code_uses_description(self) -> None:
        option = EnumOption(code="loanTransactionType.refund", value="Refund", description="Refund Out")
        assert transaction_type_label(option) == "Refund Out"

    def test_unknown_code_uses_value(self) -> None:
        assert transaction_type_label(EnumOption(code="x.refund", value="Refund")) == "Refund"

    def test_missing_type(self) -> None:
        assert transaction_type_label(None) == "Unknown"
        assert transaction_type_label(EnumOption()) == "Unknown"


class TestBuildStatementRows:
    """Tests for build_statement_rows."""

    def test_sorted_and_replayed(self) -> None:
        """Disbursement 1000 then a 50 principal repayment leaves 950."""
        transactions = [
            _tx("repayment", "2024-02-01", "60", "50"),
            _tx("disbursement", "2024-01-01", "1000"),
        ]

        rows = build_statement_rows(transactions, Decimal("1000"))

        assert [row.type for row in rows] == ["Disbursement", "Repayment"]
        assert [row.principal_outstanding for row in rows] == [Decimal("1000"), Decimal("950")]

    def test_reversed_excluded(self, sample_loan: Loan) -> None:
        rows = build_statement_rows(sample_loan.transactions, Decimal("100000"))

        assert len(rows) == 2
        assert rows[-1].principal_outstanding == Decimal("50000")

    def test_source_balance_wins(self) -> None:
        transactions = [
            _tx("disbursement", "2024-01-01", "1000"),
            _tx("repayment", "2024-02-01", "60", "50", outstanding_loan_balance=Decimal("940")),
            _tx("repayment", "2024-03-01", "60", "50"),
        ]

        rows = build_statement_rows(transactions, Decimal("1000"))

        assert rows[1].principal_outstanding == Decimal("940")
        # Replay continues from its own balance
        assert rows[2].principal_outstanding == Decimal("900")

    def test_balance_never_negative(self) -> None:
        transactions = [
            _tx("disbursement", "2024-01-01", "100"),
            _tx("repayment", "2024-02-01", "500", "500"),
        ]
        rows = build_statement_rows(transactions, Decimal("100"))
        assert rows[-1].principal_outstanding == Decimal("0")

    def test_write_off_reduces_balance(self) -> None:
        transactions = [
            _tx("disbursement", "2024-01-01", "1000"),
            _tx("writeOff", "2024-05-01", "1000", "1000"),
        ]
        rows = build_statement_rows(transactions, Decimal("1000"))
        assert rows[-1].type == "Write Off"
        assert rows[-1].principal_outstanding == Decimal("0")

    def test_net_off_does_not_reset_balance(self) -> None:
        transactions = [
            _tx("disbursement", "2024-01-01", "1000"),
            _tx("repaymentAtDisbursement", "2024-01-01", "20"),
        ]

        rows = build_statement_rows(transactions, Decimal("1000"))

        assert [row.type for row in rows] == ["Disbursement", "Fee Deduction (Net-off)"]
        assert rows[1].principal_outstanding == Decimal("1000")

    def test_disbursement_without_amount_uses_approved(self) -> None:
        tx = LoanTransaction(date="2024-01-01", type=EnumOption(code="loanTransactionType.disbursement"))
        rows = build_statement_rows([tx], Decimal("750"))
        assert rows[0].principal_outstanding == Decimal("750")
        assert rows[0].amount == Decimal("0")

    def test_same_day_keeps_source_order(self) -> None:
        transactions = [
            _tx("disbursement", "2024-01-01", "1000"),
            _tx("chargePayment", "2024-01-01", "5"),
            _tx("accrual", "2024-01-01", "3"),
        ]
        rows = build_statement_rows(transactions, Decimal("1000"))
        assert [row.type for row in rows] == ["Disbursement", "Charge", "Accrual"]

    def test_undated_transactions_first(self) -> None:
        transactions = [_tx("repayment", "2024-02-01", "10"), LoanTransaction()]
        rows = build_statement_rows(transactions, Decimal("0"))
        assert rows[0].type == "Unknown"
        assert rows[0].date == ""

    def test_skip_count_logged(self, sample_loan: Loan, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="loan_export.projectors"):
            build_statement_rows(sample_loan.transactions, Decimal("100000"))
        assert "1 reversed" in caplog.text
