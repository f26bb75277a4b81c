"""Tests for sample loan generators."""

from decimal import Decimal

import pytest

from loan_export.generators import LoanAggregateGenerator
from loan_export.models import Loan
from loan_export.projectors import build_schedule_rows, build_statement_rows
from loan_export.summary import compute_disbursement_summary


class TestLoanAggregateGenerator:
    """Tests for LoanAggregateGenerator."""

    def test_reproducible(self, seed: int) -> None:
        """Same seed produces the same loan."""
        first = LoanAggregateGenerator(seed=seed).generate(loan_id=1)
        second = LoanAggregateGenerator(seed=seed).generate(loan_id=1)

        assert first == second

    def test_shape(self, seed: int) -> None:
        """Test the API field layout."""
        data = LoanAggregateGenerator(seed=seed).generate(loan_id=42, term_months=6)

        assert data["accountNo"] == "000000042"
        assert data["currency"]["code"] == "KES"
        assert "period" not in data["repaymentSchedule"]["periods"][0]
        assert len(data["repaymentSchedule"]["periods"]) == 7
        assert data["timeline"]["expectedMaturityDate"] == data["repaymentSchedule"]["periods"][-1]["dueDate"]

    def test_parses_into_loan(self, seed: int) -> None:
        loan = Loan.from_dict(LoanAggregateGenerator(seed=seed).generate(loan_id=3, term_months=12))

        assert loan.id == 3
        assert len(build_schedule_rows(loan.repayment_periods)) == 12
        assert loan.repayment_periods[-1].principal_loan_balance_outstanding == Decimal("0")

    def test_summary_is_consistent(self, seed: int) -> None:
        loan = Loan.from_dict(LoanAggregateGenerator(seed=seed).generate(loan_id=5))

        summary = compute_disbursement_summary(loan, loan.charges)

        assert summary.upfront_fees_total == sum(item.amount for item in summary.upfront_fee_items)
        assert summary.net_paid_to_client == summary.approved_amount - summary.upfront_fees_total
        assert "Processing Fee" in [item.name for item in summary.upfront_fee_items]
        assert "Insurance" not in [item.name for item in summary.upfront_fee_items]

    @pytest.mark.parametrize("repaid", [0, 2, 6])
    def test_statement_replay(self, seed: int, repaid: int) -> None:
        data = LoanAggregateGenerator(seed=seed).generate(
            loan_id=8, term_months=6, repaid_installments=repaid, with_reversal=True
        )
        loan = Loan.from_dict(data)

        rows = build_statement_rows(loan.transactions, loan.approved_principal)

        assert len(rows) == 2 + repaid
        assert rows[0].type == "Disbursement"
        assert rows[1].type == "Fee Deduction (Net-off)"
        expected = data["repaymentSchedule"]["periods"][repaid]["principalLoanBalanceOutstanding"]
        assert rows[-1].principal_outstanding == Decimal(str(expected))

    def test_reversal_flagged(self, seed: int) -> None:
        data = LoanAggregateGenerator(seed=seed).generate(loan_id=9, with_reversal=True)
        assert sum(1 for tx in data["transactions"] if tx["manuallyReversed"]) == 1
