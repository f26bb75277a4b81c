"""Pytest configuration and fixtures."""

from typing import Any

import pytest

from loan_export.models import Loan


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def loan_payload() -> dict[str, Any]:
    """Loan response with schedule, transactions and charges."""
    return {
        "id": 42,
        "accountNo": "000000042",
        "clientName": "Jane Wanjiru",
        "loanProductName": "Business Loan",
        "status": {"id": 300, "code": "loanStatusType.active", "value": "Active", "description": "Active"},
        "currency": {"code": "KES", "displaySymbol": "KSh", "decimalPlaces": 2},
        "principal": 100000,
        "approvedPrincipal": 100000,
        "timeline": {
            "actualDisbursementDate": [2024, 1, 1],
            "expectedMaturityDate": [2024, 3, 1],
        },
        "charges": [
            {
                "name": "Processing Fee",
                "amount": 2000,
                "chargeTimeType": {"id": 1, "code": "chargeTimeType.disbursement", "value": "Disbursement"},
            },
            {
                "name": "Insurance",
                "amount": 500,
                "chargeTimeType": {"id": 8, "code": "chargeTimeType.instalmentFee", "value": "Installment Fee"},
            },
        ],
        "repaymentSchedule": {
            "periods": [
                {"dueDate": [2024, 1, 1], "principalLoanBalanceOutstanding": 100000},
                {
                    "period": 1,
                    "dueDate": [2024, 2, 1],
                    "principalDue": 50000,
                    "interestDue": 1500.5,
                    "feeChargesDue": 250,
                    "totalDueForPeriod": 51750.5,
                    "principalLoanBalanceOutstanding": 50000,
                },
                {
                    "period": 2,
                    "dueDate": "2024-03-01",
                    "principalDue": 50000,
                    "interestDue": 750.25,
                    "feeChargesDue": 250,
                    "penaltyChargesDue": 100,
                    "totalDueForPeriod": 51100.25,
                    "principalLoanBalanceOutstanding": 0,
                },
            ]
        },
        "transactions": [
            {
                "date": [2024, 2, 1],
                "type": {"code": "loanTransactionType.repayment", "value": "Repayment"},
                "amount": 51750.5,
                "principalPortion": 50000,
                "interestPortion": 1500.5,
                "feeChargesPortion": 250,
            },
            {
                "date": [2024, 1, 1],
                "type": {"code": "loanTransactionType.disbursement", "value": "Disbursement"},
                "amount": 100000,
            },
            {
                "date": [2024, 1, 15],
                "type": {"code": "loanTransactionType.repayment", "value": "Repayment"},
                "amount": 10000,
                "principalPortion": 10000,
                "manuallyReversed": True,
            },
        ],
    }


@pytest.fixture
def sample_loan(loan_payload: dict[str, Any]) -> Loan:
    """Parsed sample loan."""
    return Loan.from_dict(loan_payload)
