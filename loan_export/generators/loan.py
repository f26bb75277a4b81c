"""Generator for sample loan aggregates shaped like API responses."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Any

from loan_export.generators.base import BaseGenerator

PRODUCTS = ("Business Loan", "Salary Advance", "Asset Finance", "School Fees Loan")

# (name, charge time type, share of principal); the first is deducted at disbursement
CHARGE_TEMPLATES = (
    ("Processing Fee", {"id": 1, "code": "chargeTimeType.disbursement", "value": "Disbursement"}, 0.02),
    ("Insurance", {"id": 8, "code": "chargeTimeType.instalmentFee", "value": "Installment Fee"}, 0.005),
    ("Stamp Duty", {"id": 2, "code": "chargeTimeType.specifiedDueDate", "value": "Specified due date"}, 0.001),
)

ACTIVE_STATUS = {"id": 300, "code": "loanStatusType.active", "value": "Active", "description": "Active"}


def _triple(day: date) -> list[int]:
    return [day.year, day.month, day.day]


def _tx_type(code: str, value: str) -> dict[str, Any]:
    return {"code": f"loanTransactionType.{code}", "value": value}


class LoanAggregateGenerator(BaseGenerator):
    """Generate loan aggregates with schedule, charges and transactions."""

    def generate(
        self,
        loan_id: int | None = None,
        term_months: int | None = None,
        repaid_installments: int | None = None,
        with_reversal: bool = False,
    ) -> dict[str, Any]:
        """Generate one loan aggregate.

        Parameters
        ----------
        loan_id : int | None
            Loan id; random when omitted.
        term_months : int | None
            Number of installments; random when omitted.
        repaid_installments : int | None
            How many installments have been repaid.
        with_reversal : bool
            Add a manually reversed repayment to the ledger.

        Returns
        -------
        dict[str, Any]
            Loan in the API's camelCase JSON shape.
        """
        loan_id = loan_id if loan_id is not None else self.random.randint(1, 99999)
        term = term_months or self.random.choice([3, 6, 12, 18, 24])
        principal = float(self.random.randint(10, 500) * 1000)
        monthly_rate = self.random.choice([0.01, 0.015, 0.02, 0.03])
        disbursed_on = date(2024, 1, 1) + timedelta(days=self.random.randint(0, 365))

        charges = self._charges(principal)
        upfront_fee = charges[0]["amount"]
        periods = self._schedule(principal, monthly_rate, term, disbursed_on)

        if repaid_installments is None:
            repaid_installments = self.random.randint(0, term)
        transactions = self._transactions(
            principal, upfront_fee, periods, disbursed_on, repaid_installments, with_reversal
        )

        return {
            "id": loan_id,
            "accountNo": f"{loan_id:09d}",
            "clientName": self.fake.name(),
            "loanProductName": self.random.choice(PRODUCTS),
            "status": dict(ACTIVE_STATUS),
            "currency": {"code": "KES", "displaySymbol": "KSh", "decimalPlaces": 2},
            "principal": principal,
            "approvedPrincipal": principal,
            "timeline": {
                "actualDisbursementDate": _triple(disbursed_on),
                "expectedMaturityDate": periods[-1]["dueDate"],
            },
            "charges": charges,
            "repaymentSchedule": {"periods": periods},
            "transactions": transactions,
        }

    def _charges(self, principal: float) -> list[dict[str, Any]]:
        return [
            {
                "name": name,
                "amount": round(principal * share, 2),
                "chargeTimeType": dict(time_type),
            }
            for name, time_type, share in CHARGE_TEMPLATES
        ]

    def _schedule(
        self, principal: float, rate: float, term: int, disbursed_on: date
    ) -> list[dict[str, Any]]:
        """Equal-installment amortization with a leading disbursement period."""
        payment = principal * (rate * (1 + rate) ** term) / ((1 + rate) ** term - 1)
        periods: list[dict[str, Any]] = [
            {
                "dueDate": _triple(disbursed_on),
                "principalDisbursed": principal,
                "principalLoanBalanceOutstanding": principal,
            }
        ]

        balance = principal
        for number in range(1, term + 1):
            interest = round(balance * rate, 2)
            principal_due = round(payment - interest, 2) if number < term else round(balance, 2)
            balance = round(balance - principal_due, 2)
            periods.append(
                {
                    "period": number,
                    "dueDate": _triple(disbursed_on + timedelta(days=30 * number)),
                    "principalDue": principal_due,
                    "interestDue": interest,
                    "feeChargesDue": 0.0,
                    "penaltyChargesDue": 0.0,
                    "totalDueForPeriod": round(principal_due + interest, 2),
                    "principalLoanBalanceOutstanding": balance,
                }
            )
        return periods

    def _transactions(
        self,
        principal: float,
        upfront_fee: float,
        periods: list[dict[str, Any]],
        disbursed_on: date,
        repaid: int,
        with_reversal: bool,
    ) -> list[dict[str, Any]]:
        transactions: list[dict[str, Any]] = [
            {
                "id": 1,
                "date": _triple(disbursed_on),
                "type": _tx_type("disbursement", "Disbursement"),
                "amount": principal,
                "principalPortion": 0.0,
                "outstandingLoanBalance": principal,
                "manuallyReversed": False,
            },
            {
                "id": 2,
                "date": _triple(disbursed_on),
                "type": _tx_type("repaymentAtDisbursement", "Repayment (at time of disbursement)"),
                "amount": upfront_fee,
                "feeChargesPortion": upfront_fee,
                "principalPortion": 0.0,
                "manuallyReversed": False,
            },
        ]

        for period in periods[1 : repaid + 1]:
            transactions.append(
                {
                    "id": len(transactions) + 1,
                    "date": period["dueDate"],
                    "type": _tx_type("repayment", "Repayment"),
                    "amount": period["totalDueForPeriod"],
                    "principalPortion": period["principalDue"],
                    "interestPortion": period["interestDue"],
                    "outstandingLoanBalance": period["principalLoanBalanceOutstanding"],
                    "manuallyReversed": False,
                }
            )

        if with_reversal and len(periods) > 1:
            period = periods[1]
            transactions.append(
                {
                    "id": len(transactions) + 1,
                    "date": period["dueDate"],
                    "type": _tx_type("repayment", "Repayment"),
                    "amount": period["totalDueForPeriod"],
                    "principalPortion": period["principalDue"],
                    "interestPortion": period["interestDue"],
                    "manuallyReversed": True,
                }
            )

        # Newest first, as some API versions return the ledger; the
        # disbursement stays ahead of its same-day fee net-off
        return transactions[2:][::-1] + transactions[:2]
