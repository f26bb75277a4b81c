"""Sample loan aggregate generators."""

from loan_export.generators.loan import LoanAggregateGenerator

__all__ = ["LoanAggregateGenerator"]
