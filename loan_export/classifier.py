"""Upfront charge classification."""

from loan_export.models.loan import Charge

# Charge time types whose charges are collected at disbursement
UPFRONT_CHARGE_TIME_TYPES = (
    "disbursement",
    "tranche disbursement",
    "specified due date",
)

# Name fallback for sources that expose neither flags nor a usable time type
KNOWN_UPFRONT_FEE_NAMES = (
    "processing fee",
    "disbursement fee",
    "application fee",
    "origination fee",
    "duty",
    "stamp duty",
    "rev share",
    "revenue share",
    "guarantee pool",
    "onboarding",
    "admin fee",
    "administrative fee",
)


def is_upfront_charge(charge: Charge) -> bool:
    """Return True when the charge is deducted from the disbursed amount.

    Checks, in order: the explicit disbursement flags, the charge time type,
    then the charge name. The name match is a heuristic and can misclassify
    charges whose names merely resemble upfront fees.
    """
    if charge.deducted_from_disbursement or charge.is_paid_at_disbursement:
        return True

    time_type = ""
    if charge.charge_time_type is not None:
        time_type = (charge.charge_time_type.value or charge.charge_time_type.code).lower()
    if any(t in time_type for t in UPFRONT_CHARGE_TIME_TYPES):
        return True

    name = charge.name.lower()
    return any(known in name for known in KNOWN_UPFRONT_FEE_NAMES)
