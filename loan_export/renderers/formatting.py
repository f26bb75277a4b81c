"""Shared number formatting utilities for renderers."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Any

TWO_PLACES = Decimal("0.01")


def quantize_amount(value: Any) -> Decimal:
    """Round a monetary value to two places, half up. ``None`` counts as 0."""
    if value is None:
        value = Decimal("0")
    elif not isinstance(value, Decimal):
        value = Decimal(str(value))
    result = value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
    if result == 0:
        result = abs(result)  # no "-0.00"
    return result


def format_amount(value: Any) -> str:
    """Two decimals, no thousands separator (``1234.50``)."""
    return f"{quantize_amount(value):f}"


def format_display_amount(value: Any) -> str:
    """Two decimals with thousands separators (``1,234.50``)."""
    return f"{quantize_amount(value):,.2f}"
