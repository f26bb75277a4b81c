"""Date normalization for loan aggregates.

The banking API returns dates either as ``[year, month, day]`` triples or as
ISO strings. Every date entering the pipeline goes through :func:`to_iso_date`
so the rest of the code only ever sees canonical ``YYYY-MM-DD`` strings.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Sequence, Union

logger = logging.getLogger(__name__)

DateTriple = Sequence[int]
IsoDateString = str
DateInput = Union[DateTriple, IsoDateString, date, None]

DISPLAY_FORMAT = "%d %b %Y"


def to_iso_date(value: DateInput) -> str | None:
    """Normalize a date value to ``YYYY-MM-DD``.

    Strings are returned unchanged, so a malformed value is echoed rather
    than rejected. Absent values return ``None``.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, str):
        return value
    raw = "-".join(str(part) for part in value)
    if len(value) < 3:
        return raw or None
    try:
        year, month, day = (int(part) for part in value[:3])
    except (TypeError, ValueError):
        return raw
    return f"{year:04d}-{month:02d}-{day:02d}"


def parse_iso_date(value: str) -> date | None:
    """Parse the date part of an ISO string, or return None."""
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None


def format_date_for_display(value: DateInput, fmt: str = DISPLAY_FORMAT) -> str:
    """Format a date value for display in exports (``01 Jan 2024``).

    Returns an empty string for absent values and the raw value when it
    cannot be parsed.
    """
    iso = to_iso_date(value)
    if iso is None:
        return ""
    parsed = parse_iso_date(iso)
    if parsed is None:
        logger.debug("Unparseable date %r echoed as-is", iso)
        return iso
    return parsed.strftime(fmt)
