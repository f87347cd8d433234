"""Calendar-day arithmetic.

Every value handled here is a plain ``datetime.date``.  ``datetime`` inputs
are truncated to their local wall-clock day first, so time-of-day and DST
offsets can never leak into a day count.
"""

from __future__ import annotations

import calendar
import re
from datetime import date, datetime, timedelta
from typing import Iterator

# Shown wherever a date is expected but none is available
PLACEHOLDER = "—"

_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def normalize_to_midnight(value: date | datetime) -> date:
    """Drop any time-of-day component, keeping year/month/day."""
    if isinstance(value, datetime):
        return value.date()
    return date(value.year, value.month, value.day)


def add_days(value: date | datetime, days: int) -> date:
    """Return a new date shifted by ``days`` (may be negative)."""
    return normalize_to_midnight(value) + timedelta(days=int(days))


def days_between(a: date | datetime, b: date | datetime) -> int:
    """Signed whole-day distance from ``a`` to ``b``."""
    return (normalize_to_midnight(b) - normalize_to_midnight(a)).days


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every day from ``start`` to ``end`` inclusive."""
    current = normalize_to_midnight(start)
    while days_between(current, end) >= 0:
        yield current
        current = add_days(current, 1)


def parse_iso_date(value: str | None) -> date | None:
    """Parse a ``YYYY-MM-DD`` string.

    Returns None for empty or malformed input instead of raising, so bad
    user input never turns into an exception further up.
    """
    if not value or not isinstance(value, str):
        return None
    value = value.strip()
    if not _ISO_DATE_RE.match(value):
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def format_iso(value: date) -> str:
    """Canonical ``YYYY-MM-DD`` key for a day."""
    return normalize_to_midnight(value).isoformat()


def format_human(value: date | None) -> str:
    """Short label such as ``Jun 3``; the placeholder when no date is given."""
    if value is None:
        return PLACEHOLDER
    return f"{value.strftime('%b')} {value.day}"


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def sunday_weekday_index(value: date) -> int:
    """Weekday index with Sunday = 0 … Saturday = 6."""
    return (value.weekday() + 1) % 7
