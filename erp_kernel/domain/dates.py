"""
Day-granularity date helpers.

Rows arrive from the data store with ISO-8601 strings; view models carry
``date`` or ``datetime`` values.  Everything that buckets by days goes
through ``to_date`` so both sides of a comparison are normalized to
their calendar date (local midnight) before subtracting.  Instant
comparisons go through ``to_utc`` instead, since hosted rows carry an
offset and SQLite rows do not.
"""

from __future__ import annotations

from datetime import date, datetime, timezone

DateLike = date | datetime | str

MS_PER_DAY = 86_400_000


def to_date(value: DateLike) -> date:
    """Normalize a date, datetime or ISO string to its calendar date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return to_datetime(value).date()


def to_datetime(value: DateLike) -> datetime:
    """Parse an ISO string (``Z`` suffix allowed) or widen a date to midnight."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def to_utc(value: DateLike) -> datetime:
    """
    Parse like ``to_datetime`` and return an aware UTC instant.

    Naive values are taken to be UTC already.
    """
    parsed = to_datetime(value)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def days_between(reference: DateLike, target: DateLike) -> int:
    """Whole days from ``reference`` to ``target`` (negative if target is earlier)."""
    return (to_date(target) - to_date(reference)).days


def elapsed_ms(start: DateLike, end: DateLike) -> float:
    """Milliseconds from ``start`` to ``end`` without day normalization."""
    return (to_utc(end) - to_utc(start)).total_seconds() * 1000
