"""
Module: erp_engines.schedule
Responsibility:
    Time-of-day arithmetic for notification delivery: ``HH:MM`` parsing,
    quiet-hour window membership (including windows that wrap past
    midnight) and the next digest send time.

Architecture position:
    Engines -- pure calculation layer, zero I/O.  The instant being
    tested is always a parameter; callers take it from their Clock.

Invariants enforced:
    - Windows are half-open: ``start <= t < end``.  An overnight window
      (start after end) is the complement ``t >= start or t < end``.
    - A window with a missing bound is never active.
    - Comparison is at minute granularity; seconds are ignored.

Failure modes:
    - InvalidTimeFormatError from ``parse_time_of_day`` for strings that
      are not ``H:MM``/``HH:MM`` on a 24-hour clock.  Validators should
      reject such input first via ``is_valid_time_format``.
"""

from __future__ import annotations

import re
from datetime import datetime, time, timedelta

from erp_kernel.exceptions import InvalidTimeFormatError

TIME_OF_DAY_PATTERN = re.compile(r"^([01]?[0-9]|2[0-3]):([0-5][0-9])$")

DEFAULT_DIGEST_HOUR = 9


def is_valid_time_format(value: str | None) -> bool:
    return isinstance(value, str) and TIME_OF_DAY_PATTERN.match(value) is not None


def parse_time_of_day(value: str) -> int:
    """Minutes since midnight for an ``HH:MM`` string."""
    match = TIME_OF_DAY_PATTERN.match(value) if isinstance(value, str) else None
    if match is None:
        raise InvalidTimeFormatError(value)
    return int(match.group(1)) * 60 + int(match.group(2))


def minutes_of_day(moment: datetime | time) -> int:
    return moment.hour * 60 + moment.minute


def is_in_window(start: str | None, end: str | None, moment: datetime | time) -> bool:
    """
    True when ``moment`` falls inside the ``start``..``end`` window.

    ``22:00``..``07:00`` covers 23:00 and 03:00 but not 12:00.  Equal
    bounds describe an empty window.
    """
    if not start or not end:
        return False

    start_minutes = parse_time_of_day(start)
    end_minutes = parse_time_of_day(end)
    current = minutes_of_day(moment)

    if start_minutes > end_minutes:
        return current >= start_minutes or current < end_minutes
    return start_minutes <= current < end_minutes


def next_hour(from_time: datetime) -> datetime:
    """The next top of the hour strictly after ``from_time``'s hour start."""
    return from_time.replace(minute=0, second=0, microsecond=0) + timedelta(hours=1)


def next_daily_run(from_time: datetime, hour: int = DEFAULT_DIGEST_HOUR) -> datetime:
    """Today at ``hour``:00, or tomorrow if that moment is not after ``from_time``."""
    candidate = from_time.replace(hour=hour, minute=0, second=0, microsecond=0)
    if candidate <= from_time:
        candidate += timedelta(days=1)
    return candidate
