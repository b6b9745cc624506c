"""
Module: erp_engines.expiry
Responsibility:
    Signed days-until-expiry and three-way urgency classification for
    anything that carries an expiry date (asset documents, safety
    permits, employee certifications).

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - ``days_until_expiry`` is computed on calendar dates, so a time of
      day on either side never shifts the result.
    - Classification is total over the integers: negative -> expired,
      0..7 -> expiring this week, anything else -> expiring this month.
      Items beyond the lookahead window are excluded by the caller with
      ``is_within_window`` before classification.
"""

from __future__ import annotations

from enum import Enum

from erp_kernel.domain.dates import DateLike, days_between

DEFAULT_EXPIRY_LOOKAHEAD_DAYS = 30
EXPIRING_THIS_WEEK_DAYS = 7


class ExpiryUrgency(str, Enum):
    """Urgency of an expiring item, most urgent first."""

    EXPIRED = "expired"
    EXPIRING_THIS_WEEK = "expiring_this_week"
    EXPIRING_THIS_MONTH = "expiring_this_month"


def days_until_expiry(expiry_date: DateLike, reference_date: DateLike) -> int:
    """Days from ``reference_date`` to ``expiry_date``; negative once expired."""
    return days_between(reference_date, expiry_date)


def is_within_window(
    expiry_date: DateLike,
    within_days: int,
    reference_date: DateLike,
) -> bool:
    return days_until_expiry(expiry_date, reference_date) <= within_days


def classify_expiry_urgency(
    days: int,
    this_week_days: int = EXPIRING_THIS_WEEK_DAYS,
) -> ExpiryUrgency:
    if days < 0:
        return ExpiryUrgency.EXPIRED
    if days <= this_week_days:
        return ExpiryUrgency.EXPIRING_THIS_WEEK
    return ExpiryUrgency.EXPIRING_THIS_MONTH
