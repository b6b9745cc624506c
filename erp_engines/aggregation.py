"""
Module: erp_engines.aggregation
Responsibility:
    Single-pass folds over record collections: grouped sums, guarded
    rates and means.  Report builders compose these instead of writing
    their own loops.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - Folding the empty collection yields zero, never an error.
    - A zero denominator yields exactly zero.
    - Missing or blank group keys land in the caller's sentinel key.
    - Grouped sums preserve first-seen key order and sum to the
      ungrouped total.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from decimal import Decimal
from typing import TypeVar

from erp_kernel.domain.values import HUNDRED, ZERO, Number, round_half_up, to_decimal

T = TypeVar("T")

UNKNOWN_CUSTOMER = "Unknown"
GENERAL_SERVICE = "General"


def group_and_sum(
    records: Iterable[T],
    key_fn: Callable[[T], str | None],
    value_fn: Callable[[T], Number | None],
    default_key: str = UNKNOWN_CUSTOMER,
) -> dict[str, Decimal]:
    """
    Sum ``value_fn`` per ``key_fn`` group.

    A ``None`` value counts as zero; a ``None`` or empty key is folded
    into ``default_key``.
    """
    totals: dict[str, Decimal] = {}
    for record in records:
        key = key_fn(record) or default_key
        totals[key] = totals.get(key, ZERO) + to_decimal(value_fn(record))
    return totals


def group_and_count(
    records: Iterable[T],
    key_fn: Callable[[T], str | None],
    default_key: str = UNKNOWN_CUSTOMER,
) -> dict[str, int]:
    counts: dict[str, int] = {}
    for record in records:
        key = key_fn(record) or default_key
        counts[key] = counts.get(key, 0) + 1
    return counts


def sum_decimal(values: Iterable[Number | None]) -> Decimal:
    return sum((to_decimal(v) for v in values), ZERO)


def safe_rate(numerator: Number, denominator: Number) -> Decimal:
    """``numerator / denominator``, or zero when the denominator is zero."""
    denom = to_decimal(denominator)
    if denom == ZERO:
        return ZERO
    return to_decimal(numerator) / denom


def safe_percent(numerator: Number, denominator: Number, places: int = 2) -> Decimal:
    """Rate as a percentage rounded half-up; zero for an empty denominator."""
    return round_half_up(safe_rate(numerator, denominator) * HUNDRED, places)


def mean(values: Iterable[Number]) -> Decimal:
    """Arithmetic mean; zero for an empty collection."""
    total = ZERO
    count = 0
    for value in values:
        total += to_decimal(value)
        count += 1
    return safe_rate(total, count)
