"""
Module: erp_engines.trend
Responsibility:
    Compare a current and a previous value and describe the movement as
    a percentage change plus a direction.  Used for week-over-week KPI
    trends.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - Division by a zero previous value is defined: 100 when the current
      value is positive, 0 otherwise.
    - ``change_percent`` is rounded half-up to two places and the
      direction is derived from the rounded value, so a change that
      rounds to 0.00 is always ``stable``.
    - ``WEEK_OVER_WEEK_METRICS`` is a closed, ordered list; adding a
      metric is a version change.

Usage:
    trend = create_trend("total_revenue", Decimal("150"), Decimal("100"))
    trend.change_percent   # Decimal("50.00")
    trend.direction        # TrendDirection.UP
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any

from erp_engines.tracer import traced_engine
from erp_kernel.domain.values import HUNDRED, ZERO, Number, round_half_up, to_decimal

WEEK_OVER_WEEK_METRICS: tuple[str, ...] = (
    "total_revenue",
    "jobs_completed",
    "on_time_delivery_rate",
    "average_job_duration_days",
    "ar_aging_current",
    "ar_aging_30_days",
    "ar_aging_60_days",
    "ar_aging_90_plus",
    "collection_rate",
)


class TrendDirection(str, Enum):
    UP = "up"
    DOWN = "down"
    STABLE = "stable"


@dataclass(frozen=True)
class KPITrend:
    """Movement of one metric between two periods."""

    metric_name: str
    current_value: Decimal
    previous_value: Decimal
    change_percent: Decimal
    direction: TrendDirection


def calculate_change_percent(current: Number, previous: Number) -> Decimal:
    """Unrounded percentage change from ``previous`` to ``current``."""
    cur = to_decimal(current)
    prev = to_decimal(previous)
    if prev == ZERO:
        return HUNDRED if cur > ZERO else ZERO
    return (cur - prev) / prev * HUNDRED


def determine_trend_direction(change_percent: Number) -> TrendDirection:
    value = to_decimal(change_percent)
    if value > ZERO:
        return TrendDirection.UP
    if value < ZERO:
        return TrendDirection.DOWN
    return TrendDirection.STABLE


def create_trend(metric_name: str, current: Number, previous: Number) -> KPITrend:
    change = round_half_up(calculate_change_percent(current, previous), 2)
    return KPITrend(
        metric_name=metric_name,
        current_value=to_decimal(current),
        previous_value=to_decimal(previous),
        change_percent=change,
        direction=determine_trend_direction(change),
    )


def _metric_value(snapshot: Any, name: str) -> Any:
    if isinstance(snapshot, Mapping):
        return snapshot.get(name)
    return getattr(snapshot, name, None)


@traced_engine("trend", "1.0")
def calculate_week_over_week_trends(current: Any, previous: Any) -> tuple[KPITrend, ...]:
    """
    One trend per entry of ``WEEK_OVER_WEEK_METRICS``, in that order.

    ``current`` and ``previous`` are snapshots exposing the metric names
    as attributes or mapping keys; a missing value counts as zero.
    """
    return tuple(
        create_trend(
            name,
            to_decimal(_metric_value(current, name)),
            to_decimal(_metric_value(previous, name)),
        )
        for name in WEEK_OVER_WEEK_METRICS
    )
