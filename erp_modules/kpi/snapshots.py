"""
KPI Snapshot assembly, filtering and validation.

A snapshot is dated on the last day (Sunday) of its ISO week.  Stored
snapshots are listed most recent first.
"""

from __future__ import annotations

from collections.abc import Iterable

from erp_kernel.domain.values import HUNDRED, ZERO
from erp_modules.kpi.models import (
    FinancialMetrics,
    KPISnapshot,
    OperationalMetrics,
    RevenueMetrics,
)
from erp_modules.kpi.weeks import get_week_date_range


def create_kpi_snapshot(
    week_number: int,
    year: int,
    revenue_metrics: RevenueMetrics,
    operational_metrics: OperationalMetrics,
    financial_metrics: FinancialMetrics,
) -> KPISnapshot:
    """Unsaved snapshot (``id`` None) for the given week."""
    return KPISnapshot(
        week_number=week_number,
        year=year,
        snapshot_date=get_week_date_range(week_number, year).end.date(),
        revenue_metrics=revenue_metrics,
        operational_metrics=operational_metrics,
        financial_metrics=financial_metrics,
    )


def is_kpi_snapshot_complete(snapshot: KPISnapshot) -> bool:
    """True when the snapshot is stored and carries all three metric groups."""
    if not snapshot.id or not snapshot.week_number or not snapshot.year:
        return False
    if snapshot.snapshot_date is None:
        return False
    return (
        snapshot.revenue_metrics is not None
        and snapshot.operational_metrics is not None
        and snapshot.financial_metrics is not None
    )


def filter_kpi_snapshots(
    snapshots: Iterable[KPISnapshot],
    *,
    year: int | None = None,
    start_week: int | None = None,
    end_week: int | None = None,
    limit: int | None = None,
) -> list[KPISnapshot]:
    """Matching snapshots, most recent first; a non-positive limit is ignored."""
    result = [
        s for s in snapshots
        if (year is None or s.year == year)
        and (start_week is None or s.week_number >= start_week)
        and (end_week is None or s.week_number <= end_week)
    ]
    result.sort(key=lambda s: (s.year, s.week_number), reverse=True)
    if limit is not None and limit > 0:
        result = result[:limit]
    return result


def get_recent_snapshots(snapshots: Iterable[KPISnapshot], weeks: int) -> list[KPISnapshot]:
    return filter_kpi_snapshots(snapshots, limit=weeks)


# Validators


def is_valid_week_number(week_number: object) -> bool:
    return (
        isinstance(week_number, int)
        and not isinstance(week_number, bool)
        and 1 <= week_number <= 53
    )


def is_valid_year(year: object) -> bool:
    return isinstance(year, int) and not isinstance(year, bool) and 2000 <= year <= 2100


def _is_rate(value) -> bool:
    return ZERO <= value <= HUNDRED


def is_valid_revenue_metrics(metrics: RevenueMetrics) -> bool:
    return metrics.total_revenue >= ZERO


def is_valid_operational_metrics(metrics: OperationalMetrics) -> bool:
    return (
        metrics.jobs_completed >= 0
        and _is_rate(metrics.on_time_delivery_rate)
        and metrics.average_job_duration_days >= ZERO
    )


def is_valid_financial_metrics(metrics: FinancialMetrics) -> bool:
    return (
        metrics.ar_aging_current >= ZERO
        and metrics.ar_aging_30_days >= ZERO
        and metrics.ar_aging_60_days >= ZERO
        and metrics.ar_aging_90_plus >= ZERO
        and _is_rate(metrics.collection_rate)
    )
