"""
KPISnapshotService -- Computes weekly KPI snapshots and week-over-week
trends from operational data.

Architecture: erp_services -- imperative shell.
    Selectors load job orders, invoices and stored snapshots; the pure
    functions in ``erp_modules.kpi`` and ``erp_engines.trend`` do the
    arithmetic.

Invariants enforced:
    - Revenue and operational metrics count only jobs completed inside
      the ISO week.
    - Financial metrics are taken as of the last day of the week, or
      today if the week has not ended.
    - A stored snapshot is preferred over recomputation.
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from erp_config import AnalyticsConfig
from erp_engines.trend import KPITrend, calculate_week_over_week_trends
from erp_kernel.domain.clock import Clock, SystemClock
from erp_kernel.logging_config import get_logger
from erp_kernel.selectors import InvoiceSelector, JobOrderSelector, KPISnapshotSelector
from erp_modules.kpi import (
    KPISnapshot,
    WeekRef,
    calculate_financial_metrics,
    calculate_operational_metrics,
    calculate_revenue_metrics,
    create_kpi_snapshot,
    filter_kpi_snapshots,
    get_iso_week,
    get_previous_week,
    get_week_date_range,
    job_order_from_row,
    kpi_snapshot_from_row,
)
from erp_modules.kpi.models import COMPLETED_JOB_STATUSES
from erp_modules.reports import invoice_from_row

logger = get_logger("services.kpi_snapshot")


class KPISnapshotService:
    """Weekly KPI snapshots and their trends.

    Contract:
        - ``compute_snapshot(week, year)`` always recomputes.
        - ``get_snapshot(week, year)`` returns the stored snapshot, or a
          recomputed one when none is stored.
        - ``week_over_week(week, year)`` compares a week with the ISO
          week before it.

    Non-goals:
        - Does NOT write snapshots; callers persist ``kpi_snapshot_to_row``.
    """

    def __init__(
        self,
        session: Session,
        clock: Clock | None = None,
        config: AnalyticsConfig | None = None,
    ) -> None:
        self._clock = clock or SystemClock()
        self._config = config or AnalyticsConfig.with_defaults()
        self._jobs = JobOrderSelector(session)
        self._invoices = InvoiceSelector(session)
        self._snapshots = KPISnapshotSelector(session)

    def current_week(self) -> WeekRef:
        return get_iso_week(self._clock.today())

    def compute_snapshot(self, week_number: int, year: int) -> KPISnapshot:
        period = get_week_date_range(week_number, year)
        jobs = [
            job_order_from_row(r)
            for r in self._jobs.completed_between(
                sorted(COMPLETED_JOB_STATUSES), period.start, period.end
            )
        ]
        invoices = [invoice_from_row(r) for r in self._invoices.all()]
        as_of = min(period.end.date(), self._clock.today())

        snapshot = create_kpi_snapshot(
            week_number,
            year,
            calculate_revenue_metrics(jobs, period),
            calculate_operational_metrics(jobs, period),
            calculate_financial_metrics(invoices, as_of, self._config.collection_window_days),
        )
        logger.info(
            "kpi_snapshot_computed",
            extra={
                "week_number": week_number,
                "year": year,
                "job_count": len(jobs),
                "invoice_count": len(invoices),
            },
        )
        return snapshot

    def get_snapshot(self, week_number: int, year: int) -> KPISnapshot:
        row = self._snapshots.for_week(week_number, year)
        if row is not None:
            return kpi_snapshot_from_row(row)
        return self.compute_snapshot(week_number, year)

    def week_over_week(self, week_number: int, year: int) -> tuple[KPITrend, ...]:
        previous = get_previous_week(week_number, year)
        return calculate_week_over_week_trends(
            self.get_snapshot(week_number, year),
            self.get_snapshot(previous.week_number, previous.year),
        )

    def list_snapshots(
        self,
        *,
        year: int | None = None,
        start_week: int | None = None,
        end_week: int | None = None,
        limit: int | None = None,
    ) -> list[KPISnapshot]:
        stored = [kpi_snapshot_from_row(r) for r in self._snapshots.all()]
        return filter_kpi_snapshots(
            stored, year=year, start_week=start_week, end_week=end_week, limit=limit
        )
