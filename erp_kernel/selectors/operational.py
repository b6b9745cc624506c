"""
Module: erp_kernel.selectors.operational
Responsibility: Row loaders for invoices, job orders, expiring HSE items
    and stored KPI snapshots.  Filters here are the coarse "explicit
    upstream filters" (status sets, non-null expiry); everything that
    depends on a reference date is left to the pure engines so that the
    same rows can be re-bucketed for any as-of date.
Architecture position: Kernel > Selectors.
"""

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import and_, select
from sqlalchemy.engine import RowMapping

from erp_kernel.db.tables import (
    asset_documents,
    employee_certifications,
    invoices,
    job_orders,
    kpi_snapshots,
    safety_permits,
)
from erp_kernel.logging_config import get_logger
from erp_kernel.selectors.base import BaseSelector

logger = get_logger("selectors.operational")


class InvoiceSelector(BaseSelector):
    """Invoice rows for AR aging and collection metrics."""

    def all(self) -> Sequence[RowMapping]:
        rows = self._fetch(select(invoices).order_by(invoices.c.due_date))
        logger.debug("invoices_loaded", extra={"row_count": len(rows)})
        return rows

    def by_status(self, statuses: Sequence[str]) -> Sequence[RowMapping]:
        stmt = (
            select(invoices)
            .where(invoices.c.status.in_(list(statuses)))
            .order_by(invoices.c.due_date)
        )
        rows = self._fetch(stmt)
        logger.debug(
            "invoices_loaded_by_status",
            extra={"statuses": list(statuses), "row_count": len(rows)},
        )
        return rows

    def for_customer(self, customer_id: str) -> Sequence[RowMapping]:
        stmt = select(invoices).where(invoices.c.customer_id == customer_id)
        return self._fetch(stmt)


class JobOrderSelector(BaseSelector):
    """Job order rows for revenue and operational KPIs."""

    def completed_between(
        self,
        statuses: Sequence[str],
        start: datetime,
        end: datetime,
    ) -> Sequence[RowMapping]:
        stmt = select(job_orders).where(
            and_(
                job_orders.c.status.in_(list(statuses)),
                job_orders.c.completed_at.is_not(None),
                job_orders.c.completed_at >= start,
                job_orders.c.completed_at <= end,
            )
        )
        rows = self._fetch(stmt)
        logger.debug(
            "job_orders_loaded",
            extra={
                "start": start.isoformat(),
                "end": end.isoformat(),
                "row_count": len(rows),
            },
        )
        return rows


class ExpirySelector(BaseSelector):
    """Rows that carry an expiry date: asset documents, permits, certifications."""

    def documents(self) -> Sequence[RowMapping]:
        stmt = select(asset_documents).where(asset_documents.c.expiry_date.is_not(None))
        return self._fetch(stmt)

    def permits(self) -> Sequence[RowMapping]:
        return self._fetch(select(safety_permits))

    def certifications(self) -> Sequence[RowMapping]:
        stmt = select(employee_certifications).where(
            employee_certifications.c.expiry_date.is_not(None)
        )
        return self._fetch(stmt)


class KPISnapshotSelector(BaseSelector):
    """Stored weekly KPI snapshots."""

    def for_week(self, week_number: int, year: int) -> RowMapping | None:
        stmt = select(kpi_snapshots).where(
            and_(
                kpi_snapshots.c.week_number == week_number,
                kpi_snapshots.c.year == year,
            )
        )
        return self.session.execute(stmt).mappings().first()

    def all(self) -> Sequence[RowMapping]:
        return self._fetch(select(kpi_snapshots))
