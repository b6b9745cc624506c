"""Row mappers for job orders and stored KPI snapshots."""

from collections.abc import Mapping
from typing import Any

from erp_kernel.domain.dates import to_date, to_datetime
from erp_kernel.domain.rows import require_keys
from erp_kernel.domain.values import to_decimal
from erp_modules.kpi.models import (
    FinancialMetrics,
    JobOrderRecord,
    KPISnapshot,
    OperationalMetrics,
    RevenueMetrics,
)

JOB_ORDER_REQUIRED = ("id", "status", "created_at")

KPI_SNAPSHOT_REQUIRED = (
    "week_number",
    "year",
    "snapshot_date",
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


def _maybe_datetime(value: Any):
    return None if value is None else to_datetime(value)


def job_order_from_row(row: Mapping[str, Any]) -> JobOrderRecord:
    require_keys(row, "job_order", JOB_ORDER_REQUIRED)
    revenue = row.get("final_revenue")
    return JobOrderRecord(
        id=str(row["id"]),
        status=row["status"],
        created_at=to_datetime(row["created_at"]),
        jo_number=row.get("jo_number"),
        customer_name=row.get("customer_name"),
        service_type=row.get("service_type"),
        final_revenue=None if revenue is None else to_decimal(revenue),
        completed_at=_maybe_datetime(row.get("completed_at")),
        target_completion_date=_maybe_datetime(row.get("target_completion_date")),
    )


def job_order_to_row(job: JobOrderRecord) -> dict[str, Any]:
    return {
        "id": job.id,
        "jo_number": job.jo_number,
        "status": job.status,
        "customer_name": job.customer_name,
        "service_type": job.service_type,
        "final_revenue": job.final_revenue,
        "created_at": job.created_at,
        "completed_at": job.completed_at,
        "target_completion_date": job.target_completion_date,
    }


def kpi_snapshot_from_row(row: Mapping[str, Any]) -> KPISnapshot:
    """
    Rebuild a snapshot from its flat stored form.

    The per-customer and per-service revenue breakdowns are not stored,
    so they come back empty.
    """
    require_keys(row, "kpi_snapshot", KPI_SNAPSHOT_REQUIRED)
    return KPISnapshot(
        id=None if row.get("id") is None else str(row["id"]),
        week_number=int(row["week_number"]),
        year=int(row["year"]),
        snapshot_date=to_date(row["snapshot_date"]),
        revenue_metrics=RevenueMetrics(total_revenue=to_decimal(row["total_revenue"])),
        operational_metrics=OperationalMetrics(
            jobs_completed=int(row["jobs_completed"]),
            on_time_delivery_rate=to_decimal(row["on_time_delivery_rate"]),
            average_job_duration_days=to_decimal(row["average_job_duration_days"]),
        ),
        financial_metrics=FinancialMetrics(
            ar_aging_current=to_decimal(row["ar_aging_current"]),
            ar_aging_30_days=to_decimal(row["ar_aging_30_days"]),
            ar_aging_60_days=to_decimal(row["ar_aging_60_days"]),
            ar_aging_90_plus=to_decimal(row["ar_aging_90_plus"]),
            collection_rate=to_decimal(row["collection_rate"]),
        ),
    )


def kpi_snapshot_to_row(snapshot: KPISnapshot) -> dict[str, Any]:
    return {
        "id": snapshot.id,
        "week_number": snapshot.week_number,
        "year": snapshot.year,
        "snapshot_date": snapshot.snapshot_date,
        "total_revenue": snapshot.total_revenue,
        "jobs_completed": snapshot.jobs_completed,
        "on_time_delivery_rate": snapshot.on_time_delivery_rate,
        "average_job_duration_days": snapshot.average_job_duration_days,
        "ar_aging_current": snapshot.ar_aging_current,
        "ar_aging_30_days": snapshot.ar_aging_30_days,
        "ar_aging_60_days": snapshot.ar_aging_60_days,
        "ar_aging_90_plus": snapshot.ar_aging_90_plus,
        "collection_rate": snapshot.collection_rate,
    }
