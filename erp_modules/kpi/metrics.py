"""
KPI Metric Calculations (``erp_modules.kpi.metrics``).

Responsibility
--------------
Fold job orders and invoices into the three weekly metric groups.

Architecture position
---------------------
**Modules layer** -- composes ``erp_engines.aggregation`` and
``erp_kernel.domain.dates``.  No I/O and no clock: the period and the
reference date are parameters.

Invariants enforced
-------------------
* A job counts toward a period iff its status is a completed status and
  ``completed_at`` lies inside the period (inclusive).
* On-time rate denominator is the completed jobs with a target date;
  a job finished exactly at its target is on time.
* Empty inputs produce all-zero metrics.
* Rates and durations are rounded half-up to two places.

Audit relevance
---------------
The financial aging here uses four columns (current, 1-30, 31-60, 61+)
and reports 61-90 day amounts inside ``ar_aging_90_plus``.  The AR aging
report in ``erp_modules.reports`` has a separate 61-90 bucket; the two
are not expected to agree on that column.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, timedelta
from decimal import Decimal

from erp_engines.aggregation import (
    GENERAL_SERVICE,
    UNKNOWN_CUSTOMER,
    group_and_sum,
    mean,
    safe_percent,
    sum_decimal,
)
from erp_kernel.domain.dates import days_between, to_date, to_utc
from erp_kernel.domain.values import ZERO, round_half_up
from erp_kernel.logging_config import get_logger
from erp_modules.kpi.models import (
    COMPLETED_JOB_STATUSES,
    OUTSTANDING_INVOICE_STATUSES,
    PAID_INVOICE_STATUS,
    DateRange,
    FinancialMetrics,
    JobOrderRecord,
    OperationalMetrics,
    RevenueMetrics,
)
from erp_modules.reports.models import InvoiceRecord

logger = get_logger("modules.kpi.metrics")

SECONDS_PER_DAY = Decimal(86_400)
DEFAULT_COLLECTION_WINDOW_DAYS = 90


def completed_in_period(
    jobs: Iterable[JobOrderRecord],
    period: DateRange,
) -> list[JobOrderRecord]:
    return [
        job for job in jobs
        if job.status in COMPLETED_JOB_STATUSES
        and job.completed_at is not None
        and period.contains(job.completed_at)
    ]


def calculate_revenue_metrics(
    jobs: Iterable[JobOrderRecord],
    period: DateRange,
) -> RevenueMetrics:
    period_jobs = completed_in_period(jobs, period)
    return RevenueMetrics(
        total_revenue=sum_decimal(job.final_revenue for job in period_jobs),
        revenue_by_customer=group_and_sum(
            period_jobs,
            key_fn=lambda job: job.customer_name,
            value_fn=lambda job: job.final_revenue,
            default_key=UNKNOWN_CUSTOMER,
        ),
        revenue_by_service=group_and_sum(
            period_jobs,
            key_fn=lambda job: job.service_type,
            value_fn=lambda job: job.final_revenue,
            default_key=GENERAL_SERVICE,
        ),
    )


def job_duration_days(job: JobOrderRecord) -> Decimal | None:
    """Days from creation to completion, or None while the job is open."""
    if job.completed_at is None or job.created_at is None:
        return None
    elapsed = to_utc(job.completed_at) - to_utc(job.created_at)
    seconds = Decimal(str(elapsed.total_seconds()))
    return seconds / SECONDS_PER_DAY


def calculate_operational_metrics(
    jobs: Iterable[JobOrderRecord],
    period: DateRange,
) -> OperationalMetrics:
    completed = completed_in_period(jobs, period)

    with_target = [job for job in completed if job.target_completion_date is not None]
    on_time = [
        job for job in with_target
        if to_utc(job.completed_at) <= to_utc(job.target_completion_date)
    ]

    durations = [d for d in (job_duration_days(job) for job in completed) if d is not None]

    return OperationalMetrics(
        jobs_completed=len(completed),
        on_time_delivery_rate=safe_percent(len(on_time), len(with_target)),
        average_job_duration_days=round_half_up(mean(durations), 2),
    )


def calculate_financial_metrics(
    invoices: Iterable[InvoiceRecord],
    as_of: date,
    collection_window_days: int = DEFAULT_COLLECTION_WINDOW_DAYS,
) -> FinancialMetrics:
    """
    AR aging columns for outstanding invoices plus the collection rate.

    Collection rate is paid / created over the ``collection_window_days``
    ending on ``as_of``, compared at day granularity.
    """
    invoices = list(invoices)
    reference = to_date(as_of)

    current = aged_30 = aged_60 = aged_90_plus = ZERO
    for inv in invoices:
        if inv.status not in OUTSTANDING_INVOICE_STATUSES:
            continue
        days_overdue = days_between(inv.due_date, reference)
        if days_overdue <= 0:
            current += inv.total_amount
        elif days_overdue <= 30:
            aged_30 += inv.total_amount
        elif days_overdue <= 60:
            aged_60 += inv.total_amount
        else:
            aged_90_plus += inv.total_amount

    window_start = reference - timedelta(days=collection_window_days)
    recent = [
        inv for inv in invoices
        if inv.created_at is not None
        and window_start <= inv.created_at.date() <= reference
    ]
    paid = [inv for inv in recent if inv.status == PAID_INVOICE_STATUS]

    logger.debug(
        "financial_metrics_calculated",
        extra={
            "as_of": reference.isoformat(),
            "invoice_count": len(invoices),
            "recent_count": len(recent),
            "paid_count": len(paid),
        },
    )
    return FinancialMetrics(
        ar_aging_current=round_half_up(current, 2),
        ar_aging_30_days=round_half_up(aged_30, 2),
        ar_aging_60_days=round_half_up(aged_60, 2),
        ar_aging_90_plus=round_half_up(aged_90_plus, 2),
        collection_rate=safe_percent(len(paid), len(recent)),
    )
