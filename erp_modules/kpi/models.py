"""
KPI Snapshot Models (``erp_modules.kpi.models``).

Responsibility
--------------
Frozen dataclass value objects for weekly KPI snapshots: job orders as
read from the data store, the three metric groups (revenue, operational,
financial) and the snapshot that bundles them for one ISO week.

Architecture position
---------------------
**Modules layer** -- pure data definitions with ZERO I/O.

Invariants enforced
-------------------
* All models are ``frozen=True``.
* Amounts, rates and durations are ``Decimal``; rates are percentages
  in ``[0, 100]`` rounded to two places.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal

from erp_kernel.domain.dates import to_utc
from erp_kernel.domain.values import ZERO

COMPLETED_JOB_STATUSES: frozenset[str] = frozenset(
    {"completed", "submitted_to_finance", "invoiced", "closed"}
)
OUTSTANDING_INVOICE_STATUSES: frozenset[str] = frozenset({"sent", "overdue", "partial"})
PAID_INVOICE_STATUS = "paid"


@dataclass(frozen=True)
class JobOrderRecord:
    """A job order as stored; only the fields KPI metrics read."""
    id: str
    status: str
    created_at: datetime
    jo_number: str | None = None
    customer_name: str | None = None
    service_type: str | None = None
    final_revenue: Decimal | None = None
    completed_at: datetime | None = None
    target_completion_date: datetime | None = None


@dataclass(frozen=True)
class WeekRef:
    """An ISO week of an ISO year."""
    week_number: int
    year: int


@dataclass(frozen=True)
class DateRange:
    """Inclusive instant range: Monday 00:00 through Sunday 23:59:59.999999."""
    start: datetime
    end: datetime

    def contains(self, moment: datetime) -> bool:
        return to_utc(self.start) <= to_utc(moment) <= to_utc(self.end)


@dataclass(frozen=True)
class RevenueMetrics:
    total_revenue: Decimal = ZERO
    revenue_by_customer: dict[str, Decimal] = field(default_factory=dict)
    revenue_by_service: dict[str, Decimal] = field(default_factory=dict)


@dataclass(frozen=True)
class OperationalMetrics:
    jobs_completed: int = 0
    on_time_delivery_rate: Decimal = ZERO
    average_job_duration_days: Decimal = ZERO


@dataclass(frozen=True)
class FinancialMetrics:
    ar_aging_current: Decimal = ZERO
    ar_aging_30_days: Decimal = ZERO
    ar_aging_60_days: Decimal = ZERO
    ar_aging_90_plus: Decimal = ZERO
    collection_rate: Decimal = ZERO


@dataclass(frozen=True)
class KPISnapshot:
    """
    KPI metrics captured for one ISO week.

    ``id`` is None until the snapshot has been stored.  The flat
    properties expose each metric by the name used in
    ``WEEK_OVER_WEEK_METRICS``.
    """
    week_number: int
    year: int
    snapshot_date: date
    revenue_metrics: RevenueMetrics | None
    operational_metrics: OperationalMetrics | None
    financial_metrics: FinancialMetrics | None
    id: str | None = None
    created_at: datetime | None = None

    @property
    def total_revenue(self) -> Decimal:
        return self.revenue_metrics.total_revenue if self.revenue_metrics else ZERO

    @property
    def jobs_completed(self) -> int:
        return self.operational_metrics.jobs_completed if self.operational_metrics else 0

    @property
    def on_time_delivery_rate(self) -> Decimal:
        return self.operational_metrics.on_time_delivery_rate if self.operational_metrics else ZERO

    @property
    def average_job_duration_days(self) -> Decimal:
        return (
            self.operational_metrics.average_job_duration_days
            if self.operational_metrics else ZERO
        )

    @property
    def ar_aging_current(self) -> Decimal:
        return self.financial_metrics.ar_aging_current if self.financial_metrics else ZERO

    @property
    def ar_aging_30_days(self) -> Decimal:
        return self.financial_metrics.ar_aging_30_days if self.financial_metrics else ZERO

    @property
    def ar_aging_60_days(self) -> Decimal:
        return self.financial_metrics.ar_aging_60_days if self.financial_metrics else ZERO

    @property
    def ar_aging_90_plus(self) -> Decimal:
        return self.financial_metrics.ar_aging_90_plus if self.financial_metrics else ZERO

    @property
    def collection_rate(self) -> Decimal:
        return self.financial_metrics.collection_rate if self.financial_metrics else ZERO
