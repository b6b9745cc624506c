"""
Receivables Report Models (``erp_modules.reports.models``).

Responsibility
--------------
Frozen dataclass value objects for the AR aging report: the invoice as
read from the data store, the per-customer aging row and the assembled
report.

Architecture position
---------------------
**Modules layer** -- pure data definitions with ZERO I/O.

Invariants enforced
-------------------
* All models are ``frozen=True`` (immutable after construction).
* All monetary fields use ``Decimal``.
* ``ARAgingReport.total_amount`` equals the sum of its bucket totals and
  of its detail amounts.
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from erp_engines.aging import AgedItem, BucketTotal
from erp_kernel.domain.values import ZERO


@dataclass(frozen=True)
class InvoiceRecord:
    """A customer invoice as stored, including payment state."""
    id: str
    invoice_number: str
    invoice_date: date
    due_date: date
    total_amount: Decimal
    status: str = "sent"
    amount_due: Decimal | None = None
    customer_id: str | None = None
    customer_name: str | None = None
    created_at: datetime | None = None
    paid_at: datetime | None = None

    @property
    def outstanding_amount(self) -> Decimal:
        """Amount still due; the invoice total when no payment state is recorded."""
        return self.total_amount if self.amount_due is None else self.amount_due


@dataclass(frozen=True)
class CustomerAging:
    """One customer's open amounts spread across the aging buckets."""
    customer_id: str | None
    customer_name: str
    buckets: tuple[tuple[str, Decimal], ...]
    total: Decimal

    def amount(self, label: str) -> Decimal:
        return next((amt for lbl, amt in self.buckets if lbl == label), ZERO)

    @property
    def current(self) -> Decimal:
        return self.amount("Current")

    @property
    def days_1_to_30(self) -> Decimal:
        return self.amount("1-30 Days")

    @property
    def days_31_to_60(self) -> Decimal:
        return self.amount("31-60 Days")

    @property
    def days_61_to_90(self) -> Decimal:
        return self.amount("61-90 Days")

    @property
    def over_90(self) -> Decimal:
        return self.amount("90+ Days")


@dataclass(frozen=True)
class ARAgingReport:
    """Bucket summary, detail lines sorted by days overdue, and totals."""
    as_of: date
    summary: tuple[BucketTotal, ...]
    details: tuple[AgedItem, ...]
    total_count: int
    total_amount: Decimal
