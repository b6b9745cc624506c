"""
ARAgingService -- Read-path orchestration for the receivables aging report.

Loads open invoices through the kernel selectors, maps rows to models,
and hands them to the pure report builder in ``erp_modules.reports``.

Architecture: erp_services -- imperative shell.
    Owns no state between calls.  The session is the caller's; this
    service only reads.

Invariants enforced:
    - Only invoices in an outstanding status with a positive amount due
      are aged.
    - "Today" comes from the injected clock, never from the system.
    - Bucket boundaries come from ``AnalyticsConfig``.
"""

from __future__ import annotations

from datetime import date

from sqlalchemy.orm import Session

from erp_config import AnalyticsConfig
from erp_engines.aging import AgingCalculator
from erp_kernel.domain.clock import Clock, SystemClock
from erp_kernel.domain.validation import ValidationResult
from erp_kernel.logging_config import get_logger
from erp_kernel.selectors import InvoiceSelector
from erp_modules.kpi.models import OUTSTANDING_INVOICE_STATUSES
from erp_modules.reports import (
    ARAgingReport,
    CustomerAging,
    InvoiceRecord,
    aggregate_by_customer,
    build_ar_aging_report,
    filter_unpaid_invoices,
    invoice_from_row,
    validate_aging_filters,
)

logger = get_logger("services.ar_aging")


class ARAgingService:
    """AR aging report as of a date, optionally for one customer.

    Contract:
        - ``build_report()`` returns the report for every open invoice.
        - ``customer_breakdown()`` returns one aging row per customer.

    Non-goals:
        - Does NOT persist reports.
        - Does NOT decide who may see the report (see authorization).
    """

    def __init__(
        self,
        session: Session,
        clock: Clock | None = None,
        config: AnalyticsConfig | None = None,
    ) -> None:
        self._clock = clock or SystemClock()
        self._config = config or AnalyticsConfig.with_defaults()
        self._invoices = InvoiceSelector(session)
        self._calculator = AgingCalculator(self._config.aging_buckets)

    def validate(self, as_of: date | str | None = None, customer_id: object = None) -> ValidationResult:
        return validate_aging_filters(as_of, customer_id)

    def open_invoices(self, customer_id: str | None = None) -> list[InvoiceRecord]:
        if customer_id is None:
            rows = self._invoices.by_status(sorted(OUTSTANDING_INVOICE_STATUSES))
        else:
            rows = [
                r for r in self._invoices.for_customer(customer_id)
                if r["status"] in OUTSTANDING_INVOICE_STATUSES
            ]
        return filter_unpaid_invoices(invoice_from_row(r) for r in rows)

    def build_report(
        self,
        as_of: date | None = None,
        customer_id: str | None = None,
    ) -> ARAgingReport:
        effective_as_of = as_of or self._clock.today()
        invoices = self.open_invoices(customer_id)
        logger.info(
            "ar_aging_requested",
            extra={
                "as_of": effective_as_of.isoformat(),
                "customer_id": customer_id,
                "invoice_count": len(invoices),
            },
        )
        return build_ar_aging_report(
            invoices, as_of=effective_as_of, calculator=self._calculator
        )

    def customer_breakdown(self, as_of: date | None = None) -> list[CustomerAging]:
        report = self.build_report(as_of)
        return aggregate_by_customer(report.details, self._calculator)
