"""
AR Aging Report (``erp_modules.reports.ar_aging``).

Responsibility
--------------
Turn open customer invoices into an aging report as of a given date:
per-bucket counts and totals, detail lines sorted by days overdue, and a
per-customer breakdown.

Architecture position
---------------------
**Modules layer** -- composes ``erp_engines.aging``.  No I/O: invoices
arrive already mapped; the as-of date is a parameter.

Invariants enforced
-------------------
* The caller's invoice list is never mutated; sorting produces a new,
  stable sequence.
* Grand total == sum of bucket totals == sum of detail amounts.
* Invoices without a customer name are reported under ``"Unknown"``.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date
from decimal import Decimal

from erp_engines.aggregation import UNKNOWN_CUSTOMER
from erp_engines.aging import AgedItem, AgingCalculator
from erp_engines.tracer import traced_engine
from erp_kernel.domain.dates import DateLike, to_date
from erp_kernel.domain.validation import ValidationResult
from erp_kernel.domain.values import ZERO
from erp_kernel.logging_config import get_logger
from erp_modules.reports.models import ARAgingReport, CustomerAging, InvoiceRecord

logger = get_logger("modules.reports.ar_aging")


def filter_unpaid_invoices(invoices: Iterable[InvoiceRecord]) -> list[InvoiceRecord]:
    """Invoices with a positive amount due (falling back to the invoice total)."""
    return [inv for inv in invoices if inv.outstanding_amount > ZERO]


def transform_invoices_to_aging_items(
    invoices: Iterable[InvoiceRecord],
    as_of: DateLike,
    calculator: AgingCalculator | None = None,
) -> list[AgedItem]:
    calc = calculator or AgingCalculator()
    return [
        calc.age_item(
            document_id=inv.id,
            document_number=inv.invoice_number,
            counterparty_name=inv.customer_name or UNKNOWN_CUSTOMER,
            document_date=inv.invoice_date,
            due_date=inv.due_date,
            amount=inv.total_amount,
            as_of=as_of,
            counterparty_id=inv.customer_id,
        )
        for inv in invoices
    ]


def sort_by_days_overdue(items: Iterable[AgedItem]) -> list[AgedItem]:
    """Most overdue first; ties keep their input order."""
    return sorted(items, key=lambda item: item.days_overdue, reverse=True)


@traced_engine("ar_aging_report", "1.0", fingerprint_fields=("as_of",))
def build_ar_aging_report(
    invoices: Sequence[InvoiceRecord],
    *,
    as_of: date,
    calculator: AgingCalculator | None = None,
) -> ARAgingReport:
    """
    Assemble the aging report for ``invoices`` as of ``as_of``.

    The invoices are reported as given; apply ``filter_unpaid_invoices``
    first for an open-items report.
    """
    calc = calculator or AgingCalculator()
    details = sort_by_days_overdue(transform_invoices_to_aging_items(invoices, as_of, calc))
    summary = calc.summarize(details)

    logger.info(
        "ar_aging_report_built",
        extra={
            "as_of": to_date(as_of).isoformat(),
            "invoice_count": summary.total_count,
            "total_amount": str(summary.total_amount),
        },
    )
    return ARAgingReport(
        as_of=to_date(as_of),
        summary=summary.buckets,
        details=tuple(details),
        total_count=summary.total_count,
        total_amount=summary.total_amount,
    )


def filter_by_bucket(items: Iterable[AgedItem], bucket_label: str) -> list[AgedItem]:
    return [item for item in items if item.bucket.name == bucket_label]


def filter_by_customer(items: Iterable[AgedItem], customer: str) -> list[AgedItem]:
    """Items whose customer id or customer name equals ``customer``."""
    return [
        item for item in items
        if item.counterparty_id == customer or item.counterparty_name == customer
    ]


def aggregate_by_customer(
    items: Iterable[AgedItem],
    calculator: AgingCalculator | None = None,
) -> list[CustomerAging]:
    """
    One row per customer name, in first-seen order.

    Every bucket of the calculator's sequence appears in each row, so a
    customer with nothing past due still shows zeros in the overdue
    columns.
    """
    calc = calculator or AgingCalculator()
    labels = [b.name for b in calc.buckets]
    customer_ids: dict[str, str | None] = {}
    amounts: dict[str, dict[str, Decimal]] = {}

    for item in items:
        name = item.counterparty_name
        if name not in amounts:
            customer_ids[name] = item.counterparty_id
            amounts[name] = dict.fromkeys(labels, ZERO)
        by_bucket = amounts[name]
        by_bucket[item.bucket.name] = by_bucket.get(item.bucket.name, ZERO) + item.amount

    return [
        CustomerAging(
            customer_id=customer_ids[name],
            customer_name=name,
            buckets=tuple(by_bucket.items()),
            total=sum(by_bucket.values(), ZERO),
        )
        for name, by_bucket in amounts.items()
    ]


def validate_aging_filters(
    as_of: DateLike | None = None,
    customer_id: object = None,
) -> ValidationResult:
    if as_of is not None:
        try:
            to_date(as_of)
        except (TypeError, ValueError):
            return ValidationResult.from_errors(["Invalid as-of date"])

    if customer_id is not None:
        if not isinstance(customer_id, str) or customer_id.strip() == "":
            return ValidationResult.from_errors(["Customer ID must be a non-empty string"])

    return ValidationResult.ok()
