"""
Receivables Reports Module.

AR aging as of a date: bucket summary, detail lines and per-customer
breakdown.  Bucket arithmetic comes from ``erp_engines.aging``.
"""

from erp_modules.reports.ar_aging import (
    aggregate_by_customer,
    build_ar_aging_report,
    filter_by_bucket,
    filter_by_customer,
    filter_unpaid_invoices,
    sort_by_days_overdue,
    transform_invoices_to_aging_items,
    validate_aging_filters,
)
from erp_modules.reports.mappers import invoice_from_row, invoice_to_row
from erp_modules.reports.models import ARAgingReport, CustomerAging, InvoiceRecord

__all__ = [
    "ARAgingReport",
    "CustomerAging",
    "InvoiceRecord",
    "aggregate_by_customer",
    "build_ar_aging_report",
    "filter_by_bucket",
    "filter_by_customer",
    "filter_unpaid_invoices",
    "invoice_from_row",
    "invoice_to_row",
    "sort_by_days_overdue",
    "transform_invoices_to_aging_items",
    "validate_aging_filters",
]
