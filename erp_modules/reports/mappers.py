"""Row mappers for receivables entities."""

from collections.abc import Mapping
from typing import Any

from erp_kernel.domain.dates import to_date, to_datetime
from erp_kernel.domain.rows import optional, require_keys
from erp_kernel.domain.values import to_decimal
from erp_modules.reports.models import InvoiceRecord

INVOICE_REQUIRED = ("id", "invoice_number", "invoice_date", "due_date", "total_amount")


def invoice_from_row(row: Mapping[str, Any]) -> InvoiceRecord:
    require_keys(row, "invoice", INVOICE_REQUIRED)
    amount_due = row.get("amount_due")
    created_at = row.get("created_at")
    paid_at = row.get("paid_at")
    return InvoiceRecord(
        id=str(row["id"]),
        invoice_number=row["invoice_number"],
        invoice_date=to_date(row["invoice_date"]),
        due_date=to_date(row["due_date"]),
        total_amount=to_decimal(row["total_amount"]),
        status=optional(row, "status", "sent"),
        amount_due=None if amount_due is None else to_decimal(amount_due),
        customer_id=row.get("customer_id"),
        customer_name=row.get("customer_name"),
        created_at=None if created_at is None else to_datetime(created_at),
        paid_at=None if paid_at is None else to_datetime(paid_at),
    )


def invoice_to_row(invoice: InvoiceRecord) -> dict[str, Any]:
    return {
        "id": invoice.id,
        "invoice_number": invoice.invoice_number,
        "invoice_date": invoice.invoice_date,
        "due_date": invoice.due_date,
        "total_amount": invoice.total_amount,
        "status": invoice.status,
        "amount_due": invoice.amount_due,
        "customer_id": invoice.customer_id,
        "customer_name": invoice.customer_name,
        "created_at": invoice.created_at,
        "paid_at": invoice.paid_at,
    }
