"""Tests for ARAgingService against the in-memory database."""

from datetime import date
from decimal import Decimal

import pytest

from erp_config import AnalyticsConfig
from erp_services import ARAgingService


@pytest.fixture
def service(session, clock) -> ARAgingService:
    return ARAgingService(session, clock=clock)


@pytest.fixture
def open_book(add_invoice):
    """Two open invoices plus rows that must never be aged."""
    overdue = add_invoice(due_date=date(2024, 4, 28), total_amount="1000000", invoice_number="INV-001")
    current = add_invoice(
        due_date=date(2024, 6, 20),
        total_amount="500000",
        customer_id="cust-2",
        customer_name="CV Sinar Laut",
        invoice_number="INV-002",
    )
    add_invoice(due_date=date(2024, 3, 1), status="paid", invoice_number="INV-003")
    add_invoice(due_date=date(2024, 3, 1), status="draft", invoice_number="INV-004")
    add_invoice(due_date=date(2024, 3, 1), amount_due="0", invoice_number="INV-005")
    return overdue, current


class TestBuildReport:

    def test_ages_open_invoices_as_of_clock_today(self, service, open_book, today):
        report = service.build_report()

        assert report.as_of == today
        assert report.total_count == 2
        assert report.total_amount == Decimal("1500000")
        assert [d.document_number for d in report.details] == ["INV-001", "INV-002"]

        overdue = report.details[0]
        assert overdue.days_overdue == 45
        assert overdue.bucket.name == "31-60 Days"

    def test_summary_covers_every_bucket(self, service, open_book):
        report = service.build_report()
        by_label = {b.label: b for b in report.summary}
        assert list(by_label) == ["Current", "1-30 Days", "31-60 Days", "61-90 Days", "90+ Days"]
        assert by_label["Current"].total_amount == Decimal("500000")
        assert by_label["31-60 Days"].count == 1
        assert by_label["90+ Days"].count == 0

    def test_explicit_as_of_moves_buckets(self, service, open_book):
        report = service.build_report(as_of=date(2024, 8, 1))
        overdue = next(d for d in report.details if d.document_number == "INV-001")
        assert overdue.days_overdue == 95
        assert overdue.bucket.name == "90+ Days"

    def test_customer_filter(self, service, open_book):
        report = service.build_report(customer_id="cust-2")
        assert [d.document_number for d in report.details] == ["INV-002"]

    def test_empty_book(self, service):
        report = service.build_report()
        assert report.total_count == 0
        assert report.total_amount == Decimal("0")

    def test_logs_request(self, service, open_book, captured_logs):
        service.build_report()
        record = next(r for r in captured_logs() if r["message"] == "ar_aging_requested")
        assert record["invoice_count"] == 2
        assert record["as_of"] == "2024-06-12"

    def test_configured_boundaries(self, session, clock, open_book):
        config = AnalyticsConfig(aging_boundaries=(15, 45))
        report = ARAgingService(session, clock=clock, config=config).build_report()
        labels = [b.label for b in report.summary]
        assert labels == ["Current", "1-15 Days", "16-45 Days", "45+ Days"]
        overdue = report.details[0]
        assert overdue.bucket.name == "16-45 Days"


class TestCustomerBreakdown:

    def test_one_row_per_customer(self, service, open_book):
        rows = service.customer_breakdown()
        by_name = {r.customer_name: r for r in rows}

        assert set(by_name) == {"PT Maju Jaya", "CV Sinar Laut"}
        assert by_name["PT Maju Jaya"].days_31_to_60 == Decimal("1000000")
        assert by_name["PT Maju Jaya"].current == Decimal("0")
        assert by_name["CV Sinar Laut"].current == Decimal("500000")
        assert by_name["CV Sinar Laut"].customer_id == "cust-2"


class TestValidate:

    def test_accepts_defaults(self, service):
        assert service.validate().valid

    def test_rejects_bad_date(self, service):
        assert service.validate(as_of="12/06/2024").error == "Invalid as-of date"

    def test_rejects_blank_customer(self, service):
        assert service.validate(customer_id="  ").error == "Customer ID must be a non-empty string"
