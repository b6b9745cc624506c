"""
Pytest fixtures for the ERP analytics test suite.

Provides:
- An in-memory SQLite engine with every operational table, created once
  per session; each test runs inside a transaction that is rolled back
- A DeterministicClock pinned to a known instant
- Row builders for the operational tables
- Captured structured log records
"""

import json
import logging
from collections.abc import Generator
from datetime import date, datetime, timezone
from decimal import Decimal
from io import StringIO
from uuid import uuid4

import pytest
from sqlalchemy import insert
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from erp_kernel.db.engine import (
    create_tables,
    drop_tables,
    get_session,
    init_engine_from_url,
    reset_engine,
)
from erp_kernel.db.tables import (
    asset_documents,
    employee_certifications,
    invoices,
    job_orders,
    kpi_snapshots,
    safety_permits,
)
from erp_kernel.domain.clock import DeterministicClock
from erp_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)

# Wednesday of ISO week 24, 2024
FIXED_NOW = datetime(2024, 6, 12, 10, 0, 0, tzinfo=timezone.utc)


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture erp_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs):
            service.build_report()
            assert any(r["message"] == "ar_aging_requested" for r in captured_logs())
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("erp_kernel")
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)


# =============================================================================
# Clock
# =============================================================================


@pytest.fixture
def clock() -> DeterministicClock:
    return DeterministicClock(FIXED_NOW)


@pytest.fixture
def today(clock) -> date:
    return clock.today()


# =============================================================================
# Database
# =============================================================================


@pytest.fixture(scope="session")
def _engine():
    engine = init_engine_from_url("sqlite://", poolclass=StaticPool)
    create_tables()
    yield engine
    drop_tables()
    reset_engine()


@pytest.fixture
def session(_engine) -> Generator[Session, None, None]:
    """A session whose writes are rolled back after the test."""
    sess = get_session()
    try:
        yield sess
    finally:
        sess.rollback()
        sess.close()


def _new_id() -> str:
    return str(uuid4())


@pytest.fixture
def add_invoice(session):
    def _add(
        *,
        due_date: date,
        total_amount: Decimal | str = "1000000",
        status: str = "sent",
        customer_name: str | None = "PT Maju Jaya",
        customer_id: str | None = "cust-1",
        amount_due: Decimal | str | None = None,
        invoice_date: date | None = None,
        created_at: datetime | None = None,
        paid_at: datetime | None = None,
        invoice_number: str | None = None,
    ) -> str:
        invoice_id = _new_id()
        session.execute(
            insert(invoices).values(
                id=invoice_id,
                invoice_number=invoice_number or f"INV-{invoice_id[:8]}",
                invoice_date=invoice_date or due_date,
                due_date=due_date,
                total_amount=Decimal(str(total_amount)),
                amount_due=None if amount_due is None else Decimal(str(amount_due)),
                status=status,
                customer_id=customer_id,
                customer_name=customer_name,
                created_at=created_at or datetime.combine(invoice_date or due_date, datetime.min.time()),
                paid_at=paid_at,
            )
        )
        return invoice_id

    return _add


@pytest.fixture
def add_job_order(session):
    def _add(
        *,
        created_at: datetime,
        completed_at: datetime | None,
        status: str = "completed",
        final_revenue: Decimal | str | None = "5000000",
        customer_name: str | None = "PT Maju Jaya",
        service_type: str | None = "Heavy Haul",
        target_completion_date: datetime | None = None,
    ) -> str:
        job_id = _new_id()
        session.execute(
            insert(job_orders).values(
                id=job_id,
                jo_number=f"JO-{job_id[:8]}",
                status=status,
                customer_name=customer_name,
                service_type=service_type,
                final_revenue=None if final_revenue is None else Decimal(str(final_revenue)),
                created_at=created_at,
                completed_at=completed_at,
                target_completion_date=target_completion_date,
            )
        )
        return job_id

    return _add


@pytest.fixture
def add_document(session):
    def _add(*, expiry_date: date | None, name: str = "STNK Trailer 01") -> str:
        doc_id = _new_id()
        session.execute(
            insert(asset_documents).values(
                id=doc_id,
                document_name=name,
                document_type="registration",
                expiry_date=expiry_date,
                asset_id="asset-1",
                asset_code="TRL-01",
                asset_name="Lowbed Trailer 01",
                uploaded_by="user-1",
            )
        )
        return doc_id

    return _add


@pytest.fixture
def add_permit(session):
    def _add(*, valid_to: date, status: str = "active") -> str:
        permit_id = _new_id()
        session.execute(
            insert(safety_permits).values(
                id=permit_id,
                permit_number=f"PTW-{permit_id[:6]}",
                permit_type="hot_work",
                work_description="Welding at yard",
                work_location="Yard B",
                valid_to=valid_to,
                status=status,
                requested_by="user-2",
                requester_name="Budi",
            )
        )
        return permit_id

    return _add


@pytest.fixture
def add_certification(session):
    def _add(*, expiry_date: date | None, is_certified: bool = True) -> str:
        cert_id = _new_id()
        session.execute(
            insert(employee_certifications).values(
                id=cert_id,
                employee_id="emp-1",
                employee_name="Siti",
                skill_id="skill-1",
                skill_name="Crane Operator",
                skill_code="CRN",
                certification_number="SIO-001",
                expiry_date=expiry_date,
                is_certified=is_certified,
            )
        )
        return cert_id

    return _add


@pytest.fixture
def add_kpi_snapshot(session):
    def _add(*, week_number: int, year: int, snapshot_date: date, **metrics) -> str:
        snapshot_id = _new_id()
        values = {
            "total_revenue": Decimal("0"),
            "jobs_completed": 0,
            "on_time_delivery_rate": Decimal("0"),
            "average_job_duration_days": Decimal("0"),
            "ar_aging_current": Decimal("0"),
            "ar_aging_30_days": Decimal("0"),
            "ar_aging_60_days": Decimal("0"),
            "ar_aging_90_plus": Decimal("0"),
            "collection_rate": Decimal("0"),
        }
        values.update(metrics)
        session.execute(
            insert(kpi_snapshots).values(
                id=snapshot_id,
                week_number=week_number,
                year=year,
                snapshot_date=snapshot_date,
                **values,
            )
        )
        return snapshot_id

    return _add
