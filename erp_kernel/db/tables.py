"""
Module: erp_kernel.db.tables
Responsibility: SQLAlchemy Core table definitions for the operational
    tables the analytics layer reads.  The tables are owned and migrated
    by the main application; these definitions describe the columns this
    layer depends on, nothing more.
Architecture position: Kernel > DB.  Lowest-level import target; imports
    nothing from the rest of the project.

Invariants enforced:
    - Monetary columns are Numeric (Decimal on the Python side).
    - Column names are the persistence (snake_case) names that the row
      mappers in ``erp_modules`` expect.
"""

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    Text,
)

metadata = MetaData()

invoices = Table(
    "invoices",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("invoice_number", String(50), nullable=False),
    Column("invoice_date", Date, nullable=False),
    Column("due_date", Date, nullable=False),
    Column("total_amount", Numeric(18, 2), nullable=False),
    Column("amount_due", Numeric(18, 2)),
    Column("status", String(30), nullable=False),
    Column("customer_id", String(36)),
    Column("customer_name", String(200)),
    Column("created_at", DateTime, nullable=False),
    Column("paid_at", DateTime),
)

job_orders = Table(
    "job_orders",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("jo_number", String(50)),
    Column("status", String(30), nullable=False),
    Column("customer_name", String(200)),
    Column("service_type", String(100)),
    Column("final_revenue", Numeric(18, 2)),
    Column("created_at", DateTime, nullable=False),
    Column("completed_at", DateTime),
    Column("target_completion_date", DateTime),
)

asset_documents = Table(
    "asset_documents",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("document_name", String(200), nullable=False),
    Column("document_type", String(50), nullable=False),
    Column("expiry_date", Date),
    Column("asset_id", String(36)),
    Column("asset_code", String(50)),
    Column("asset_name", String(200)),
    Column("uploaded_by", String(36)),
)

safety_permits = Table(
    "safety_permits",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("permit_number", String(50)),
    Column("permit_type", String(50), nullable=False),
    Column("work_description", Text, nullable=False),
    Column("work_location", String(200), nullable=False),
    Column("valid_to", Date, nullable=False),
    Column("status", String(30), nullable=False),
    Column("requested_by", String(36)),
    Column("requester_name", String(200)),
)

employee_certifications = Table(
    "employee_certifications",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("employee_id", String(36), nullable=False),
    Column("employee_name", String(200), nullable=False),
    Column("skill_id", String(36), nullable=False),
    Column("skill_name", String(200), nullable=False),
    Column("skill_code", String(50), nullable=False),
    Column("certification_number", String(100)),
    Column("expiry_date", Date),
    Column("is_certified", Boolean, nullable=False, default=False),
)

kpi_snapshots = Table(
    "kpi_snapshots",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("week_number", Integer, nullable=False),
    Column("year", Integer, nullable=False),
    Column("snapshot_date", Date, nullable=False),
    Column("total_revenue", Numeric(18, 2), nullable=False),
    Column("jobs_completed", Integer, nullable=False),
    Column("on_time_delivery_rate", Numeric(5, 2), nullable=False),
    Column("average_job_duration_days", Numeric(10, 2), nullable=False),
    Column("ar_aging_current", Numeric(18, 2), nullable=False),
    Column("ar_aging_30_days", Numeric(18, 2), nullable=False),
    Column("ar_aging_60_days", Numeric(18, 2), nullable=False),
    Column("ar_aging_90_plus", Numeric(18, 2), nullable=False),
    Column("collection_rate", Numeric(5, 2), nullable=False),
)
