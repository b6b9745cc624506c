"""
ERP Services -- imperative shell over the pure modules and engines.

Services own the I/O seams: they take a caller-provided SQLAlchemy
session, an injectable Clock and an ``AnalyticsConfig``, load rows
through the kernel selectors, and delegate every calculation to
``erp_modules`` / ``erp_engines``.

- ARAgingService: receivables aging report
- ExpiryCheckService: expiring documents, permits and certifications
- KPISnapshotService: weekly KPI snapshots and trends
- authorization: report visibility by role
- observability: query cache statistics and slow query log
"""

from erp_services.ar_aging_service import ARAgingService
from erp_services.authorization import (
    ADMIN_ROLES,
    REPORT_CATALOGUE,
    ReportCategory,
    ReportDefinition,
    Role,
    can_access,
    can_access_category,
    can_access_report,
    get_report,
    get_reports_by_category,
    get_visible_reports,
    is_admin_role,
    parse_role,
)
from erp_services.expiry_check_service import ExpiryCheckService
from erp_services.kpi_snapshot_service import KPISnapshotService
from erp_services.observability import (
    CacheStats,
    CacheStatsCollector,
    PerformanceMetrics,
    QueryCache,
    SlowQueryEntry,
    SlowQueryLog,
)

__all__ = [
    "ADMIN_ROLES",
    "ARAgingService",
    "CacheStats",
    "CacheStatsCollector",
    "ExpiryCheckService",
    "KPISnapshotService",
    "PerformanceMetrics",
    "QueryCache",
    "REPORT_CATALOGUE",
    "ReportCategory",
    "ReportDefinition",
    "Role",
    "SlowQueryEntry",
    "SlowQueryLog",
    "can_access",
    "can_access_category",
    "can_access_report",
    "get_report",
    "get_reports_by_category",
    "get_visible_reports",
    "is_admin_role",
    "parse_role",
]
