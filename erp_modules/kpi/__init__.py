"""
KPI Snapshot Module.

Weekly revenue, operational and financial metrics, stored per ISO week
and compared week over week.  Aggregation and trend arithmetic come from
``erp_engines``.
"""

from erp_engines.trend import (
    WEEK_OVER_WEEK_METRICS,
    KPITrend,
    TrendDirection,
    calculate_week_over_week_trends,
    create_trend,
)
from erp_modules.kpi.mappers import (
    job_order_from_row,
    job_order_to_row,
    kpi_snapshot_from_row,
    kpi_snapshot_to_row,
)
from erp_modules.kpi.metrics import (
    calculate_financial_metrics,
    calculate_operational_metrics,
    calculate_revenue_metrics,
    completed_in_period,
)
from erp_modules.kpi.models import (
    DateRange,
    FinancialMetrics,
    JobOrderRecord,
    KPISnapshot,
    OperationalMetrics,
    RevenueMetrics,
    WeekRef,
)
from erp_modules.kpi.snapshots import (
    create_kpi_snapshot,
    filter_kpi_snapshots,
    get_recent_snapshots,
    is_kpi_snapshot_complete,
    is_valid_financial_metrics,
    is_valid_operational_metrics,
    is_valid_revenue_metrics,
    is_valid_week_number,
    is_valid_year,
)
from erp_modules.kpi.weeks import (
    get_iso_week,
    get_previous_week,
    get_week_date_range,
    get_week_number,
    weeks_in_year,
)

__all__ = [
    "WEEK_OVER_WEEK_METRICS",
    "DateRange",
    "FinancialMetrics",
    "JobOrderRecord",
    "KPISnapshot",
    "KPITrend",
    "OperationalMetrics",
    "RevenueMetrics",
    "TrendDirection",
    "WeekRef",
    "calculate_financial_metrics",
    "calculate_operational_metrics",
    "calculate_revenue_metrics",
    "calculate_week_over_week_trends",
    "completed_in_period",
    "create_kpi_snapshot",
    "create_trend",
    "filter_kpi_snapshots",
    "get_iso_week",
    "get_previous_week",
    "get_recent_snapshots",
    "get_week_date_range",
    "get_week_number",
    "is_kpi_snapshot_complete",
    "is_valid_financial_metrics",
    "is_valid_operational_metrics",
    "is_valid_revenue_metrics",
    "is_valid_week_number",
    "is_valid_year",
    "job_order_from_row",
    "job_order_to_row",
    "kpi_snapshot_from_row",
    "kpi_snapshot_to_row",
    "weeks_in_year",
]
