"""
Module: erp_engines
Responsibility:
    Package entrypoint that re-exports the public symbols of the pure
    classification and aggregation engines.  This is the canonical import
    surface for higher layers (erp_modules, erp_services).

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import erp_kernel (domain, exceptions, logging) and sibling
    engine modules.  MUST NOT import erp_services or erp_modules.

Invariants enforced:
    - Purity: engines NEVER call ``datetime.now()`` or ``date.today()``.
      Reference dates and instants are explicit parameters; callers take
      them from an injected Clock.
    - Decimal-only arithmetic for amounts, rates and percentages.
    - Totality: every classification function returns a value for every
      input in its declared domain.

Failure modes:
    - InvalidTimeFormatError from the schedule engine for malformed
      ``HH:MM`` strings.
    - UnknownBucketError from the aging engine for malformed bucket
      sequences.

Usage:
    from erp_engines.aging import AgingCalculator
    from erp_engines.expiry import classify_expiry_urgency
    from erp_engines.schedule import is_in_window
    from erp_engines.trend import create_trend
"""

from erp_kernel.logging_config import get_logger

logger = get_logger("engines")

from erp_engines.aggregation import (
    GENERAL_SERVICE,
    UNKNOWN_CUSTOMER,
    group_and_count,
    group_and_sum,
    mean,
    safe_percent,
    safe_rate,
    sum_decimal,
)
from erp_engines.aging import (
    STANDARD_BUCKETS,
    AgeBucket,
    AgedItem,
    AgingCalculator,
    AgingSeverity,
    AgingSummary,
    BucketTotal,
    buckets_from_boundaries,
    validate_buckets,
)
from erp_engines.clearance import (
    HORIZONTAL_CLEARANCE_MARGIN,
    VERTICAL_CLEARANCE_MARGIN,
    PassabilityResult,
    TransportDimensions,
    assess_passability,
)
from erp_engines.expiry import (
    DEFAULT_EXPIRY_LOOKAHEAD_DAYS,
    EXPIRING_THIS_WEEK_DAYS,
    ExpiryUrgency,
    classify_expiry_urgency,
    days_until_expiry,
    is_within_window,
)
from erp_engines.performance import (
    SLOW_QUERY_THRESHOLD_MS,
    format_execution_time,
    is_slow_operation,
)
from erp_engines.schedule import (
    is_in_window,
    is_valid_time_format,
    next_daily_run,
    next_hour,
    parse_time_of_day,
)
from erp_engines.tracer import compute_input_fingerprint, traced_engine
from erp_engines.trend import (
    WEEK_OVER_WEEK_METRICS,
    KPITrend,
    TrendDirection,
    calculate_change_percent,
    calculate_week_over_week_trends,
    create_trend,
    determine_trend_direction,
)

__all__ = [
    # Aggregation
    "GENERAL_SERVICE",
    "UNKNOWN_CUSTOMER",
    "group_and_count",
    "group_and_sum",
    "mean",
    "safe_percent",
    "safe_rate",
    "sum_decimal",
    # Aging
    "STANDARD_BUCKETS",
    "AgeBucket",
    "AgedItem",
    "AgingCalculator",
    "AgingSeverity",
    "AgingSummary",
    "BucketTotal",
    "buckets_from_boundaries",
    "validate_buckets",
    # Clearance
    "HORIZONTAL_CLEARANCE_MARGIN",
    "VERTICAL_CLEARANCE_MARGIN",
    "PassabilityResult",
    "TransportDimensions",
    "assess_passability",
    # Expiry
    "DEFAULT_EXPIRY_LOOKAHEAD_DAYS",
    "EXPIRING_THIS_WEEK_DAYS",
    "ExpiryUrgency",
    "classify_expiry_urgency",
    "days_until_expiry",
    "is_within_window",
    # Performance
    "SLOW_QUERY_THRESHOLD_MS",
    "format_execution_time",
    "is_slow_operation",
    # Schedule
    "is_in_window",
    "is_valid_time_format",
    "next_daily_run",
    "next_hour",
    "parse_time_of_day",
    # Tracer
    "compute_input_fingerprint",
    "traced_engine",
    # Trend
    "WEEK_OVER_WEEK_METRICS",
    "KPITrend",
    "TrendDirection",
    "calculate_change_percent",
    "calculate_week_over_week_trends",
    "create_trend",
    "determine_trend_direction",
]
