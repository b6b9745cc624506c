"""
Analytics Configuration Schema (``erp_config.schema``).

Responsibility
--------------
The one typed configuration object for the analytics layer: thresholds,
windows and margins that the engines default to when a caller does not
pass its own.

Architecture position
---------------------
**Config layer** -- depends on ``erp_kernel`` (exceptions) and
``erp_engines.aging`` (bucket validation) only.

Invariants enforced
-------------------
* ``AnalyticsConfig`` is frozen; a loaded configuration cannot drift.
* Every value is range-checked in ``__post_init__``; an impossible value
  raises ``ConfigurationError`` naming the field.
* Aging boundaries always produce a bucket sequence with no gaps or
  overlaps.

Failure modes
-------------
* ``ConfigurationError`` for out-of-range values, unknown keys in
  ``from_dict``, or non-ascending aging boundaries.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from decimal import Decimal
from typing import Any

from erp_engines.aging import AgeBucket, buckets_from_boundaries, validate_buckets
from erp_engines.clearance import HORIZONTAL_CLEARANCE_MARGIN, VERTICAL_CLEARANCE_MARGIN
from erp_engines.expiry import DEFAULT_EXPIRY_LOOKAHEAD_DAYS, EXPIRING_THIS_WEEK_DAYS
from erp_engines.performance import SLOW_QUERY_THRESHOLD_MS
from erp_engines.schedule import DEFAULT_DIGEST_HOUR
from erp_kernel.domain.values import to_decimal
from erp_kernel.exceptions import ConfigurationError

DEFAULT_AGING_BOUNDARIES = (30, 60, 90)
DEFAULT_COLLECTION_WINDOW_DAYS = 90
DEFAULT_CACHE_TTL_SECONDS = 300
DEFAULT_STALE_MAPPING_HOURS = 24


@dataclass(frozen=True)
class AnalyticsConfig:
    slow_query_threshold_ms: int = SLOW_QUERY_THRESHOLD_MS
    expiry_lookahead_days: int = DEFAULT_EXPIRY_LOOKAHEAD_DAYS
    expiring_this_week_days: int = EXPIRING_THIS_WEEK_DAYS
    aging_boundaries: tuple[int, ...] = DEFAULT_AGING_BOUNDARIES
    vertical_clearance_margin: Decimal = VERTICAL_CLEARANCE_MARGIN
    horizontal_clearance_margin: Decimal = HORIZONTAL_CLEARANCE_MARGIN
    collection_window_days: int = DEFAULT_COLLECTION_WINDOW_DAYS
    digest_hour: int = DEFAULT_DIGEST_HOUR
    cache_ttl_seconds: int = DEFAULT_CACHE_TTL_SECONDS
    stale_mapping_hours: int = DEFAULT_STALE_MAPPING_HOURS
    default_currency: str = "IDR"
    display_precision: int = 2

    def __post_init__(self) -> None:
        for name in (
            "slow_query_threshold_ms",
            "expiry_lookahead_days",
            "expiring_this_week_days",
            "collection_window_days",
            "cache_ttl_seconds",
            "stale_mapping_hours",
        ):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ConfigurationError(name, f"must be a positive integer, got {value!r}")

        if self.expiring_this_week_days > self.expiry_lookahead_days:
            raise ConfigurationError(
                "expiring_this_week_days",
                "must not exceed expiry_lookahead_days",
            )
        if not 0 <= self.digest_hour <= 23:
            raise ConfigurationError("digest_hour", f"must be 0-23, got {self.digest_hour}")
        if not 0 <= self.display_precision <= 6:
            raise ConfigurationError(
                "display_precision", f"must be 0-6, got {self.display_precision}"
            )
        if len(self.default_currency) != 3 or not self.default_currency.isupper():
            raise ConfigurationError(
                "default_currency", f"must be an ISO 4217 code, got {self.default_currency!r}"
            )
        for name in ("vertical_clearance_margin", "horizontal_clearance_margin"):
            if getattr(self, name) < 0:
                raise ConfigurationError(name, "must not be negative")

        if not self.aging_boundaries or any(b <= 0 for b in self.aging_boundaries):
            raise ConfigurationError("aging_boundaries", "must be positive day counts")
        if any(a >= b for a, b in zip(self.aging_boundaries, self.aging_boundaries[1:])):
            raise ConfigurationError("aging_boundaries", "must be strictly ascending")
        problems = validate_buckets(buckets_from_boundaries(self.aging_boundaries))
        if problems:
            raise ConfigurationError("aging_boundaries", "; ".join(problems))

    @property
    def aging_buckets(self) -> tuple[AgeBucket, ...]:
        return buckets_from_boundaries(self.aging_boundaries)

    @classmethod
    def with_defaults(cls) -> AnalyticsConfig:
        return cls()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> AnalyticsConfig:
        """
        Build from a parsed YAML mapping.  Missing keys keep their
        defaults; unknown keys are rejected.
        """
        data = dict(data or {})
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(", ".join(unknown), "unknown configuration key")

        if "aging_boundaries" in data:
            data["aging_boundaries"] = tuple(int(b) for b in data["aging_boundaries"])
        for name in ("vertical_clearance_margin", "horizontal_clearance_margin"):
            if name in data:
                data[name] = to_decimal(data[name])
        return cls(**data)
