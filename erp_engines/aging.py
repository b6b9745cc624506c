"""
Module: erp_engines.aging
Responsibility:
    Calculate days overdue for dated documents and classify them into
    ordered aging buckets.  Used by the AR aging report and the weekly
    KPI financial metrics.

Architecture position:
    Engines -- pure calculation layer, zero I/O.  No clock access: the
    as-of date is always a parameter.

Invariants enforced:
    - Buckets partition the integers: every day count maps to exactly
      one bucket of a well-formed sequence (``validate_buckets``).
    - First matching bucket wins, scanned in ascending order.
    - Decimal-only arithmetic for bucket totals; the grand total of a
      summary equals the sum of its bucket totals.

Failure modes:
    - UnknownBucketError when a day count falls outside every bucket of
      a malformed (gapped) bucket sequence.

Usage:
    from erp_engines.aging import AgingCalculator
    from datetime import date

    calculator = AgingCalculator()
    days = calculator.days_overdue(date(2024, 1, 1), as_of=date(2024, 2, 15))  # 45
    calculator.classify(days).name  # "31-60 Days"
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum

from erp_kernel.domain.dates import DateLike, days_between
from erp_kernel.domain.values import ZERO
from erp_kernel.exceptions import UnknownBucketError
from erp_kernel.logging_config import get_logger

logger = get_logger("engines.aging")


@dataclass(frozen=True)
class AgeBucket:
    """
    A named, inclusive day range.

    ``min_days=None`` is unbounded below (the "Current" bucket also holds
    documents that are not yet due); ``max_days=None`` is unbounded above.
    """

    name: str
    min_days: int | None
    max_days: int | None

    def __post_init__(self) -> None:
        if (
            self.min_days is not None
            and self.max_days is not None
            and self.max_days < self.min_days
        ):
            raise ValueError("max_days cannot be less than min_days")

    def contains(self, days: int) -> bool:
        """Check if a day count falls within this bucket."""
        if self.min_days is not None and days < self.min_days:
            return False
        return self.max_days is None or days <= self.max_days


# Standard receivable aging buckets
STANDARD_BUCKETS: tuple[AgeBucket, ...] = (
    AgeBucket("Current", None, 0),
    AgeBucket("1-30 Days", 1, 30),
    AgeBucket("31-60 Days", 31, 60),
    AgeBucket("61-90 Days", 61, 90),
    AgeBucket("90+ Days", 91, None),
)


def buckets_from_boundaries(boundaries: Sequence[int]) -> tuple[AgeBucket, ...]:
    """
    Build a bucket sequence from ascending upper bounds.

    ``(30, 60, 90)`` produces the standard five buckets: Current,
    1-30, 31-60, 61-90 and 90+.
    """
    buckets = [AgeBucket("Current", None, 0)]
    lower = 1
    for upper in boundaries:
        buckets.append(AgeBucket(f"{lower}-{upper} Days", lower, upper))
        lower = upper + 1
    last = boundaries[-1] if boundaries else 0
    buckets.append(AgeBucket(f"{last}+ Days", lower, None))
    return tuple(buckets)


def validate_buckets(buckets: Sequence[AgeBucket]) -> list[str]:
    """
    Check that a bucket sequence partitions the integers.

    Returns a list of problems; an empty list means the sequence is
    ascending, contiguous, unbounded below at the start and unbounded
    above at the end.
    """
    problems: list[str] = []
    if not buckets:
        return ["bucket sequence is empty"]
    if buckets[0].min_days is not None:
        problems.append(f"first bucket '{buckets[0].name}' must be unbounded below")
    if buckets[-1].max_days is not None:
        problems.append(f"last bucket '{buckets[-1].name}' must be unbounded above")
    for prev, nxt in zip(buckets, buckets[1:]):
        if prev.max_days is None:
            problems.append(f"bucket '{prev.name}' is unbounded but not last")
            continue
        if nxt.min_days != prev.max_days + 1:
            problems.append(f"gap or overlap between '{prev.name}' and '{nxt.name}'")
    return problems


class AgingSeverity(str, Enum):
    """Display severity of an overdue document."""

    NORMAL = "normal"
    WARNING = "warning"
    CRITICAL = "critical"


@dataclass(frozen=True)
class AgedItem:
    """A document with its overdue classification."""

    document_id: str
    document_number: str
    counterparty_name: str
    document_date: date
    due_date: date
    amount: Decimal
    days_overdue: int
    bucket: AgeBucket
    severity: AgingSeverity
    counterparty_id: str | None = None


@dataclass(frozen=True)
class BucketTotal:
    """Count and amount of the items in one bucket."""

    bucket: AgeBucket
    count: int
    total_amount: Decimal

    @property
    def label(self) -> str:
        return self.bucket.name


@dataclass(frozen=True)
class AgingSummary:
    """
    Per-bucket totals plus the grand total.

    Guarantees:
        - ``buckets`` covers every bucket of the sequence, in order,
          including empty ones.
        - ``total_count`` and ``total_amount`` equal the sums over
          ``buckets``.
    """

    buckets: tuple[BucketTotal, ...]
    total_count: int
    total_amount: Decimal

    def for_label(self, label: str) -> BucketTotal | None:
        return next((b for b in self.buckets if b.label == label), None)


class AgingCalculator:
    """
    Calculate aging for any dated documents.

    Contract:
        Pure functions -- no I/O, no database access.
    Guarantees:
        - ``classify`` maps every integer to exactly one bucket of a
          well-formed sequence.
    """

    DEFAULT_BUCKETS = STANDARD_BUCKETS
    WARNING_DAYS = 31
    CRITICAL_DAYS = 90

    def __init__(self, buckets: Sequence[AgeBucket] | None = None):
        self.buckets: tuple[AgeBucket, ...] = tuple(buckets or self.DEFAULT_BUCKETS)

    def days_outstanding(self, due_date: DateLike, as_of: DateLike) -> int:
        """Signed days from due date to as-of date (zero or negative if not yet due)."""
        return days_between(due_date, as_of)

    def days_overdue(self, due_date: DateLike, as_of: DateLike) -> int:
        """Days past due, floored at zero."""
        return max(0, self.days_outstanding(due_date, as_of))

    def classify(self, days: int, buckets: Sequence[AgeBucket] | None = None) -> AgeBucket:
        """Return the first bucket (ascending scan) containing ``days``."""
        seq = self.buckets if buckets is None else buckets
        for bucket in seq:
            if bucket.contains(days):
                return bucket
        logger.warning(
            "aging_classification_no_bucket",
            extra={"days": days, "bucket_count": len(seq)},
        )
        raise UnknownBucketError(days, len(seq))

    def severity(self, days_overdue: int) -> AgingSeverity:
        if days_overdue >= self.CRITICAL_DAYS:
            return AgingSeverity.CRITICAL
        if days_overdue >= self.WARNING_DAYS:
            return AgingSeverity.WARNING
        return AgingSeverity.NORMAL

    def age_item(
        self,
        *,
        document_id: str,
        document_number: str,
        counterparty_name: str,
        document_date: date,
        due_date: date,
        amount: Decimal,
        as_of: DateLike,
        counterparty_id: str | None = None,
    ) -> AgedItem:
        """Convenience: days overdue + bucket + severity for one document."""
        days = self.days_overdue(due_date, as_of)
        return AgedItem(
            document_id=document_id,
            document_number=document_number,
            counterparty_name=counterparty_name,
            document_date=document_date,
            due_date=due_date,
            amount=amount,
            days_overdue=days,
            bucket=self.classify(days),
            severity=self.severity(days),
            counterparty_id=counterparty_id,
        )

    def summarize(self, items: Iterable[AgedItem]) -> AgingSummary:
        """Fold aged items into per-bucket and grand totals."""
        counts = {b.name: 0 for b in self.buckets}
        amounts = {b.name: ZERO for b in self.buckets}
        for item in items:
            counts[item.bucket.name] += 1
            amounts[item.bucket.name] += item.amount

        totals = tuple(
            BucketTotal(bucket=b, count=counts[b.name], total_amount=amounts[b.name])
            for b in self.buckets
        )
        return AgingSummary(
            buckets=totals,
            total_count=sum(t.count for t in totals),
            total_amount=sum((t.total_amount for t in totals), ZERO),
        )
