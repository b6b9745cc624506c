"""
Query observability: cache hit/miss statistics, a TTL query cache and a
slow-query log.

All state lives on explicit collector objects created by the caller and
passed to whoever records into them.  Nothing here is module-level
state, so two tenants or two tests never share counters.  Each collector
guards its state with a ``threading.Lock`` and can be shared between
request-handling threads.

Usage:
    stats = CacheStatsCollector()
    cache = QueryCache(clock=clock, stats=stats)
    rows = cache.with_cache("kpi-2024-10", load_rows, ttl_seconds=300)

    slow_log = SlowQueryLog(clock=clock)
    slow_log.record("select invoices", 1250.0, table="invoices", operation="select")
    slow_log.metrics().average_ms
"""

from __future__ import annotations

import threading
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, TypeVar

from erp_engines.aggregation import safe_rate
from erp_engines.performance import (
    SLOW_QUERY_THRESHOLD_MS,
    format_execution_time,
    is_slow_operation,
)
from erp_kernel.domain.clock import Clock, SystemClock
from erp_kernel.logging_config import get_logger

logger = get_logger("services.observability")

T = TypeVar("T")

EVENT_SLOW_QUERY = "slow_query"
EVENT_CACHE_INVALIDATED = "cache_invalidated"

DEFAULT_CACHE_TTL_SECONDS = 300
MAX_SLOW_QUERY_ENTRIES = 100
RECENT_SLOW_QUERY_LIMIT = 10


@dataclass(frozen=True)
class CacheStats:
    hits: int
    misses: int
    hit_rate: float
    size: int = 0


class CacheStatsCollector:
    """Thread-safe hit/miss counters."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def record_hit(self) -> None:
        with self._lock:
            self._hits += 1

    def record_miss(self) -> None:
        with self._lock:
            self._misses += 1

    @property
    def hits(self) -> int:
        return self._hits

    @property
    def misses(self) -> int:
        return self._misses

    @property
    def hit_rate(self) -> float:
        """Hits over total lookups; 0.0 before the first lookup."""
        with self._lock:
            return float(safe_rate(self._hits, self._hits + self._misses))

    def snapshot(self, size: int = 0) -> CacheStats:
        with self._lock:
            hits, misses = self._hits, self._misses
        return CacheStats(hits=hits, misses=misses, hit_rate=float(safe_rate(hits, hits + misses)), size=size)

    def reset(self) -> None:
        with self._lock:
            self._hits = 0
            self._misses = 0


@dataclass(frozen=True)
class _CacheEntry:
    value: Any
    expires_at: datetime


class QueryCache:
    """
    In-process cache with a per-entry TTL.

    Expiry is judged against the injected clock.  An expired entry counts
    as a miss and is evicted on the lookup that finds it.
    """

    def __init__(
        self,
        clock: Clock | None = None,
        stats: CacheStatsCollector | None = None,
        default_ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS,
    ) -> None:
        self._clock = clock or SystemClock()
        self.stats = stats or CacheStatsCollector()
        self._default_ttl = default_ttl_seconds
        self._entries: dict[str, _CacheEntry] = {}
        self._lock = threading.Lock()

    def _live_entry(self, key: str) -> _CacheEntry | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock.now() >= entry.expires_at:
            del self._entries[key]
            return None
        return entry

    def get(self, key: str) -> Any | None:
        with self._lock:
            entry = self._live_entry(key)
        if entry is None:
            self.stats.record_miss()
            return None
        self.stats.record_hit()
        return entry.value

    def set(self, key: str, value: Any, ttl_seconds: float | None = None) -> None:
        ttl = self._default_ttl if ttl_seconds is None else ttl_seconds
        expires_at = self._clock.now() + timedelta(seconds=ttl)
        with self._lock:
            self._entries[key] = _CacheEntry(value=value, expires_at=expires_at)

    def has(self, key: str) -> bool:
        """Presence check that does not touch the hit/miss counters."""
        with self._lock:
            return self._live_entry(key) is not None

    def with_cache(
        self,
        key: str,
        loader: Callable[[], T],
        ttl_seconds: float | None = None,
    ) -> T:
        """Cached value for ``key``, calling ``loader`` only on a miss."""
        with self._lock:
            entry = self._live_entry(key)
        if entry is not None:
            self.stats.record_hit()
            return entry.value
        self.stats.record_miss()
        value = loader()
        self.set(key, value, ttl_seconds)
        return value

    def invalidate(self, pattern: str | None = None) -> int:
        """
        Remove entries and return how many were removed.

        ``None`` clears everything; ``"prefix*"`` removes keys starting
        with ``prefix``; anything else removes that exact key.
        """
        with self._lock:
            if pattern is None:
                doomed = list(self._entries)
            elif pattern.endswith("*"):
                prefix = pattern[:-1]
                doomed = [k for k in self._entries if k.startswith(prefix)]
            else:
                doomed = [pattern] if pattern in self._entries else []
            for key in doomed:
                del self._entries[key]

        logger.debug(
            "cache_invalidated",
            extra={
                "observability_event": EVENT_CACHE_INVALIDATED,
                "pattern": pattern,
                "removed": len(doomed),
            },
        )
        return len(doomed)

    @property
    def size(self) -> int:
        with self._lock:
            return len(self._entries)

    def snapshot(self) -> CacheStats:
        return self.stats.snapshot(size=self.size)


@dataclass(frozen=True)
class SlowQueryEntry:
    query: str
    execution_ms: float
    timestamp: datetime
    table: str | None = None
    operation: str | None = None

    @property
    def formatted_time(self) -> str:
        return format_execution_time(self.execution_ms)


@dataclass(frozen=True)
class PerformanceMetrics:
    slow_query_count: int
    average_ms: float
    slowest: SlowQueryEntry | None
    recent: tuple[SlowQueryEntry, ...]


class SlowQueryLog:
    """
    Bounded log of queries at or above the slow threshold.

    Only the newest ``max_entries`` are kept.  Recording a slow query
    also emits a ``slow_query`` warning log record.
    """

    def __init__(
        self,
        clock: Clock | None = None,
        threshold_ms: float = SLOW_QUERY_THRESHOLD_MS,
        max_entries: int = MAX_SLOW_QUERY_ENTRIES,
    ) -> None:
        self._clock = clock or SystemClock()
        self.threshold_ms = threshold_ms
        self._entries: deque[SlowQueryEntry] = deque(maxlen=max_entries)
        self._lock = threading.Lock()

    def record(
        self,
        query: str,
        execution_ms: float,
        table: str | None = None,
        operation: str | None = None,
    ) -> bool:
        """Log the query if it was slow; return whether it was logged."""
        if not is_slow_operation(execution_ms, self.threshold_ms):
            return False
        entry = SlowQueryEntry(
            query=query,
            execution_ms=execution_ms,
            timestamp=self._clock.now(),
            table=table,
            operation=operation,
        )
        with self._lock:
            self._entries.append(entry)
        logger.warning(
            "slow_query",
            extra={
                "observability_event": EVENT_SLOW_QUERY,
                "query": query,
                "duration_ms": round(execution_ms, 2),
                "table": table,
                "operation": operation,
            },
        )
        return True

    def timed(
        self,
        query: str,
        fn: Callable[[], T],
        table: str | None = None,
        operation: str | None = None,
    ) -> T:
        """Run ``fn``, recording it if it ran slow by the injected clock."""
        start = self._clock.now()
        result = fn()
        elapsed = (self._clock.now() - start).total_seconds() * 1000
        self.record(query, elapsed, table, operation)
        return result

    @property
    def entries(self) -> tuple[SlowQueryEntry, ...]:
        with self._lock:
            return tuple(self._entries)

    def metrics(self, recent_limit: int = RECENT_SLOW_QUERY_LIMIT) -> PerformanceMetrics:
        entries = self.entries
        if not entries:
            return PerformanceMetrics(0, 0.0, None, ())
        slowest = max(entries, key=lambda e: e.execution_ms)
        return PerformanceMetrics(
            slow_query_count=len(entries),
            average_ms=sum(e.execution_ms for e in entries) / len(entries),
            slowest=slowest,
            recent=tuple(reversed(entries[-recent_limit:])),
        )

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
