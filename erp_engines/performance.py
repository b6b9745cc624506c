"""Slow-operation classification and execution-time formatting."""

from __future__ import annotations

SLOW_QUERY_THRESHOLD_MS = 1000


def is_slow_operation(
    execution_time_ms: float,
    threshold_ms: float = SLOW_QUERY_THRESHOLD_MS,
) -> bool:
    """Exactly-at-threshold counts as slow."""
    return execution_time_ms >= threshold_ms


def format_execution_time(execution_time_ms: float) -> str:
    """``"250ms"`` below one second, ``"1.50s"`` from one second up."""
    if execution_time_ms >= 1000:
        return f"{execution_time_ms / 1000:.2f}s"
    return f"{round(execution_time_ms)}ms"
