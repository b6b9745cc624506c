"""
erp_engines.tracer -- Engine invocation tracer emitting ERP_ENGINE_TRACE.

Responsibility:
    ``@traced_engine`` wraps report-level engine calls with one structured
    log record: engine name, version, a deterministic fingerprint of the
    selected keyword inputs, the result size where the result is sized,
    and duration_ms.

Architecture position:
    Engines -- infrastructure support for the pure calculation layer.
    Emits a log record only; never touches inputs or results.

Failure modes:
    - Fingerprint fields absent from kwargs are recorded as "null".
    - Unknown value types are fingerprinted through ``str(value)``.
"""

from __future__ import annotations

import functools
import hashlib
import time
from collections.abc import Callable, Mapping
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, TypeVar

from erp_kernel.logging_config import get_logger

_logger = get_logger("engines.tracer")

F = TypeVar("F", bound=Callable[..., Any])


def _canonicalize(value: Any) -> str:
    """Stable string form of a value for fingerprinting."""
    if value is None:
        return "null"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, (bool, int, float, Decimal, str)):
        return str(value)
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Mapping):
        items = sorted(value.items(), key=lambda kv: str(kv[0]))
        return "{" + ",".join(f"{k}:{_canonicalize(v)}" for k, v in items) + "}"
    if isinstance(value, (list, tuple)):
        return "[" + ",".join(_canonicalize(v) for v in value) + "]"
    return str(value)


def compute_input_fingerprint(
    fingerprint_fields: tuple[str, ...],
    kwargs: Mapping[str, Any],
) -> str:
    """16-hex-char SHA-256 prefix over the canonicalized selected kwargs."""
    canonical = "|".join(
        f"{name}={_canonicalize(kwargs.get(name))}" for name in fingerprint_fields
    )
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()[:16]


def traced_engine(
    engine_name: str,
    engine_version: str,
    fingerprint_fields: tuple[str, ...] = (),
) -> Callable[[F], F]:
    """Decorator that emits ERP_ENGINE_TRACE for an engine invocation."""

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            fp = compute_input_fingerprint(fingerprint_fields, kwargs) if fingerprint_fields else ""

            t0 = time.monotonic()
            result = func(*args, **kwargs)
            duration_ms = round((time.monotonic() - t0) * 1000, 2)

            extra: dict[str, Any] = {
                "trace_type": "ERP_ENGINE_TRACE",
                "engine_name": engine_name,
                "engine_version": engine_version,
                "input_fingerprint": fp,
                "duration_ms": duration_ms,
                "function": func.__qualname__,
            }
            if isinstance(result, (list, tuple)):
                extra["result_count"] = len(result)
            _logger.info("ERP_ENGINE_TRACE", extra=extra)
            return result

        return wrapper  # type: ignore[return-value]

    return decorator
