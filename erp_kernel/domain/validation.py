"""
Lightweight validation result and field checks (kernel primitives).

Pure checks with no I/O.  Validators across the modules layer return a
``ValidationResult`` instead of raising; callers check ``valid`` before
using the validated data.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Any


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of an input-shape or business-rule check."""

    valid: bool
    errors: tuple[str, ...] = ()

    @classmethod
    def ok(cls) -> ValidationResult:
        return cls(valid=True)

    @classmethod
    def from_errors(cls, errors: Iterable[str]) -> ValidationResult:
        errs = tuple(errors)
        return cls(valid=not errs, errors=errs)

    @property
    def error(self) -> str | None:
        """First error message, or None when valid."""
        return self.errors[0] if self.errors else None


def is_blank(value: Any) -> bool:
    """True for None, non-strings, and strings that are empty after trimming."""
    return not isinstance(value, str) or value.strip() == ""


def negative_fields(data: Mapping[str, Any], fields: Iterable[str]) -> list[str]:
    """Names of numeric fields in ``data`` that are present and below zero."""
    found: list[str] = []
    for name in fields:
        value = data.get(name)
        if isinstance(value, bool) or value is None:
            continue
        if isinstance(value, (int, float, Decimal)) and value < 0:
            found.append(name)
    return found
