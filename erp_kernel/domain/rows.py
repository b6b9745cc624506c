"""
Row-shape checks for persistence rows.

Every entity has one ``x_from_row`` mapper in ``erp_modules``.  Mappers
call ``require_keys`` first, so an unexpected row shape fails at the
boundary with a RowShapeError instead of surfacing later as a KeyError
or a silently missing value.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from erp_kernel.exceptions import RowShapeError


def require_keys(row: Mapping[str, Any], entity: str, keys: Iterable[str]) -> None:
    """Raise RowShapeError naming every key in ``keys`` absent from ``row``."""
    missing = [k for k in keys if k not in row]
    if missing:
        raise RowShapeError(entity, missing)


def optional(row: Mapping[str, Any], key: str, default: Any = None) -> Any:
    """``row[key]`` with ``None`` and absence both mapped to ``default``."""
    value = row.get(key)
    return default if value is None else value
