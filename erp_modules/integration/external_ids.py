"""
External ID Mappings (``erp_modules.integration.external_ids``).

Responsibility
--------------
Keep the link between a local record and its ID in an external system:
validate and normalize new links, decide create-versus-update for a sync
run, find stale links, and build lookups in both directions.

Architecture position
---------------------
**Modules layer** -- pure functions; "now" is always a parameter.

Invariants enforced
-------------------
* A missing link, or one never synced, is always stale.
* Ownership is exact equality on ``connection_id`` and ``local_table``.
* Lookups keep the last mapping seen for a duplicated key.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import datetime, timedelta
from typing import Any

from erp_kernel.domain.dates import to_utc
from erp_kernel.domain.validation import ValidationResult, is_blank
from erp_kernel.logging_config import get_logger
from erp_modules.integration.models import (
    ExternalIdMapping,
    OperationPlan,
    PreparedWrite,
    SyncOperation,
)

logger = get_logger("modules.integration.external_ids")

_REQUIRED_LABELS = (
    ("connection_id", "Connection ID"),
    ("local_table", "Local table"),
    ("local_id", "Local ID"),
    ("external_id", "External ID"),
)


def validate_external_id_mapping_input(data: Mapping[str, Any]) -> ValidationResult:
    return ValidationResult.from_errors(
        f"{label} is required" for key, label in _REQUIRED_LABELS if is_blank(data.get(key))
    )


def prepare_external_id_mapping_for_create(data: Mapping[str, Any]) -> PreparedWrite:
    validation = validate_external_id_mapping_input(data)
    if not validation.valid:
        return PreparedWrite(validation=validation)
    row = {key: data[key].strip() for key, _ in _REQUIRED_LABELS}
    row["external_data"] = data.get("external_data") or None
    return PreparedWrite(validation=validation, data=row)


def prepare_external_id_mapping_for_update(
    data: Mapping[str, Any],
    now: datetime,
) -> dict[str, Any]:
    """Only the supplied fields, plus ``synced_at`` which every update refreshes."""
    update: dict[str, Any] = {}
    if data.get("external_id") is not None:
        update["external_id"] = data["external_id"].strip()
    if "external_data" in data:
        update["external_data"] = data["external_data"]
    update["synced_at"] = now
    return update


def determine_operation(existing: ExternalIdMapping | None) -> SyncOperation:
    return SyncOperation.CREATE if existing is None else SyncOperation.UPDATE


def determine_operation_batch(
    local_ids: Iterable[str],
    existing: Mapping[str, ExternalIdMapping],
) -> list[OperationPlan]:
    plans = []
    for local_id in local_ids:
        mapping = existing.get(local_id)
        plans.append(OperationPlan(local_id, determine_operation(mapping), mapping))
    return plans


def get_external_id(mapping: ExternalIdMapping | None) -> str | None:
    return mapping.external_id or None if mapping is not None else None


def get_local_id(mapping: ExternalIdMapping | None) -> str | None:
    return mapping.local_id or None if mapping is not None else None


def has_external_mapping(mapping: ExternalIdMapping | None) -> bool:
    return mapping is not None and bool(mapping.external_id)


def is_mapping_stale(
    mapping: ExternalIdMapping | None,
    max_age_hours: float,
    now: datetime,
) -> bool:
    if mapping is None or mapping.synced_at is None:
        return True
    return to_utc(now) - to_utc(mapping.synced_at) > timedelta(hours=max_age_hours)


def find_stale_mappings(
    mappings: Iterable[ExternalIdMapping],
    max_age_hours: float,
    now: datetime,
) -> list[ExternalIdMapping]:
    stale = [m for m in mappings if is_mapping_stale(m, max_age_hours, now)]
    logger.debug(
        "stale_mappings_found",
        extra={"count": len(stale), "max_age_hours": max_age_hours},
    )
    return stale


def group_mappings_by_table(
    mappings: Iterable[ExternalIdMapping],
) -> dict[str, list[ExternalIdMapping]]:
    grouped: dict[str, list[ExternalIdMapping]] = {}
    for mapping in mappings:
        grouped.setdefault(mapping.local_table, []).append(mapping)
    return grouped


def create_mapping_lookup(mappings: Iterable[ExternalIdMapping]) -> dict[str, ExternalIdMapping]:
    return {m.local_id: m for m in mappings}


def create_reverse_mapping_lookup(
    mappings: Iterable[ExternalIdMapping],
) -> dict[str, ExternalIdMapping]:
    return {m.external_id: m for m in mappings}


def filter_mappings_by_connection(
    mappings: Iterable[ExternalIdMapping],
    connection_id: str,
) -> list[ExternalIdMapping]:
    return [m for m in mappings if m.connection_id == connection_id]


def filter_mappings_by_table(
    mappings: Iterable[ExternalIdMapping],
    local_table: str,
) -> list[ExternalIdMapping]:
    return [m for m in mappings if m.local_table == local_table]


def extract_external_ids(mappings: Iterable[ExternalIdMapping]) -> list[str]:
    return [m.external_id for m in mappings]


def extract_local_ids(mappings: Iterable[ExternalIdMapping]) -> list[str]:
    return [m.local_id for m in mappings]


def merge_external_data(
    existing: Mapping[str, Any] | None,
    new: Mapping[str, Any],
) -> dict[str, Any]:
    """Shallow merge; keys in ``new`` win."""
    return {**(existing or {}), **new}


def validate_mapping_ownership(
    mapping: ExternalIdMapping,
    connection_id: str,
    local_table: str,
) -> bool:
    return mapping.connection_id == connection_id and mapping.local_table == local_table
