"""Row mappers for external ID mappings and sync mappings."""

from collections.abc import Mapping
from typing import Any

from erp_kernel.domain.dates import to_datetime
from erp_kernel.domain.rows import optional, require_keys
from erp_modules.integration.models import (
    ExternalIdMapping,
    FieldMapping,
    FilterCondition,
    FilterOperator,
    SyncDirection,
    SyncFrequency,
    SyncMapping,
    TransformFunction,
)

EXTERNAL_ID_REQUIRED = ("id", "connection_id", "local_table", "local_id", "external_id")
SYNC_MAPPING_REQUIRED = ("id", "connection_id", "local_table", "remote_entity", "field_mappings")


def external_id_mapping_from_row(row: Mapping[str, Any]) -> ExternalIdMapping:
    require_keys(row, "external_id_mapping", EXTERNAL_ID_REQUIRED)
    synced_at = row.get("synced_at")
    return ExternalIdMapping(
        id=str(row["id"]),
        connection_id=str(row["connection_id"]),
        local_table=row["local_table"],
        local_id=str(row["local_id"]),
        external_id=str(row["external_id"]),
        external_data=row.get("external_data"),
        synced_at=None if synced_at is None else to_datetime(synced_at),
    )


def external_id_mapping_to_row(mapping: ExternalIdMapping) -> dict[str, Any]:
    return {
        "id": mapping.id,
        "connection_id": mapping.connection_id,
        "local_table": mapping.local_table,
        "local_id": mapping.local_id,
        "external_id": mapping.external_id,
        "external_data": mapping.external_data,
        "synced_at": mapping.synced_at,
    }


def field_mapping_from_row(row: Mapping[str, Any]) -> FieldMapping:
    require_keys(row, "field_mapping", ("local_field", "remote_field"))
    transform = row.get("transform")
    return FieldMapping(
        local_field=row["local_field"],
        remote_field=row["remote_field"],
        transform=TransformFunction(transform) if transform else None,
    )


def field_mapping_to_row(mapping: FieldMapping) -> dict[str, Any]:
    row = {"local_field": mapping.local_field, "remote_field": mapping.remote_field}
    if mapping.transform is not None:
        row["transform"] = mapping.transform.value
    return row


def filter_condition_from_row(row: Mapping[str, Any]) -> FilterCondition:
    require_keys(row, "filter_condition", ("field", "operator"))
    return FilterCondition(
        field=row["field"],
        operator=FilterOperator(row["operator"]),
        value=row.get("value"),
    )


def sync_mapping_from_row(row: Mapping[str, Any]) -> SyncMapping:
    require_keys(row, "sync_mapping", SYNC_MAPPING_REQUIRED)
    conditions = row.get("filter_conditions")
    created_at = row.get("created_at")
    return SyncMapping(
        id=str(row["id"]),
        connection_id=str(row["connection_id"]),
        local_table=row["local_table"],
        remote_entity=row["remote_entity"],
        field_mappings=tuple(field_mapping_from_row(fm) for fm in row["field_mappings"]),
        sync_direction=SyncDirection(optional(row, "sync_direction", "push")),
        sync_frequency=SyncFrequency(optional(row, "sync_frequency", "realtime")),
        filter_conditions=(
            None if conditions is None
            else tuple(filter_condition_from_row(c) for c in conditions)
        ),
        is_active=bool(optional(row, "is_active", True)),
        created_at=None if created_at is None else to_datetime(created_at),
    )
