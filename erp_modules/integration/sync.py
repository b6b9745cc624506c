"""
Sync mapping validation and record transformation.

A sync mapping filters local records with AND-ed conditions, then renames
fields (dot paths allowed on both sides) and applies an optional value
transform per field.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping, Sequence
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from erp_kernel.domain.dates import to_date
from erp_kernel.domain.validation import ValidationResult, is_blank
from erp_kernel.domain.values import round_half_up
from erp_modules.integration.models import (
    FieldMapping,
    FilterCondition,
    FilterOperator,
    IntegrationType,
    PreparedWrite,
    SyncDirection,
    SyncFrequency,
    SyncMapping,
    TransformFunction,
)

CONNECTION_CODE_PATTERN = re.compile(r"^[a-zA-Z0-9_-]+$")
MAX_CONNECTION_CODE_LENGTH = 50
MAX_CONNECTION_NAME_LENGTH = 100

DEFAULT_RETRY_BASE_MS = 1000
DEFAULT_RETRY_MAX_MS = 30000


def _values(enum_cls) -> list[str]:
    return [member.value for member in enum_cls]


def is_valid_connection_code(code: str | None) -> bool:
    if is_blank(code) or len(code) > MAX_CONNECTION_CODE_LENGTH:
        return False
    return CONNECTION_CODE_PATTERN.match(code) is not None


def validate_connection_input(data: Mapping[str, Any]) -> ValidationResult:
    errors: list[str] = []
    code = data.get("connection_code")
    if not code:
        errors.append("connection_code is required")
    elif not is_valid_connection_code(code):
        errors.append("connection_code must be alphanumeric with underscores/hyphens, max 50 chars")

    name = data.get("connection_name")
    if not name:
        errors.append("connection_name is required")
    elif is_blank(name) or len(name) > MAX_CONNECTION_NAME_LENGTH:
        errors.append("connection_name must be non-empty, max 100 chars")

    integration_type = data.get("integration_type")
    if not integration_type:
        errors.append("integration_type is required")
    elif integration_type not in _values(IntegrationType):
        errors.append(f"integration_type must be one of: {', '.join(_values(IntegrationType))}")

    if not data.get("provider"):
        errors.append("provider is required")
    return ValidationResult.from_errors(errors)


def is_valid_field_mapping(mapping: Mapping[str, Any]) -> bool:
    if is_blank(mapping.get("local_field")) or is_blank(mapping.get("remote_field")):
        return False
    transform = mapping.get("transform")
    return not transform or transform in _values(TransformFunction)


def is_valid_filter_condition(condition: Mapping[str, Any]) -> bool:
    return not is_blank(condition.get("field")) and condition.get("operator") in _values(FilterOperator)


def validate_sync_mapping_input(data: Mapping[str, Any]) -> ValidationResult:
    errors: list[str] = []
    if not data.get("connection_id"):
        errors.append("connection_id is required")
    if is_blank(data.get("local_table")):
        errors.append("local_table is required")
    if is_blank(data.get("remote_entity")):
        errors.append("remote_entity is required")

    field_mappings = data.get("field_mappings")
    if not isinstance(field_mappings, Sequence) or isinstance(field_mappings, str):
        errors.append("field_mappings is required and must be an array")
    elif not field_mappings:
        errors.append("field_mappings must have at least one mapping")
    else:
        errors.extend(
            f"field_mappings[{i}] is invalid"
            for i, fm in enumerate(field_mappings)
            if not is_valid_field_mapping(fm)
        )

    direction = data.get("sync_direction")
    if direction and direction not in _values(SyncDirection):
        errors.append(f"sync_direction must be one of: {', '.join(_values(SyncDirection))}")
    frequency = data.get("sync_frequency")
    if frequency and frequency not in _values(SyncFrequency):
        errors.append(f"sync_frequency must be one of: {', '.join(_values(SyncFrequency))}")

    for i, condition in enumerate(data.get("filter_conditions") or ()):
        if not is_valid_filter_condition(condition):
            errors.append(f"filter_conditions[{i}] is invalid")
    return ValidationResult.from_errors(errors)


def _normalize_field_mappings(field_mappings: Iterable[Mapping[str, Any]]) -> list[dict[str, Any]]:
    normalized = []
    for fm in field_mappings:
        row = {"local_field": fm["local_field"].strip(), "remote_field": fm["remote_field"].strip()}
        if fm.get("transform"):
            row["transform"] = fm["transform"]
        normalized.append(row)
    return normalized


def prepare_sync_mapping_for_create(data: Mapping[str, Any]) -> PreparedWrite:
    validation = validate_sync_mapping_input(data)
    if not validation.valid:
        return PreparedWrite(validation=validation)
    is_active = data.get("is_active")
    return PreparedWrite(
        validation=validation,
        data={
            "connection_id": data["connection_id"],
            "local_table": data["local_table"].strip(),
            "remote_entity": data["remote_entity"].strip(),
            "field_mappings": _normalize_field_mappings(data["field_mappings"]),
            "sync_direction": data.get("sync_direction") or SyncDirection.PUSH.value,
            "sync_frequency": data.get("sync_frequency") or SyncFrequency.REALTIME.value,
            "filter_conditions": data.get("filter_conditions") or None,
            "is_active": True if is_active is None else is_active,
        },
    )


def prepare_sync_mapping_for_update(data: Mapping[str, Any]) -> dict[str, Any]:
    update: dict[str, Any] = {}
    for key in ("local_table", "remote_entity"):
        if data.get(key) is not None:
            update[key] = data[key].strip()
    if data.get("field_mappings") is not None:
        update["field_mappings"] = _normalize_field_mappings(data["field_mappings"])
    for key in ("sync_direction", "sync_frequency", "filter_conditions", "is_active"):
        if key in data:
            update[key] = data[key]
    return update


def apply_transform(value: Any, transform: TransformFunction) -> Any:
    """Transformed value; values the transform cannot handle pass through unchanged."""
    if value is None:
        return None
    if transform == TransformFunction.DATE_FORMAT:
        if isinstance(value, (date, datetime, str)):
            try:
                return to_date(value).isoformat()
            except ValueError:
                return value
        return value
    if transform == TransformFunction.CURRENCY_FORMAT:
        if isinstance(value, bool) or not isinstance(value, (int, float, Decimal, str)):
            return value
        try:
            return round_half_up(Decimal(str(value)))
        except InvalidOperation:
            return value
    if isinstance(value, str):
        if transform == TransformFunction.UPPERCASE:
            return value.upper()
        if transform == TransformFunction.LOWERCASE:
            return value.lower()
    return value


def get_nested_value(record: Mapping[str, Any], path: str) -> Any:
    current: Any = record
    for part in path.split("."):
        if not isinstance(current, Mapping):
            return None
        current = current.get(part)
    return current


def set_nested_value(record: dict[str, Any], path: str, value: Any) -> None:
    *parents, leaf = path.split(".")
    current = record
    for part in parents:
        if not isinstance(current.get(part), dict):
            current[part] = {}
        current = current[part]
    current[leaf] = value


def apply_field_mappings(
    record: Mapping[str, Any],
    field_mappings: Iterable[FieldMapping],
) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for fm in field_mappings:
        value = get_nested_value(record, fm.local_field)
        if fm.transform is not None:
            value = apply_transform(value, fm.transform)
        set_nested_value(result, fm.remote_field, value)
    return result


def _comparable(left: Any, right: Any) -> bool:
    if isinstance(left, bool) or isinstance(right, bool):
        return False
    numeric = (int, float, Decimal)
    if isinstance(left, numeric) and isinstance(right, numeric):
        return True
    if isinstance(left, str) and isinstance(right, str):
        return True
    if isinstance(left, datetime) and isinstance(right, datetime):
        return True
    return (
        isinstance(left, date) and isinstance(right, date)
        and not isinstance(left, datetime) and not isinstance(right, datetime)
    )


def evaluate_operator(field_value: Any, operator: FilterOperator, filter_value: Any) -> bool:
    if operator == FilterOperator.EQ:
        return field_value == filter_value
    if operator == FilterOperator.NEQ:
        return field_value != filter_value
    if operator in (FilterOperator.GT, FilterOperator.LT, FilterOperator.GTE, FilterOperator.LTE):
        if not _comparable(field_value, filter_value):
            return False
        if operator == FilterOperator.GT:
            return field_value > filter_value
        if operator == FilterOperator.LT:
            return field_value < filter_value
        if operator == FilterOperator.GTE:
            return field_value >= filter_value
        return field_value <= filter_value
    if operator == FilterOperator.IN:
        return isinstance(filter_value, (list, tuple, set, frozenset)) and field_value in filter_value
    if operator == FilterOperator.CONTAINS:
        if isinstance(field_value, str) and isinstance(filter_value, str):
            return filter_value.lower() in field_value.lower()
        if isinstance(field_value, (list, tuple)):
            return filter_value in field_value
    return False


def evaluate_filter_conditions(
    record: Mapping[str, Any],
    conditions: Sequence[FilterCondition] | None,
) -> bool:
    """AND of all conditions; no conditions lets every record through."""
    if not conditions:
        return True
    return all(
        evaluate_operator(get_nested_value(record, c.field), c.operator, c.value)
        for c in conditions
    )


def filter_records(
    records: Iterable[Mapping[str, Any]],
    conditions: Sequence[FilterCondition] | None,
) -> list[Mapping[str, Any]]:
    return [r for r in records if evaluate_filter_conditions(r, conditions)]


def filter_active_mappings(mappings: Iterable[SyncMapping]) -> list[SyncMapping]:
    return [m for m in mappings if m.is_active]


def process_sync_mapping(
    records: Iterable[Mapping[str, Any]],
    mapping: SyncMapping,
) -> list[dict[str, Any]]:
    """Filter by the mapping's conditions, then rename and transform fields."""
    return [
        apply_field_mappings(r, mapping.field_mappings)
        for r in filter_records(records, mapping.filter_conditions)
    ]


def calculate_retry_delay(
    retry_count: int,
    base_delay_ms: int = DEFAULT_RETRY_BASE_MS,
    max_delay_ms: int = DEFAULT_RETRY_MAX_MS,
) -> int:
    """Exponential backoff capped at ``max_delay_ms``; negative counts act as 0."""
    return min(base_delay_ms * 2 ** max(0, retry_count), max_delay_ms)
