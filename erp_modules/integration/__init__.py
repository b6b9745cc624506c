"""
Integration Module.

External ID links and sync mappings between local tables and external
systems: validation, create/update planning, staleness, ownership, and
record filtering and field transformation.
"""

from erp_modules.integration.external_ids import (
    create_mapping_lookup,
    create_reverse_mapping_lookup,
    determine_operation,
    determine_operation_batch,
    extract_external_ids,
    extract_local_ids,
    filter_mappings_by_connection,
    filter_mappings_by_table,
    find_stale_mappings,
    get_external_id,
    get_local_id,
    group_mappings_by_table,
    has_external_mapping,
    is_mapping_stale,
    merge_external_data,
    prepare_external_id_mapping_for_create,
    prepare_external_id_mapping_for_update,
    validate_external_id_mapping_input,
    validate_mapping_ownership,
)
from erp_modules.integration.mappers import (
    external_id_mapping_from_row,
    external_id_mapping_to_row,
    field_mapping_from_row,
    field_mapping_to_row,
    filter_condition_from_row,
    sync_mapping_from_row,
)
from erp_modules.integration.models import (
    ExternalIdMapping,
    FieldMapping,
    FilterCondition,
    FilterOperator,
    IntegrationType,
    OperationPlan,
    PreparedWrite,
    SyncDirection,
    SyncFrequency,
    SyncMapping,
    SyncOperation,
    TransformFunction,
)
from erp_modules.integration.sync import (
    apply_field_mappings,
    apply_transform,
    calculate_retry_delay,
    evaluate_filter_conditions,
    evaluate_operator,
    filter_active_mappings,
    filter_records,
    get_nested_value,
    is_valid_connection_code,
    prepare_sync_mapping_for_create,
    prepare_sync_mapping_for_update,
    process_sync_mapping,
    set_nested_value,
    validate_connection_input,
    validate_sync_mapping_input,
)

__all__ = [
    "ExternalIdMapping",
    "FieldMapping",
    "FilterCondition",
    "FilterOperator",
    "IntegrationType",
    "OperationPlan",
    "PreparedWrite",
    "SyncDirection",
    "SyncFrequency",
    "SyncMapping",
    "SyncOperation",
    "TransformFunction",
    "apply_field_mappings",
    "apply_transform",
    "calculate_retry_delay",
    "create_mapping_lookup",
    "create_reverse_mapping_lookup",
    "determine_operation",
    "determine_operation_batch",
    "evaluate_filter_conditions",
    "evaluate_operator",
    "external_id_mapping_from_row",
    "external_id_mapping_to_row",
    "extract_external_ids",
    "extract_local_ids",
    "field_mapping_from_row",
    "field_mapping_to_row",
    "filter_active_mappings",
    "filter_condition_from_row",
    "filter_mappings_by_connection",
    "filter_mappings_by_table",
    "filter_records",
    "find_stale_mappings",
    "get_external_id",
    "get_local_id",
    "get_nested_value",
    "group_mappings_by_table",
    "has_external_mapping",
    "is_mapping_stale",
    "is_valid_connection_code",
    "merge_external_data",
    "prepare_external_id_mapping_for_create",
    "prepare_external_id_mapping_for_update",
    "prepare_sync_mapping_for_create",
    "prepare_sync_mapping_for_update",
    "process_sync_mapping",
    "set_nested_value",
    "sync_mapping_from_row",
    "validate_connection_input",
    "validate_external_id_mapping_input",
    "validate_mapping_ownership",
    "validate_sync_mapping_input",
]
