"""Tests for external ID mappings and sync mapping transforms."""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest
from hypothesis import given
from hypothesis import strategies as st

from erp_modules.integration import (
    ExternalIdMapping,
    FieldMapping,
    FilterCondition,
    FilterOperator,
    SyncDirection,
    SyncMapping,
    SyncOperation,
    TransformFunction,
    apply_field_mappings,
    apply_transform,
    calculate_retry_delay,
    create_mapping_lookup,
    create_reverse_mapping_lookup,
    determine_operation,
    determine_operation_batch,
    evaluate_filter_conditions,
    evaluate_operator,
    external_id_mapping_from_row,
    extract_external_ids,
    extract_local_ids,
    filter_active_mappings,
    filter_mappings_by_connection,
    filter_mappings_by_table,
    filter_records,
    find_stale_mappings,
    get_external_id,
    get_local_id,
    get_nested_value,
    group_mappings_by_table,
    has_external_mapping,
    is_mapping_stale,
    is_valid_connection_code,
    merge_external_data,
    prepare_external_id_mapping_for_create,
    prepare_external_id_mapping_for_update,
    prepare_sync_mapping_for_create,
    prepare_sync_mapping_for_update,
    process_sync_mapping,
    set_nested_value,
    sync_mapping_from_row,
    validate_connection_input,
    validate_external_id_mapping_input,
    validate_mapping_ownership,
    validate_sync_mapping_input,
)

NOW = datetime(2024, 6, 12, 10, 0, 0)


def _mapping(
    local_id: str,
    external_id: str | None = None,
    *,
    connection_id: str = "conn-accurate",
    local_table: str = "invoices",
    synced_at: datetime | None = None,
) -> ExternalIdMapping:
    return ExternalIdMapping(
        id=f"map-{local_id}",
        connection_id=connection_id,
        local_table=local_table,
        local_id=local_id,
        external_id=external_id or f"ext-{local_id}",
        synced_at=synced_at,
    )


# =============================================================================
# External ID mappings
# =============================================================================


class TestExternalIdValidation:

    def test_all_fields_required(self):
        result = validate_external_id_mapping_input({"local_id": "  "})
        assert result.errors == (
            "Connection ID is required",
            "Local table is required",
            "Local ID is required",
            "External ID is required",
        )

    def test_create_trims_values(self):
        prepared = prepare_external_id_mapping_for_create({
            "connection_id": " conn-1 ",
            "local_table": "invoices ",
            "local_id": " inv-1",
            "external_id": "ACC-991 ",
            "external_data": {},
        })
        assert prepared.valid
        assert prepared.data == {
            "connection_id": "conn-1",
            "local_table": "invoices",
            "local_id": "inv-1",
            "external_id": "ACC-991",
            "external_data": None,
        }

    def test_create_rejects_invalid(self):
        prepared = prepare_external_id_mapping_for_create({"connection_id": "conn-1"})
        assert not prepared.valid
        assert prepared.data is None
        assert "Local table is required" in prepared.errors

    def test_update_always_refreshes_synced_at(self):
        assert prepare_external_id_mapping_for_update({}, NOW) == {"synced_at": NOW}
        update = prepare_external_id_mapping_for_update(
            {"external_id": " ACC-2 ", "external_data": {"status": "paid"}}, NOW
        )
        assert update == {"external_id": "ACC-2", "external_data": {"status": "paid"}, "synced_at": NOW}


class TestOperationsAndLookups:

    def test_determine_operation(self):
        assert determine_operation(None) == SyncOperation.CREATE
        assert determine_operation(_mapping("inv-1")) == SyncOperation.UPDATE

    def test_batch_plans_follow_input_order(self):
        existing = create_mapping_lookup([_mapping("inv-2")])
        plans = determine_operation_batch(["inv-1", "inv-2"], existing)
        assert [(p.local_id, p.operation) for p in plans] == [
            ("inv-1", SyncOperation.CREATE),
            ("inv-2", SyncOperation.UPDATE),
        ]
        assert plans[0].existing_mapping is None
        assert plans[1].existing_mapping == existing["inv-2"]

    def test_id_accessors(self):
        mapping = _mapping("inv-1", "ACC-1")
        assert get_external_id(mapping) == "ACC-1"
        assert get_local_id(mapping) == "inv-1"
        assert get_external_id(None) is None
        assert get_local_id(None) is None
        assert has_external_mapping(mapping)
        assert not has_external_mapping(None)

    def test_lookups_keep_last_duplicate(self):
        first = _mapping("inv-1", "ACC-1")
        second = _mapping("inv-1", "ACC-9")
        assert create_mapping_lookup([first, second])["inv-1"] is second
        reverse = create_reverse_mapping_lookup([first, second])
        assert set(reverse) == {"ACC-1", "ACC-9"}

    def test_grouping_and_filters(self):
        inv = _mapping("inv-1")
        job = _mapping("job-1", local_table="job_orders")
        other = _mapping("inv-2", connection_id="conn-gps")
        mappings = [inv, job, other]

        assert group_mappings_by_table(mappings) == {"invoices": [inv, other], "job_orders": [job]}
        assert filter_mappings_by_connection(mappings, "conn-gps") == [other]
        assert filter_mappings_by_table(mappings, "job_orders") == [job]
        assert extract_local_ids(mappings) == ["inv-1", "job-1", "inv-2"]
        assert extract_external_ids([inv]) == ["ext-inv-1"]

    def test_merge_external_data(self):
        assert merge_external_data(None, {"a": 1}) == {"a": 1}
        assert merge_external_data({"a": 1, "b": 2}, {"b": 3}) == {"a": 1, "b": 3}

    def test_ownership_is_exact(self):
        mapping = _mapping("inv-1")
        assert validate_mapping_ownership(mapping, "conn-accurate", "invoices")
        assert not validate_mapping_ownership(mapping, "conn-accurate", "Invoices")
        assert not validate_mapping_ownership(mapping, "conn-other", "invoices")

    def test_row_mapper(self):
        mapping = external_id_mapping_from_row({
            "id": 7,
            "connection_id": "conn-1",
            "local_table": "invoices",
            "local_id": "inv-1",
            "external_id": 991,
            "synced_at": "2024-06-12T08:00:00",
        })
        assert mapping.id == "7"
        assert mapping.external_id == "991"
        assert mapping.synced_at == datetime(2024, 6, 12, 8, 0, 0)


class TestStaleness:

    def test_missing_or_never_synced_is_stale(self):
        assert is_mapping_stale(None, 24, NOW)
        assert is_mapping_stale(_mapping("inv-1"), 24, NOW)

    def test_age_threshold(self):
        fresh = _mapping("inv-1", synced_at=NOW - timedelta(hours=23))
        boundary = _mapping("inv-2", synced_at=NOW - timedelta(hours=24))
        old = _mapping("inv-3", synced_at=NOW - timedelta(hours=25))
        assert not is_mapping_stale(fresh, 24, NOW)
        assert not is_mapping_stale(boundary, 24, NOW)
        assert is_mapping_stale(old, 24, NOW)

    def test_offset_synced_at_against_aware_now(self):
        mapping = external_id_mapping_from_row({
            "id": "m-1",
            "connection_id": "conn-1",
            "local_table": "invoices",
            "local_id": "inv-1",
            "external_id": "ACC-1",
            "synced_at": "2024-06-12T08:00:00Z",
        })
        now = datetime(2024, 6, 13, 8, 0, tzinfo=timezone.utc)
        assert not is_mapping_stale(mapping, 24, now)
        assert is_mapping_stale(mapping, 24, now + timedelta(seconds=1))
        assert not is_mapping_stale(mapping, 24, datetime(2024, 6, 13, 8, 0))

    def test_find_stale_logs_count(self, captured_logs):
        mappings = [
            _mapping("inv-1", synced_at=NOW - timedelta(hours=1)),
            _mapping("inv-2", synced_at=NOW - timedelta(days=3)),
            _mapping("inv-3"),
        ]
        stale = find_stale_mappings(mappings, 24, NOW)
        assert [m.local_id for m in stale] == ["inv-2", "inv-3"]

        records = [r for r in captured_logs() if r["message"] == "stale_mappings_found"]
        assert records and records[-1]["count"] == 2


# =============================================================================
# Sync mappings
# =============================================================================


class TestConnectionValidation:

    @pytest.mark.parametrize("code", ["accurate_prod", "gps-01", "A1"])
    def test_valid_codes(self, code):
        assert is_valid_connection_code(code)

    @pytest.mark.parametrize("code", [None, "", "has space", "x" * 51, "kode!"])
    def test_invalid_codes(self, code):
        assert not is_valid_connection_code(code)

    def test_connection_input(self):
        assert validate_connection_input({
            "connection_code": "accurate",
            "connection_name": "Accurate Online",
            "integration_type": "accounting",
            "provider": "accurate",
        }).valid
        result = validate_connection_input({"connection_code": "bad code", "integration_type": "fax"})
        assert result.errors == (
            "connection_code must be alphanumeric with underscores/hyphens, max 50 chars",
            "connection_name is required",
            "integration_type must be one of: accounting, tracking, email, storage, messaging, custom",
            "provider is required",
        )


class TestSyncMappingValidation:

    def _valid(self, **overrides):
        data = {
            "connection_id": "conn-1",
            "local_table": "invoices",
            "remote_entity": "SalesInvoice",
            "field_mappings": [{"local_field": "invoice_number", "remote_field": "number"}],
        }
        data.update(overrides)
        return data

    def test_valid_input(self):
        assert validate_sync_mapping_input(self._valid()).valid

    def test_required_fields(self):
        result = validate_sync_mapping_input({})
        assert result.errors == (
            "connection_id is required",
            "local_table is required",
            "remote_entity is required",
            "field_mappings is required and must be an array",
        )

    def test_field_mapping_problems(self):
        assert validate_sync_mapping_input(self._valid(field_mappings=[])).errors == (
            "field_mappings must have at least one mapping",
        )
        result = validate_sync_mapping_input(self._valid(field_mappings=[
            {"local_field": "a", "remote_field": "b"},
            {"local_field": "a", "remote_field": "b", "transform": "reverse"},
        ]))
        assert result.errors == ("field_mappings[1] is invalid",)

    def test_enums_and_conditions(self):
        result = validate_sync_mapping_input(self._valid(
            sync_direction="sideways",
            sync_frequency="weekly",
            filter_conditions=[{"field": "status", "operator": "eq"}, {"field": "x", "operator": "like"}],
        ))
        assert result.errors == (
            "sync_direction must be one of: push, pull, bidirectional",
            "sync_frequency must be one of: realtime, hourly, daily, manual",
            "filter_conditions[1] is invalid",
        )

    def test_create_applies_defaults(self):
        prepared = prepare_sync_mapping_for_create(self._valid(
            local_table=" invoices ",
            field_mappings=[{"local_field": " total ", "remote_field": "amount ", "transform": None}],
        ))
        assert prepared.valid
        assert prepared.data["local_table"] == "invoices"
        assert prepared.data["field_mappings"] == [{"local_field": "total", "remote_field": "amount"}]
        assert prepared.data["sync_direction"] == "push"
        assert prepared.data["sync_frequency"] == "realtime"
        assert prepared.data["filter_conditions"] is None
        assert prepared.data["is_active"] is True

    def test_create_keeps_explicit_inactive(self):
        prepared = prepare_sync_mapping_for_create(self._valid(is_active=False))
        assert prepared.data["is_active"] is False

    def test_update_only_supplied_fields(self):
        assert prepare_sync_mapping_for_update({"remote_entity": " Invoice ", "is_active": False}) == {
            "remote_entity": "Invoice",
            "is_active": False,
        }


class TestTransforms:

    def test_date_format(self):
        assert apply_transform("2024-06-12T10:30:00Z", TransformFunction.DATE_FORMAT) == "2024-06-12"
        assert apply_transform(date(2024, 1, 5), TransformFunction.DATE_FORMAT) == "2024-01-05"
        assert apply_transform("not a date", TransformFunction.DATE_FORMAT) == "not a date"

    def test_currency_format_rounds_half_up(self):
        assert apply_transform("12.345", TransformFunction.CURRENCY_FORMAT) == Decimal("12.35")
        assert apply_transform(1500, TransformFunction.CURRENCY_FORMAT) == Decimal("1500.00")
        assert apply_transform("n/a", TransformFunction.CURRENCY_FORMAT) == "n/a"
        assert apply_transform(True, TransformFunction.CURRENCY_FORMAT) is True

    def test_case_transforms(self):
        assert apply_transform("Maju Jaya", TransformFunction.UPPERCASE) == "MAJU JAYA"
        assert apply_transform("Maju Jaya", TransformFunction.LOWERCASE) == "maju jaya"
        assert apply_transform(42, TransformFunction.UPPERCASE) == 42

    def test_none_passes_through(self):
        for transform in TransformFunction:
            assert apply_transform(None, transform) is None

    def test_nested_paths(self):
        record = {"customer": {"address": {"city": "Jakarta"}}, "total": 5}
        assert get_nested_value(record, "customer.address.city") == "Jakarta"
        assert get_nested_value(record, "customer.phone") is None
        assert get_nested_value(record, "total.amount") is None

        out: dict = {"contact": "replace me"}
        set_nested_value(out, "contact.email", "a@b.co")
        set_nested_value(out, "contact.name", "Budi")
        assert out == {"contact": {"email": "a@b.co", "name": "Budi"}}

    def test_apply_field_mappings(self):
        record = {"invoice_number": "inv-001", "customer": {"name": "PT Maju"}, "total": "99.999"}
        mappings = [
            FieldMapping("invoice_number", "number", TransformFunction.UPPERCASE),
            FieldMapping("customer.name", "contact.name"),
            FieldMapping("total", "amount", TransformFunction.CURRENCY_FORMAT),
        ]
        assert apply_field_mappings(record, mappings) == {
            "number": "INV-001",
            "contact": {"name": "PT Maju"},
            "amount": Decimal("100.00"),
        }


class TestFilters:

    @pytest.mark.parametrize(
        "field_value, operator, filter_value, expected",
        [
            ("sent", FilterOperator.EQ, "sent", True),
            ("sent", FilterOperator.NEQ, "paid", True),
            (10, FilterOperator.GT, 5, True),
            (10, FilterOperator.LT, 5, False),
            (5, FilterOperator.GTE, 5, True),
            (Decimal("4.5"), FilterOperator.LTE, 5, True),
            ("10", FilterOperator.GT, 5, False),
            (None, FilterOperator.GT, 5, False),
            ("sent", FilterOperator.IN, ["sent", "overdue"], True),
            ("paid", FilterOperator.IN, "paid", False),
            ("PT Maju Jaya", FilterOperator.CONTAINS, "maju", True),
            (["urgent", "vip"], FilterOperator.CONTAINS, "vip", True),
            (42, FilterOperator.CONTAINS, "4", False),
        ],
    )
    def test_operator(self, field_value, operator, filter_value, expected):
        assert evaluate_operator(field_value, operator, filter_value) is expected

    def test_conditions_are_anded(self):
        conditions = [
            FilterCondition("status", FilterOperator.EQ, "sent"),
            FilterCondition("totals.amount", FilterOperator.GT, 1000),
        ]
        assert evaluate_filter_conditions({"status": "sent", "totals": {"amount": 5000}}, conditions)
        assert not evaluate_filter_conditions({"status": "sent", "totals": {"amount": 10}}, conditions)

    @given(st.dictionaries(st.text(min_size=1, max_size=5), st.integers()))
    def test_no_conditions_accept_everything(self, record):
        assert evaluate_filter_conditions(record, None)
        assert evaluate_filter_conditions(record, [])

    def test_filter_records(self):
        records = [{"status": "sent"}, {"status": "draft"}]
        assert filter_records(records, [FilterCondition("status", FilterOperator.NEQ, "draft")]) == [
            {"status": "sent"}
        ]


class TestProcessing:

    def test_process_sync_mapping(self):
        mapping = sync_mapping_from_row({
            "id": "sm-1",
            "connection_id": "conn-1",
            "local_table": "invoices",
            "remote_entity": "SalesInvoice",
            "field_mappings": [
                {"local_field": "invoice_number", "remote_field": "number"},
                {"local_field": "due_date", "remote_field": "dueDate", "transform": "date_format"},
            ],
            "filter_conditions": [{"field": "status", "operator": "in", "value": ["sent", "overdue"]}],
            "sync_direction": "push",
        })
        records = [
            {"invoice_number": "INV-1", "due_date": "2024-07-01T00:00:00", "status": "sent"},
            {"invoice_number": "INV-2", "due_date": "2024-07-02", "status": "draft"},
        ]
        assert mapping.sync_direction == SyncDirection.PUSH
        assert process_sync_mapping(records, mapping) == [{"number": "INV-1", "dueDate": "2024-07-01"}]

    def test_filter_active_mappings(self):
        active = SyncMapping("sm-1", "conn-1", "invoices", "SalesInvoice", ())
        inactive = SyncMapping("sm-2", "conn-1", "customers", "Customer", (), is_active=False)
        assert filter_active_mappings([active, inactive]) == [active]


class TestRetryDelay:

    def test_exponential_backoff(self):
        assert [calculate_retry_delay(n) for n in range(6)] == [1000, 2000, 4000, 8000, 16000, 30000]

    def test_negative_count_is_base(self):
        assert calculate_retry_delay(-3) == 1000

    @given(st.integers(min_value=0, max_value=64))
    def test_delay_bounded(self, retry_count):
        delay = calculate_retry_delay(retry_count, 1000, 30000)
        assert 1000 <= delay <= 30000
