"""
Tests for the kernel domain primitives.

Covers:
- Clock implementations
- Day-granularity date helpers
- Decimal conversion and rounding
- ValidationResult and field checks
- Row-shape checks
"""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from erp_kernel.domain.clock import DeterministicClock, SystemClock
from erp_kernel.domain.dates import days_between, elapsed_ms, to_date, to_datetime, to_utc
from erp_kernel.domain.rows import optional, require_keys
from erp_kernel.domain.validation import ValidationResult, is_blank, negative_fields
from erp_kernel.domain.values import ZERO, round_half_up, to_decimal
from erp_kernel.exceptions import RowShapeError


class TestDeterministicClock:
    def test_default_time(self):
        clock = DeterministicClock()
        assert clock.now() == datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def test_repeated_calls_stable(self):
        clock = DeterministicClock()
        assert clock.now() == clock.now()

    def test_advance(self):
        clock = DeterministicClock()
        start = clock.now()
        clock.advance(90)
        assert clock.now() - start == timedelta(seconds=90)

    def test_set_time_resets_advance(self):
        clock = DeterministicClock()
        clock.advance(3600)
        target = datetime(2025, 3, 1, 8, 30, tzinfo=timezone.utc)
        clock.set_time(target)
        assert clock.now() == target

    def test_today_is_calendar_date(self):
        clock = DeterministicClock(datetime(2024, 2, 29, 23, 59, tzinfo=timezone.utc))
        assert clock.today() == date(2024, 2, 29)


class TestSystemClock:
    def test_now_is_timezone_aware(self):
        assert SystemClock().now().tzinfo is not None

    def test_custom_timezone(self):
        jakarta = timezone(timedelta(hours=7))
        assert SystemClock(jakarta).now().utcoffset() == timedelta(hours=7)


class TestDates:
    def test_to_date_from_iso_string(self):
        assert to_date("2024-03-15") == date(2024, 3, 15)

    def test_to_date_drops_time(self):
        assert to_date(datetime(2024, 3, 15, 23, 59)) == date(2024, 3, 15)

    def test_to_datetime_z_suffix(self):
        parsed = to_datetime("2024-03-15T10:00:00Z")
        assert parsed.tzinfo is not None
        assert parsed.hour == 10

    def test_to_datetime_widens_date(self):
        assert to_datetime(date(2024, 3, 15)) == datetime(2024, 3, 15)

    def test_invalid_string_raises(self):
        with pytest.raises(ValueError):
            to_date("not-a-date")

    def test_days_between_ignores_time_of_day(self):
        assert days_between(datetime(2024, 1, 1, 23, 0), datetime(2024, 1, 2, 1, 0)) == 1

    def test_days_between_negative(self):
        assert days_between(date(2024, 1, 10), date(2024, 1, 8)) == -2

    def test_elapsed_ms(self):
        assert elapsed_ms("2024-01-01T00:00:00", "2024-01-01T00:00:01.500000") == 1500.0

    def test_elapsed_ms_mixed_offsets(self):
        assert elapsed_ms("2024-01-01T00:00:00", "2024-01-01T07:00:01+07:00") == 1000.0

    def test_to_utc_naive_is_utc(self):
        assert to_utc("2024-03-15T10:00:00") == datetime(2024, 3, 15, 10, tzinfo=timezone.utc)

    def test_to_utc_converts_offset(self):
        parsed = to_utc("2024-03-15T17:00:00+07:00")
        assert parsed == datetime(2024, 3, 15, 10, tzinfo=timezone.utc)
        assert parsed.utcoffset() == timedelta(0)

    def test_to_utc_widens_date(self):
        assert to_utc(date(2024, 3, 15)) == datetime(2024, 3, 15, tzinfo=timezone.utc)


class TestValues:
    def test_none_is_zero(self):
        assert to_decimal(None) == ZERO

    def test_float_goes_through_str(self):
        assert to_decimal(0.1) == Decimal("0.1")

    def test_round_half_up(self):
        assert round_half_up(Decimal("2.345"), 2) == Decimal("2.35")
        assert round_half_up(Decimal("-2.345"), 2) == Decimal("-2.35")

    def test_round_to_whole(self):
        assert round_half_up(Decimal("2.5"), 0) == Decimal("3")


class TestValidationResult:
    def test_ok(self):
        result = ValidationResult.ok()
        assert result.valid
        assert result.error is None

    def test_from_errors(self):
        result = ValidationResult.from_errors(["first", "second"])
        assert not result.valid
        assert result.error == "first"
        assert result.errors == ("first", "second")

    def test_from_no_errors_is_valid(self):
        assert ValidationResult.from_errors([]).valid

    @pytest.mark.parametrize("value", [None, "", "   ", 42])
    def test_is_blank(self, value):
        assert is_blank(value)

    def test_is_not_blank(self):
        assert not is_blank(" x ")

    def test_negative_fields(self):
        data = {"a": -1, "b": 0, "c": Decimal("-0.5"), "d": None, "e": True}
        assert negative_fields(data, ["a", "b", "c", "d", "e", "missing"]) == ["a", "c"]


class TestRows:
    def test_require_keys_passes(self):
        require_keys({"id": 1, "name": "x"}, "thing", ["id", "name"])

    def test_require_keys_names_every_missing_key(self):
        with pytest.raises(RowShapeError) as exc_info:
            require_keys({"id": 1}, "invoice", ["id", "due_date", "amount"])
        assert exc_info.value.entity == "invoice"
        assert exc_info.value.missing == ("amount", "due_date")
        assert exc_info.value.code == "ROW_SHAPE_MISMATCH"

    def test_optional_maps_none_to_default(self):
        assert optional({"k": None}, "k", "fallback") == "fallback"
        assert optional({}, "k", 3) == 3
        assert optional({"k": False}, "k", True) is False
