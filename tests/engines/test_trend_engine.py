"""Tests for week-over-week trend calculation."""

from decimal import Decimal
from types import SimpleNamespace

import pytest
from hypothesis import given
from hypothesis import strategies as st

from erp_engines.trend import (
    WEEK_OVER_WEEK_METRICS,
    TrendDirection,
    calculate_change_percent,
    calculate_week_over_week_trends,
    create_trend,
    determine_trend_direction,
)


class TestChangePercent:
    def test_increase(self):
        assert calculate_change_percent(150, 100) == Decimal("50")

    def test_from_zero_to_positive_is_hundred(self):
        assert calculate_change_percent(50, 0) == Decimal("100")

    def test_zero_to_zero(self):
        assert calculate_change_percent(0, 0) == Decimal("0")

    def test_decrease(self):
        assert calculate_change_percent(75, 100) == Decimal("-25")


class TestCreateTrend:
    def test_fifty_from_zero(self):
        trend = create_trend("total_revenue", 50, 0)
        assert trend.change_percent == Decimal("100.00")
        assert trend.direction == TrendDirection.UP

    def test_zero_from_zero_stable(self):
        trend = create_trend("jobs_completed", 0, 0)
        assert trend.change_percent == Decimal("0.00")
        assert trend.direction == TrendDirection.STABLE

    def test_rounding_to_zero_is_stable(self):
        trend = create_trend("x", Decimal("100.001"), Decimal("100"))
        assert trend.change_percent == Decimal("0.00")
        assert trend.direction == TrendDirection.STABLE

    def test_rounds_half_up(self):
        # 1/3 = 33.333...; 2/3 = 66.666...
        assert create_trend("x", 4, 3).change_percent == Decimal("33.33")
        assert create_trend("x", 5, 3).change_percent == Decimal("66.67")

    @pytest.mark.parametrize(
        "value, direction",
        [(Decimal("0.01"), TrendDirection.UP), (Decimal("-0.01"), TrendDirection.DOWN), (0, TrendDirection.STABLE)],
    )
    def test_direction(self, value, direction):
        assert determine_trend_direction(value) == direction


class TestWeekOverWeek:
    def test_one_trend_per_metric_in_order(self):
        current = {"total_revenue": 200, "jobs_completed": 4}
        previous = {"total_revenue": 100, "jobs_completed": 4}
        trends = calculate_week_over_week_trends(current, previous)

        assert [t.metric_name for t in trends] == list(WEEK_OVER_WEEK_METRICS)
        assert trends[0].direction == TrendDirection.UP
        assert trends[1].direction == TrendDirection.STABLE

    def test_missing_values_count_as_zero(self):
        trends = calculate_week_over_week_trends({}, {})
        assert all(t.direction == TrendDirection.STABLE for t in trends)

    def test_missing_attributes_count_as_zero(self):
        current = SimpleNamespace(total_revenue=Decimal("500"))
        previous = SimpleNamespace()
        trends = calculate_week_over_week_trends(current, previous)

        assert trends[0].metric_name == "total_revenue"
        assert trends[0].previous_value == Decimal("0")
        assert trends[0].change_percent == Decimal("100.00")
        assert all(t.current_value == Decimal("0") for t in trends[1:])


class TestTrendProperties:
    @given(
        st.decimals(min_value=0, max_value=10**9, places=2, allow_nan=False),
        st.decimals(min_value=0, max_value=10**9, places=2, allow_nan=False),
    )
    def test_direction_matches_sign_of_rounded_change(self, current, previous):
        trend = create_trend("m", current, previous)
        if trend.change_percent > 0:
            assert trend.direction == TrendDirection.UP
        elif trend.change_percent < 0:
            assert trend.direction == TrendDirection.DOWN
        else:
            assert trend.direction == TrendDirection.STABLE

    @given(st.decimals(min_value=Decimal("0.01"), max_value=10**9, places=2, allow_nan=False))
    def test_unchanged_value_is_stable(self, value):
        assert create_trend("m", value, value).direction == TrendDirection.STABLE
