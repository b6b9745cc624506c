"""
Tests for the aging engine.

Covers:
- Days overdue
- Bucket classification and boundaries
- Custom bucket sequences and validation
- Summaries
"""

from datetime import date
from decimal import Decimal

import pytest
from hypothesis import given
from hypothesis import strategies as st

from erp_engines.aging import (
    STANDARD_BUCKETS,
    AgeBucket,
    AgingCalculator,
    AgingSeverity,
    buckets_from_boundaries,
    validate_buckets,
)
from erp_kernel.exceptions import UnknownBucketError


class TestDaysOverdue:
    def setup_method(self):
        self.calculator = AgingCalculator()

    def test_forty_five_days(self):
        assert self.calculator.days_overdue(date(2024, 1, 1), date(2024, 2, 15)) == 45

    def test_not_yet_due_floors_at_zero(self):
        assert self.calculator.days_overdue(date(2024, 3, 1), date(2024, 2, 15)) == 0

    def test_outstanding_is_signed(self):
        assert self.calculator.days_outstanding(date(2024, 3, 1), date(2024, 2, 15)) == -15

    def test_accepts_iso_strings(self):
        assert self.calculator.days_overdue("2024-01-01", "2024-01-31") == 30


class TestClassification:
    def setup_method(self):
        self.calculator = AgingCalculator()

    @pytest.mark.parametrize(
        "days, label",
        [
            (-5, "Current"),
            (0, "Current"),
            (1, "1-30 Days"),
            (30, "1-30 Days"),
            (31, "31-60 Days"),
            (45, "31-60 Days"),
            (60, "31-60 Days"),
            (61, "61-90 Days"),
            (90, "61-90 Days"),
            (91, "90+ Days"),
            (1000, "90+ Days"),
        ],
    )
    def test_standard_boundaries(self, days, label):
        assert self.calculator.classify(days).name == label

    def test_gapped_sequence_raises(self):
        gapped = (AgeBucket("Current", None, 0), AgeBucket("Late", 10, None))
        with pytest.raises(UnknownBucketError) as exc_info:
            self.calculator.classify(5, gapped)
        assert exc_info.value.days == 5

    @pytest.mark.parametrize(
        "days, severity",
        [(0, AgingSeverity.NORMAL), (30, AgingSeverity.NORMAL), (31, AgingSeverity.WARNING),
         (89, AgingSeverity.WARNING), (90, AgingSeverity.CRITICAL)],
    )
    def test_severity(self, days, severity):
        assert self.calculator.severity(days) == severity

    def test_age_item_scenario(self):
        item = self.calculator.age_item(
            document_id="inv-1",
            document_number="INV-001",
            counterparty_name="PT Maju Jaya",
            document_date=date(2023, 12, 1),
            due_date=date(2024, 1, 1),
            amount=Decimal("1000000"),
            as_of=date(2024, 2, 15),
        )
        assert item.days_overdue == 45
        assert item.bucket.name == "31-60 Days"
        assert item.amount == Decimal("1000000")


class TestBucketSequences:
    def test_boundaries_reproduce_standard(self):
        assert buckets_from_boundaries((30, 60, 90)) == STANDARD_BUCKETS

    def test_standard_is_valid(self):
        assert validate_buckets(STANDARD_BUCKETS) == []

    def test_empty_is_invalid(self):
        assert validate_buckets(()) == ["bucket sequence is empty"]

    def test_gap_detected(self):
        problems = validate_buckets(
            (AgeBucket("Current", None, 0), AgeBucket("Late", 5, None))
        )
        assert any("gap or overlap" in p for p in problems)

    def test_bounded_ends_detected(self):
        problems = validate_buckets((AgeBucket("Only", 0, 10),))
        assert len(problems) == 2

    def test_inverted_bucket_rejected(self):
        with pytest.raises(ValueError):
            AgeBucket("Bad", 10, 5)


class TestSummary:
    def test_empty_buckets_included(self):
        calc = AgingCalculator()
        item = calc.age_item(
            document_id="1", document_number="A", counterparty_name="X",
            document_date=date(2024, 1, 1), due_date=date(2024, 1, 1),
            amount=Decimal("10"), as_of=date(2024, 1, 20),
        )
        summary = calc.summarize([item])

        assert [b.label for b in summary.buckets] == [b.name for b in STANDARD_BUCKETS]
        assert summary.for_label("1-30 Days").count == 1
        assert summary.for_label("Current").total_amount == Decimal("0")
        assert summary.total_amount == Decimal("10")
        assert summary.for_label("nope") is None


class TestAgingProperties:
    @given(st.integers(min_value=-10_000, max_value=10_000))
    def test_standard_buckets_partition_integers(self, days):
        matches = [b for b in STANDARD_BUCKETS if b.contains(days)]
        assert len(matches) == 1
        assert AgingCalculator().classify(days) == matches[0]

    @given(
        st.lists(st.integers(min_value=1, max_value=400), min_size=1, max_size=6, unique=True),
        st.integers(min_value=-500, max_value=2000),
    )
    def test_generated_sequences_partition_integers(self, boundaries, days):
        buckets = buckets_from_boundaries(sorted(boundaries))
        assert validate_buckets(buckets) == []
        assert sum(1 for b in buckets if b.contains(days)) == 1

    @given(
        st.lists(
            st.tuples(
                st.integers(min_value=0, max_value=400),
                st.decimals(min_value=0, max_value=10**9, places=2, allow_nan=False),
            ),
            max_size=20,
        )
    )
    def test_summary_total_is_sum_of_buckets(self, entries):
        calc = AgingCalculator()
        items = [
            calc.age_item(
                document_id=str(i), document_number=str(i), counterparty_name="C",
                document_date=date(2024, 1, 1), due_date=date(2024, 1, 1),
                amount=amount, as_of=date.fromordinal(date(2024, 1, 1).toordinal() + days),
            )
            for i, (days, amount) in enumerate(entries)
        ]
        summary = calc.summarize(items)
        assert summary.total_amount == sum((b.total_amount for b in summary.buckets), Decimal("0"))
        assert summary.total_count == len(items)
