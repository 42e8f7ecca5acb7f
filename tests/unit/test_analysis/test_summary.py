#!/usr/bin/env python3
"""Tests for concept summary aggregation."""

from decimal import Decimal

import pytest

from homeledger.analysis.summary import SummaryAggregator, truncate_path
from homeledger.core.dates import LedgerDate, Month
from homeledger.ledger.records import Expense


def expense(concepts: list[str], price: str) -> Expense:
    return Expense(LedgerDate(2024, Month.JANUARY, 1), Decimal(price), concepts, "Shop", "City")


class TestTruncatePath:
    """Test prefix truncation."""

    def test_truncate(self):
        """Test paths are cut to depth; shorter paths are kept whole."""
        assert truncate_path(["Home", "Utilities", "Water"], 2) == ("Home", "Utilities")
        assert truncate_path(["Food"], 3) == ("Food",)

    def test_depth_must_be_positive(self):
        """Test depth 0 is rejected."""
        with pytest.raises(ValueError):
            truncate_path(["Food"], 0)


class TestSummaryAggregator:
    """Test bucket accumulation, merging and iteration."""

    def setup_method(self):
        """Set up records under three branches."""
        self.records = [
            expense(["Home", "Rent"], "600"),
            expense(["Food", "Groceries"], "12.50"),
            expense(["Food", "Restaurants"], "40"),
            expense(["Food", "Groceries"], "7.25"),
            expense(["Transport"], "30"),
        ]

    @pytest.mark.currency
    def test_depth_one(self):
        """Test top-level buckets and their lexicographic order."""
        summary = SummaryAggregator.from_records(self.records, depth=1)

        assert list(summary) == [
            (("Food",), Decimal("59.75")),
            (("Home",), Decimal("600")),
            (("Transport",), Decimal("30")),
        ]
        assert summary.get_total() == Decimal("689.75")

    @pytest.mark.currency
    def test_total_equals_bucket_sum(self):
        """Test the grand total always equals the sum of buckets."""
        for depth in (1, 2, 3):
            summary = SummaryAggregator.from_records(self.records, depth)
            assert summary.get_total() == sum((amount for _, amount in summary), Decimal("0"))
            assert summary.get_total() == sum((r.price for r in self.records), Decimal("0"))

    def test_depth_two_keys(self):
        """Test short paths keep their own bucket at deeper depths."""
        summary = SummaryAggregator.from_records(self.records, depth=2)

        assert summary.get(["Food", "Groceries"]) == Decimal("19.75")
        assert summary.get(["Transport"]) == Decimal("30")
        assert summary.get(["Food"]) is None
        assert len(summary) == 4

    def test_merge_sums_overlapping_buckets(self):
        """Test merging two aggregators for the same path."""
        first = SummaryAggregator()
        first.add(["Food"], Decimal("10.0"))
        second = SummaryAggregator()
        second.add(["Food"], Decimal("15.0"))
        second.add(["Gifts"], Decimal("5"))

        first.merge(second)

        assert first.get(["Food"]) == Decimal("25.0")
        assert first.get_total() == Decimal("30.0")

    def test_empty(self):
        """Test an empty aggregator."""
        summary = SummaryAggregator()

        assert not summary.has_data()
        assert summary.get_total() == Decimal("0")
        assert summary.max_widths() == []

    def test_max_widths(self):
        """Test per-level label widths."""
        summary = SummaryAggregator.from_records(self.records, depth=2)

        assert summary.max_widths() == [len("Transport"), len("Restaurants")]
