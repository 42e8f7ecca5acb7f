#!/usr/bin/env python3
"""Tests for record queries and yearly reports."""

from decimal import Decimal

from homeledger.analysis.queries import (
    all_of,
    concept_prefix,
    counterparty_contains,
    counterparty_is,
    iter_records,
    place_is,
    price_range,
    yearly_report,
)
from homeledger.core.dates import Month
from homeledger.ledger.datastore import load_ledger
from homeledger.ledger.records import RecordKind
from tests.fixtures.synthetic_data import create_ledger_data_dir


class TestRecordQueries:
    """Test iteration and predicates over a loaded ledger."""

    def test_iter_all_in_date_order(self, temp_dir):
        """Test records come out across years in date order."""
        ledger = load_ledger(create_ledger_data_dir(temp_dir / "data"))

        dates = [str(r.date) for r in iter_records(ledger, RecordKind.EXPENSE)]

        assert dates[:3] == ["2023/December/3", "2023/December/20", "2024/January/4"]
        assert len(dates) == 7

    def test_restrict_year_and_month(self, temp_dir):
        """Test year and month restrictions."""
        ledger = load_ledger(create_ledger_data_dir(temp_dir / "data"))

        assert len(list(iter_records(ledger, RecordKind.EXPENSE, year=2024))) == 5
        assert len(list(iter_records(ledger, RecordKind.EXPENSE, year=2024, month=Month.FEBRUARY))) == 2
        assert list(iter_records(ledger, RecordKind.INCOME, year=2023)) == []

    def test_predicates(self, temp_dir):
        """Test concept, price and counterparty filters and their conjunction."""
        ledger = load_ledger(create_ledger_data_dir(temp_dir / "data"))

        food = list(iter_records(ledger, RecordKind.EXPENSE, predicate=concept_prefix(["food"])))
        assert len(food) == 3

        cheap = list(iter_records(ledger, RecordKind.EXPENSE, predicate=price_range(Decimal("0"), Decimal("20"))))
        assert [str(r.price) for r in cheap] == ["12.50", "18"]

        landlord = all_of(counterparty_is("Sample Landlord"), concept_prefix(["Home", "Rent"]))
        assert len(list(iter_records(ledger, RecordKind.EXPENSE, predicate=landlord))) == 2

        grocery = counterparty_contains("Grocery")
        assert len(list(iter_records(ledger, RecordKind.EXPENSE, predicate=grocery))) == 2

    def test_open_price_bounds(self, temp_dir):
        """Test a price range with only one bound."""
        ledger = load_ledger(create_ledger_data_dir(temp_dir / "data"))

        large = iter_records(ledger, RecordKind.EXPENSE, predicate=price_range(lower=Decimal("60")))
        assert [str(r.price) for r in large] == ["60", "75.25", "60"]

        small = iter_records(ledger, RecordKind.EXPENSE, predicate=price_range(upper=Decimal("18")))
        assert [str(r.price) for r in small] == ["12.50", "18"]

        assert len(list(iter_records(ledger, RecordKind.EXPENSE, predicate=price_range()))) == 7

    def test_place(self, temp_dir):
        """Test city and place matching for both kinds."""
        ledger = load_ledger(create_ledger_data_dir(temp_dir / "data"))

        expenses = list(iter_records(ledger, RecordKind.EXPENSE, predicate=place_is("Shelbyville")))
        incomes = list(iter_records(ledger, RecordKind.INCOME, predicate=place_is("Shelbyville")))

        assert [r.shop for r in expenses] == ["Test Gas Station"]
        assert [r.source for r in incomes] == ["Relative"]


class TestYearlyReport:
    """Test per-year summaries."""

    def test_report_per_year(self, temp_dir):
        """Test each year has its own summary and the overall total adds up."""
        ledger = load_ledger(create_ledger_data_dir(temp_dir / "data"))

        report = yearly_report(ledger, RecordKind.EXPENSE, depth=1)

        assert list(report.years) == [2023, 2024]
        assert report.years[2023].get(["Home"]) == Decimal("60")
        assert report.years[2024].get(["Food"]) == Decimal("70.50")
        assert report.get_total() == Decimal("296.25")
        assert report.overall.get(["Home"]) == Decimal("195.25")

    def test_years_without_matches_are_skipped(self, temp_dir):
        """Test filtered-out years do not appear."""
        ledger = load_ledger(create_ledger_data_dir(temp_dir / "data"))

        report = yearly_report(ledger, RecordKind.EXPENSE, depth=2, predicate=concept_prefix(["Food"]))

        assert list(report.years) == [2024]
        assert report.get_total() == Decimal("70.50")
