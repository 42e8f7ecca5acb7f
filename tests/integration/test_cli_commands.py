#!/usr/bin/env python3
"""
Integration tests for the concepts, records and stats commands

Each test runs against a fresh synthetic data directory and checks both the
command output and what ends up on disk.
"""

import pandas as pd
import pytest
from click.testing import CliRunner

from homeledger.cli.main import main
from homeledger.core.dates import Month
from homeledger.ledger.datastore import load_ledger
from homeledger.ledger.records import RecordKind
from tests.fixtures.synthetic_data import create_ledger_data_dir


@pytest.mark.integration
class TestConceptsCommands:
    """Test taxonomy editing through the CLI."""

    def setup_method(self):
        """Set up test environment."""
        self.runner = CliRunner()

    def invoke(self, data_dir, *args):
        return self.runner.invoke(main, ["--data-dir", str(data_dir), *args])

    def test_show(self, temp_dir):
        """Test the expense taxonomy is printed as a tree."""
        data_dir = create_ledger_data_dir(temp_dir / "data")

        result = self.invoke(data_dir, "concepts", "show")

        assert result.exit_code == 0
        assert "Home (" in result.output
        assert "        Electricity ()" in result.output

    def test_add_under_branch(self, temp_dir):
        """Test adding a concept writes the taxonomy file."""
        data_dir = create_ledger_data_dir(temp_dir / "data")

        result = self.invoke(data_dir, "concepts", "add", "--under", "Home;Utilities", "Gas")

        assert result.exit_code == 0
        assert load_ledger(data_dir).expense_concepts.tree.has_path(["Home", "Utilities", "Gas"])

    def test_rename_updates_records(self, temp_dir):
        """Test renaming relabels matching records on disk."""
        data_dir = create_ledger_data_dir(temp_dir / "data")

        result = self.invoke(data_dir, "concepts", "rename", "--kind", "income", "Work;Salary", "Wages")

        assert result.exit_code == 0
        assert "2 record(s) updated" in result.output
        assert "Work;Wages" in (data_dir / "incomes" / "2024.txt").read_text()

    def test_remove_unknown_path(self, temp_dir):
        """Test removing an unknown concept fails."""
        data_dir = create_ledger_data_dir(temp_dir / "data")

        result = self.invoke(data_dir, "concepts", "remove", "Food;Bakery")

        assert result.exit_code == 1
        assert "Unknown concept path" in result.output

    def test_rename_to_blank_name(self, temp_dir):
        """Test a blank new name is a usage error and changes nothing."""
        data_dir = create_ledger_data_dir(temp_dir / "data")
        before = (data_dir / "expense_types.txt").read_bytes()

        result = self.invoke(data_dir, "concepts", "rename", "Food", "   ")

        assert result.exit_code == 2
        assert "Concept name is empty" in result.output
        assert (data_dir / "expense_types.txt").read_bytes() == before

    def test_add_name_with_parentheses(self, temp_dir):
        """Test a name using taxonomy syntax is a usage error and the data still loads."""
        data_dir = create_ledger_data_dir(temp_dir / "data")

        result = self.invoke(data_dir, "concepts", "add", "--kind", "income", "Gifts (birthday)")

        assert result.exit_code == 2
        assert "reserved characters" in result.output
        assert load_ledger(data_dir).income_concepts.tree.keys() == ["Gifts", "Work"]

    def test_add_under_invalid_branch(self, temp_dir):
        """Test a parent path with a reserved character is a usage error."""
        data_dir = create_ledger_data_dir(temp_dir / "data")

        result = self.invoke(data_dir, "concepts", "add", "--under", "Home (rented)", "Water")

        assert result.exit_code == 2
        assert not load_ledger(data_dir).expense_concepts.tree.has_path(["Home (rented)"])


@pytest.mark.integration
class TestRecordsCommands:
    """Test record entry through the CLI."""

    def setup_method(self):
        """Set up test environment."""
        self.runner = CliRunner()

    def invoke(self, data_dir, *args):
        return self.runner.invoke(main, ["--data-dir", str(data_dir), *args])

    def test_list_month(self, temp_dir):
        """Test a month is listed with its records."""
        data_dir = create_ledger_data_dir(temp_dir / "data")

        result = self.invoke(data_dir, "records", "list", "--year", "2024", "--month", "february")

        assert result.exit_code == 0
        assert "February 2024" in result.output
        assert "Sample Landlord" in result.output
        assert "Mock Restaurant" not in result.output

    def test_list_missing_year(self, temp_dir):
        """Test a year without records."""
        data_dir = create_ledger_data_dir(temp_dir / "data")

        result = self.invoke(data_dir, "records", "list", "--year", "1999")

        assert result.exit_code == 0
        assert "No records for 1999" in result.output

    def test_add_writes_only_its_year(self, temp_dir):
        """Test adding an expense rewrites only that year's file."""
        data_dir = create_ledger_data_dir(temp_dir / "data")
        untouched = (data_dir / "expenses" / "2023.txt").read_bytes()

        result = self.invoke(
            data_dir,
            "records", "add",
            "--date", "2024/February/5",
            "--amount", "9.99",
            "--concepts", "Food;Groceries",
            "--counterparty", "Corner Shop",
            "--place", "Springfield",
        )

        assert result.exit_code == 0
        assert "at index 1" in result.output
        assert (data_dir / "expenses" / "2023.txt").read_bytes() == untouched
        february = load_ledger(data_dir).get_month_records(2024, Month.FEBRUARY, RecordKind.EXPENSE)
        assert [r.counterparty for r in february][1] == "Corner Shop"

    def test_add_rejects_unknown_concept(self, temp_dir):
        """Test records must use an existing concept path."""
        data_dir = create_ledger_data_dir(temp_dir / "data")

        result = self.invoke(
            data_dir,
            "records", "add",
            "--amount", "1",
            "--concepts", "Hobbies",
            "--counterparty", "Shop",
            "--place", "Town",
        )

        assert result.exit_code == 1
        assert "Unknown concept path" in result.output

    def test_add_rejects_bad_date(self, temp_dir):
        """Test a malformed date is a usage error."""
        data_dir = create_ledger_data_dir(temp_dir / "data")

        result = self.invoke(
            data_dir,
            "records", "add",
            "--date", "2024-02-05",
            "--amount", "1",
            "--concepts", "Food",
            "--counterparty", "Shop",
            "--place", "Town",
        )

        assert result.exit_code == 2
        assert "Invalid value" in result.output

    def test_add_monthly(self, temp_dir):
        """Test a recurring income across two years."""
        data_dir = create_ledger_data_dir(temp_dir / "data")

        result = self.invoke(
            data_dir,
            "records", "add-monthly",
            "--kind", "income",
            "--start", "2024/November",
            "--end", "2025/January",
            "--day", "28",
            "--amount", "2500",
            "--concepts", "Work;Salary",
            "--counterparty", "Example Employer",
            "--place", "Springfield",
        )

        assert result.exit_code == 0
        assert "Added 3 income record(s)" in result.output
        assert (data_dir / "incomes" / "2025.txt").exists()

    def test_edit_and_remove(self, temp_dir):
        """Test editing a record's amount and then removing it."""
        data_dir = create_ledger_data_dir(temp_dir / "data")
        base = ["records"]
        where = ["--year", "2024", "--month", "January", "--index", "0"]

        result = self.invoke(data_dir, *base, "edit", *where, "--amount", "13.00", "--counterparty", "Other")
        assert result.exit_code == 0
        edited = load_ledger(data_dir).get_month_records(2024, Month.JANUARY, RecordKind.EXPENSE)[0]
        assert edited.shop == "Other"
        assert str(edited.price) == "13.00"

        result = self.invoke(data_dir, *base, "remove", *where)
        assert result.exit_code == 0
        assert len(load_ledger(data_dir).get_month_records(2024, Month.JANUARY, RecordKind.EXPENSE)) == 2

    def test_remove_missing_record(self, temp_dir):
        """Test removing an index that does not exist."""
        data_dir = create_ledger_data_dir(temp_dir / "data")

        result = self.invoke(data_dir, "records", "remove", "--year", "2024", "--month", "March", "--index", "0")

        assert result.exit_code == 1
        assert "No expense record 0 in March 2024" in result.output

    def test_add_rejects_tab_in_description(self, temp_dir):
        """Test free text that would split the record line is a usage error."""
        data_dir = create_ledger_data_dir(temp_dir / "data")
        before = (data_dir / "expenses" / "2024.txt").read_bytes()

        result = self.invoke(
            data_dir,
            "records", "add",
            "--date", "2024/February/5",
            "--amount", "4",
            "--concepts", "Food;Groceries",
            "--counterparty", "Corner Shop",
            "--place", "Springfield",
            "--description", "milk\tbread",
        )

        assert result.exit_code == 2
        assert "may not contain quotes, tabs or line breaks" in result.output
        assert (data_dir / "expenses" / "2024.txt").read_bytes() == before
        assert len(load_ledger(data_dir).get_month_records(2024, Month.FEBRUARY, RecordKind.EXPENSE)) == 2

    def test_edit_rejects_quote_in_counterparty(self, temp_dir):
        """Test edit refuses a counterparty containing a double quote."""
        data_dir = create_ledger_data_dir(temp_dir / "data")

        result = self.invoke(
            data_dir,
            "records", "edit",
            "--year", "2024", "--month", "January", "--index", "0",
            "--counterparty", 'The "Best" Shop',
        )

        assert result.exit_code == 2
        assert load_ledger(data_dir).get_month_records(2024, Month.JANUARY, RecordKind.EXPENSE)[0].shop == (
            "Generic Grocery Store"
        )


@pytest.mark.integration
class TestRecordsListFilters:
    """Test the filtered views of 'records list'."""

    def setup_method(self):
        """Set up test environment."""
        self.runner = CliRunner()

    def list_records(self, data_dir, *args):
        return self.runner.invoke(main, ["--data-dir", str(data_dir), "records", "list", *args])

    def test_concepts_across_all_years(self, temp_dir):
        """Test a concept filter over every year with the matching total."""
        data_dir = create_ledger_data_dir(temp_dir / "data")

        result = self.list_records(data_dir, "--all", "--concepts", "Food")

        assert result.exit_code == 0
        assert "January 2024" in result.output
        assert "February 2024" in result.output
        assert "December 2023" not in result.output
        assert "Demo Power Co" not in result.output
        assert "3 record(s), total 70.50" in result.output

    def test_amount_bounds(self, temp_dir):
        """Test --min over all years and --max within one year."""
        data_dir = create_ledger_data_dir(temp_dir / "data")

        result = self.list_records(data_dir, "--all", "--min", "60")
        assert result.exit_code == 0
        assert "December 2023" in result.output
        assert "3 record(s), total 195.25" in result.output

        result = self.list_records(data_dir, "--year", "2024", "--max", "20")
        assert result.exit_code == 0
        assert "2 record(s), total 30.50" in result.output
        assert "Mock Restaurant" not in result.output

    def test_counterparty_exact_and_contains(self, temp_dir):
        """Test exact counterparty matching differs from substring matching."""
        data_dir = create_ledger_data_dir(temp_dir / "data")

        result = self.list_records(data_dir, "--year", "2024", "--counterparty", "Generic")
        assert result.exit_code == 0
        assert "No expense records for 2024" in result.output

        result = self.list_records(data_dir, "--year", "2024", "--counterparty-contains", "Generic")
        assert "2 record(s), total 30.50" in result.output

        result = self.list_records(data_dir, "--year", "2024", "-c", "Generic Grocery Store")
        assert "2 record(s), total 30.50" in result.output

    def test_place_for_incomes(self, temp_dir):
        """Test the place filter on incomes."""
        data_dir = create_ledger_data_dir(temp_dir / "data")

        result = self.list_records(data_dir, "--kind", "income", "--all", "--place", "Shelbyville")

        assert result.exit_code == 0
        assert "Relative" in result.output
        assert "Example Employer" not in result.output
        assert "1 record(s), total 100.00" in result.output

    def test_filtered_rows_show_edit_index(self, temp_dir):
        """Test a filtered row keeps the index used by edit and remove."""
        data_dir = create_ledger_data_dir(temp_dir / "data")

        result = self.list_records(data_dir, "-y", "2024", "-m", "January", "-c", "Mock Restaurant")

        assert result.exit_code == 0
        assert "1  2024/January/15" in result.output
        assert "Generic Grocery Store" not in result.output

    def test_no_match_in_any_year(self, temp_dir):
        """Test the message when no year has a matching record."""
        data_dir = create_ledger_data_dir(temp_dir / "data")

        result = self.list_records(data_dir, "--all", "--place", "Capital City")

        assert result.exit_code == 0
        assert "No expense records in any year" in result.output

    @pytest.mark.parametrize(
        "args",
        [("--all", "--year", "2024"), ("--min", "50", "--max", "10"), ("--min", "lots")],
    )
    def test_conflicting_options(self, temp_dir, args):
        """Test inconsistent filters are usage errors."""
        data_dir = create_ledger_data_dir(temp_dir / "data")

        assert self.list_records(data_dir, *args).exit_code == 2


@pytest.mark.integration
class TestStatsCommands:
    """Test reports through the CLI."""

    def setup_method(self):
        """Set up test environment."""
        self.runner = CliRunner()

    def invoke(self, data_dir, *args):
        return self.runner.invoke(main, ["--data-dir", str(data_dir), *args])

    def test_summary(self, temp_dir):
        """Test a concept summary for one year."""
        data_dir = create_ledger_data_dir(temp_dir / "data")

        result = self.invoke(data_dir, "stats", "summary", "--year", "2024")

        assert result.exit_code == 0
        assert "Total: 205.75" in result.output

    def test_concepts_csv_export(self, temp_dir):
        """Test the concept history is exported to CSV."""
        data_dir = create_ledger_data_dir(temp_dir / "data")
        csv_path = temp_dir / "concepts.csv"

        result = self.invoke(data_dir, "stats", "concepts", "--sort", "value", "--csv", str(csv_path))

        assert result.exit_code == 0
        df = pd.read_csv(csv_path)
        assert df["group"].tolist() == ["Home", "Food", "Transport"]
        assert df["count"].tolist() == [3, 3, 1]

    def test_counterparties(self, temp_dir):
        """Test counterparty history with the place column."""
        data_dir = create_ledger_data_dir(temp_dir / "data")

        result = self.invoke(data_dir, "stats", "counterparties", "--sort", "times")

        assert result.exit_code == 0
        assert "Place" in result.output
        assert "Generic Grocery Store" in result.output

    def test_years(self, temp_dir):
        """Test per-year reports and the overall total."""
        data_dir = create_ledger_data_dir(temp_dir / "data")

        result = self.invoke(data_dir, "stats", "years", "--concepts", "Home")

        assert result.exit_code == 0
        assert "2023" in result.output
        assert "All years: 195.25" in result.output
