"""
Pytest Configuration and Shared Fixtures

Provides common test fixtures and configuration for the entire test suite.
"""

import tempfile
from decimal import Decimal
from pathlib import Path

import pytest

from homeledger.concepts import parse_taxonomy_text
from homeledger.core import config as config_module
from homeledger.core.dates import LedgerDate, Month
from homeledger.ledger import Expense, Income, Ledger, add_record


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as temp_path:
        yield Path(temp_path)


@pytest.fixture
def sample_expense() -> Expense:
    """Sample grocery expense for testing."""
    return Expense(
        date=LedgerDate(2024, Month.MARCH, 5),
        price=Decimal("45.99"),
        concepts=["Food", "Groceries"],
        shop="Generic Grocery Store",
        city="Springfield",
        description="Weekly shopping",
    )


@pytest.fixture
def sample_income() -> Income:
    """Sample salary income for testing."""
    return Income(
        date=LedgerDate(2024, Month.MARCH, 1),
        price=Decimal("2500.00"),
        concepts=["Work", "Salary"],
        source="Example Employer",
        place="Springfield",
    )


@pytest.fixture
def sample_ledger(sample_expense, sample_income) -> Ledger:
    """Small two-year ledger with both taxonomies, all flags cleared."""
    ledger = Ledger()
    ledger.expense_concepts.set_tree(
        parse_taxonomy_text("Food (\nGroceries ()\nRestaurants ()\n)\nTransport (\nFuel ()\n)\n")
    )
    ledger.income_concepts.set_tree(parse_taxonomy_text("Work (\nSalary ()\n)\n"))

    add_record(ledger, sample_expense)
    add_record(ledger, sample_income)
    add_record(
        ledger,
        Expense(LedgerDate(2023, Month.DECEMBER, 20), Decimal("30"), ["Transport", "Fuel"], "Test Gas Station", "Shelbyville"),
    )
    ledger.set_changes(False)
    return ledger


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch, tmp_path):
    """Set up test environment variables."""
    # Ensure tests don't use real data
    monkeypatch.setenv("LEDGER_ENV", "test")
    monkeypatch.setenv("LEDGER_DATA_DIR", str(tmp_path / "ledger_data"))
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("LEDGER_PROJECT_CONFIG", raising=False)

    # Force configuration to be re-read from the patched environment
    monkeypatch.setattr(config_module, "_config", None)


# Test markers for categorizing tests
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests for individual components"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests for complete workflows"
    )
    config.addinivalue_line(
        "markers", "currency: Tests for amount handling and precision"
    )
    config.addinivalue_line(
        "markers", "concepts: Tests for concept trees and taxonomy files"
    )
    config.addinivalue_line(
        "markers", "ledger: Tests for the record store and persistence"
    )
    config.addinivalue_line(
        "markers", "slow: Tests that take significant time to run"
    )
