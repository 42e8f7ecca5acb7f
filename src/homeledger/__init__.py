"""
Home Ledger - Personal Expense and Income Manager

Keeps dated expense and income records in plain-text files, one file per year
and kind, classified by user-maintained hierarchical concept taxonomies.

Domain Packages:
- core: Configuration, dates, amounts, errors, datastore helpers
- concepts: Concept trees and the nested-parenthesis taxonomy format
- ledger: Records, monthly/yearly ledgers, persistence and edits
- analysis: Concept summaries, histories and per-year reports
- cli: Command-line interface

Example Usage:
    from homeledger.ledger import LedgerStore
    from homeledger.analysis import SummaryAggregator

    ledger = LedgerStore(data_dir).load()
    summary = SummaryAggregator.from_records(ledger.get_year(2024).expenses.iter_records(), depth=1)
"""

__version__ = "0.1.0"
__author__ = "Home Ledger Contributors"

# Export core utilities for easy access
from .core.currency import format_amount, format_display, parse_amount
from .core.dates import LedgerDate, Month

# Export key domain functionality
from .concepts import ConceptTree, parse_taxonomy_text, format_taxonomy_text
from .ledger import Expense, Income, Ledger, LedgerStore, RecordKind
from .analysis import SummaryAggregator
from .core.config import get_config, Environment

__all__ = [
    # Core helpers
    "parse_amount",
    "format_amount",
    "format_display",
    "LedgerDate",
    "Month",

    # Domain
    "ConceptTree",
    "parse_taxonomy_text",
    "format_taxonomy_text",
    "Expense",
    "Income",
    "Ledger",
    "LedgerStore",
    "RecordKind",
    "SummaryAggregator",

    # Configuration
    "get_config",
    "Environment",
]
