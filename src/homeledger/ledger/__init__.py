"""
Ledger Package

Sorted, merge-capable store of dated records: Ledger -> YearlyLedger ->
MonthlyLedgerCollection -> MonthlyLedger -> Expense/Income.

This package provides:
- Record models and the per-line file codec
- The year/month hierarchy with dirty tracking for selective rewrites
- Record and concept editing operations
- Directory load/save
"""

from .datastore import LedgerStore, load_ledger, read_record_file, save_ledger, write_record_file
from .edits import (
    add_concept,
    add_record,
    add_recurring,
    edit_record,
    remove_concept,
    remove_record,
    rename_concept,
)
from .ledger import Ledger
from .monthly import MonthlyLedger, MonthlyLedgerCollection
from .records import (
    Expense,
    Income,
    Record,
    RecordKind,
    concept_path_matches,
    format_record_line,
    parse_record_line,
    split_concepts,
)
from .yearly import YearlyLedger

__all__ = [
    "Expense",
    "Income",
    "Ledger",
    "LedgerStore",
    "MonthlyLedger",
    "MonthlyLedgerCollection",
    "Record",
    "RecordKind",
    "YearlyLedger",
    "add_concept",
    "add_record",
    "add_recurring",
    "concept_path_matches",
    "edit_record",
    "format_record_line",
    "load_ledger",
    "parse_record_line",
    "read_record_file",
    "remove_concept",
    "remove_record",
    "rename_concept",
    "save_ledger",
    "split_concepts",
    "write_record_file",
]
