"""
Core Utilities Package

Shared primitives used across the ledger packages.

This package provides:
- Configuration management and logging setup
- Month/date primitives in the record file format
- Decimal amount parsing and formatting
- Error types
"""

from .config import (
    Config,
    DisplayConfig,
    Environment,
    get_config,
    get_data_dir,
    reload_config,
)
from .currency import format_amount, format_display, parse_amount
from .dates import LedgerDate, Month, YearMonth, month_range
from .errors import (
    DateParseError,
    LedgerError,
    LedgerLoadError,
    RecordParseError,
    TaxonomyParseError,
)

__all__ = [
    "Config",
    "DateParseError",
    "DisplayConfig",
    "Environment",
    "LedgerDate",
    "LedgerError",
    "LedgerLoadError",
    "Month",
    "RecordParseError",
    "TaxonomyParseError",
    "YearMonth",
    "format_amount",
    "format_display",
    "get_config",
    "get_data_dir",
    "month_range",
    "parse_amount",
    "reload_config",
]
