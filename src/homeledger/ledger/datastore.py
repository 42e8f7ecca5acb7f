#!/usr/bin/env python3
"""
Ledger DataStore

Reads the data directory into a Ledger and writes back only what changed.

Directory layout::

    <root>/expense_types.txt
    <root>/income_types.txt
    <root>/expenses/<year>.txt
    <root>/incomes/<year>.txt

Loading is fail-fast: any unreadable or malformed file aborts the whole load.
"""

import logging
from datetime import datetime
from pathlib import Path

from ..concepts.io import read_taxonomy_file, write_taxonomy_file
from ..core.datastore_mixin import DataStoreMixin
from ..core.errors import LedgerLoadError, RecordParseError
from .ledger import Ledger
from .records import RecordKind, format_record_line, parse_record_line
from .yearly import YearlyLedger

logger = logging.getLogger(__name__)

RECORD_FILE_PATTERN = "*.txt"


def year_from_filename(path: Path) -> int:
    """
    Year encoded in the first four characters of a record file name.

    Raises:
        LedgerLoadError: If the name does not start with a year
    """
    prefix = path.name[:4]
    if len(prefix) != 4 or not prefix.isdigit():
        raise LedgerLoadError(f"Record file name does not start with a year: {path}")
    return int(prefix)


def read_record_file(path: Path, kind: RecordKind, encoding: str = "utf-8") -> YearlyLedger:
    """
    Parse a per-year record file.

    Blank lines are skipped. The returned ledger has its dirty flags cleared.

    Raises:
        LedgerLoadError: If the file cannot be read or any line fails to parse
    """
    year = year_from_filename(path)
    yearly = YearlyLedger(year, changes=False)
    collection = yearly.collection(kind)

    try:
        with open(path, encoding=encoding) as f:
            for line_number, line in enumerate(f, start=1):
                if not line.strip():
                    continue
                try:
                    record = parse_record_line(line, kind)
                except RecordParseError as e:
                    raise e.at(path, line_number) from e
                collection.add(record.date.month).push(record)
    except OSError as e:
        raise LedgerLoadError(f"Cannot read record file {path}: {e}") from e
    except RecordParseError as e:
        raise LedgerLoadError(str(e)) from e

    yearly.set_changes(False)
    return yearly


def write_record_file(path: Path, yearly: YearlyLedger, kind: RecordKind, encoding: str = "utf-8") -> None:
    """
    Rewrite the file for one year and kind, one record per line in date order.

    Every line is formatted before the file is opened, so a record that cannot
    be written leaves the existing file untouched.

    Raises:
        RecordParseError: If a record cannot be written as a parseable line
    """
    lines = [format_record_line(record) + "\n" for record in yearly.iter_records(kind)]

    logger.info("Writing into '%s'", path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding=encoding) as f:
        f.writelines(lines)


def _record_files(directory: Path) -> list[Path]:
    if not directory.is_dir():
        raise LedgerLoadError(f"Data directory not found: {directory}")
    return sorted(p for p in directory.glob(RECORD_FILE_PATTERN) if p.is_file())


def load_ledger(root_dir: Path) -> Ledger:
    """
    Build a Ledger from a data directory.

    Every expense and income file is read and merged year by year, then both
    taxonomy files are read. All dirty flags are cleared at the end.

    Raises:
        LedgerLoadError: On any missing directory or unreadable/malformed file
    """
    root_dir = Path(root_dir)
    ledger = Ledger()

    for kind in RecordKind:
        for path in _record_files(root_dir / kind.directory):
            logger.info("Reading '%s'", path)
            ledger.merge(read_record_file(path, kind))

    for kind in RecordKind:
        ledger.concepts(kind).set_tree(read_taxonomy_file(root_dir / kind.types_filename))

    ledger.set_changes(False)
    logger.info("Loaded %d years (%s..%s) from %s", len(ledger), ledger.min_year, ledger.max_year, root_dir)
    return ledger


def save_ledger(root_dir: Path, ledger: Ledger, force: bool = False) -> list[Path]:
    """
    Write dirty sub-collections and changed taxonomies.

    Args:
        root_dir: Data directory
        ledger: Ledger to save
        force: Rewrite every file regardless of flags

    Returns:
        Paths written, in write order

    Raises:
        RecordParseError: If a dirty record cannot be written; files written
                          before it stay written and flags stay set
    """
    root_dir = Path(root_dir)
    if force:
        ledger.set_changes(True)

    written: list[Path] = []
    for yearly in ledger:
        for kind in RecordKind:
            if not yearly.collection(kind).has_changes():
                continue
            path = root_dir / kind.directory / f"{yearly.year}.txt"
            write_record_file(path, yearly, kind)
            written.append(path)

    for kind in RecordKind:
        if ledger.concepts(kind).has_changes():
            path = root_dir / kind.types_filename
            write_taxonomy_file(path, ledger.concepts(kind).tree)
            written.append(path)

    ledger.set_changes(False)
    logger.info("Saved %d files to %s", len(written), root_dir)
    return written


class LedgerStore(DataStoreMixin):
    """
    DataStore for a ledger data directory.

    Wraps load_ledger/save_ledger and reports metadata about the year files.
    """

    def __init__(self, root_dir: Path):
        """
        Initialize ledger store.

        Args:
            root_dir: Directory holding the taxonomy files and record directories
        """
        super().__init__()
        self.root_dir = Path(root_dir)

    def _record_dirs(self) -> list[Path]:
        return [self.root_dir / kind.directory for kind in RecordKind]

    def _data_files(self) -> list[Path]:
        files = list(self._get_files_cached(self._record_dirs(), RECORD_FILE_PATTERN))
        for kind in RecordKind:
            types_file = self.root_dir / kind.types_filename
            if types_file.exists():
                files.append(types_file)
        return files

    def exists(self) -> bool:
        """Check that both record directories and both taxonomy files exist."""
        return all(d.is_dir() for d in self._record_dirs()) and all(
            (self.root_dir / kind.types_filename).exists() for kind in RecordKind
        )

    def initialize(self) -> None:
        """Create an empty data directory layout, keeping existing files."""
        for directory in self._record_dirs():
            directory.mkdir(parents=True, exist_ok=True)
        for kind in RecordKind:
            (self.root_dir / kind.types_filename).touch(exist_ok=True)
        self._invalidate_cache()

    def load(self) -> Ledger:
        """
        Load the ledger.

        Raises:
            LedgerLoadError: If data is missing or malformed
        """
        return load_ledger(self.root_dir)

    def save(self, ledger: Ledger, force: bool = False) -> list[Path]:
        """Save dirty parts of the ledger."""
        written = save_ledger(self.root_dir, ledger, force=force)
        self._invalidate_cache()
        return written

    def last_modified(self) -> datetime | None:
        latest = self._get_latest_file(self._data_files())
        if latest is None:
            return None
        return datetime.fromtimestamp(latest.stat().st_mtime)

    def item_count(self) -> int | None:
        """Number of per-year record files."""
        if not self.exists():
            return None
        return len(self._get_files_cached(self._record_dirs(), RECORD_FILE_PATTERN))

    def size_bytes(self) -> int | None:
        if not self.exists():
            return None
        return self._get_total_size(self._data_files())

    def summary_text(self) -> str:
        count = self.item_count()
        if count is None:
            return f"No ledger data found in {self.root_dir}"
        return f"Ledger data: {count} year files in {self.root_dir}"
