#!/usr/bin/env python3
"""
DataStore Mixin - Common functionality for file-backed stores.

Provides shared metadata methods and a short-lived file listing cache so that
several metadata queries in a row only scan the directory once.
"""

from abc import abstractmethod
from datetime import datetime
from pathlib import Path


class DataStoreMixin:
    """
    Mixin providing common DataStore functionality.

    Subclasses must implement:
    - exists() -> bool
    - last_modified() -> datetime | None
    - item_count() -> int | None
    - size_bytes() -> int | None
    - summary_text() -> str
    """

    def __init__(self):
        self._file_cache: list[Path] | None = None
        self._cache_timestamp: float | None = None
        self._cache_ttl_seconds: float = 1.0

    def _invalidate_cache(self) -> None:
        self._file_cache = None
        self._cache_timestamp = None

    def _is_cache_valid(self) -> bool:
        if self._file_cache is None or self._cache_timestamp is None:
            return False
        elapsed = datetime.now().timestamp() - self._cache_timestamp
        return elapsed < self._cache_ttl_seconds

    def _get_files_cached(self, directories: list[Path], pattern: str) -> list[Path]:
        """
        Get files matching pattern in any of the directories, with caching.

        Args:
            directories: Directories to search (missing ones are skipped)
            pattern: Glob pattern to match files

        Returns:
            Sorted list of matching file paths
        """
        if self._is_cache_valid():
            return self._file_cache  # type: ignore

        files: list[Path] = []
        for directory in directories:
            if directory.exists():
                files.extend(directory.glob(pattern))

        self._file_cache = sorted(files)
        self._cache_timestamp = datetime.now().timestamp()
        return self._file_cache

    def _get_latest_file(self, files: list[Path]) -> Path | None:
        if not files:
            return None
        return max(files, key=lambda p: p.stat().st_mtime)

    def _get_total_size(self, files: list[Path]) -> int:
        return sum(f.stat().st_size for f in files)

    @abstractmethod
    def exists(self) -> bool:
        """Check if data exists in storage."""
        ...

    @abstractmethod
    def last_modified(self) -> datetime | None:
        """Get timestamp of most recent data modification."""
        ...

    @abstractmethod
    def item_count(self) -> int | None:
        """Get count of data files in storage."""
        ...

    @abstractmethod
    def size_bytes(self) -> int | None:
        """Get total storage size in bytes."""
        ...

    @abstractmethod
    def summary_text(self) -> str:
        """Get human-readable summary of current data state."""
        ...

    def age_days(self) -> int | None:
        """
        Get age of data in days since last modification.

        Returns:
            Number of days since last modification, or None if data doesn't exist
        """
        last_mod = self.last_modified()
        if last_mod is None:
            return None
        return (datetime.now() - last_mod).days
