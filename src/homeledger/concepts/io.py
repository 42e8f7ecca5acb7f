#!/usr/bin/env python3
"""
Taxonomy File I/O

Reads and writes the ``expense_types.txt`` / ``income_types.txt`` files.
"""

import logging
from pathlib import Path

from ..core.errors import LedgerLoadError, TaxonomyParseError
from .codec import format_taxonomy_text, parse_taxonomy_text
from .tree import ConceptTree

logger = logging.getLogger(__name__)


def read_taxonomy_file(path: Path, encoding: str = "utf-8") -> ConceptTree:
    """
    Load and normalize a taxonomy file.

    Raises:
        LedgerLoadError: If the file is missing, unreadable or malformed
    """
    logger.info("Reading taxonomy '%s'", path)
    try:
        text = path.read_text(encoding=encoding)
    except OSError as e:
        raise LedgerLoadError(f"Cannot read taxonomy file {path}: {e}") from e

    try:
        tree = parse_taxonomy_text(text)
    except TaxonomyParseError as e:
        raise LedgerLoadError(f"Malformed taxonomy file {path}: {e}") from e

    return tree.normalize()


def write_taxonomy_file(path: Path, tree: ConceptTree, encoding: str = "utf-8") -> None:
    """Write a tree in nested-parenthesis notation, replacing the file."""
    logger.info("Writing taxonomy '%s'", path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(format_taxonomy_text(tree), encoding=encoding)
