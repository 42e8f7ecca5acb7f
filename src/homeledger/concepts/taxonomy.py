#!/usr/bin/env python3
"""
Concept Taxonomy

A ConceptTree together with the flag that decides whether its file is
rewritten on save.
"""

from .tree import ConceptTree


class ConceptTaxonomy:
    """Expense or income taxonomy with change tracking."""

    def __init__(self, tree: ConceptTree | None = None, changes: bool = False):
        self._tree = tree if tree is not None else ConceptTree()
        self._changes = changes

    @property
    def tree(self) -> ConceptTree:
        """Read-only access; does not mark the taxonomy as changed."""
        return self._tree

    def edit_tree(self) -> ConceptTree:
        """Mutable access; marks the taxonomy as changed."""
        self._changes = True
        return self._tree

    def set_tree(self, tree: ConceptTree) -> None:
        self._tree = tree

    def has_changes(self) -> bool:
        return self._changes

    def set_changes(self, changes: bool) -> None:
        self._changes = changes

    def __repr__(self) -> str:
        return f"ConceptTaxonomy(keys={self._tree.keys()!r}, changes={self._changes})"
