#!/usr/bin/env python3
"""
Concept Tree

Ordered n-ary tree of category labels. Every level is a list of
(key, optional subtree) pairs kept in strictly ascending key order, searched
with bisection. A key with no subtree is a leaf.

The taxonomy is small and shallow, and both the picker and the file writer
need deterministic alphabetical iteration, so a sorted list is used rather
than a dict.
"""

from bisect import bisect_left
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Optional


@dataclass
class KeyTree:
    """One child entry: a label and the subtree it owns, if any."""

    key: str
    tree: Optional["ConceptTree"] = None

    @property
    def is_leaf(self) -> bool:
        return not self.tree


class ConceptTree:
    """
    Sorted tree of concept labels.

    Each subtree is owned by exactly one parent entry. Mutating operations
    keep siblings sorted, except rename_key, which must be followed by
    normalize().
    """

    def __init__(self, children: list[KeyTree] | None = None):
        self._children: list[KeyTree] = children if children is not None else []

    def _position(self, key: str) -> tuple[int, bool]:
        idx = bisect_left(self._children, key, key=lambda child: child.key)
        found = idx < len(self._children) and self._children[idx].key == key
        return idx, found

    # Queries

    def get_child(self, key: str) -> Optional["ConceptTree"]:
        """Subtree under key, or None when key is absent or a leaf."""
        idx, found = self._position(key)
        if not found:
            return None
        return self._children[idx].tree

    def lookup(self, path: Sequence[str]) -> Optional["ConceptTree"]:
        """
        Descend key by key.

        An empty path returns this tree. A missing key at any level, or a leaf
        before the end of the path, yields None.
        """
        tree: ConceptTree | None = self
        for key in path:
            if tree is None:
                return None
            tree = tree.get_child(key)
        return tree

    def has_path(self, path: Sequence[str]) -> bool:
        """Check that every key of path exists, the last one possibly a leaf."""
        if not path:
            return False
        parent = self.lookup(path[:-1])
        return parent is not None and path[-1] in parent

    def keys(self) -> list[str]:
        return [child.key for child in self._children]

    def items(self) -> Iterator[tuple[str, Optional["ConceptTree"]]]:
        """Sorted (key, optional subtree) pairs of this level."""
        for child in self._children:
            yield child.key, child.tree

    def walk(self, max_depth: int | None = None) -> Iterator[tuple[tuple[str, ...], Optional["ConceptTree"]]]:
        """
        Pre-order iteration over (path, optional subtree) pairs.

        Args:
            max_depth: Deepest level to visit (1 = top level only), None for all
        """
        yield from self._walk((), max_depth)

    def _walk(self, prefix: tuple[str, ...], max_depth: int | None):
        if max_depth is not None and len(prefix) >= max_depth:
            return
        for key, subtree in self.items():
            path = prefix + (key,)
            yield path, subtree
            if subtree:
                yield from subtree._walk(path, max_depth)

    def leaf_paths(self) -> list[tuple[str, ...]]:
        """Every root-to-leaf path, in sorted order."""
        return [path for path, subtree in self.walk() if not subtree]

    def depth(self) -> int:
        if not self._children:
            return 0
        return 1 + max((child.tree.depth() if child.tree else 0) for child in self._children)

    # Mutation

    def make_child(self, key: str) -> "ConceptTree":
        """Get or create the subtree under key (turning a leaf into a node)."""
        idx, found = self._position(key)
        if not found:
            self._children.insert(idx, KeyTree(key, ConceptTree()))
        elif self._children[idx].tree is None:
            self._children[idx].tree = ConceptTree()
        return self._children[idx].tree  # type: ignore[return-value]

    def make_path(self, path: Sequence[str]) -> "ConceptTree":
        """Get or create every key of path; returns the deepest subtree."""
        tree = self
        for key in path:
            tree = tree.make_child(key)
        return tree

    def insert(self, key: str, subtree: Optional["ConceptTree"] = None) -> "ConceptTree":
        """
        Insert a (key, subtree) pair.

        If key already exists the given subtree is merged into the existing
        one; otherwise the pair is placed at its sorted position.
        """
        idx, found = self._position(key)
        if not found:
            self._children.insert(idx, KeyTree(key, subtree))
        elif subtree is not None:
            existing = self._children[idx]
            if existing.tree is None:
                existing.tree = subtree
            else:
                existing.tree.merge(subtree)
        return self

    def remove_child(self, key: str) -> "ConceptTree":
        """Remove key and its whole subtree; no-op if absent."""
        idx, found = self._position(key)
        if found:
            del self._children[idx]
        return self

    def rename_key(self, old_key: str, new_key: str) -> "ConceptTree":
        """
        Rename old_key in place, keeping its subtree.

        Siblings are not re-sorted and a collision with an existing sibling
        leaves duplicate keys; call normalize() afterwards.
        """
        idx, found = self._position(old_key)
        if found:
            self._children[idx].key = new_key
        return self

    def normalize(self) -> "ConceptTree":
        """Re-sort every level by key."""
        self._children.sort(key=lambda child: child.key)
        for child in self._children:
            if child.tree is not None:
                child.tree.normalize()
        return self

    def merge(self, other: "ConceptTree") -> "ConceptTree":
        """Move every top-level pair of other into this tree via insert()."""
        children, other._children = other._children, []
        for child in children:
            self.insert(child.key, child.tree)
        return self

    # Protocols

    def __len__(self) -> int:
        return len(self._children)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self._position(key)[1]

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __eq__(self, other: object) -> bool:
        """Structural equality; an empty subtree counts as a leaf."""
        if not isinstance(other, ConceptTree):
            return NotImplemented
        if self.keys() != other.keys():
            return False
        for mine, theirs in zip(self._children, other._children):
            if mine.is_leaf != theirs.is_leaf:
                return False
            if not mine.is_leaf and mine.tree != theirs.tree:
                return False
        return True

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"ConceptTree(keys={self.keys()!r})"
