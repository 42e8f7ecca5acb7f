#!/usr/bin/env python3
"""
Taxonomy Text Codec

Converts between a ConceptTree and the nested-parenthesis notation used by
the taxonomy files::

    Food (
    	Groceries ()
    	Restaurants ()
    )
    Transport ()

Each entry is ``key (`` followed either by ``)`` (a leaf) or by nested
entries and a closing ``)``. Line breaks, tabs and surrounding spaces carry
no meaning.
"""

from dataclasses import dataclass
from enum import Enum

from ..core.errors import TaxonomyParseError
from .tree import ConceptTree


class TokenType(Enum):
    CONTENT = "content"
    OPEN = "("
    CLOSE = ")"


@dataclass(frozen=True)
class Token:
    type: TokenType
    text: str = ""


# Characters that would break the taxonomy or record file formats.
RESERVED_KEY_CHARS = "();\"\t\r\n"


def validate_concept_key(key: str) -> str:
    """
    Check that a concept name can be written to a taxonomy file and read back.

    Args:
        key: Proposed concept name

    Returns:
        The name with surrounding whitespace removed

    Raises:
        TaxonomyParseError: If the name is empty or contains a reserved character
    """
    cleaned = key.strip()
    if not cleaned:
        raise TaxonomyParseError("Concept name is empty")
    bad = sorted({char for char in cleaned if char in RESERVED_KEY_CHARS})
    if bad:
        shown = ", ".join(repr(char) for char in bad)
        raise TaxonomyParseError(f"Concept name '{cleaned}' contains reserved characters: {shown}")
    return cleaned


def tokenize(text: str) -> list[Token]:
    """
    Split taxonomy text into content and parenthesis tokens.

    Every line is stripped and the lines are concatenated before scanning, so
    adjacent characters between two parentheses form a single content token.
    Tabs are dropped.
    """
    joined = "".join(line.strip() for line in text.splitlines())

    tokens: list[Token] = []
    pending: list[str] = []

    for char in joined:
        if char in "()":
            content = "".join(pending).strip()
            if content:
                tokens.append(Token(TokenType.CONTENT, content))
            pending = []
            tokens.append(Token(TokenType.OPEN if char == "(" else TokenType.CLOSE))
        elif char != "\t":
            pending.append(char)

    if "".join(pending).strip():
        tokens.append(Token(TokenType.CONTENT, "".join(pending).strip()))

    return tokens


def _build_tree(tokens: list[Token], idx: int, nested: bool) -> tuple[ConceptTree, int]:
    """
    Build the tree for the region starting at idx.

    Returns the tree and the index just after the region. A nested region ends
    by consuming its closing parenthesis; the top-level region stops in front
    of a stray one so the caller can detect it.
    """
    tree = ConceptTree()
    pending_key: str | None = None

    while idx < len(tokens):
        token = tokens[idx]

        if token.type is TokenType.CONTENT:
            if pending_key is not None:
                raise TaxonomyParseError(f"Concept '{pending_key}' is not followed by '('")
            pending_key = token.text
            idx += 1

        elif token.type is TokenType.OPEN:
            if pending_key is None:
                raise TaxonomyParseError(f"'(' without a concept name at token {idx}")
            subtree, idx = _build_tree(tokens, idx + 1, nested=True)
            tree.insert(pending_key, subtree if len(subtree) > 0 else None)
            pending_key = None

        else:
            if pending_key is not None:
                raise TaxonomyParseError(f"Concept '{pending_key}' is not followed by '('")
            if not nested:
                return tree, idx
            return tree, idx + 1

    if pending_key is not None:
        raise TaxonomyParseError(f"Concept '{pending_key}' is not followed by '('")
    if nested:
        raise TaxonomyParseError("Unbalanced parentheses: missing ')' at end of input")
    return tree, idx


def parse_taxonomy_text(text: str) -> ConceptTree:
    """
    Parse nested-parenthesis text into a ConceptTree.

    Raises:
        TaxonomyParseError: If the parentheses are unbalanced or an entry is malformed
    """
    tokens = tokenize(text)
    tree, idx = _build_tree(tokens, 0, nested=False)

    if idx != len(tokens):
        raise TaxonomyParseError(f"Unbalanced parentheses: unexpected ')' at token {idx} of {len(tokens)}")

    return tree


def format_taxonomy_text(tree: ConceptTree, indent: str = "\t") -> str:
    """Serialize a tree with one indent per nesting level, one entry per line."""
    lines: list[str] = []
    _format_level(tree, "", indent, lines)
    return "".join(lines)


def _format_level(tree: ConceptTree, tab: str, indent: str, lines: list[str]) -> None:
    for key, subtree in tree.items():
        if subtree:
            lines.append(f"{tab}{key} (\n")
            _format_level(subtree, tab + indent, indent, lines)
            lines.append(f"{tab})\n")
        else:
            lines.append(f"{tab}{key} ()\n")
