"""
Concept Taxonomy Package

Hierarchical categories ("concepts") for expenses and incomes.

This package provides:
- ConceptTree: sorted tree of labels with merge, rename and normalize
- Text codec for the nested-parenthesis taxonomy files
- ConceptTaxonomy: a tree plus its change flag
"""

from .codec import format_taxonomy_text, parse_taxonomy_text, tokenize, validate_concept_key
from .io import read_taxonomy_file, write_taxonomy_file
from .taxonomy import ConceptTaxonomy
from .tree import ConceptTree, KeyTree

__all__ = [
    "ConceptTaxonomy",
    "ConceptTree",
    "KeyTree",
    "format_taxonomy_text",
    "parse_taxonomy_text",
    "read_taxonomy_file",
    "tokenize",
    "validate_concept_key",
    "write_taxonomy_file",
]
