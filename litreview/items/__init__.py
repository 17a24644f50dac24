"""Bibliographic item sources."""
from .base import Creator, Item, ItemSource
from .memory import MemoryItemSource
from .bibtex import BibtexItemSource, parse_authors

__all__ = [
    "Creator",
    "Item",
    "ItemSource",
    "MemoryItemSource",
    "BibtexItemSource",
    "parse_authors",
]
