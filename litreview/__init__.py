"""litreview - Custom review fields for literature reviews.

A Python library for literature review bookkeeping including:
- User-defined review fields (relevance, quality, inclusion, notes, ...)
- Per-item review values stored in a key-value preference store
- Review table and statistics over a BibTeX library
- CSV and JSON export
"""

from .config import Config
from .exceptions import (
    LitReviewError,
    ConfigurationError,
    StorageError,
    ValidationError,
    ItemSourceError,
    ExportError,
)
from .core.models import FieldDefinition, FieldType, ReviewRecord, ReviewStatistics
from .core.fields import FieldRegistry
from .core.records import ReviewStore
from .core.export import escape_csv, export_to_csv, export_to_json
from .items import Creator, Item, ItemSource, MemoryItemSource, BibtexItemSource
from .storage import PreferenceStore, MemoryPreferenceStore, JsonFilePreferenceStore
from .views import FieldEditor, ReviewTable, build_table
from .litreview import LitReview

__version__ = "1.0.0"
__all__ = [
    "LitReview",
    "Config",
    "FieldDefinition",
    "FieldType",
    "ReviewRecord",
    "ReviewStatistics",
    "FieldRegistry",
    "ReviewStore",
    "FieldEditor",
    "ReviewTable",
    "build_table",
    "escape_csv",
    "export_to_csv",
    "export_to_json",
    "Creator",
    "Item",
    "ItemSource",
    "MemoryItemSource",
    "BibtexItemSource",
    "PreferenceStore",
    "MemoryPreferenceStore",
    "JsonFilePreferenceStore",
    "LitReviewError",
    "ConfigurationError",
    "StorageError",
    "ValidationError",
    "ItemSourceError",
    "ExportError",
]
