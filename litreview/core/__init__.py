"""Core field registry, review store and export."""
from .models import FieldDefinition, FieldType, ReviewRecord, ReviewStatistics
from .fields import FIELDS_KEY, FieldRegistry, default_fields, generate_id
from .records import DATA_KEY, ReviewStore
from .export import escape_csv, export_to_csv, export_to_json

__all__ = [
    "FieldDefinition",
    "FieldType",
    "ReviewRecord",
    "ReviewStatistics",
    "FIELDS_KEY",
    "DATA_KEY",
    "FieldRegistry",
    "ReviewStore",
    "default_fields",
    "generate_id",
    "escape_csv",
    "export_to_csv",
    "export_to_json",
]
