"""Key-value stores holding the persisted field and review blobs."""
from .base import PreferenceStore
from .memory import MemoryPreferenceStore
from .json_file import JsonFilePreferenceStore

__all__ = ["PreferenceStore", "MemoryPreferenceStore", "JsonFilePreferenceStore"]
