"""In-memory preference store."""
from typing import Dict, Optional

from .base import PreferenceStore


class MemoryPreferenceStore(PreferenceStore):
    """Dictionary-backed store, used for tests and throwaway sessions."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._values: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def clear(self, key: str) -> None:
        self._values.pop(key, None)

    def __repr__(self) -> str:
        return f"MemoryPreferenceStore(keys={sorted(self._values)})"
