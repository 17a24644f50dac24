"""Base preference store interface."""
from abc import ABC, abstractmethod
from typing import Optional


class PreferenceStore(ABC):
    """Abstract key-value store of string blobs.

    Writes replace the whole value for a key; there are no transactions, the
    last write wins.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the blob stored under key, or None if nothing is stored."""
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store a blob under key, replacing any previous value."""
        pass

    @abstractmethod
    def clear(self, key: str) -> None:
        """Remove key; a missing key is not an error."""
        pass

    def has(self, key: str) -> bool:
        return self.get(key) is not None
