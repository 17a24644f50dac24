"""Preference store persisted as a single JSON file."""
import json
import logging
import os
from pathlib import Path
from typing import Dict, Optional, Union

from ..exceptions import StorageError
from .base import PreferenceStore

logger = logging.getLogger(__name__)


class JsonFilePreferenceStore(PreferenceStore):
    """Stores every key as a string in one JSON object on disk.

    The file is re-read on every ``get`` and rewritten in full on every
    ``set``/``clear``, so several processes see each other's last write.

    Example:
        store = JsonFilePreferenceStore("~/.litreview/prefs.json")
        store.set("review-fields", "[]")
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(os.path.expanduser(str(path)))

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Failed to read preference file {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Preference file {self.path} does not hold a JSON object, ignoring it")
            return {}
        return data

    def _save(self, data: Dict[str, str]) -> None:
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise StorageError(f"Failed to write preference file {self.path}: {e}")

    def get(self, key: str) -> Optional[str]:
        value = self._load().get(key)
        if value is None:
            return None
        return value if isinstance(value, str) else json.dumps(value, ensure_ascii=False)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._save(data)
        logger.debug(f"Stored {len(value)} chars under '{key}' in {self.path}")

    def clear(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._save(data)

    def __repr__(self) -> str:
        return f"JsonFilePreferenceStore({str(self.path)!r})"
