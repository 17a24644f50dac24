"""Field registry: the user-defined review field definitions."""
import json
import logging
import random
import string
import time
from dataclasses import replace
from typing import Any, Dict, List, Optional

from ..locale import DEFAULT_LOCALE, get_string
from ..storage.base import PreferenceStore
from .models import FieldDefinition, FieldType

logger = logging.getLogger(__name__)

FIELDS_KEY = "review-fields"

_ID_ALPHABET = string.digits + string.ascii_lowercase


def default_fields(locale: str = DEFAULT_LOCALE) -> List[FieldDefinition]:
    """Built-in starter fields used until the user saves their own."""
    return [
        FieldDefinition(
            id="relevance",
            name=get_string("field-relevance", locale),
            type=FieldType.SELECT.value,
            options=[
                get_string("relevance-high", locale),
                get_string("relevance-medium", locale),
                get_string("relevance-low", locale),
                get_string("relevance-none", locale),
            ],
            default_value="",
        ),
        FieldDefinition(
            id="quality",
            name=get_string("field-quality", locale),
            type=FieldType.SELECT.value,
            options=["A", "B", "C", "D"],
            default_value="",
        ),
        FieldDefinition(
            id="included",
            name=get_string("field-included", locale),
            type=FieldType.BOOLEAN.value,
            default_value=False,
        ),
        FieldDefinition(
            id="notes",
            name=get_string("field-notes", locale),
            type=FieldType.TEXT.value,
            default_value="",
        ),
    ]


def generate_id() -> str:
    """Generate a field id from the current time plus a random suffix."""
    suffix = "".join(random.choice(_ID_ALPHABET) for _ in range(9))
    return f"field_{int(time.time() * 1000)}_{suffix}"


class FieldRegistry:
    """Reads and writes the ordered list of field definitions.

    Nothing is cached: every read parses the stored blob and every write
    replaces it.

    Example:
        >>> registry = FieldRegistry(MemoryPreferenceStore())
        >>> [f.id for f in registry.list_fields()]
        ['relevance', 'quality', 'included', 'notes']
    """

    def __init__(self, store: PreferenceStore, locale: str = DEFAULT_LOCALE):
        self.store = store
        self.locale = locale

    def list_fields(self) -> List[FieldDefinition]:
        """Return the saved definitions, or the starter set if none are usable."""
        raw = self.store.get(FIELDS_KEY)
        if not raw:
            return default_fields(self.locale)
        try:
            data = json.loads(raw)
        except ValueError as e:
            logger.warning(f"Failed to parse review fields, using defaults: {e}")
            return default_fields(self.locale)
        if not isinstance(data, list):
            logger.warning(f"Failed to parse review fields, expected a JSON array, got {type(data).__name__}")
            return default_fields(self.locale)

        fields = []
        for position, entry in enumerate(data):
            try:
                fields.append(FieldDefinition.from_dict(entry))
            except (KeyError, TypeError, AttributeError) as e:
                logger.warning(f"Skipping malformed field definition at position {position}: {e!r}")
        return fields

    def get_field(self, field_id: str) -> Optional[FieldDefinition]:
        for definition in self.list_fields():
            if definition.id == field_id:
                return definition
        return None

    def replace_fields(self, fields: List[FieldDefinition]) -> None:
        """Persist the given definitions verbatim, replacing the stored list.

        Ids that disappear are removed from every review record, and records
        holding values for a field whose type changed are migrated to the
        new type.
        """
        previous = {f.id: f for f in self.list_fields()}
        self._write(fields)

        kept_ids = {f.id for f in fields}
        records = self._records()
        for field_id in previous:
            if field_id not in kept_ids:
                records.remove_field(field_id)
        for definition in fields:
            old = previous.get(definition.id)
            if old is not None and old.type != definition.type:
                records.migrate_field(definition)

    def add_field(self, definition: FieldDefinition) -> None:
        self.replace_fields(self.list_fields() + [definition])

    def update_field(self, field_id: str, changes: Optional[Dict[str, Any]] = None, **kwargs: Any) -> None:
        """Shallow-merge changes into the first definition with field_id.

        Changes use attribute names (``name``, ``type``, ``options``,
        ``default_value``). Unknown ids are ignored.
        """
        updates = dict(changes or {})
        updates.update(kwargs)
        updates.pop("id", None)

        fields = self.list_fields()
        for index, definition in enumerate(fields):
            if definition.id != field_id:
                continue
            # replace() raises TypeError for attributes the definition lacks
            fields[index] = replace(definition, **updates)
            self.replace_fields(fields)
            return
        logger.debug(f"update_field: no field with id '{field_id}'")

    def delete_field(self, field_id: str) -> None:
        """Remove a definition and cascade the removal into every record."""
        fields = [f for f in self.list_fields() if f.id != field_id]
        self._write(fields)
        self._records().remove_field(field_id)

    def new_field(self, name: Optional[str] = None, type: str = FieldType.TEXT.value) -> FieldDefinition:
        """Build (but do not save) a definition with a fresh id."""
        return FieldDefinition(
            id=generate_id(),
            name=name if name is not None else get_string("new-field", self.locale),
            type=type,
            default_value="",
        )

    def _write(self, fields: List[FieldDefinition]) -> None:
        self.store.set(FIELDS_KEY, json.dumps([f.to_dict() for f in fields], ensure_ascii=False))
        logger.debug(f"Saved {len(fields)} field definitions")

    def _records(self):
        from .records import ReviewStore

        return ReviewStore(self.store, registry=self)
