"""Review store: per-item review records."""
import json
import logging
import time
from typing import Any, Callable, Dict, List, Optional

from ..exceptions import ValidationError
from ..storage.base import PreferenceStore
from .fields import FieldRegistry
from .models import FieldDefinition, ReviewRecord, ReviewStatistics
from .values import coerce_value

logger = logging.getLogger(__name__)

DATA_KEY = "review-data"

# Field whose true values are counted as included in the statistics
INCLUDED_FIELD_ID = "included"


def _now_ms() -> int:
    return int(time.time() * 1000)


class ReviewStore:
    """Reads and writes review records keyed by item id.

    Every write serializes the whole collection back to the store.

    Args:
        store: Preference store holding the data blob
        registry: Field registry used to validate values (shares the store if omitted)
        clock: Returns the current time in epoch milliseconds
    """

    def __init__(
        self,
        store: PreferenceStore,
        registry: Optional[FieldRegistry] = None,
        clock: Optional[Callable[[], int]] = None,
    ):
        self.store = store
        self.registry = registry or FieldRegistry(store)
        self.clock = clock or _now_ms

    def list_all_records(self) -> List[ReviewRecord]:
        raw = self.store.get(DATA_KEY)
        if not raw:
            return []
        try:
            data = json.loads(raw)
        except ValueError as e:
            logger.warning(f"Failed to parse review data, treating it as empty: {e}")
            return []
        if not isinstance(data, list):
            logger.warning(f"Failed to parse review data, expected a JSON array, got {type(data).__name__}")
            return []

        records = []
        for position, entry in enumerate(data):
            try:
                records.append(ReviewRecord.from_dict(entry))
            except (ValueError, KeyError, TypeError, AttributeError) as e:
                logger.warning(f"Skipping malformed review record at position {position}: {e!r}")
        return records

    def get_record(self, item_id: int) -> Optional[ReviewRecord]:
        for record in self.list_all_records():
            if record.item_id == item_id:
                return record
        return None

    def set_record(self, item_id: int, fields: Dict[str, Any]) -> ReviewRecord:
        """Create or replace the record of an item.

        Values for defined fields are validated and normalized; keys without
        a definition are kept as given.

        Returns:
            The record as persisted

        Raises:
            ValidationError: If a value does not fit its field definition
        """
        definitions = {f.id: f for f in self.registry.list_fields()}
        normalized = {}
        for field_id, value in fields.items():
            definition = definitions.get(field_id)
            if definition is None:
                logger.warning(f"Item {item_id}: storing value for undefined field '{field_id}'")
                normalized[field_id] = value
            else:
                normalized[field_id] = coerce_value(definition, value).raw

        records = self.list_all_records()
        index = next((i for i, r in enumerate(records) if r.item_id == item_id), None)

        updated_at = self.clock()
        if index is not None:
            updated_at = max(updated_at, records[index].updated_at)
        record = ReviewRecord(item_id=item_id, fields=normalized, updated_at=updated_at)

        if index is not None:
            records[index] = record
        else:
            records.append(record)
        self._save(records)
        return record

    def update_field(self, item_id: int, field_id: str, value: Any) -> ReviewRecord:
        """Set a single field value of an item, creating the record if needed.

        Raises:
            ValidationError: If the field is not defined or the value does not fit
        """
        if self.registry.get_field(field_id) is None:
            raise ValidationError(f"Unknown review field: {field_id}", field_id=field_id)
        record = self.get_record(item_id)
        fields = dict(record.fields) if record else {}
        fields[field_id] = value
        return self.set_record(item_id, fields)

    def clear_all(self) -> None:
        self.store.clear(DATA_KEY)
        logger.info("Cleared all review data")

    def remove_field(self, field_id: str) -> int:
        """Drop a field id from every record; returns how many records changed."""
        records = self.list_all_records()
        touched = 0
        for record in records:
            if field_id in record.fields:
                del record.fields[field_id]
                touched += 1
        if touched:
            self._save(records)
        logger.debug(f"Removed field '{field_id}' from {touched} records")
        return touched

    def migrate_field(self, definition: FieldDefinition) -> int:
        """Convert stored values of a field after its type changed.

        Values that cannot be coerced to the new type are removed. Returns
        the number of records changed. Stored values are left alone when
        the new type is not one this package knows.
        """
        if definition.field_type is None:
            logger.warning(
                f"Field '{definition.id}' has unknown type {definition.type!r}, keeping stored values"
            )
            return 0
        records = self.list_all_records()
        touched = 0
        for record in records:
            if definition.id not in record.fields:
                continue
            old = record.fields[definition.id]
            try:
                new = coerce_value(definition, old).raw
            except ValidationError:
                logger.info(
                    f"Item {record.item_id}: dropping '{definition.id}' value {old!r} "
                    f"that does not fit type {definition.type}"
                )
                del record.fields[definition.id]
                touched += 1
                continue
            if new != old or type(new) is not type(old):
                record.fields[definition.id] = new
                touched += 1
        if touched:
            self._save(records)
        return touched

    def statistics(self) -> ReviewStatistics:
        """Count review records and the ones marked as included."""
        records = self.list_all_records()
        included = 0
        if self.registry.get_field(INCLUDED_FIELD_ID) is not None:
            included = sum(1 for r in records if r.fields.get(INCLUDED_FIELD_ID) is True)
        return ReviewStatistics(total=len(records), included=included)

    def _save(self, records: List[ReviewRecord]) -> None:
        self.store.set(DATA_KEY, json.dumps([r.to_dict() for r in records], ensure_ascii=False))
        logger.debug(f"Saved {len(records)} review records")
