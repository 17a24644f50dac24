"""Data models for litreview."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class FieldType(str, Enum):
    """Kinds of custom review fields."""

    TEXT = "text"
    SELECT = "select"
    NUMBER = "number"
    DATE = "date"
    BOOLEAN = "boolean"

    @classmethod
    def values(cls) -> List[str]:
        return [member.value for member in cls]


# Keys the persisted definition shape knows about; anything else is carried in extra
_DEFINITION_KEYS = ("id", "name", "type", "options", "defaultValue")


@dataclass
class FieldDefinition:
    """A user-defined review field.

    Attributes:
        id: Stable identifier, referenced by review records
        name: Display label
        type: One of FieldType values ('text', 'select', 'number', 'date', 'boolean')
        options: Closed value set for select fields
        default_value: Value shown when a record has no entry for this field
        extra: Unrecognized keys from the persisted definition, kept on round-trip
    """

    id: str
    name: str
    type: str = FieldType.TEXT.value
    options: Optional[List[str]] = None
    default_value: Any = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def field_type(self) -> Optional[FieldType]:
        """Parsed type, or None for a type this version does not know."""
        try:
            return FieldType(self.type)
        except ValueError:
            return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert definition to its persisted dictionary shape."""
        data: Dict[str, Any] = {"id": self.id, "name": self.name, "type": self.type}
        if self.options is not None:
            data["options"] = list(self.options)
        if self.default_value is not None:
            data["defaultValue"] = self.default_value
        data.update(self.extra)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FieldDefinition":
        """Create definition from its persisted dictionary shape."""
        options = data.get("options")
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            type=data.get("type", FieldType.TEXT.value),
            options=list(options) if options is not None else None,
            default_value=data.get("defaultValue"),
            extra={k: v for k, v in data.items() if k not in _DEFINITION_KEYS},
        )


@dataclass
class ReviewRecord:
    """Review values for one bibliographic item.

    Attributes:
        item_id: Identifier of the item in the library
        fields: Mapping from field id to raw stored value
        updated_at: Epoch milliseconds of the last write
    """

    item_id: int
    fields: Dict[str, Any] = field(default_factory=dict)
    updated_at: int = 0

    def raw(self, field_id: str, default: Any = None) -> Any:
        return self.fields.get(field_id, default)

    def value(self, definition: FieldDefinition):
        """Typed value of a field, falling back to the definition's default."""
        from .values import read_value

        if definition.id in self.fields:
            return read_value(definition, self.fields[definition.id])
        return read_value(definition, definition.default_value)

    def to_dict(self) -> Dict[str, Any]:
        """Convert record to its persisted dictionary shape."""
        return {
            "itemID": self.item_id,
            "fields": dict(self.fields),
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ReviewRecord":
        """Create record from its persisted dictionary shape."""
        return cls(
            item_id=int(data["itemID"]),
            fields=dict(data.get("fields") or {}),
            updated_at=int(data.get("updatedAt") or 0),
        )


@dataclass
class ReviewStatistics:
    """Counters shown next to the review table."""

    total: int = 0
    included: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {"total": self.total, "included": self.included}
