"""Typed review values.

Records persist plain JSON values; these classes are the typed view of them,
checked against the field definition whenever a value is written or read.
"""
import logging
import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Optional, Union

from ..exceptions import ValidationError
from .models import FieldDefinition, FieldType

logger = logging.getLogger(__name__)

_TRUE_STRINGS = {"true", "yes", "y", "1", "on"}
_FALSE_STRINGS = {"false", "no", "n", "0", "off", ""}


@dataclass(frozen=True)
class TextValue:
    value: str

    @property
    def raw(self) -> str:
        return self.value


@dataclass(frozen=True)
class NumberValue:
    value: Union[int, float]

    @property
    def raw(self) -> Union[int, float]:
        return self.value


@dataclass(frozen=True)
class BooleanValue:
    value: bool

    @property
    def raw(self) -> bool:
        return self.value


@dataclass(frozen=True)
class DateValue:
    """A calendar date, or the empty (unset) date when value is None."""

    value: Optional[date]

    @property
    def raw(self) -> str:
        return self.value.isoformat() if self.value else ""


@dataclass(frozen=True)
class SelectValue:
    """One of the field's options; the empty string means nothing selected."""

    value: str

    @property
    def raw(self) -> str:
        return self.value


FieldValue = Union[TextValue, NumberValue, BooleanValue, DateValue, SelectValue]


def _to_text(raw: Any) -> TextValue:
    if raw is None:
        return TextValue("")
    if isinstance(raw, (dict, list)):
        raise ValueError("text fields hold scalar values")
    if isinstance(raw, bool):
        return TextValue("true" if raw else "false")
    return TextValue(str(raw))


def _to_number(raw: Any) -> NumberValue:
    if isinstance(raw, bool):
        raise ValueError("booleans are not numbers")
    if isinstance(raw, (int, float)):
        number = raw
    elif isinstance(raw, str) and raw.strip():
        text = raw.strip()
        try:
            number = int(text)
        except ValueError:
            number = float(text)
    else:
        raise ValueError(f"not a number: {raw!r}")
    if isinstance(number, float) and not math.isfinite(number):
        raise ValueError(f"not a finite number: {raw!r}")
    return NumberValue(number)


def _to_boolean(raw: Any) -> BooleanValue:
    if isinstance(raw, bool):
        return BooleanValue(raw)
    if raw is None:
        return BooleanValue(False)
    if isinstance(raw, (int, float)) and raw in (0, 1):
        return BooleanValue(bool(raw))
    if isinstance(raw, str):
        lowered = raw.strip().lower()
        if lowered in _TRUE_STRINGS:
            return BooleanValue(True)
        if lowered in _FALSE_STRINGS:
            return BooleanValue(False)
    raise ValueError(f"not a yes/no value: {raw!r}")


def _to_date(raw: Any) -> DateValue:
    if raw is None or raw == "":
        return DateValue(None)
    if isinstance(raw, datetime):
        return DateValue(raw.date())
    if isinstance(raw, date):
        return DateValue(raw)
    if isinstance(raw, str):
        # Accept full ISO timestamps too, only the calendar date is kept
        return DateValue(date.fromisoformat(raw.strip()[:10]))
    raise ValueError(f"not a date: {raw!r}")


def _to_select(raw: Any, definition: FieldDefinition) -> SelectValue:
    if raw is None or raw == "":
        return SelectValue("")
    text = str(raw)
    if text not in (definition.options or []):
        raise ValueError(f"{text!r} is not one of the options of '{definition.name}'")
    return SelectValue(text)


def coerce_value(definition: FieldDefinition, raw: Any) -> FieldValue:
    """Validate a raw value against a field definition.

    Args:
        definition: Field the value is written to
        raw: Value as typed by the user or read from storage

    Returns:
        Typed value; its ``raw`` attribute is what gets persisted

    Raises:
        ValidationError: If the value does not fit the field type
    """
    field_type = definition.field_type
    try:
        if field_type is FieldType.NUMBER:
            return _to_number(raw)
        if field_type is FieldType.BOOLEAN:
            return _to_boolean(raw)
        if field_type is FieldType.DATE:
            return _to_date(raw)
        if field_type is FieldType.SELECT:
            return _to_select(raw, definition)
        if field_type is FieldType.TEXT:
            return _to_text(raw)
    except ValueError as e:
        raise ValidationError(
            f"Invalid value for field '{definition.name}' ({definition.type}): {e}",
            field_id=definition.id,
        )
    raise ValidationError(
        f"Field '{definition.name}' has unknown type: {definition.type}",
        field_id=definition.id,
    )


def read_value(definition: FieldDefinition, raw: Any) -> Optional[FieldValue]:
    """Lenient read-side coercion: values that no longer fit come back as None."""
    try:
        return coerce_value(definition, raw)
    except ValidationError as e:
        logger.debug(f"Ignoring stored value {raw!r}: {e}")
        return None
