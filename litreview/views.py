"""Headless presentation layer: field editor session and review table."""
import copy
import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional

from .core.fields import FieldRegistry
from .core.models import FieldDefinition, FieldType, ReviewStatistics
from .core.records import ReviewStore
from .core.values import read_value
from .exceptions import ValidationError
from .items.base import ItemSource
from .locale import DEFAULT_LOCALE, get_string

logger = logging.getLogger(__name__)


class FieldEditor:
    """Buffered editing of the field definitions.

    Edits act on a private copy of the list; nothing reaches the registry
    until ``save()``. ``cancel()`` throws the edits away.

    Example:
        >>> editor = FieldEditor(registry)
        >>> new = editor.add()
        >>> editor.rename(len(editor.fields) - 1, "Study design")
        >>> editor.save()
    """

    def __init__(self, registry: FieldRegistry):
        self.registry = registry
        self.fields: List[FieldDefinition] = copy.deepcopy(registry.list_fields())

    def _get(self, index: int) -> FieldDefinition:
        try:
            return self.fields[index]
        except IndexError:
            raise ValidationError(f"No field at position {index}")

    def index_of(self, field_id: str) -> int:
        for index, definition in enumerate(self.fields):
            if definition.id == field_id:
                return index
        raise ValidationError(f"Unknown review field: {field_id}", field_id=field_id)

    def add(self, name: Optional[str] = None, type: str = FieldType.TEXT.value) -> FieldDefinition:
        definition = self.registry.new_field(name=name, type=type)
        self.fields.append(definition)
        return definition

    def rename(self, index: int, name: str) -> None:
        self._get(index).name = name

    def set_type(self, index: int, type: str) -> None:
        """Change a field's type; its options are kept even when it stops being a select."""
        if type not in FieldType.values():
            raise ValidationError(f"Unknown field type: {type}")
        self._get(index).type = type

    def set_options_text(self, index: int, text: str) -> None:
        """Set select options from text with one option per line; blank lines are dropped."""
        self._get(index).options = [line.strip() for line in text.split("\n") if line.strip()]

    def set_default(self, index: int, value: Any) -> None:
        self._get(index).default_value = value

    def remove(self, index: int) -> FieldDefinition:
        definition = self._get(index)
        del self.fields[index]
        return definition

    @property
    def dirty(self) -> bool:
        return self.fields != self.registry.list_fields()

    def save(self) -> List[FieldDefinition]:
        self.registry.replace_fields(self.fields)
        logger.info(f"Saved {len(self.fields)} review fields")
        return copy.deepcopy(self.fields)

    def cancel(self) -> None:
        self.fields = copy.deepcopy(self.registry.list_fields())


def control_for(definition: FieldDefinition) -> str:
    """Kind of input control used to edit a field in the table."""
    if definition.type == FieldType.SELECT.value and definition.options:
        return "select"
    if definition.type == FieldType.BOOLEAN.value:
        return "checkbox"
    if definition.type == FieldType.NUMBER.value:
        return "number"
    return "text"


@dataclass
class TableCell:
    field_id: str
    value: Any
    control: str
    options: List[str] = field(default_factory=list)


@dataclass
class TableRow:
    item_id: int
    title: str
    authors: str
    year: str
    journal: str
    cells: List[TableCell] = field(default_factory=list)


@dataclass
class ReviewTable:
    """Snapshot of the review table: one row per regular library item."""

    fields: List[FieldDefinition]
    rows: List[TableRow]
    statistics: ReviewStatistics

    def row(self, item_id: int) -> Optional[TableRow]:
        return next((r for r in self.rows if r.item_id == item_id), None)


async def build_table(registry: FieldRegistry, records: ReviewStore, items: ItemSource) -> ReviewTable:
    """Read fields, records and library items into a fresh table snapshot.

    Cells hold typed values; a stored value that no longer fits its field
    shows as empty.
    """
    fields = registry.list_fields()
    by_item = {r.item_id: r for r in records.list_all_records()}

    rows = []
    for item in await items.list_regular_items():
        record = by_item.get(item.id)
        cells = []
        for definition in fields:
            typed = record.value(definition) if record else read_value(definition, definition.default_value)
            cells.append(TableCell(
                field_id=definition.id,
                value=typed.raw if typed is not None else "",
                control=control_for(definition),
                options=list(definition.options or []),
            ))
        rows.append(TableRow(
            item_id=item.id,
            title=item.title or "",
            authors=item.author_string(", "),
            year=item.year,
            journal=item.publication_title or "",
            cells=cells,
        ))

    return ReviewTable(fields=fields, rows=rows, statistics=records.statistics())


def _display(cell: TableCell) -> str:
    if cell.control == "checkbox":
        return "[x]" if cell.value is True else "[ ]"
    if cell.value is None or cell.value == "":
        return "-"
    return str(cell.value)


def _clip(text: str, width: int) -> str:
    return text if len(text) <= width else text[: width - 1] + "…"


def render_table(table: ReviewTable, locale: str = DEFAULT_LOCALE, max_width: int = 30) -> str:
    """Render a table snapshot as aligned plain text."""
    header = [
        get_string("column-id", locale),
        get_string("column-title", locale),
        get_string("column-authors", locale),
        get_string("column-year", locale),
        get_string("column-journal", locale),
    ] + [f.name for f in table.fields]

    lines = [header]
    for row in table.rows:
        lines.append(
            [str(row.item_id), row.title, row.authors, row.year, row.journal]
            + [_display(c) for c in row.cells]
        )
    lines = [[_clip(col, max_width) for col in line] for line in lines]

    widths = [max(len(line[i]) for line in lines) for i in range(len(header))]
    rendered = ["  ".join(col.ljust(widths[i]) for i, col in enumerate(line)).rstrip() for line in lines]
    rendered.insert(1, "  ".join("-" * w for w in widths))
    rendered.append("")
    rendered.append(format_statistics(table.statistics, locale))
    return "\n".join(rendered)


def format_statistics(stats: ReviewStatistics, locale: str = DEFAULT_LOCALE) -> str:
    return get_string("review-stats", locale, total=stats.total, included=stats.included)
