"""CSV and JSON export of review data.

Exports join the field definitions, the review records and the item
metadata resolved from the library:
- JSON: the raw definitions and records, for backup or further processing
- CSV: one row per reviewed regular item with bibliographic columns first
"""

import json
import logging
import math
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, List, Optional, Union

from ..exceptions import ExportError
from ..items.base import ItemSource
from ..locale import DEFAULT_LOCALE, get_string
from .fields import FieldRegistry
from .records import ReviewStore

logger = logging.getLogger(__name__)

EXPORT_VERSION = "1.0"
EXPORT_FORMATS = ("csv", "json")

_CSV_SPECIAL = (",", '"', "\n")


def escape_csv(value: Optional[str]) -> str:
    """Quote a CSV cell only when it contains a comma, quote or newline."""
    if not value:
        return ""
    if any(ch in value for ch in _CSV_SPECIAL):
        return '"' + value.replace('"', '""') + '"'
    return value


def format_cell(value: Any) -> str:
    """String form of a stored value; falsy values become empty cells."""
    if not value:
        return ""
    if value is True:
        return "true"
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, list):
        return ",".join(format_cell(v) for v in value)
    if isinstance(value, dict):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def _iso_now() -> str:
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def export_to_json(registry: FieldRegistry, records: ReviewStore) -> str:
    """Serialize field definitions and review records as one JSON document."""
    document = {
        "version": EXPORT_VERSION,
        "fields": [f.to_dict() for f in registry.list_fields()],
        "data": [r.to_dict() for r in records.list_all_records()],
        "exportedAt": _iso_now(),
    }
    return json.dumps(document, indent=2, ensure_ascii=False)


def csv_header(registry: FieldRegistry, locale: str = DEFAULT_LOCALE) -> List[str]:
    fixed = [
        get_string("column-item-id", locale),
        get_string("column-title", locale),
        get_string("column-authors", locale),
        get_string("column-year", locale),
        get_string("column-journal", locale),
        get_string("column-doi", locale),
    ]
    return fixed + [escape_csv(f.name) for f in registry.list_fields()]


async def export_to_csv(
    registry: FieldRegistry,
    records: ReviewStore,
    items: ItemSource,
    locale: str = DEFAULT_LOCALE,
) -> str:
    """Build the CSV export, resolving item metadata one item at a time.

    Records whose item is missing, a note or an attachment are skipped.
    An item that fails to resolve is logged and skipped; the export goes on.

    Args:
        registry: Field definitions, giving the trailing columns in order
        records: Review records, one CSV row each
        items: Library the item metadata is resolved from
        locale: Language of the fixed column headers

    Returns:
        CSV text with '\\n' line separators and no trailing newline
    """
    fields = registry.list_fields()
    all_records = records.list_all_records()
    rows: List[List[str]] = [csv_header(registry, locale)]

    for record in all_records:
        try:
            item = await items.get_item(record.item_id)
            if item is None or item.is_note or item.is_attachment:
                continue

            row = [
                str(record.item_id),
                escape_csv(item.title),
                escape_csv(item.author_string("; ")),
                escape_csv(item.year),
                escape_csv(item.publication_title),
                escape_csv(item.doi),
            ]
            row.extend(escape_csv(format_cell(record.fields.get(f.id))) for f in fields)
            rows.append(row)
        except Exception as e:
            logger.warning(f"Failed to process item {record.item_id}: {e}")

    logger.info(f"Exported {len(rows) - 1} of {len(all_records)} review records to CSV")
    return "\n".join(",".join(row) for row in rows)


def default_export_filename(fmt: str, today: Optional[date] = None) -> str:
    """File name offered for an export, e.g. review-export-2024-05-01.csv."""
    if fmt not in EXPORT_FORMATS:
        raise ExportError(f"Unsupported export format: {fmt}")
    today = today or datetime.now(timezone.utc).date()
    return f"review-export-{today.isoformat()}.{fmt}"


def write_export(output_path: Union[str, Path], content: str) -> str:
    """Write export content as UTF-8.

    Args:
        output_path: Path to save the export to

    Returns:
        Path to saved file

    Raises:
        ExportError: If the file cannot be written
    """
    output_path = Path(output_path)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8", newline="") as f:
            f.write(content)
    except OSError as e:
        raise ExportError(f"Failed to write export file {output_path}: {e}")
    logger.info(f"Wrote export to {output_path}")
    return str(output_path)
