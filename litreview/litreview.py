"""Main LitReview class - entry point for the library."""
import asyncio
import logging
import os
from dataclasses import replace
from typing import Any, Dict, List, Optional

from .config import Config
from .core.export import (
    EXPORT_FORMATS,
    default_export_filename,
    export_to_csv,
    export_to_json,
    write_export,
)
from .core.fields import FieldRegistry
from .core.models import FieldDefinition, ReviewRecord, ReviewStatistics
from .core.records import ReviewStore
from .core.values import coerce_value
from .exceptions import ExportError
from .items.base import ItemSource
from .items.bibtex import BibtexItemSource
from .items.memory import MemoryItemSource
from .storage.base import PreferenceStore
from .storage.json_file import JsonFilePreferenceStore
from .utils.logging import setup_logging
from .views import FieldEditor, ReviewTable, build_table

logger = logging.getLogger(__name__)


class LitReview:
    """Main entry point for review fields, review data and exports.

    Example:
        >>> from litreview import LitReview
        >>> review = LitReview(library_path="library.bib")
        >>> review.update_value(1, "relevance", "高")
        >>> review.export("csv", "review.csv")
    """

    def __init__(
        self,
        store: Optional[PreferenceStore] = None,
        items: Optional[ItemSource] = None,
        library_path: Optional[str] = None,
        config: Optional[Config] = None,
        log_level: Optional[int] = None,
    ):
        """Initialize LitReview.

        Args:
            store: Preference store (defaults to the JSON file from config)
            items: Item source (defaults to the BibTeX library from config)
            library_path: BibTeX library path, overrides config
            config: Optional Config object (loaded from environment if omitted)
            log_level: Logging level (defaults to config.log_level)
        """
        if config is None:
            config = Config.from_env()
        if library_path:
            config.library_path = library_path
        self.config = config

        setup_logging(level=log_level if log_level is not None else config.log_level)

        self.store = store or JsonFilePreferenceStore(config.resolved_store_path)
        self.registry = FieldRegistry(self.store, locale=config.locale)
        self.records = ReviewStore(self.store, registry=self.registry)
        self.items = items or self._init_items()

        logger.info(f"LitReview initialized with {self.store!r}")

    def _init_items(self) -> ItemSource:
        if self.config.library_path:
            return BibtexItemSource(self.config.library_path)
        logger.warning("No library configured; item metadata will be empty")
        return MemoryItemSource()

    # ==================== Fields ====================

    def list_fields(self) -> List[FieldDefinition]:
        return self.registry.list_fields()

    def add_field(
        self,
        name: str,
        type: str = "text",
        options: Optional[List[str]] = None,
        default_value: Any = "",
    ) -> FieldDefinition:
        """Create and save a new field with a fresh id."""
        definition = self.registry.new_field(name=name, type=type)
        definition.options = options
        if default_value not in ("", None):
            default_value = coerce_value(definition, default_value).raw
        definition.default_value = default_value
        self.registry.add_field(definition)
        return definition

    def update_field(self, field_id: str, **changes: Any) -> None:
        """Merge changes into a field; a new default is checked against the updated type."""
        default_value = changes.get("default_value")
        if default_value not in ("", None):
            current = self.registry.get_field(field_id)
            if current is not None:
                updated = replace(current, **{k: v for k, v in changes.items() if k != "id"})
                changes["default_value"] = coerce_value(updated, default_value).raw
        self.registry.update_field(field_id, changes)

    def delete_field(self, field_id: str) -> None:
        self.registry.delete_field(field_id)

    def edit_fields(self) -> FieldEditor:
        """Start a buffered field editing session."""
        return FieldEditor(self.registry)

    # ==================== Review data ====================

    def get_record(self, item_id: int) -> Optional[ReviewRecord]:
        return self.records.get_record(item_id)

    def update_value(self, item_id: int, field_id: str, value: Any) -> ReviewRecord:
        return self.records.update_field(item_id, field_id, value)

    def set_values(self, item_id: int, fields: Dict[str, Any]) -> ReviewRecord:
        return self.records.set_record(item_id, fields)

    def list_records(self) -> List[ReviewRecord]:
        return self.records.list_all_records()

    def clear(self) -> None:
        self.records.clear_all()

    def statistics(self) -> ReviewStatistics:
        return self.records.statistics()

    def table(self) -> ReviewTable:
        return asyncio.run(build_table(self.registry, self.records, self.items))

    # ==================== Export ====================

    def export_json(self) -> str:
        return export_to_json(self.registry, self.records)

    async def export_csv_async(self) -> str:
        return await export_to_csv(self.registry, self.records, self.items, self.config.locale)

    def export_csv(self) -> str:
        return asyncio.run(self.export_csv_async())

    def export(self, fmt: str, output_path: Optional[str] = None) -> str:
        """Export review data to a file.

        Args:
            fmt: 'csv' or 'json'
            output_path: Target file (defaults to a dated name in config.export_dir)

        Returns:
            Path to saved file

        Raises:
            ExportError: If the format is unsupported, or building or writing the export fails
        """
        if fmt not in EXPORT_FORMATS:
            raise ExportError(f"Unsupported export format: {fmt}")

        if output_path is None:
            output_path = os.path.join(self.config.export_dir, default_export_filename(fmt))

        try:
            content = self.export_csv() if fmt == "csv" else self.export_json()
        except ExportError:
            raise
        except Exception as e:
            logger.error(f"Export failed: {e}")
            raise ExportError(f"Failed to build {fmt.upper()} export: {e}")

        return write_export(output_path, content)
