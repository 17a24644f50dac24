"""Tests for the field editor session and review table."""

import asyncio
import json

import pytest

from litreview.core.fields import default_fields
from litreview.core.models import ReviewStatistics
from litreview.core.records import DATA_KEY
from litreview.exceptions import ValidationError
from litreview.views import FieldEditor, build_table, control_for, format_statistics, render_table


class TestFieldEditor:
    """Buffered edits committed on save."""

    def test_nothing_persisted_before_save(self, store, registry):
        editor = FieldEditor(registry)
        editor.add(name="Design")
        editor.rename(0, "Relevance!")
        assert editor.dirty
        assert store.get("review-fields") is None
        assert registry.list_fields() == default_fields()

    def test_save_commits(self, registry):
        editor = FieldEditor(registry)
        added = editor.add()
        editor.set_type(len(editor.fields) - 1, "select")
        editor.set_options_text(len(editor.fields) - 1, "RCT\n\n  Cohort \n")
        editor.save()

        saved = registry.get_field(added.id)
        assert saved.name == "新字段"
        assert saved.type == "select"
        assert saved.options == ["RCT", "Cohort"]
        assert not editor.dirty

    def test_cancel_discards(self, registry):
        editor = FieldEditor(registry)
        editor.remove(0)
        editor.cancel()
        assert len(editor.fields) == 4
        assert not editor.dirty

    def test_remove_then_save_cascades(self, registry, records):
        records.set_record(1, {"relevance": "高", "notes": "n"})
        editor = FieldEditor(registry)
        editor.remove(editor.index_of("relevance"))
        editor.save()
        assert records.get_record(1).fields == {"notes": "n"}

    def test_set_type_keeps_options(self, registry):
        editor = FieldEditor(registry)
        editor.set_type(0, "text")
        editor.save()
        assert registry.get_field("relevance").options == ["高", "中", "低", "不相关"]

    def test_invalid_edits(self, registry):
        editor = FieldEditor(registry)
        with pytest.raises(ValidationError):
            editor.set_type(0, "rating")
        with pytest.raises(ValidationError):
            editor.rename(17, "x")
        with pytest.raises(ValidationError):
            editor.index_of("missing")

    def test_edits_do_not_leak_into_registry_objects(self, registry):
        editor = FieldEditor(registry)
        editor.set_default(3, "todo")
        assert registry.get_field("notes").default_value == ""


class TestTable:
    """Review table snapshot."""

    def test_rows_are_regular_items(self, registry, records, items):
        table = asyncio.run(build_table(registry, records, items))
        assert [r.item_id for r in table.rows] == [42, 7]

    def test_cells_apply_defaults(self, registry, records, items):
        records.set_record(42, {"relevance": "高"})
        table = asyncio.run(build_table(registry, records, items))
        row = table.row(42)
        assert [c.value for c in row.cells] == ["高", "", False, ""]
        assert [c.control for c in row.cells] == ["select", "select", "checkbox", "text"]
        assert row.cells[0].options == ["高", "中", "低", "不相关"]
        assert row.year == "2020"

    def test_stale_values_show_empty(self, store, registry, records, items):
        store.set(DATA_KEY, json.dumps([
            {"itemID": 42, "fields": {"quality": "Z", "notes": "ok", "included": "yes"}, "updatedAt": 1},
        ]))
        table = asyncio.run(build_table(registry, records, items))
        assert [c.value for c in table.row(42).cells] == ["", "", True, "ok"]

    def test_authors_comma_joined(self, registry, records, items):
        table = asyncio.run(build_table(registry, records, items))
        assert table.row(7).authors == "Ada Lovelace, Alan Turing"

    def test_statistics_in_snapshot(self, registry, records, items):
        records.update_field(42, "included", True)
        table = asyncio.run(build_table(registry, records, items))
        assert table.statistics == ReviewStatistics(total=1, included=1)

    def test_control_for_select_without_options(self, registry):
        definition = registry.new_field(type="select")
        assert control_for(definition) == "text"
        definition.type = "number"
        assert control_for(definition) == "number"

    def test_render(self, registry, records, items):
        records.update_field(42, "included", True)
        text = render_table(asyncio.run(build_table(registry, records, items)))
        lines = text.split("\n")
        assert lines[0].startswith("ID")
        assert "[x]" in lines[2]
        assert lines[-1] == "共 1 条评审记录，已纳入 1 条"

    def test_format_statistics_english(self):
        assert format_statistics(ReviewStatistics(3, 2), "en") == "3 review records, 2 included"
