"""Tests for CSV and JSON export."""

import asyncio
import json
from datetime import date

import pytest

from litreview.core.export import (
    default_export_filename,
    escape_csv,
    export_to_csv,
    export_to_json,
    format_cell,
    write_export,
)
from litreview.core.models import FieldDefinition
from litreview.exceptions import ExportError
from litreview.items import Creator, Item, MemoryItemSource


class TestEscape:
    """CSV cell quoting."""

    def test_comma(self):
        assert escape_csv("a,b") == '"a,b"'

    def test_quotes(self):
        assert escape_csv('say "hi"') == '"say ""hi"""'

    def test_newline(self):
        assert escape_csv("line1\nline2") == '"line1\nline2"'

    def test_empty(self):
        assert escape_csv("") == ""
        assert escape_csv(None) == ""

    def test_plain(self):
        assert escape_csv("plain text") == "plain text"

    @pytest.mark.parametrize("value, expected", [
        (None, ""), (False, ""), (0, ""), ("", ""), (True, "true"), (3, "3"), (2.0, "2"), (2.5, "2.5"),
        ("高", "高"), (["a", "b"], "a,b"),
    ])
    def test_format_cell(self, value, expected):
        assert format_cell(value) == expected


class TestCSV:
    """CSV export joined against the item library."""

    def test_fresh_export(self, registry, records):
        records.set_record(42, {"relevance": "高"})
        items = MemoryItemSource([
            Item(id=42, title="Foo", creators=[Creator("Jane", "Doe")], date="2020-05-01"),
        ])

        csv_text = asyncio.run(export_to_csv(registry, records, items))

        assert csv_text == (
            "Item ID,标题,作者,年份,期刊,DOI,相关性,质量评分,是否纳入,评审备注\n"
            "42,Foo,Jane Doe,2020,,,高,,,"
        )

    def test_header_only_without_records(self, registry, records, items):
        csv_text = asyncio.run(export_to_csv(registry, records, items))
        assert csv_text == "Item ID,标题,作者,年份,期刊,DOI,相关性,质量评分,是否纳入,评审备注"

    def test_english_header(self, records, items):
        from litreview.core.fields import FieldRegistry

        registry = FieldRegistry(records.store, locale="en")
        csv_text = asyncio.run(export_to_csv(registry, records, items, locale="en"))
        assert csv_text.startswith("Item ID,Title,Authors,Year,Journal,DOI,Relevance,Quality")

    def test_skips_missing_notes_and_attachments(self, registry, records, items):
        records.set_record(1000, {"notes": "gone"})
        records.set_record(8, {"notes": "note"})
        records.set_record(9, {"notes": "pdf"})
        records.set_record(42, {"notes": "kept"})

        lines = asyncio.run(export_to_csv(registry, records, items)).split("\n")

        assert len(lines) == 2
        assert lines[1].startswith("42,")

    def test_failing_item_is_skipped(self, registry, records, items, caplog):
        items.failing_ids.add(7)
        records.set_record(7, {"notes": "broken"})
        records.set_record(42, {"notes": "ok"})

        with caplog.at_level("WARNING"):
            lines = asyncio.run(export_to_csv(registry, records, items)).split("\n")

        assert [line.split(",")[0] for line in lines[1:]] == ["42"]
        assert "Failed to process item 7" in caplog.text

    def test_quoting_and_multiple_authors(self, registry, records, items):
        records.set_record(7, {"notes": 'said "maybe", later', "included": True, "quality": "B"})
        lines = asyncio.run(export_to_csv(registry, records, items)).split("\n")
        assert lines[1] == (
            '7,"Screening, at scale",Ada Lovelace; Alan Turing,1999,Journal of Reviews,10.1000/xyz,'
            ',B,true,"said ""maybe"", later"'
        )

    def test_columns_follow_registry_order(self, registry, records, items):
        registry.replace_fields([
            FieldDefinition(id="notes", name="Notes", type="text"),
            FieldDefinition(id="score", name="Score, 0-5", type="number"),
        ])
        records.set_record(42, {"score": 4, "notes": "n"})
        lines = asyncio.run(export_to_csv(registry, records, items)).split("\n")
        assert lines[0].endswith('DOI,Notes,"Score, 0-5"')
        assert lines[1].endswith(",n,4")


class TestJSON:
    """JSON export document."""

    def test_document(self, registry, records):
        records.set_record(42, {"relevance": "高"})
        document = json.loads(export_to_json(registry, records))

        assert document["version"] == "1.0"
        assert [f["id"] for f in document["fields"]] == ["relevance", "quality", "included", "notes"]
        assert document["data"] == [
            {"itemID": 42, "fields": {"relevance": "高"}, "updatedAt": 1_700_000_000_000}
        ]
        assert document["exportedAt"].endswith("Z")
        assert "T" in document["exportedAt"]

    def test_pretty_printed_and_unescaped(self, registry, records):
        text = export_to_json(registry, records)
        assert text.startswith('{\n  "version": "1.0"')
        assert "相关性" in text


class TestFiles:
    """Export file helpers."""

    def test_default_filename(self):
        assert default_export_filename("csv", date(2024, 5, 1)) == "review-export-2024-05-01.csv"
        assert default_export_filename("json", date(2024, 5, 1)) == "review-export-2024-05-01.json"

    def test_default_filename_rejects_format(self):
        with pytest.raises(ExportError):
            default_export_filename("xlsx")

    def test_write_export(self, tmp_path):
        path = write_export(tmp_path / "out" / "review.csv", "a,b\n1,2")
        with open(path, encoding="utf-8") as f:
            assert f.read() == "a,b\n1,2"

    def test_write_export_failure(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("x")
        with pytest.raises(ExportError):
            write_export(blocker / "review.csv", "data")
