"""Tests for the LitReview facade."""

import json

import pytest

from litreview import LitReview
from litreview.config import Config
from litreview.exceptions import ExportError, ValidationError
from litreview.items import MemoryItemSource
from litreview.storage import MemoryPreferenceStore


@pytest.fixture
def review(items):
    return LitReview(store=MemoryPreferenceStore(), items=items, config=Config())


class TestFacade:
    """End-to-end use through the entry point."""

    def test_add_field_with_default(self, review):
        definition = review.add_field("Reviewed", type="boolean", default_value="yes")
        assert definition.default_value is True
        assert review.list_fields()[-1].id == definition.id

    def test_add_field_invalid_default(self, review):
        with pytest.raises(ValidationError):
            review.add_field("Score", type="number", default_value="lots")
        assert len(review.list_fields()) == 4

    def test_update_field_coerces_default(self, review):
        review.update_field("included", default_value="yes")
        assert review.registry.get_field("included").default_value is True

    def test_update_field_checks_default_against_new_type(self, review):
        review.update_field("notes", type="number", default_value="3")
        assert review.registry.get_field("notes").default_value == 3
        with pytest.raises(ValidationError):
            review.update_field("quality", default_value="Z")
        assert review.registry.get_field("quality").default_value == ""

    def test_values_and_statistics(self, review):
        review.update_value(42, "included", True)
        review.set_values(7, {"included": False, "notes": "later"})
        assert review.get_record(7).fields == {"included": False, "notes": "later"}
        assert review.statistics().to_dict() == {"total": 2, "included": 1}
        review.clear()
        assert review.list_records() == []

    def test_table(self, review):
        assert [r.item_id for r in review.table().rows] == [42, 7]

    def test_export_csv_file(self, review, tmp_path):
        review.update_value(42, "relevance", "高")
        path = review.export("csv", str(tmp_path / "review.csv"))
        with open(path, encoding="utf-8") as f:
            assert f.read().split("\n")[1] == "42,Foo,Jane Doe,2020,,,高,,,"

    def test_export_json_default_name(self, items, tmp_path):
        review = LitReview(
            store=MemoryPreferenceStore(),
            items=items,
            config=Config(export_dir=str(tmp_path)),
        )
        path = review.export("json")
        assert path.startswith(str(tmp_path))
        assert path.endswith(".json")
        with open(path, encoding="utf-8") as f:
            assert json.load(f)["version"] == "1.0"

    def test_export_unknown_format(self, review):
        with pytest.raises(ExportError):
            review.export("xlsx")

    def test_export_write_failure(self, review, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("x")
        with pytest.raises(ExportError):
            review.export("json", str(blocker / "out.json"))

    def test_delete_field_cascades(self, review):
        review.update_value(42, "notes", "n")
        review.delete_field("notes")
        assert review.get_record(42).fields == {}

    def test_without_library(self):
        review = LitReview(store=MemoryPreferenceStore(), config=Config())
        assert isinstance(review.items, MemoryItemSource)
        review.update_value(1, "notes", "x")
        assert review.export_csv().count("\n") == 0
