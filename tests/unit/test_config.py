"""
Unit tests for config models and YAML I/O (layout_fields.config).

Tests Pydantic model defaults and validation, options YAML round-trip,
and field definition loading.
"""

import pytest
from pydantic import ValidationError

from layout_fields.config import (
    FieldDefinition,
    RowLayoutOptions,
    load_field_definitions,
    load_options,
    save_options,
)
from layout_fields.exceptions import OptionsValidationError
from tests.conftest import LISTING_YAML


# ---------------------------------------------------------------------------
# RowLayoutOptions
# ---------------------------------------------------------------------------

class TestRowLayoutOptions:
    """Tests for RowLayoutOptions defaults and lookups."""

    def test_defaults(self):
        opts = RowLayoutOptions()
        assert opts.layout == ""
        assert opts.default_region == ""
        assert opts.assigned_regions == {}

    def test_none_values_in_model(self):
        opts = RowLayoutOptions(layout=None, default_region=None, assigned_regions=None)
        assert opts == RowLayoutOptions()

    def test_get_assigned_region(self):
        opts = RowLayoutOptions(assigned_regions={"title": "first"})
        assert opts.get_assigned_region("title") == "first"

    def test_get_assigned_region_unset_is_empty_string(self):
        assert RowLayoutOptions().get_assigned_region("title") == ""

    def test_defaults_not_shared(self):
        a = RowLayoutOptions()
        b = RowLayoutOptions()
        a.assigned_regions["x"] = "y"
        assert b.assigned_regions == {}

    def test_rejects_non_string_region(self):
        with pytest.raises(ValidationError, match="assigned_regions"):
            RowLayoutOptions(assigned_regions={"title": ["a", "b"]})


# ---------------------------------------------------------------------------
# FieldDefinition
# ---------------------------------------------------------------------------

class TestFieldDefinition:
    """Tests for FieldDefinition helpers."""

    def test_source_column_defaults_to_name(self):
        assert FieldDefinition(name="title").source_column == "title"

    def test_source_column_override(self):
        assert FieldDefinition(name="headline", column="title").source_column == "title"

    def test_display_label_falls_back_to_name(self):
        assert FieldDefinition(name="title").display_label == "title"
        assert FieldDefinition(name="title", label="Title").display_label == "Title"

    def test_missing_name(self):
        with pytest.raises(ValidationError, match="name"):
            FieldDefinition(label="Title")


# ---------------------------------------------------------------------------
# YAML I/O
# ---------------------------------------------------------------------------

class TestLoadOptions:
    """Tests for load_options()."""

    def test_fixture_file(self):
        opts = load_options(LISTING_YAML)
        assert opts.layout == "sidebar"
        assert opts.default_region == "main"
        assert opts.assigned_regions == {
            "title": "main",
            "author": "sidebar",
            "tags": "removed_region",
        }

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_options(tmp_path / "nope.yaml")

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        with pytest.raises(OptionsValidationError, match="empty"):
            load_options(path)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(OptionsValidationError, match="mapping"):
            load_options(path)

    def test_unset_keys_use_defaults(self, tmp_path):
        path = tmp_path / "partial.yaml"
        path.write_text("layout: twocol\nassigned_regions:\n", encoding="utf-8")
        opts = load_options(path)
        assert opts.layout == "twocol"
        assert opts.default_region == ""
        assert opts.assigned_regions == {}

    @pytest.mark.parametrize(
        "text, layout, default_region",
        [
            ("layout:\ndefault_region: main\n", "", "main"),
            ("layout: twocol\ndefault_region:\n", "twocol", ""),
            ("layout:\ndefault_region:\nassigned_regions:\n", "", ""),
        ],
    )
    def test_keys_without_values_use_defaults(self, tmp_path, text, layout, default_region):
        path = tmp_path / "blank.yaml"
        path.write_text(text, encoding="utf-8")
        opts = load_options(path)
        assert opts.layout == layout
        assert opts.default_region == default_region
        assert opts.assigned_regions == {}


class TestLoadFieldDefinitions:
    """Tests for load_field_definitions()."""

    def test_fixture_file_order(self):
        fields = load_field_definitions(LISTING_YAML)
        assert list(fields) == ["title", "body", "author", "tags", "nid"]
        assert fields["author"].empty_text == "Anonymous"
        assert fields["nid"].exclude is True

    def test_no_fields_block(self, tmp_path):
        path = tmp_path / "opts.yaml"
        path.write_text("layout: onecol\n", encoding="utf-8")
        assert load_field_definitions(path) == {}

    def test_duplicate_field(self, tmp_path):
        path = tmp_path / "dup.yaml"
        path.write_text("fields:\n  - name: a\n  - name: a\n", encoding="utf-8")
        with pytest.raises(OptionsValidationError, match="more than once"):
            load_field_definitions(path)

    def test_invalid_entry(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("fields:\n  - label: no name\n", encoding="utf-8")
        with pytest.raises(OptionsValidationError, match="Invalid field definition"):
            load_field_definitions(path)

    def test_fields_not_a_list(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("fields:\n  title: Title\n", encoding="utf-8")
        with pytest.raises(OptionsValidationError, match="must be a list"):
            load_field_definitions(path)


class TestSaveOptions:
    """Tests for save_options() round-trip."""

    def test_roundtrip(self, tmp_path):
        opts = RowLayoutOptions(
            layout="twocol",
            default_region="first",
            assigned_regions={"teaser": "second"},
        )
        path = tmp_path / "sub" / "opts.yaml"
        save_options(opts, path)
        assert load_options(path) == opts

    def test_roundtrip_with_fields(self, tmp_path):
        opts = RowLayoutOptions(layout="onecol", default_region="content")
        fields = {
            "title": FieldDefinition(name="title", label="Title"),
            "nid": FieldDefinition(name="nid", exclude=True),
        }
        path = tmp_path / "opts.yaml"
        save_options(opts, path, fields=fields)
        assert load_field_definitions(path) == fields

    def test_header_comment(self, tmp_path):
        path = tmp_path / "opts.yaml"
        save_options(RowLayoutOptions(), path)
        assert path.read_text(encoding="utf-8").startswith("# layout-fields")
