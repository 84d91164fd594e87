"""Unit tests for the category-keyed JSON adapter."""

import json
from pathlib import Path

import pytest

from tokensmith.errors import SourceNotFoundError
from tokensmith.token_adapters.json_tokens import JSONTokenAdapter, find_slot
from tokensmith.tokens import TokenType


@pytest.fixture
def adapter():
    return JSONTokenAdapter()


class TestCategoryAliases:
    """Each category accepts several top-level spellings."""

    def test_color_alias(self, adapter):
        """Test that 'color' and 'colors' give the same result."""
        plural = adapter.extract_from_data({"colors": {"primary": "221 83% 53%"}})
        singular = adapter.extract_from_data({"color": {"primary": "221 83% 53%"}})

        assert plural == singular
        assert plural.colors["primary"].value == "221 83% 53%"

    def test_structural_aliases(self, adapter):
        """Test space, radii and boxShadow aliases."""
        tokens = adapter.extract_from_data(
            {
                "space": {"sm": "8px"},
                "radii": {"md": "6px"},
                "boxShadow": {"card": "0 1px 2px #0001"},
            }
        )

        assert tokens.spacing["sm"].value == "8px"
        assert tokens.radius["md"].value == "6px"
        assert tokens.shadows["card"].value == "0 1px 2px #0001"

    def test_first_alias_wins(self, adapter):
        """Test that the primary spelling is preferred when both exist."""
        tokens = adapter.extract_from_data(
            {"colors": {"a": "#000"}, "color": {"b": "#fff"}}
        )

        assert set(tokens.colors) == {"a"}


class TestValues:
    """Tests for value handling."""

    def test_value_wrapper(self, adapter):
        """Test that wrapped values are unwrapped."""
        tokens = adapter.extract_from_data(
            {"colors": {"primary": {"value": "#2563eb", "description": "Brand"}}}
        )

        assert tokens.colors["primary"].value == "#2563eb"
        assert tokens.colors["primary"].type is TokenType.COLOR
        assert tokens.colors["primary"].description == "Brand"

    def test_blank_values_dropped(self, adapter):
        """Test that empty strings never become tokens."""
        tokens = adapter.extract_from_data({"spacing": {"none": "", "sm": "4px"}})

        assert set(tokens.spacing) == {"sm"}

    def test_unknown_keys_ignored(self, adapter):
        """Test that unrecognized top-level keys are ignored."""
        tokens = adapter.extract_from_data({"version": "1.0", "colors": {"a": "#000"}})

        assert tokens.to_dict().keys() == {"colors"}

    def test_present_but_empty_category(self, adapter):
        """Test that a category present with no usable values is empty, not absent."""
        tokens = adapter.extract_from_data({"colors": {"a": ""}})

        assert tokens.colors == {}
        assert tokens.spacing is None


class TestTypographySlot:
    """Tests for typography subtype handling."""

    def test_typography_infers_subtype(self, adapter):
        """Test that keys under 'typography' are classified by name."""
        tokens = adapter.extract_from_data(
            {
                "typography": {
                    "font-sans": "Inter, sans-serif",
                    "text-lg": "1.125rem",
                    "font-weight-bold": "700",
                    "leading-tight": "1.25",
                }
            }
        )

        assert "font-sans" in tokens.typography.font_family
        assert "text-lg" in tokens.typography.font_size
        assert "font-weight-bold" in tokens.typography.font_weight
        assert "leading-tight" in tokens.typography.line_height

    def test_font_size_alias_is_sizes(self, adapter):
        """Test that every entry under 'fontSize' is a font size."""
        tokens = adapter.extract_from_data({"fontSize": {"sm": "0.875rem", "font-x": "1rem"}})

        assert set(tokens.typography.font_size) == {"sm", "font-x"}
        assert tokens.typography.font_family == {}


class TestNonObjects:
    """Non-object input degrades to empty results."""

    def test_array(self, adapter):
        assert adapter.extract_from_data(["a"]).total_tokens == 0

    def test_malformed_content(self, adapter, caplog):
        """Test that bad JSON text logs a warning and returns empty tokens."""
        tokens = adapter.extract_from_content("{ invalid", "broken.json")

        assert tokens.to_dict() == {}
        assert "broken.json" in caplog.text


class TestFileExtraction:
    """Tests for path-based extraction."""

    def test_extract_file(self, adapter, tmp_path: Path):
        path = tmp_path / "tokens.json"
        path.write_text(json.dumps({"borderRadius": {"lg": "12px"}}))

        tokens = adapter.extract(path)

        assert tokens.radius["lg"].value == "12px"

    def test_missing_file(self, adapter, tmp_path: Path):
        with pytest.raises(SourceNotFoundError):
            adapter.extract(tmp_path / "missing.json")

    def test_can_handle(self, adapter):
        assert adapter.can_handle(Path("tokens.json"))
        assert not adapter.can_handle(Path("tokens.css"))


class TestFindSlot:
    """Tests for find_slot."""

    def test_skips_non_objects(self):
        assert find_slot({"colors": "red", "color": {"a": "#000"}}, ("colors", "color")) == (
            "color",
            {"a": "#000"},
        )

    def test_missing(self):
        assert find_slot({}, ("colors",)) is None
