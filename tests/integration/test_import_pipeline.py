"""Integration tests for multi-source token import.

Exercises the full path from source files through adapter selection,
input limits, precedence-ordered merge, color normalization and export.
"""

import json
import logging
from pathlib import Path

import pytest

from tokensmith import (
    ExtractionConfig,
    ExportTarget,
    SourceFile,
    TokenExporter,
    TokenImporter,
    import_files,
    to_full_tokens,
    to_simple_tokens,
)
from tokensmith.errors import SourceNotFoundError, UnsupportedSourceError

pytestmark = pytest.mark.integration


def tailwind_source(colors: dict[str, str]) -> SourceFile:
    body = json.dumps({"theme": {"extend": {"colors": colors}}})
    return SourceFile("tailwind.config.js", f"module.exports = {body};\n")


def css_source(name: str, declarations: str) -> SourceFile:
    return SourceFile(name, f":root {{\n{declarations}\n}}\n")


def json_source(data: dict) -> SourceFile:
    return SourceFile("tokens.json", json.dumps(data))


class TestMergePrecedence:
    """Later stages override earlier ones regardless of listing order."""

    def test_stage_order(self):
        sources = [
            json_source({"colors": {"color-brand": "#000003"}}),
            css_source("tokens.css", "  --color-brand: #000002;"),
            tailwind_source({"color-brand": "#000001", "color-accent": "#0000aa"}),
        ]

        result = TokenImporter().import_sources(sources)

        assert result.tokens.colors["color-brand"].value == "#000003"
        assert result.tokens.colors["color-accent"].value == "#0000aa"
        assert result.sources == ["tailwind.config.js", "tokens.css", "tokens.json"]

    def test_css_overrides_tailwind(self):
        sources = [
            css_source("tokens.css", "  --color-brand: #000002;"),
            tailwind_source({"color-brand": "#000001"}),
        ]

        result = TokenImporter().import_sources(sources)

        assert result.tokens.colors["color-brand"].value == "#000002"

    def test_stylesheets_keep_listing_order(self):
        """Test that the last listed stylesheet wins within the CSS stage."""
        sources = [
            css_source("a.css", "  --radius-md: 4px;"),
            css_source("b.css", "  --radius-md: 8px;"),
        ]

        result = TokenImporter().import_sources(sources)

        assert result.tokens.radius["radius-md"].value == "8px"

    def test_project_files(self, token_project: Path):
        """Test importing one source of each kind from disk."""
        paths = [
            token_project / "tokens.json",
            token_project / "styles" / "tokens.css",
            token_project / "styles" / "globals.css",
            token_project / "tailwind.config.js",
        ]

        result = import_files(paths)
        tokens = result.tokens

        assert result.sources[0].endswith("tailwind.config.js")
        assert result.sources[-1].endswith("tokens.json")
        # Tokens Studio export wins for the shared radius key
        assert tokens.radius["md"].value == "6px"
        assert tokens.colors["primary"].description == "Brand"
        assert tokens.colors["blue-500"].value == "#3b82f6"
        assert tokens.colors["dark-background"].value == "222.2 84% 4.9%"
        assert tokens.colors["color-primary"].value == "#2563eb"
        assert tokens.typography.font_family["font-sans"].value == [
            "Inter",
            "system-ui",
            "sans-serif",
        ]
        assert result.has_content


class TestInputLimits:
    """Tests for the stylesheet cap and the size limit."""

    def test_css_file_limit(self):
        config = ExtractionConfig(max_css_files=1)
        sources = [
            css_source("a.css", "  --radius-sm: 2px;"),
            css_source("b.css", "  --radius-lg: 12px;"),
        ]

        result = TokenImporter(config).import_sources(sources)

        assert set(result.tokens.radius) == {"radius-sm"}
        assert [s.to_dict() for s in result.skipped] == [
            {"name": "b.css", "reason": "css file limit reached"}
        ]

    def test_limit_does_not_apply_to_other_stages(self):
        config = ExtractionConfig(max_css_files=0)
        sources = [
            css_source("a.css", "  --radius-sm: 2px;"),
            json_source({"spacing": {"sm": "8px"}}),
        ]

        result = TokenImporter(config).import_sources(sources)

        assert result.sources == ["tokens.json"]
        assert result.tokens.radius is None
        assert result.tokens.spacing["sm"].value == "8px"

    def test_oversized_source_skipped(self, caplog):
        config = ExtractionConfig(max_input_bytes=64)
        big = css_source("big.css", "\n".join(f"  --spacing-{i}: {i}px;" for i in range(20)))

        with caplog.at_level(logging.WARNING, logger="tokensmith"):
            result = TokenImporter(config).import_sources(
                [big, json_source({"colors": {"a": "#000"}})]
            )

        assert result.skipped[0].reason == "input too large"
        assert result.tokens.spacing is None
        assert result.tokens.colors["a"].value == "#000"
        assert "big.css" in caplog.text

    def test_oversized_stylesheet_keeps_css_slot_free(self):
        """Test that a skipped oversized stylesheet does not use up the cap."""
        config = ExtractionConfig(max_css_files=1, max_input_bytes=64)
        big = css_source("big.css", "\n".join(f"  --spacing-{i}: {i}px;" for i in range(20)))

        result = TokenImporter(config).import_sources(
            [big, css_source("small.css", "  --radius-sm: 2px;")]
        )

        assert set(result.tokens.radius) == {"radius-sm"}
        assert [s.to_dict() for s in result.skipped] == [
            {"name": "big.css", "reason": "input too large"}
        ]
        assert result.sources == ["small.css"]

    def test_oversized_file_not_read(self, tmp_path: Path):
        path = tmp_path / "tokens.css"
        path.write_text(":root { --radius-md: 8px; }" + " " * 200)

        result = import_files([path], ExtractionConfig(max_input_bytes=100))

        assert result.skipped[0].to_dict() == {"name": str(path), "reason": "input too large"}
        assert not result.has_content


class TestFailures:
    """A bad source never aborts the import; unknown ones do."""

    def test_broken_source_contributes_nothing(self, caplog):
        sources = [
            SourceFile("tokens.json", "{ not json"),
            css_source("tokens.css", "  --radius-md: 8px;"),
        ]

        with caplog.at_level(logging.WARNING, logger="tokensmith"):
            result = TokenImporter().import_sources(sources)

        assert result.tokens.radius["radius-md"].value == "8px"
        assert result.tokens.colors is None
        assert "tokens.json" in result.sources

    def test_unsupported_source(self):
        with pytest.raises(UnsupportedSourceError):
            TokenImporter().import_sources([SourceFile("logo.png", "")])

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(SourceNotFoundError):
            import_files([tmp_path / "tokens.css"])

    def test_no_sources(self):
        result = TokenImporter().import_sources([])

        assert result.tokens.total_tokens == 0
        assert not result.has_content


class TestNormalization:
    """Tests for optional color normalization."""

    def test_normalize_colors(self):
        sources = [
            json_source(
                {"colors": {"red": "#ff0000", "ring": "221 83% 53%", "edge": "currentColor"}}
            )
        ]

        result = TokenImporter(ExtractionConfig(normalize_colors=True)).import_sources(sources)
        colors = result.simple.colors

        assert colors["red"] == "0 100% 50%"
        assert colors["ring"] == "221 83% 53%"
        assert colors["edge"] == "currentColor"

    def test_colors_untouched_by_default(self):
        result = TokenImporter().import_sources([json_source({"colors": {"red": "#ff0000"}})])

        assert result.simple.colors == {"red": "#ff0000"}


class TestStorageAndExport:
    """Merged results survive storage and re-import."""

    def test_stored_form_is_stable(self, token_project: Path):
        result = import_files(
            [
                token_project / "tailwind.config.js",
                token_project / "styles" / "tokens.css",
                token_project / "tokens.json",
            ]
        )

        simple = result.simple

        assert to_simple_tokens(to_full_tokens(simple)) == simple

    def test_result_to_dict(self, token_project: Path):
        result = import_files([token_project / "styles" / "globals.css"])

        data = result.to_dict()

        assert data["summary"]["colors"] == 5
        assert data["skipped"] == []
        assert data["execution_time_ms"] >= 0

    def test_tailwind_export_reimports(self, tmp_path: Path, tokens_css):
        """Test that an exported Tailwind config extracts back to the same values."""
        original = TokenImporter().import_sources([css_source("tokens.css", tokens_css)])
        exported = tmp_path / "tailwind.config.js"
        TokenExporter().export(original.simple, ExportTarget.TAILWIND, exported)

        reimported = import_files([exported])

        assert reimported.tokens.colors["color-primary"].value == "#2563eb"
        assert reimported.tokens.spacing["spacing-4"].value == "1rem"
        assert reimported.tokens.radius["radius-md"].value == "8px"

    def test_tokens_studio_export_reimports(self, tmp_path: Path, tokens_css):
        original = TokenImporter().import_sources([css_source("tokens.css", tokens_css)])
        exported = tmp_path / "tokens.json"
        TokenExporter().export(original.simple, ExportTarget.TOKENS_STUDIO, exported)

        reimported = import_files([exported])

        assert reimported.simple.colors == original.simple.colors
        assert reimported.simple.spacing == original.simple.spacing
        assert reimported.simple.radius == original.simple.radius
