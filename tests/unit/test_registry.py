"""Unit tests for adapter selection."""

from pathlib import Path

import pytest

from tokensmith.config import ExtractionConfig
from tokensmith.errors import SourceNotFoundError, UnsupportedSourceError
from tokensmith.token_adapters import (
    CSSVariablesAdapter,
    ExportFormatAdapter,
    ShadcnThemeAdapter,
    TailwindConfigAdapter,
    TokenAdapterRegistry,
    create_registry,
    get_default_registry,
)


class TestAdapterSelection:
    """Source file names route to the right adapter."""

    @pytest.mark.parametrize(
        "name,adapter_type",
        [
            ("tailwind.config.js", TailwindConfigAdapter),
            ("tailwind.config.ts", TailwindConfigAdapter),
            ("src/app/globals.css", ShadcnThemeAdapter),
            ("app.css", ShadcnThemeAdapter),
            ("styles/tokens.css", CSSVariablesAdapter),
            ("theme.scss", CSSVariablesAdapter),
            ("tokens.json", ExportFormatAdapter),
        ],
    )
    def test_routing(self, name, adapter_type):
        adapter = create_registry().get_adapter(Path(name))

        assert isinstance(adapter, adapter_type)

    def test_unsupported(self):
        assert create_registry().get_adapter(Path("logo.png")) is None

    def test_custom_theme_names(self):
        """Test that configured theme file names route to the shadcn adapter."""
        registry = create_registry(ExtractionConfig(shadcn_css_names=["theme.css"]))

        assert isinstance(registry.get_adapter(Path("theme.css")), ShadcnThemeAdapter)
        assert isinstance(registry.get_adapter(Path("globals.css")), CSSVariablesAdapter)

    def test_semantic_classifier_shared(self):
        registry = create_registry(ExtractionConfig(semantic_color_roles=True))
        css = registry.get_adapter(Path("tokens.css"))

        assert css.classifier.semantic_colors is True

    def test_default_registry_cached(self):
        assert get_default_registry() is get_default_registry()


class TestRegistryExtract:
    """Tests for path-based extraction through the registry."""

    def test_extract_file(self, tmp_path: Path, tokens_css):
        path = tmp_path / "tokens.css"
        path.write_text(tokens_css)

        tokens = create_registry().extract(path)

        assert tokens.radius["radius-md"].value == "8px"

    def test_unsupported_file(self, tmp_path: Path):
        with pytest.raises(UnsupportedSourceError):
            create_registry().extract(tmp_path / "notes.txt")

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(SourceNotFoundError):
            create_registry().extract(tmp_path / "missing.css")

    def test_registration_order(self):
        """Test that the first registered adapter that accepts a file wins."""
        registry = TokenAdapterRegistry()
        registry.register(CSSVariablesAdapter())
        registry.register(ShadcnThemeAdapter())

        assert isinstance(registry.get_adapter(Path("globals.css")), CSSVariablesAdapter)
        assert len(registry.adapters) == 2
