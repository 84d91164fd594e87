"""Design-tool export token adapter.

Figma plugins and token tools export JSON in incompatible shapes. This
adapter detects which one it received and routes it to a matching
strategy:

1. Tokens Studio: has ``$themes`` or ``global``. Tokens are read from the
   ``global`` set, or from the first token set when there is none.
2. Simple: has ``colors``, ``spacing`` or ``typography`` at the top level.
3. Nested: anything else. The document is flattened into ``a-b-c`` keys
   and each key is bucketed by the key classifier.
"""

import json
from enum import Enum
from typing import Any

from ..classifier import KeyClassifier, get_classifier
from ..normalizer import infer_animation_category, infer_typography_category
from ..tokens import Category, DesignTokens
from ..values import (
    flatten_token_tree,
    is_usable_value,
    unwrap_description,
    unwrap_token_value,
)
from .base import TokenAdapter
from .json_tokens import find_slot


class ExportFormat(Enum):
    """Detected shape of an export document."""

    TOKENS_STUDIO = "tokens_studio"
    SIMPLE = "simple"
    NESTED = "nested"
    UNKNOWN = "unknown"


# Category dispatch shared by the Tokens Studio and simple strategies
STRUCTURAL_SLOTS: tuple[tuple[Category, tuple[str, ...]], ...] = (
    (Category.COLOR, ("colors", "color")),
    (Category.SPACING, ("spacing", "space")),
    (Category.RADIUS, ("borderRadius", "radii", "radius")),
    (Category.SHADOW, ("shadows", "boxShadow")),
)

# Storage names of the remaining flat categories, accepted by the simple
# strategy so stored SimpleDesignTokens JSON can be re-imported
EXTRA_SIMPLE_SLOTS: tuple[tuple[Category, tuple[str, ...]], ...] = (
    (Category.BORDER, ("borders",)),
    (Category.OPACITY, ("opacity",)),
)

SIMPLE_MARKERS = ("colors", "spacing", "typography")
TOKENS_STUDIO_MARKERS = ("$themes", "global")

# Only these categories are reconstructed from arbitrary nesting
NESTED_CATEGORIES = (
    Category.COLOR,
    Category.SPACING,
    Category.RADIUS,
    Category.SHADOW,
)


def detect_format(raw: Any) -> ExportFormat:
    """Detect the export shape of a parsed JSON document."""
    if not isinstance(raw, dict):
        return ExportFormat.UNKNOWN
    if any(marker in raw for marker in TOKENS_STUDIO_MARKERS):
        return ExportFormat.TOKENS_STUDIO
    if any(raw.get(marker) is not None for marker in SIMPLE_MARKERS):
        return ExportFormat.SIMPLE
    return ExportFormat.NESTED


class ExportFormatAdapter(TokenAdapter):
    """Adapter for Figma / Tokens Studio style JSON exports.

    Descriptions are kept. Nested groups inside a category
    (``color.blue.500``) are flattened to ``blue-500`` before values are
    read; an object with a ``value`` field is always a leaf.
    """

    name = "export"

    def __init__(self, classifier: KeyClassifier | None = None) -> None:
        self.classifier = classifier or get_classifier()

    @property
    def supported_extensions(self) -> list[str]:
        """File extensions this adapter can handle."""
        return [".json"]

    def _extract(self, content: str) -> DesignTokens:
        return self.parse(json.loads(content))

    def extract_from_data(self, data: Any, source_name: str = "inline") -> DesignTokens:
        """Parse already-decoded JSON, never raising."""
        return self._guarded(self.parse, data, source_name)

    def parse(self, raw: Any) -> DesignTokens:
        """Parse an export document into DesignTokens.

        Returns an empty DesignTokens when the input is not an object or
        none of the strategies find data.
        """
        export_format = detect_format(raw)
        if export_format is ExportFormat.TOKENS_STUDIO:
            return self._parse_tokens_studio(raw)
        if export_format is ExportFormat.SIMPLE:
            return self._parse_simple(raw)
        if export_format is ExportFormat.NESTED:
            return self._parse_nested(raw)
        return DesignTokens()

    # ------------------------------------------------------------------
    # Strategies
    # ------------------------------------------------------------------

    def _parse_tokens_studio(self, raw: dict[str, Any]) -> DesignTokens:
        tokens = DesignTokens()
        token_set = self._select_token_set(raw)
        if token_set is None:
            return tokens

        for category, keys in STRUCTURAL_SLOTS:
            slot = find_slot(token_set, keys)
            if slot is not None:
                self._add_category(tokens, category, slot[1])
        return tokens

    @staticmethod
    def _select_token_set(raw: dict[str, Any]) -> dict[str, Any] | None:
        """The ``global`` set, else the first non-metadata object."""
        if isinstance(raw.get("global"), dict):
            return raw["global"]
        for key, value in raw.items():
            if not key.startswith("$") and isinstance(value, dict):
                return value
        return None

    def _parse_simple(self, raw: dict[str, Any]) -> DesignTokens:
        tokens = DesignTokens()

        for category, keys in STRUCTURAL_SLOTS + EXTRA_SIMPLE_SLOTS:
            slot = find_slot(raw, keys)
            if slot is not None:
                self._add_category(tokens, category, slot[1])

        if isinstance(raw.get("typography"), dict):
            tokens.ensure_map(Category.FONT_SIZE)
            for key, entry in flatten_token_tree(raw["typography"]).items():
                self._add_entry(
                    tokens, infer_typography_category(key), key, entry
                )

        if isinstance(raw.get("animation"), dict):
            tokens.ensure_map(Category.DURATION)
            for key, entry in flatten_token_tree(raw["animation"]).items():
                self._add_entry(tokens, infer_animation_category(key), key, entry)

        return tokens

    def _parse_nested(self, raw: dict[str, Any]) -> DesignTokens:
        tokens = DesignTokens()
        for key, entry in flatten_token_tree(raw).items():
            category = self.classifier.classify(key)
            if category not in NESTED_CATEGORIES:
                continue
            value = unwrap_token_value(entry)
            if not is_usable_value(value):
                continue
            tokens.add_token(
                category,
                key,
                str(value).strip(),
                description=unwrap_description(entry),
            )
        return tokens

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _add_category(
        self, tokens: DesignTokens, category: Category, obj: dict[str, Any]
    ) -> None:
        tokens.ensure_map(category)
        for key, entry in flatten_token_tree(obj).items():
            self._add_entry(tokens, category, key, entry)

    @staticmethod
    def _add_entry(
        tokens: DesignTokens, category: Category, key: str, entry: Any
    ) -> None:
        """Store one raw entry, dropping values that cannot be used."""
        value = unwrap_token_value(entry)
        if not is_usable_value(value):
            return

        if category is Category.OPACITY:
            try:
                value = float(value)
            except ValueError:
                return
        elif isinstance(value, str):
            value = value.strip()

        tokens.add_token(category, key, value, description=unwrap_description(entry))


def parse_export_tokens(raw: Any, semantic_colors: bool = False) -> DesignTokens:
    """Parse a decoded export document with a fresh adapter."""
    adapter = ExportFormatAdapter(classifier=get_classifier(semantic_colors))
    return adapter.extract_from_data(raw)
