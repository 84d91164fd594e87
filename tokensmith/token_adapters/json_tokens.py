"""JSON design token adapter.

Extracts tokens from hand-written JSON where each category lives under a
known top-level key. Several spellings are accepted for each category:

    colors | color
    typography | fontSize
    spacing | space
    borderRadius | radii
    shadows | boxShadow

Values may be plain strings or ``{"value": ..., "description": ...}``
wrappers. Unrecognized top-level keys are ignored.
"""

import json
from typing import Any

from ..normalizer import infer_typography_category
from ..tokens import CATEGORY_TOKEN_TYPES, Category, DesignTokens
from ..values import extract_tokens
from .base import TokenAdapter

# (category, accepted top-level keys in lookup order)
CATEGORY_SLOTS: tuple[tuple[Category, tuple[str, ...]], ...] = (
    (Category.COLOR, ("colors", "color")),
    (Category.FONT_SIZE, ("typography", "fontSize")),
    (Category.SPACING, ("spacing", "space")),
    (Category.RADIUS, ("borderRadius", "radii")),
    (Category.SHADOW, ("shadows", "boxShadow")),
)


def find_slot(data: dict[str, Any], keys: tuple[str, ...]) -> tuple[str, dict] | None:
    """Return the first ``(key, object)`` among ``keys`` holding an object."""
    for key in keys:
        value = data.get(key)
        if isinstance(value, dict):
            return key, value
    return None


class JSONTokenAdapter(TokenAdapter):
    """Adapter for category-keyed JSON token documents.

    This is the format of the paste box: a JSON object with top-level
    ``colors``, ``spacing`` and ``borderRadius`` maps.
    """

    name = "json"

    @property
    def supported_extensions(self) -> list[str]:
        """File extensions this adapter can handle."""
        return [".json"]

    def _extract(self, content: str) -> DesignTokens:
        return self._extract_from_data(json.loads(content))

    def extract_from_data(
        self, data: Any, source_name: str = "inline"
    ) -> DesignTokens:
        """Extract tokens from already-parsed JSON data.

        Args:
            data: Parsed JSON value. Non-objects yield an empty result.
            source_name: Name to use in log messages.
        """
        return self._guarded(self._extract_from_data, data, source_name)

    def _extract_from_data(self, data: Any) -> DesignTokens:
        tokens = DesignTokens()
        if not isinstance(data, dict):
            return tokens

        for category, keys in CATEGORY_SLOTS:
            slot = find_slot(data, keys)
            if slot is None:
                continue
            slot_key, obj = slot
            extracted = extract_tokens(obj, CATEGORY_TOKEN_TYPES[category])

            if category is Category.FONT_SIZE:
                # Under "fontSize" every entry is a size; under "typography"
                # the subtype comes from the key
                tokens.ensure_map(Category.FONT_SIZE)
                for key, token in extracted.items():
                    subtype = (
                        Category.FONT_SIZE
                        if slot_key == "fontSize"
                        else infer_typography_category(key)
                    )
                    tokens.add_token(subtype, key, token.value, token.description)
                continue

            tokens.ensure_map(category)
            for key, token in extracted.items():
                tokens.add_token(category, key, token.value, token.description)

        return tokens
