"""CSS Variables token adapter.

Extracts design tokens from CSS files containing :root custom properties.
"""

import re

from ..classifier import KeyClassifier, get_classifier
from ..token_logging import LogCategory, get_category_logger
from ..tokens import Category, DesignTokens
from .base import TokenAdapter
from .scanning import iter_blocks, strip_comments

logger = get_category_logger(LogCategory.EXTRACTION)

# ":root {" and selector lists such as ":root, :host {"; not ":root.dark {"
ROOT_BLOCK = re.compile(r"(?<![\w-]):root\s*(?:,[^{};]*)?\{", re.IGNORECASE)
CUSTOM_PROPERTY = re.compile(r"--([\w-]+)\s*:\s*([^;]+?)\s*(?:;|$)")


def iter_custom_properties(block: str):
    """Yield ``(name, value)`` for each ``--name: value`` declaration."""
    for match in CUSTOM_PROPERTY.finditer(block):
        name = match.group(1).strip()
        value = match.group(2).strip()
        if name and value:
            yield name, value


class CSSVariablesAdapter(TokenAdapter):
    """Adapter for extracting design tokens from CSS custom properties.

    Every ``:root`` block is scanned (with balanced braces, so nested
    at-rules do not truncate it) and each ``--name: value`` declaration is
    bucketed by the key classifier. For example ``--radius-md: 8px`` lands
    in ``radius`` and ``--shadow-sm: 0 1px 2px ...`` in ``shadows``.
    Declarations the classifier cannot place are dropped.
    """

    name = "css"

    def __init__(self, classifier: KeyClassifier | None = None) -> None:
        self.classifier = classifier or get_classifier()

    @property
    def supported_extensions(self) -> list[str]:
        """File extensions this adapter can handle."""
        return [".css", ".scss", ".less"]

    def _extract(self, content: str) -> DesignTokens:
        tokens = DesignTokens()
        cleaned = strip_comments(content, line_comments=False)

        for block in iter_blocks(cleaned, ROOT_BLOCK):
            for name, value in iter_custom_properties(block.body):
                category = self.classifier.classify(name)
                if category is Category.UNCLASSIFIED:
                    continue
                if category is Category.OPACITY:
                    opacity = self._parse_opacity(value)
                    if opacity is None:
                        logger.debug(f"Skipping non-numeric opacity --{name}: {value}")
                        continue
                    tokens.add_token(category, name, opacity)
                else:
                    tokens.add_token(category, name, value)

        return tokens

    @staticmethod
    def _parse_opacity(value: str) -> float | None:
        """Parse ``0.5`` or ``50%`` into a number between 0 and 1."""
        text = value.strip()
        try:
            if text.endswith("%"):
                return float(text[:-1]) / 100
            return float(text)
        except ValueError:
            return None
