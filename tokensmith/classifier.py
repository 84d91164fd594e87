"""Key classification.

Sources share no schema, so a token's category is inferred from its key
name with keyword substring matching. Rules are evaluated in a fixed
priority order so that keys matching several keyword sets always resolve
the same way (``border-radius-lg`` is a radius, not a color).

Keyword sets are versioned: bump ``KEYWORD_SET_VERSION`` whenever a rule
changes, since stored classifications depend on it.
"""

import functools
import re

from .tokens import Category

KEYWORD_SET_VERSION = 2

SHADOW_KEYWORDS = ("shadow",)
RADIUS_KEYWORDS = ("radius", "radii")
SPACING_KEYWORDS = ("space", "spacing", "gap", "padding", "margin")
COLOR_KEYWORDS = ("color", "background", "foreground", "border")

# Only consulted when semantic color roles are enabled
SEMANTIC_COLOR_KEYWORDS = (
    "primary",
    "secondary",
    "accent",
    "muted",
    "destructive",
    "success",
    "warning",
    "info",
    "card",
    "popover",
    "ring",
    "input",
)

TYPOGRAPHY_RULES: tuple[tuple[Category, tuple[str, ...]], ...] = (
    (Category.FONT_FAMILY, ("font-family",)),
    (Category.FONT_SIZE, ("text-", "size")),
    (Category.FONT_WEIGHT, ("weight",)),
    (Category.LINE_HEIGHT, ("leading", "line-height")),
    (Category.LETTER_SPACING, ("tracking",)),
)

# Evaluated after typography, so they only claim otherwise-unclassified keys
ANIMATION_RULES: tuple[tuple[Category, tuple[str, ...]], ...] = (
    (Category.DURATION, ("duration",)),
    (Category.EASING, ("easing", "ease")),
)
OPACITY_KEYWORDS = ("opacity",)
BORDER_KEYWORDS = ("stroke", "outline")

NUMERIC_KEY = re.compile(r"\d+(?:\.\d+)?")


def _contains_any(key: str, keywords: tuple[str, ...]) -> bool:
    return any(keyword in key for keyword in keywords)


class KeyClassifier:
    """Assigns token keys to semantic categories.

    Args:
        semantic_colors: Also treat semantic role names (``primary``,
            ``muted``, ``destructive``...) as colors. Off by default, which
            keeps the narrow legacy keyword set.
    """

    def __init__(self, semantic_colors: bool = False) -> None:
        self.semantic_colors = semantic_colors
        color_keywords = COLOR_KEYWORDS
        if semantic_colors:
            color_keywords = COLOR_KEYWORDS + SEMANTIC_COLOR_KEYWORDS
        self._rules: tuple[tuple[Category, tuple[str, ...]], ...] = (
            (Category.SHADOW, SHADOW_KEYWORDS),
            (Category.RADIUS, RADIUS_KEYWORDS),
            (Category.SPACING, SPACING_KEYWORDS),
            (Category.COLOR, color_keywords),
            *TYPOGRAPHY_RULES,
            *ANIMATION_RULES,
            (Category.OPACITY, OPACITY_KEYWORDS),
            (Category.BORDER, BORDER_KEYWORDS),
        )

    @property
    def rules(self) -> tuple[tuple[Category, tuple[str, ...]], ...]:
        """Ordered (category, keywords) rules, highest priority first."""
        return self._rules

    def classify(self, key: str) -> Category:
        """Classify a flattened key name.

        Args:
            key: Token key, e.g. ``"border-radius-lg"`` or ``"4"``.

        Returns:
            The first matching category, or ``Category.UNCLASSIFIED``.
        """
        lower_key = key.strip().lower()
        if not lower_key:
            return Category.UNCLASSIFIED

        for category, keywords in self._rules:
            if _contains_any(lower_key, keywords):
                return category
            # Bare numeric keys ("4", "0.5") are spacing scale steps
            if category is Category.SPACING and NUMERIC_KEY.fullmatch(lower_key):
                return category

        return Category.UNCLASSIFIED


@functools.lru_cache(maxsize=None)
def _shared_classifier(semantic_colors: bool) -> KeyClassifier:
    return KeyClassifier(semantic_colors=semantic_colors)


def get_classifier(semantic_colors: bool = False) -> KeyClassifier:
    """Return the shared narrow classifier or the shared semantic-role variant."""
    return _shared_classifier(bool(semantic_colors))


def classify(key: str) -> Category:
    """Classify a key with the default (narrow) keyword set."""
    return get_classifier().classify(key)
