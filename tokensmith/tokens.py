"""Design token models.

This module defines the typed token model (``DesignTokens``) and its flat
storage projection (``SimpleDesignTokens``). Every category is optional:
``None`` means no source contributed that category, which is distinct from
an empty mapping.
"""

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any

TokenValue = str | int | float | list[str]


class TokenType(Enum):
    """Closed set of token types."""

    COLOR = "color"
    DIMENSION = "dimension"
    FONT_FAMILY = "fontFamily"
    FONT_WEIGHT = "fontWeight"
    FONT_SIZE = "fontSize"
    LINE_HEIGHT = "lineHeight"
    LETTER_SPACING = "letterSpacing"
    SHADOW = "shadow"
    DURATION = "duration"
    CUBIC_BEZIER = "cubicBezier"
    BORDER = "border"
    OPACITY = "opacity"


class Category(Enum):
    """Semantic bucket a token key is classified into."""

    COLOR = "colors"
    SPACING = "spacing"
    RADIUS = "radius"
    SHADOW = "shadows"
    FONT_FAMILY = "fontFamily"
    FONT_SIZE = "fontSize"
    FONT_WEIGHT = "fontWeight"
    LINE_HEIGHT = "lineHeight"
    LETTER_SPACING = "letterSpacing"
    DURATION = "duration"
    EASING = "easing"
    OPACITY = "opacity"
    BORDER = "borders"
    UNCLASSIFIED = "unclassified"

    @property
    def is_typography(self) -> bool:
        return self in TYPOGRAPHY_CATEGORIES

    @property
    def is_animation(self) -> bool:
        return self in (Category.DURATION, Category.EASING)


TYPOGRAPHY_CATEGORIES = (
    Category.FONT_FAMILY,
    Category.FONT_SIZE,
    Category.FONT_WEIGHT,
    Category.LINE_HEIGHT,
    Category.LETTER_SPACING,
)

CATEGORY_TOKEN_TYPES: dict[Category, TokenType] = {
    Category.COLOR: TokenType.COLOR,
    Category.SPACING: TokenType.DIMENSION,
    Category.RADIUS: TokenType.DIMENSION,
    Category.SHADOW: TokenType.SHADOW,
    Category.FONT_FAMILY: TokenType.FONT_FAMILY,
    Category.FONT_SIZE: TokenType.FONT_SIZE,
    Category.FONT_WEIGHT: TokenType.FONT_WEIGHT,
    Category.LINE_HEIGHT: TokenType.LINE_HEIGHT,
    Category.LETTER_SPACING: TokenType.LETTER_SPACING,
    Category.DURATION: TokenType.DURATION,
    Category.EASING: TokenType.CUBIC_BEZIER,
    Category.OPACITY: TokenType.OPACITY,
    Category.BORDER: TokenType.BORDER,
}

# DesignTokens attribute holding each flat (non-grouped) category
FLAT_CATEGORY_FIELDS: dict[Category, str] = {
    Category.COLOR: "colors",
    Category.SPACING: "spacing",
    Category.RADIUS: "radius",
    Category.SHADOW: "shadows",
    Category.BORDER: "borders",
    Category.OPACITY: "opacity",
}


@dataclass
class Token:
    """A single named design decision."""

    value: TokenValue
    type: TokenType
    description: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data: dict[str, Any] = {"value": self.value, "type": self.type.value}
        if self.description is not None:
            data["description"] = self.description
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Token":
        """Create from dictionary."""
        return cls(
            value=data["value"],
            type=TokenType(data["type"]),
            description=data.get("description"),
        )


def _map_to_dict(tokens: dict[str, Token]) -> dict[str, Any]:
    return {k: v.to_dict() for k, v in tokens.items()}


def _map_from_dict(data: dict[str, Any] | None) -> dict[str, Token]:
    return {k: Token.from_dict(v) for k, v in (data or {}).items()}


@dataclass
class TypographyTokens:
    """Typography tokens split into one map per subtype."""

    font_family: dict[str, Token] = field(default_factory=dict)
    font_size: dict[str, Token] = field(default_factory=dict)
    font_weight: dict[str, Token] = field(default_factory=dict)
    line_height: dict[str, Token] = field(default_factory=dict)
    letter_spacing: dict[str, Token] = field(default_factory=dict)

    # attribute name -> serialized (camelCase) name
    SUB_MAPS = {
        "font_family": "fontFamily",
        "font_size": "fontSize",
        "font_weight": "fontWeight",
        "line_height": "lineHeight",
        "letter_spacing": "letterSpacing",
    }

    def sub_map(self, category: Category) -> dict[str, Token]:
        """Return the sub-map that stores tokens of a typography category."""
        for attr, name in self.SUB_MAPS.items():
            if name == category.value:
                return getattr(self, attr)
        raise ValueError(f"Not a typography category: {category}")

    def items(self) -> list[tuple[str, Token]]:
        """All (key, token) pairs in sub-map order."""
        pairs: list[tuple[str, Token]] = []
        for attr in self.SUB_MAPS:
            pairs.extend(getattr(self, attr).items())
        return pairs

    @property
    def total_tokens(self) -> int:
        return sum(len(getattr(self, attr)) for attr in self.SUB_MAPS)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            name: _map_to_dict(getattr(self, attr))
            for attr, name in self.SUB_MAPS.items()
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TypographyTokens":
        """Create from dictionary."""
        return cls(
            **{
                attr: _map_from_dict(data.get(name))
                for attr, name in cls.SUB_MAPS.items()
            }
        )


@dataclass
class AnimationTokens:
    """Animation tokens split into durations and easing curves."""

    duration: dict[str, Token] = field(default_factory=dict)
    easing: dict[str, Token] = field(default_factory=dict)

    SUB_MAPS = {"duration": "duration", "easing": "easing"}

    def sub_map(self, category: Category) -> dict[str, Token]:
        if category is Category.DURATION:
            return self.duration
        if category is Category.EASING:
            return self.easing
        raise ValueError(f"Not an animation category: {category}")

    def items(self) -> list[tuple[str, Token]]:
        return [*self.duration.items(), *self.easing.items()]

    @property
    def total_tokens(self) -> int:
        return len(self.duration) + len(self.easing)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "duration": _map_to_dict(self.duration),
            "easing": _map_to_dict(self.easing),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AnimationTokens":
        """Create from dictionary."""
        return cls(
            duration=_map_from_dict(data.get("duration")),
            easing=_map_from_dict(data.get("easing")),
        )


@dataclass
class DesignTokens:
    """Typed design tokens aggregated across all categories.

    Produced by every extractor (as a partial result), by the merger, and
    by ``to_full_tokens``. Values are immutable by convention: merge and
    normalize build new objects instead of mutating their inputs.
    """

    colors: dict[str, Token] | None = None
    spacing: dict[str, Token] | None = None
    radius: dict[str, Token] | None = None
    shadows: dict[str, Token] | None = None
    typography: TypographyTokens | None = None
    animation: AnimationTokens | None = None
    borders: dict[str, Token] | None = None
    opacity: dict[str, Token] | None = None

    def ensure_map(self, category: Category) -> dict[str, Token]:
        """Return the map for a category, marking the category present."""
        if category.is_typography:
            if self.typography is None:
                self.typography = TypographyTokens()
            return self.typography.sub_map(category)
        if category.is_animation:
            if self.animation is None:
                self.animation = AnimationTokens()
            return self.animation.sub_map(category)

        attr = FLAT_CATEGORY_FIELDS[category]
        if getattr(self, attr) is None:
            setattr(self, attr, {})
        return getattr(self, attr)

    def add_token(
        self,
        category: Category,
        key: str,
        value: TokenValue,
        description: str | None = None,
    ) -> None:
        """Store a value under the map for its category.

        The token type is derived from the category. Unclassified keys are
        ignored.
        """
        if category is Category.UNCLASSIFIED:
            return

        self.ensure_map(category)[key] = Token(
            value=value,
            type=CATEGORY_TOKEN_TYPES[category],
            description=description,
        )

    def category_counts(self) -> dict[str, int]:
        """Number of tokens per category (absent categories count 0)."""
        counts = {
            attr: len(getattr(self, attr) or {})
            for attr in FLAT_CATEGORY_FIELDS.values()
        }
        counts["typography"] = self.typography.total_tokens if self.typography else 0
        counts["animation"] = self.animation.total_tokens if self.animation else 0
        return counts

    @property
    def total_tokens(self) -> int:
        """Total number of tokens across all categories."""
        return sum(self.category_counts().values())

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization.

        Absent categories are omitted.
        """
        data: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            if isinstance(value, (TypographyTokens, AnimationTokens)):
                data[f.name] = value.to_dict()
            else:
                data[f.name] = _map_to_dict(value)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DesignTokens":
        """Create from dictionary."""
        tokens = cls(
            typography=(
                TypographyTokens.from_dict(data["typography"])
                if data.get("typography") is not None
                else None
            ),
            animation=(
                AnimationTokens.from_dict(data["animation"])
                if data.get("animation") is not None
                else None
            ),
        )
        for attr in FLAT_CATEGORY_FIELDS.values():
            if data.get(attr) is not None:
                setattr(tokens, attr, _map_from_dict(data[attr]))
        return tokens


@dataclass
class SimpleDesignTokens:
    """Flat storage projection of ``DesignTokens``.

    Every category is a plain string map, except opacity which maps to
    numbers. Typography and animation sub-maps are flattened into one map.
    """

    colors: dict[str, str] | None = None
    typography: dict[str, str] | None = None
    spacing: dict[str, str] | None = None
    radius: dict[str, str] | None = None
    shadows: dict[str, str] | None = None
    animation: dict[str, str] | None = None
    borders: dict[str, str] | None = None
    opacity: dict[str, float] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary, omitting absent categories."""
        return {
            f.name: dict(getattr(self, f.name))
            for f in fields(self)
            if getattr(self, f.name) is not None
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SimpleDesignTokens":
        """Create from dictionary.

        Entries with values of the wrong type are dropped.
        """
        simple = cls()
        for f in fields(cls):
            raw = data.get(f.name)
            if not isinstance(raw, dict):
                continue
            if f.name == "opacity":
                setattr(
                    simple,
                    f.name,
                    {
                        k: float(v)
                        for k, v in raw.items()
                        if isinstance(v, (int, float)) and not isinstance(v, bool)
                    },
                )
            else:
                setattr(
                    simple,
                    f.name,
                    {k: v for k, v in raw.items() if isinstance(v, str) and v.strip()},
                )
        return simple

    @property
    def total_tokens(self) -> int:
        return sum(len(getattr(self, f.name) or {}) for f in fields(self))
