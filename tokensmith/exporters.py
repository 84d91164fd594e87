"""Token exporters.

Renders stored ``SimpleDesignTokens`` back into source formats: a CSS
``:root`` block, SCSS variables, a Tailwind config module, plain JSON, or
a Tokens Studio document. Every format except SCSS can be fed back
through the matching extractor.
"""

import json
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from .colors import parse_hsl_triple
from .normalizer import infer_animation_category, infer_typography_category
from .token_logging import LogCategory, get_category_logger
from .tokens import Category, SimpleDesignTokens

logger = get_category_logger(LogCategory.PIPELINE)


class ExportTarget(Enum):
    """Supported output formats."""

    CSS = "css"
    SCSS = "scss"
    TAILWIND = "tailwind"
    JSON = "json"
    TOKENS_STUDIO = "tokens-studio"


@dataclass
class ExportConfig:
    """Configuration for token export."""

    indent: int = 2
    # Split shadcn light-/dark- color keys into :root and .dark blocks
    split_color_schemes: bool = True
    # Wrap bare HSL triples in hsl() where the target needs literal colors
    wrap_hsl: bool = True


# (SimpleDesignTokens field, variable prefix); colors and typography keys
# are already descriptive
VARIABLE_PREFIXES: tuple[tuple[str, str], ...] = (
    ("colors", ""),
    ("typography", ""),
    ("spacing", "spacing"),
    ("radius", "radius"),
    ("shadows", "shadow"),
    ("animation", ""),
    ("borders", "border"),
    ("opacity", "opacity"),
)

SECTION_TITLES = {
    "colors": "Colors",
    "typography": "Typography",
    "spacing": "Spacing",
    "radius": "Radius",
    "shadows": "Shadows",
    "animation": "Animation",
    "borders": "Borders",
    "opacity": "Opacity",
}

TAILWIND_TYPOGRAPHY_KEYS = {
    Category.FONT_FAMILY: "fontFamily",
    Category.FONT_SIZE: "fontSize",
    Category.FONT_WEIGHT: "fontWeight",
    Category.LINE_HEIGHT: "lineHeight",
    Category.LETTER_SPACING: "letterSpacing",
}

TOKENS_STUDIO_TYPOGRAPHY = {
    Category.FONT_FAMILY: ("fontFamilies", "fontFamilies"),
    Category.FONT_SIZE: ("fontSizes", "fontSizes"),
    Category.FONT_WEIGHT: ("fontWeights", "fontWeights"),
    Category.LINE_HEIGHT: ("lineHeights", "lineHeights"),
    Category.LETTER_SPACING: ("letterSpacing", "letterSpacing"),
}

_INVALID_NAME_CHARS = re.compile(r"[^A-Za-z0-9_-]+")
_FAMILY_SPLIT = re.compile(r""",(?=(?:[^"']*["'][^"']*["'])*[^"']*$)""")


def variable_name(prefix: str, key: str) -> str:
    """Build a CSS/SCSS identifier for a token key.

    The prefix is skipped when the key already starts with it, so
    ``radius-md`` stays ``radius-md`` and ``md`` becomes ``radius-md``.
    """
    name = _INVALID_NAME_CHARS.sub("-", key).strip("-") or "token"
    if prefix and name != prefix and not name.startswith(f"{prefix}-"):
        name = f"{prefix}-{name}"
    return name


def format_number(value: float) -> str:
    if value == int(value):
        return str(int(value))
    return repr(value)


def split_font_family(value: str) -> list[str]:
    """Split a CSS font stack into family names, removing quotes."""
    families = []
    for part in _FAMILY_SPLIT.split(value):
        name = part.strip().strip("\"'").strip()
        if name:
            families.append(name)
    return families


class TokenExporter:
    """Renders stored tokens into a target format."""

    def __init__(self, config: ExportConfig | None = None):
        """Initialize the exporter.

        Args:
            config: Optional export configuration.
        """
        self.config = config or ExportConfig()

    def export(
        self,
        tokens: SimpleDesignTokens,
        target: ExportTarget | str,
        output_path: Path | None = None,
    ) -> str:
        """Render tokens in the target format.

        Args:
            tokens: Stored tokens to render.
            target: Output format, as an ExportTarget or its value.
            output_path: Optional path to write the output to.

        Returns:
            The rendered text.

        Raises:
            ValueError: If the target format is unknown.
        """
        target = ExportTarget(target)
        renderers = {
            ExportTarget.CSS: self.to_css,
            ExportTarget.SCSS: self.to_scss,
            ExportTarget.TAILWIND: self.to_tailwind,
            ExportTarget.JSON: self.to_json,
            ExportTarget.TOKENS_STUDIO: self.to_tokens_studio,
        }
        text = renderers[target](tokens)

        if output_path:
            output_path = Path(output_path)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(text, encoding="utf-8")
            logger.info(f"Wrote {target.value} tokens to {output_path}")

        return text

    # ------------------------------------------------------------------
    # Variable-based formats
    # ------------------------------------------------------------------

    def _variables(self, tokens: SimpleDesignTokens) -> list[tuple[str, list[tuple[str, str]]]]:
        """(category field, [(name, value)]) for every non-empty category."""
        sections = []
        for attr, prefix in VARIABLE_PREFIXES:
            values = getattr(tokens, attr)
            if not values:
                continue
            entries = []
            for key, value in values.items():
                text = format_number(value) if isinstance(value, float) else str(value)
                entries.append((variable_name(prefix, key), text))
            sections.append((attr, entries))
        return sections

    def to_css(self, tokens: SimpleDesignTokens) -> str:
        """Render a ``:root`` block, plus ``.dark`` for dark-scheme colors."""
        pad = " " * self.config.indent
        root_lines: list[str] = []
        dark_lines: list[str] = []

        for attr, entries in self._variables(tokens):
            root_lines.append(f"{pad}/* {SECTION_TITLES[attr]} */")
            for name, value in entries:
                if attr == "colors" and self.config.split_color_schemes:
                    if name.startswith("dark-"):
                        dark_lines.append(f"{pad}--{name[5:]}: {value};")
                        continue
                    if name.startswith("light-"):
                        name = name[6:]
                root_lines.append(f"{pad}--{name}: {value};")

        blocks = [":root {\n" + "\n".join(root_lines) + "\n}"]
        if dark_lines:
            blocks.append(".dark {\n" + "\n".join(dark_lines) + "\n}")
        return "\n\n".join(blocks) + "\n"

    def to_scss(self, tokens: SimpleDesignTokens) -> str:
        """Render SCSS variables grouped by category."""
        sections = []
        for attr, entries in self._variables(tokens):
            lines = [f"// {SECTION_TITLES[attr]}"]
            lines.extend(f"${name}: {value};" for name, value in entries)
            sections.append("\n".join(lines))
        return "\n\n".join(sections) + "\n"

    # ------------------------------------------------------------------
    # Structured formats
    # ------------------------------------------------------------------

    def _literal_color(self, value: str) -> str:
        if self.config.wrap_hsl and not value.lstrip().lower().startswith("hsl"):
            if parse_hsl_triple(value) is not None:
                return f"hsl({value})"
        return value

    def to_tailwind(self, tokens: SimpleDesignTokens) -> str:
        """Render a tailwind.config.js module extending the theme."""
        extend: dict[str, Any] = {}

        if tokens.colors:
            extend["colors"] = {k: self._literal_color(v) for k, v in tokens.colors.items()}
        if tokens.spacing:
            extend["spacing"] = dict(tokens.spacing)
        if tokens.radius:
            extend["borderRadius"] = dict(tokens.radius)
        if tokens.shadows:
            extend["boxShadow"] = dict(tokens.shadows)

        for key, value in (tokens.typography or {}).items():
            category = infer_typography_category(key)
            theme_key = TAILWIND_TYPOGRAPHY_KEYS[category]
            rendered: Any = (
                split_font_family(value) if category is Category.FONT_FAMILY else value
            )
            extend.setdefault(theme_key, {})[key] = rendered

        for key, value in (tokens.animation or {}).items():
            theme_key = (
                "transitionDuration"
                if infer_animation_category(key) is Category.DURATION
                else "transitionTimingFunction"
            )
            extend.setdefault(theme_key, {})[key] = value

        if tokens.borders:
            extend["borderWidth"] = dict(tokens.borders)
        if tokens.opacity:
            extend["opacity"] = {k: format_number(v) for k, v in tokens.opacity.items()}

        body = json.dumps({"theme": {"extend": extend}}, indent=self.config.indent)
        return (
            "/** @type {import('tailwindcss').Config} */\n"
            f"module.exports = {body};\n"
        )

    def to_json(self, tokens: SimpleDesignTokens) -> str:
        """Render the stored form as JSON."""
        return json.dumps(tokens.to_dict(), indent=self.config.indent) + "\n"

    def to_tokens_studio(self, tokens: SimpleDesignTokens) -> str:
        """Render a single-set Tokens Studio document."""
        token_set: dict[str, Any] = {}

        def add(group: str, token_type: str, key: str, value: Any) -> None:
            token_set.setdefault(group, {})[key] = {"value": value, "type": token_type}

        for key, value in (tokens.colors or {}).items():
            add("colors", "color", key, value)
        for key, value in (tokens.spacing or {}).items():
            add("spacing", "spacing", key, value)
        for key, value in (tokens.radius or {}).items():
            add("borderRadius", "borderRadius", key, value)
        for key, value in (tokens.shadows or {}).items():
            add("boxShadow", "boxShadow", key, value)
        for key, value in (tokens.typography or {}).items():
            group, token_type = TOKENS_STUDIO_TYPOGRAPHY[infer_typography_category(key)]
            add(group, token_type, key, value)
        for key, value in (tokens.animation or {}).items():
            token_type = (
                "duration" if infer_animation_category(key) is Category.DURATION else "other"
            )
            add("animation", token_type, key, value)
        for key, value in (tokens.borders or {}).items():
            add("borderWidth", "borderWidth", key, value)
        for key, value in (tokens.opacity or {}).items():
            add("opacity", "opacity", key, format_number(value))

        document = {
            "global": token_set,
            "$themes": [],
            "$metadata": {"tokenSetOrder": ["global"]},
        }
        return json.dumps(document, indent=self.config.indent) + "\n"


def export_tokens(tokens: SimpleDesignTokens, target: ExportTarget | str) -> str:
    """Render tokens with the default export configuration."""
    return TokenExporter().export(tokens, target)
