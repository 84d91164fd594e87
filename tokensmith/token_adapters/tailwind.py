"""Tailwind CSS config token adapter.

Extracts design tokens from the unevaluated source text of
tailwind.config.js/ts files. The config is never executed: named object
blocks are located with a brace-depth scan and only literal leaves are
read from them.
"""

import re
from pathlib import Path

from ..tokens import Category, DesignTokens
from .base import TokenAdapter
from .scanning import QUOTES, find_closing, iter_blocks, strip_comments

# Theme blocks read from the config, in extraction order
THEME_BLOCKS: tuple[tuple[str, Category], ...] = (
    ("colors", Category.COLOR),
    ("spacing", Category.SPACING),
    ("fontFamily", Category.FONT_FAMILY),
    ("borderRadius", Category.RADIUS),
    ("boxShadow", Category.SHADOW),
)

_KEY = re.compile(r"""\s*(?:(['"])(?P<quoted>[^'"]+)\1|(?P<bare>[\w$.-]+))\s*:\s*""")
_LITERAL = re.compile(r"""(['"`])((?:\\.|(?!\1)[^\\])*)\1""", re.DOTALL)

DEFAULT_KEY = "DEFAULT"


def _block_opener(name: str) -> re.Pattern[str]:
    return re.compile(rf"""(?<![\w$.])(['"]?){re.escape(name)}\1\s*:\s*\{{""")


def _skip_value(body: str, pos: int) -> int:
    """Advance past a non-literal value to just after the next top-level comma."""
    depth = 0
    i = pos
    while i < len(body):
        char = body[i]
        if char in QUOTES:
            match = _LITERAL.match(body, i)
            i = match.end() if match else i + 1
            continue
        if char in "({[":
            depth += 1
        elif char in ")}]":
            depth -= 1
        elif char == "," and depth <= 0:
            return i + 1
        i += 1
    return len(body)


def _array_strings(body: str) -> list[str]:
    """String literals at the top level of an array body.

    Nested objects such as ``{ fontFeatureSettings: '"cv11"' }`` are skipped.
    """
    items: list[str] = []
    i = 0
    while i < len(body):
        char = body[i]
        if char in QUOTES:
            match = _LITERAL.match(body, i)
            if match is None:
                break
            if match.group(2).strip():
                items.append(match.group(2).strip())
            i = match.end()
        elif char in "{[":
            closer = "}" if char == "{" else "]"
            end = find_closing(body, i, char, closer)
            if end is None:
                break
            i = end + 1
        else:
            i += 1
    return items


class TailwindConfigAdapter(TokenAdapter):
    """Adapter for extracting design tokens from Tailwind CSS configuration.

    Reads the ``colors``, ``spacing``, ``fontFamily``, ``borderRadius`` and
    ``boxShadow`` blocks wherever they appear (``theme`` or
    ``theme.extend``). Nested color scales are flattened, so
    ``primary: { 500: '#3b82f6', DEFAULT: '#2563eb' }`` yields
    ``primary-500`` and ``primary``, and font families are keyed
    ``font-<name>``. Occurrences are merged in source order.

    Note: dynamic values (imported palettes, function calls, spreads) are
    not evaluated and are skipped.
    """

    name = "tailwind"

    @property
    def supported_extensions(self) -> list[str]:
        """File extensions this adapter can handle."""
        return [".js", ".ts", ".mjs", ".cjs"]

    def can_handle(self, file_path: Path) -> bool:
        """Only handles files named tailwind.config.*"""
        if file_path.suffix.lower() not in self.supported_extensions:
            return False
        return file_path.stem.lower() == "tailwind.config"

    def _extract(self, content: str) -> DesignTokens:
        tokens = DesignTokens()
        cleaned = strip_comments(content, line_comments=True)

        for block_name, category in THEME_BLOCKS:
            seen: list = []
            for block in iter_blocks(cleaned, _block_opener(block_name)):
                # A same-named key nested inside an earlier block is data
                if any(outer.contains(block.start) for outer in seen):
                    continue
                seen.append(block)

                tokens.ensure_map(category)
                for key, value in self._parse_entries(block.body, "").items():
                    parsed = self._coerce(value, category)
                    if parsed is not None:
                        tokens.add_token(category, self._token_key(key, category), parsed)

        return tokens

    def _parse_entries(self, body: str, prefix: str) -> dict[str, str | list[str]]:
        """Walk one object body and collect literal leaves.

        Args:
            body: Text between the object's braces.
            prefix: Key prefix for nested objects.

        Returns:
            Flattened ``key -> literal`` mapping; arrays become lists.
        """
        entries: dict[str, str | list[str]] = {}
        pos = 0
        while pos < len(body):
            if body[pos] in " \t\r\n,":
                pos += 1
                continue

            key_match = _KEY.match(body, pos)
            if key_match is None:
                pos = _skip_value(body, pos)
                continue

            key = key_match.group("quoted") or key_match.group("bare")
            full_key = self._join_key(prefix, key)
            pos = key_match.end()
            if pos >= len(body):
                break

            char = body[pos]
            if char == "{":
                end = find_closing(body, pos)
                if end is None:
                    break
                entries.update(self._parse_entries(body[pos + 1 : end], full_key))
                pos = end + 1
            elif char == "[":
                end = find_closing(body, pos, "[", "]")
                if end is None:
                    break
                items = _array_strings(body[pos + 1 : end])
                if items:
                    entries[full_key] = items
                pos = end + 1
            elif char in QUOTES:
                literal = _LITERAL.match(body, pos)
                if literal is None:
                    break
                if literal.group(2).strip():
                    entries[full_key] = literal.group(2).strip()
                pos = literal.end()
            else:
                pos = _skip_value(body, pos)

        return entries

    @staticmethod
    def _token_key(key: str, category: Category) -> str:
        """Family keys carry a ``font-`` prefix so the subtype survives storage."""
        if category is Category.FONT_FAMILY and not key.lower().startswith("font-"):
            return f"font-{key}"
        return key

    @staticmethod
    def _join_key(prefix: str, key: str) -> str:
        if key == DEFAULT_KEY and prefix:
            return prefix
        return f"{prefix}-{key}" if prefix else key

    @staticmethod
    def _coerce(value: str | list[str], category: Category) -> str | list[str] | None:
        """Fit a parsed literal to the category's value shape."""
        if isinstance(value, str):
            return value
        if category is Category.FONT_FAMILY:
            return value
        if category is Category.SHADOW:
            # Layered shadows are written as arrays
            return ", ".join(value)
        return None
