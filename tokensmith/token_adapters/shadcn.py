"""shadcn/ui theme CSS token adapter.

Theme stylesheets such as ``globals.css`` define the light palette in
``:root`` and the dark palette in ``.dark``. Every custom property in those
blocks is treated as a color, prefixed with ``light-`` or ``dark-``.
"""

import re
from pathlib import Path

from ..tokens import Category, DesignTokens
from .base import TokenAdapter
from .css_vars import ROOT_BLOCK, iter_custom_properties
from .scanning import iter_blocks, strip_comments

DARK_BLOCK = re.compile(r"(?<![\w-])\.dark\s*(?:,[^{};]*)?\{")

DEFAULT_THEME_FILES = ("globals.css", "app.css")


class ShadcnThemeAdapter(TokenAdapter):
    """Adapter for shadcn-style theme CSS.

    Unlike ``CSSVariablesAdapter`` this does not classify keys: theme CSS
    only encodes colors, so ``--primary: 221 83% 53%`` in ``:root`` becomes
    ``colors["light-primary"]`` and the same property in ``.dark`` becomes
    ``colors["dark-primary"]``.
    """

    name = "shadcn"

    def __init__(self, file_names: list[str] | tuple[str, ...] = DEFAULT_THEME_FILES) -> None:
        self.file_names = {name.lower() for name in file_names}

    @property
    def supported_extensions(self) -> list[str]:
        """File extensions this adapter can handle."""
        return [".css"]

    def can_handle(self, file_path: Path) -> bool:
        """Only handles the configured theme file names."""
        return file_path.name.lower() in self.file_names

    def _extract(self, content: str) -> DesignTokens:
        tokens = DesignTokens(colors={})
        cleaned = strip_comments(content, line_comments=False)

        for pattern, prefix in ((ROOT_BLOCK, "light-"), (DARK_BLOCK, "dark-")):
            for block in iter_blocks(cleaned, pattern):
                for name, value in iter_custom_properties(block.body):
                    tokens.add_token(Category.COLOR, f"{prefix}{name}", value)

        return tokens
