"""Token adapters for extracting design tokens from various sources.

This package provides adapters for different token source formats:
- Category-keyed JSON (json_tokens.py)
- Tailwind CSS config text (tailwind.py)
- CSS custom properties (css_vars.py)
- shadcn/ui theme CSS (shadcn.py)
- Figma / Tokens Studio exports (export_formats.py)
"""

from .base import (
    TokenAdapter,
    TokenAdapterRegistry,
    create_registry,
    get_default_registry,
)
from .css_vars import CSSVariablesAdapter
from .export_formats import ExportFormat, ExportFormatAdapter, detect_format
from .json_tokens import JSONTokenAdapter
from .shadcn import ShadcnThemeAdapter
from .tailwind import TailwindConfigAdapter

__all__ = [
    "TokenAdapter",
    "TokenAdapterRegistry",
    "create_registry",
    "get_default_registry",
    "CSSVariablesAdapter",
    "ExportFormat",
    "ExportFormatAdapter",
    "detect_format",
    "JSONTokenAdapter",
    "ShadcnThemeAdapter",
    "TailwindConfigAdapter",
]
