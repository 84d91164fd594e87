"""Design token extraction, merge and normalization.

Reads design tokens from Tailwind configs, CSS custom properties, shadcn
theme stylesheets and design-tool JSON exports, merges them with
last-write-wins precedence, and converts between the typed
(``DesignTokens``) and flat storage (``SimpleDesignTokens``) forms.
"""

__version__ = "0.1.0"

from .classifier import KeyClassifier, classify
from .colors import normalize_color_tokens, to_hsl_triple
from .config import ExtractionConfig, load_config
from .exporters import ExportTarget, TokenExporter, export_tokens
from .merge import merge_tokens
from .normalizer import to_full_tokens, to_simple_tokens
from .parser import (
    ParseResult,
    get_token_summary,
    has_token_content,
    parse_export_json,
    parse_json_to_tokens,
)
from .pipeline import ImportResult, SourceFile, TokenImporter, import_files
from .tokens import (
    AnimationTokens,
    Category,
    DesignTokens,
    SimpleDesignTokens,
    Token,
    TokenType,
    TypographyTokens,
)

__all__ = [
    "__version__",
    "KeyClassifier",
    "classify",
    "normalize_color_tokens",
    "to_hsl_triple",
    "ExtractionConfig",
    "load_config",
    "ExportTarget",
    "TokenExporter",
    "export_tokens",
    "ImportResult",
    "SourceFile",
    "TokenImporter",
    "import_files",
    "merge_tokens",
    "to_full_tokens",
    "to_simple_tokens",
    "ParseResult",
    "get_token_summary",
    "has_token_content",
    "parse_export_json",
    "parse_json_to_tokens",
    "AnimationTokens",
    "Category",
    "DesignTokens",
    "SimpleDesignTokens",
    "Token",
    "TokenType",
    "TypographyTokens",
]
