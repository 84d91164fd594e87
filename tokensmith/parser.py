"""Top-level JSON entry points.

These are the only functions with a hard failure mode: text that is not
JSON, or JSON whose top level is not an object, produces a ``ParseResult``
with ``success=False`` and an error message. No exception escapes.
"""

import json
from dataclasses import dataclass
from typing import Any

from .errors import TokenParseError
from .token_adapters.export_formats import parse_export_tokens
from .token_adapters.json_tokens import JSONTokenAdapter
from .token_logging import LogCategory, get_category_logger
from .tokens import DesignTokens, SimpleDesignTokens

logger = get_category_logger(LogCategory.EXTRACTION)


@dataclass
class ParseResult:
    """Outcome of parsing token JSON text."""

    success: bool
    tokens: DesignTokens | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data: dict[str, Any] = {"success": self.success}
        if self.tokens is not None:
            data["tokens"] = self.tokens.to_dict()
        if self.error is not None:
            data["error"] = self.error
        return data


def load_json_object(text: str, source_name: str = "inline") -> dict[str, Any]:
    """Decode JSON text that must hold an object.

    Raises:
        TokenParseError: If the text is not JSON or not an object.
    """
    try:
        parsed = json.loads(text)
    except (ValueError, TypeError) as e:
        raise TokenParseError(f"Invalid JSON format: {e}", source_name) from e
    except RecursionError as e:
        raise TokenParseError("Invalid JSON format: nesting too deep", source_name) from e

    if not isinstance(parsed, dict):
        raise TokenParseError("Invalid JSON structure: expected an object", source_name)
    return parsed


def parse_json_to_tokens(json_string: str) -> ParseResult:
    """Parse category-keyed JSON (the paste-box format) into tokens.

    Args:
        json_string: JSON text with ``colors``/``spacing``/``borderRadius``
            (and aliased) top-level keys.

    Returns:
        ParseResult with tokens on success or an error message on failure.
    """
    try:
        parsed = load_json_object(json_string)
    except TokenParseError as e:
        logger.info(f"Rejected token JSON: {e.message}")
        return ParseResult(success=False, error=e.message)

    return ParseResult(success=True, tokens=JSONTokenAdapter().extract_from_data(parsed))


def parse_export_json(json_string: str, semantic_colors: bool = False) -> ParseResult:
    """Parse a design-tool export (Tokens Studio, simple, nested) into tokens.

    Same failure semantics as ``parse_json_to_tokens``; a well-formed
    document with no recognizable tokens succeeds with empty tokens.
    """
    try:
        parsed = load_json_object(json_string)
    except TokenParseError as e:
        logger.info(f"Rejected export JSON: {e.message}")
        return ParseResult(success=False, error=e.message)

    return ParseResult(
        success=True, tokens=parse_export_tokens(parsed, semantic_colors=semantic_colors)
    )


def has_token_content(tokens: DesignTokens | SimpleDesignTokens | None) -> bool:
    """Whether any category holds at least one token.

    Emptiness is not an error; callers check it explicitly after merging.
    """
    if tokens is None:
        return False
    return tokens.total_tokens > 0


def get_token_summary(tokens: DesignTokens) -> dict[str, int]:
    """Token counts by category."""
    return tokens.category_counts()
