"""Token value extraction.

Source files wrap token values in different ways: a bare string, an object
with ``value`` (Tokens Studio, Figma exports) or ``$value`` (W3C draft).
Extraction is best-effort; entries that do not carry a usable value are
dropped without raising.
"""

from typing import Any

from .tokens import Token, TokenType

VALUE_KEYS = ("value", "$value")
DESCRIPTION_KEYS = ("description", "$description")


def is_usable_value(value: Any) -> bool:
    """Check that a value can be stored as a token value.

    Strings must be non-blank. Numbers are accepted; booleans are not.
    """
    if isinstance(value, str):
        return bool(value.strip())
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def unwrap_token_value(raw: Any) -> Any:
    """Return the value carried by a ``{value: ...}`` wrapper, else ``raw``.

    Returns None when ``raw`` is a mapping without a value field.
    """
    if isinstance(raw, dict):
        for key in VALUE_KEYS:
            if key in raw:
                return raw[key]
        return None
    return raw


def unwrap_description(raw: Any) -> str | None:
    if isinstance(raw, dict):
        for key in DESCRIPTION_KEYS:
            description = raw.get(key)
            if isinstance(description, str):
                return description
    return None


def is_token_leaf(raw: Any) -> bool:
    """Whether a nested object is a token (has a value field) not a group."""
    return isinstance(raw, dict) and any(
        raw.get(key) is not None for key in VALUE_KEYS
    )


def extract_token_values(obj: dict[str, Any]) -> dict[str, str]:
    """Extract string values from plain strings or ``{value}`` wrappers.

    Args:
        obj: Mapping of token key to raw entry.

    Returns:
        Mapping of token key to string value. Entries whose value is not a
        non-blank string are dropped.
    """
    result: dict[str, str] = {}
    if not isinstance(obj, dict):
        return result

    for key, raw in obj.items():
        value = unwrap_token_value(raw)
        if isinstance(value, str) and value.strip():
            result[str(key)] = value.strip()
    return result


def extract_tokens(
    obj: dict[str, Any],
    token_type: TokenType,
    allow_numbers: bool = False,
) -> dict[str, Token]:
    """Extract typed tokens, keeping descriptions.

    Args:
        obj: Mapping of token key to raw entry.
        token_type: Type assigned to every extracted token.
        allow_numbers: Accept numeric values (font weights, line heights).

    Returns:
        Mapping of token key to Token.
    """
    tokens: dict[str, Token] = {}
    if not isinstance(obj, dict):
        return tokens

    for key, raw in obj.items():
        value = unwrap_token_value(raw)
        if not is_usable_value(value):
            continue
        if not isinstance(value, str) and not allow_numbers:
            continue
        if isinstance(value, str):
            value = value.strip()
        tokens[str(key)] = Token(
            value=value,
            type=token_type,
            description=unwrap_description(raw),
        )
    return tokens


def flatten_token_tree(
    obj: dict[str, Any],
    prefix: str = "",
    separator: str = "-",
) -> dict[str, Any]:
    """Flatten nested groups into ``parent-child`` keys.

    An object carrying a value field is a leaf and is kept as-is (so that
    callers can still read its description). Strings and numbers are
    leaves. Lists, booleans, nulls and ``$``-prefixed metadata keys are
    skipped.
    """
    result: dict[str, Any] = {}
    for key, raw in obj.items():
        # Skip group metadata such as $type / $description
        if str(key).startswith("$"):
            continue
        full_key = f"{prefix}{separator}{key}" if prefix else str(key)
        if is_token_leaf(raw):
            result[full_key] = raw
        elif isinstance(raw, dict):
            result.update(flatten_token_tree(raw, full_key, separator))
        elif is_usable_value(raw):
            result[full_key] = raw
    return result
