"""Conversion between the typed and the flat storage token forms.

``to_simple_tokens`` is the storage projection: it drops descriptions,
collapses typography and animation sub-maps into one map each, and encodes
font family lists as a comma-delimited string. ``to_full_tokens`` rebuilds
typed tokens from that projection, inferring typography and animation
subtypes from the key.

For any tokens ``x``::

    to_simple_tokens(to_full_tokens(to_simple_tokens(x))) == to_simple_tokens(x)

Descriptions and list/number subtyping are not recovered.
"""

import re
from typing import Any

from .token_logging import LogCategory, get_category_logger
from .tokens import (
    FLAT_CATEGORY_FIELDS,
    Category,
    DesignTokens,
    SimpleDesignTokens,
    Token,
    TokenValue,
)

logger = get_category_logger(LogCategory.NORMALIZE)

NAMED_FONT_WEIGHTS = (
    "thin",
    "extralight",
    "light",
    "normal",
    "medium",
    "semibold",
    "bold",
    "extrabold",
    "black",
)
_NAMED_WEIGHT_KEY = re.compile(rf"font-(?:{'|'.join(NAMED_FONT_WEIGHTS)})$")

GENERIC_FONT_FAMILIES = {
    "serif",
    "sans-serif",
    "monospace",
    "cursive",
    "fantasy",
    "system-ui",
    "ui-sans-serif",
    "ui-serif",
    "ui-monospace",
    "ui-rounded",
    "emoji",
    "math",
}


def infer_typography_category(key: str) -> Category:
    """Infer the typography subtype of a key.

    ``font-*`` keys without size/weight are families (named weights such as
    ``font-bold`` excepted), ``text-*``/``*size*`` are sizes, ``*weight*``
    weights, ``leading-*`` line heights and ``tracking-*`` letter spacing.
    Anything else defaults to a font size.
    """
    k = key.lower()
    if "family" in k:
        return Category.FONT_FAMILY
    if "font-" in k and "size" not in k and "weight" not in k:
        if _NAMED_WEIGHT_KEY.search(k):
            return Category.FONT_WEIGHT
        return Category.FONT_FAMILY
    if "text-" in k or "size" in k:
        return Category.FONT_SIZE
    if "weight" in k:
        return Category.FONT_WEIGHT
    if "leading" in k or "line-height" in k or "lineheight" in k:
        return Category.LINE_HEIGHT
    if "tracking" in k or "letter-spacing" in k or "letterspacing" in k:
        return Category.LETTER_SPACING
    return Category.FONT_SIZE


def infer_animation_category(key: str) -> Category:
    """``*duration*`` keys are durations; everything else is an easing curve."""
    if "duration" in key.lower():
        return Category.DURATION
    return Category.EASING


def format_font_family(families: list[str]) -> str:
    """Encode a font stack as a CSS ``font-family`` value.

    Names containing whitespace are quoted unless already quoted; generic
    family keywords are never quoted.
    """
    parts = []
    for name in families:
        name = name.strip()
        if not name:
            continue
        if (
            any(ch.isspace() for ch in name)
            and name[0] not in "\"'"
            and name.lower() not in GENERIC_FONT_FAMILIES
        ):
            name = f'"{name}"'
        parts.append(name)
    return ", ".join(parts)


def _to_storage_string(value: TokenValue) -> str:
    if isinstance(value, list):
        return format_font_family([str(v) for v in value])
    return str(value).strip()


def _to_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _flat_strings(tokens: dict[str, Token] | None) -> dict[str, str] | None:
    if tokens is None:
        return None
    result: dict[str, str] = {}
    for key, token in tokens.items():
        value = _to_storage_string(token.value)
        if value:
            result[key] = value
    return result


def to_simple_tokens(full: DesignTokens) -> SimpleDesignTokens:
    """Project typed tokens onto the flat storage form.

    Total: values that cannot be represented (blank strings, non-numeric
    opacity) are dropped with a debug log.
    """
    simple = SimpleDesignTokens(
        colors=_flat_strings(full.colors),
        spacing=_flat_strings(full.spacing),
        radius=_flat_strings(full.radius),
        shadows=_flat_strings(full.shadows),
        borders=_flat_strings(full.borders),
    )

    if full.typography is not None:
        simple.typography = _flat_strings(dict(full.typography.items()))
    if full.animation is not None:
        simple.animation = _flat_strings(dict(full.animation.items()))

    if full.opacity is not None:
        simple.opacity = {}
        for key, token in full.opacity.items():
            number = _to_number(token.value)
            if number is None:
                logger.debug(f"Dropping non-numeric opacity {key}={token.value!r}")
                continue
            simple.opacity[key] = number

    return simple


def to_full_tokens(simple: SimpleDesignTokens) -> DesignTokens:
    """Rebuild typed tokens from the flat storage form.

    Token types are uniform per category except typography (subtype
    inferred per key) and animation (duration vs. easing).
    """
    full = DesignTokens()

    for category, attr in FLAT_CATEGORY_FIELDS.items():
        values = getattr(simple, attr)
        if values is None:
            continue
        full.ensure_map(category)
        for key, value in values.items():
            if category is Category.OPACITY:
                number = _to_number(value)
                if number is not None:
                    full.add_token(category, key, number)
            elif value is not None and str(value).strip():
                full.add_token(category, key, str(value).strip())

    if simple.typography is not None:
        full.ensure_map(Category.FONT_SIZE)
        for key, value in simple.typography.items():
            if value is not None and str(value).strip():
                full.add_token(infer_typography_category(key), key, str(value).strip())

    if simple.animation is not None:
        full.ensure_map(Category.DURATION)
        for key, value in simple.animation.items():
            if value is not None and str(value).strip():
                full.add_token(infer_animation_category(key), key, str(value).strip())

    return full
