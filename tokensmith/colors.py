"""Color format conversion.

The canonical stored color is an HSL triple without the ``hsl()`` wrapper
or commas, e.g. ``"221 83% 53%"``. Consumers wrap it at use time
(``hsl(var(--primary))``). Extractors keep source values untouched; these
helpers convert on request.
"""

import colorsys
import re
from dataclasses import replace

from .token_logging import LogCategory, get_category_logger
from .tokens import DesignTokens

logger = get_category_logger(LogCategory.NORMALIZE)

_NUMBER = r"(-?[\d.]+)"
HSL_TRIPLE = re.compile(
    rf"^\s*{_NUMBER}(?:deg)?\s*[,\s]\s*{_NUMBER}%?\s*[,\s]\s*{_NUMBER}%?\s*(?:[,/]\s*[\d.]+%?\s*)?$"
)
HSL_FUNCTION = re.compile(r"^\s*hsla?\s*\((.*)\)\s*$", re.IGNORECASE)
RGB_FUNCTION = re.compile(
    rf"^\s*rgba?\s*\(\s*{_NUMBER}\s*[,\s]\s*{_NUMBER}\s*[,\s]\s*{_NUMBER}\s*(?:[,/]\s*[\d.]+%?\s*)?\)\s*$",
    re.IGNORECASE,
)
HEX_COLOR = re.compile(r"^\s*#([0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})\s*$")


def _fmt(number: float) -> str:
    """Format with at most one decimal, dropping a trailing ``.0``."""
    rounded = round(number, 1)
    if rounded == int(rounded):
        return str(int(rounded))
    return str(rounded)


def format_hsl_triple(h: float, s: float, l: float) -> str:  # noqa: E741
    return f"{_fmt(h % 360)} {_fmt(s)}% {_fmt(l)}%"


def parse_hsl_triple(value: str) -> tuple[float, float, float] | None:
    """Parse ``"221 83% 53%"``, ``"221, 83%, 53%"`` or ``hsl(...)``.

    Returns:
        (hue in degrees, saturation %, lightness %) or None.
    """
    function_match = HSL_FUNCTION.match(value)
    if function_match:
        value = function_match.group(1)

    match = HSL_TRIPLE.match(value)
    if not match:
        return None
    try:
        h, s, l = (float(match.group(i)) for i in (1, 2, 3))  # noqa: E741
    except ValueError:
        return None
    if not (0 <= s <= 100 and 0 <= l <= 100):
        return None
    return h, s, l


def hex_to_rgb(value: str) -> tuple[int, int, int] | None:
    """Parse #RGB, #RGBA, #RRGGBB or #RRGGBBAA (alpha is ignored)."""
    match = HEX_COLOR.match(value)
    if not match:
        return None
    digits = match.group(1)
    if len(digits) in (3, 4):
        digits = "".join(ch * 2 for ch in digits)
    return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)


def rgb_to_hsl(r: float, g: float, b: float) -> tuple[float, float, float]:
    """Convert 0-255 RGB channels to (hue degrees, saturation %, lightness %)."""
    # colorsys works in HLS order with every component in 0..1
    h, l, s = colorsys.rgb_to_hls(r / 255, g / 255, b / 255)  # noqa: E741
    return h * 360, s * 100, l * 100


def hsl_to_rgb(h: float, s: float, l: float) -> tuple[int, int, int]:  # noqa: E741
    """Convert HSL (degrees, %, %) to 0-255 RGB channels."""
    r, g, b = colorsys.hls_to_rgb((h % 360) / 360, l / 100, s / 100)
    return round(r * 255), round(g * 255), round(b * 255)


def to_hsl_triple(value: str) -> str | None:
    """Convert a color value to the canonical HSL triple.

    Supports HSL triples, hsl()/hsla(), rgb()/rgba() and hex colors.

    Returns:
        The triple, or None for values that are not literal colors
        (``var(--x)``, named colors, gradients).
    """
    hsl = parse_hsl_triple(value)
    if hsl is not None:
        return format_hsl_triple(*hsl)

    rgb = hex_to_rgb(value)
    if rgb is None:
        rgb_match = RGB_FUNCTION.match(value)
        if rgb_match:
            try:
                rgb = tuple(  # type: ignore[assignment]
                    min(255.0, max(0.0, float(rgb_match.group(i)))) for i in (1, 2, 3)
                )
            except ValueError:
                rgb = None

    if rgb is None:
        return None
    return format_hsl_triple(*rgb_to_hsl(*rgb))


def hsl_triple_to_hex(value: str) -> str | None:
    """Convert an HSL triple (or hsl()) to ``#rrggbb``."""
    hsl = parse_hsl_triple(value)
    if hsl is None:
        return None
    r, g, b = hsl_to_rgb(*hsl)
    return f"#{r:02x}{g:02x}{b:02x}"


def normalize_color_tokens(tokens: DesignTokens) -> DesignTokens:
    """Return a copy with every convertible color rewritten as an HSL triple.

    Colors that cannot be converted keep their source value.
    """
    if not tokens.colors:
        return tokens

    colors = {}
    for key, token in tokens.colors.items():
        triple = to_hsl_triple(str(token.value))
        if triple is None:
            logger.debug(f"Keeping non-literal color {key}={token.value!r}")
            colors[key] = token
        else:
            colors[key] = replace(token, value=triple)
    return replace(tokens, colors=colors)
