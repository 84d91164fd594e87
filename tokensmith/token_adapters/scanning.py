"""Brace-aware scanning over unevaluated source text.

Tailwind configs and stylesheets nest braces, so a non-greedy ``{[^}]+}``
regex stops at the first inner ``}`` and silently drops data. Blocks are
located with a depth-counting scan instead; regexes are only applied to
the isolated block text afterwards.
"""

import re
from collections.abc import Iterator
from dataclasses import dataclass

_STRING = r"""("(?:\\.|[^"\\\n])*"|'(?:\\.|[^'\\\n])*'|`(?:\\.|[^`\\])*`)"""
_JS_COMMENTS = re.compile(_STRING + r"|(/\*.*?\*/|//[^\n]*)", re.DOTALL)
_CSS_COMMENTS = re.compile(_STRING + r"|(/\*.*?\*/)", re.DOTALL)

QUOTES = ('"', "'", "`")


@dataclass
class Block:
    """A balanced ``{...}`` block found in source text."""

    start: int  # index of the opening brace
    end: int  # index of the closing brace
    body: str  # text between the braces

    def contains(self, index: int) -> bool:
        return self.start < index < self.end


def strip_comments(content: str, line_comments: bool = True) -> str:
    """Remove comments while leaving string literals untouched.

    Args:
        content: Source text.
        line_comments: Also strip ``//`` comments (JavaScript). Disable for
            CSS, where ``//`` appears in unquoted URLs.
    """
    pattern = _JS_COMMENTS if line_comments else _CSS_COMMENTS

    def _replace(match: re.Match[str]) -> str:
        if match.group(1) is not None:
            return match.group(1)
        return " "

    return pattern.sub(_replace, content)


def find_closing(content: str, start: int, opener: str = "{", closer: str = "}") -> int | None:
    """Find the index of the bracket closing the one at ``start``.

    String literals are skipped so that braces inside quotes do not count.

    Returns:
        Index of the matching closer, or None when unbalanced.
    """
    if start >= len(content) or content[start] != opener:
        return None

    depth = 0
    in_string = False
    string_char = None

    for i in range(start, len(content)):
        char = content[i]

        if char in QUOTES and (i == 0 or content[i - 1] != "\\"):
            if not in_string:
                in_string = True
                string_char = char
            elif char == string_char:
                in_string = False
                string_char = None
            continue

        if in_string:
            continue

        if char == opener:
            depth += 1
        elif char == closer:
            depth -= 1
            if depth == 0:
                return i

    return None


def iter_blocks(content: str, opener_pattern: re.Pattern[str]) -> Iterator[Block]:
    """Yield every balanced block introduced by ``opener_pattern``.

    The pattern must match up to and including the opening brace.
    Unbalanced blocks are skipped.
    """
    for match in opener_pattern.finditer(content):
        brace = match.end() - 1
        end = find_closing(content, brace)
        if end is None:
            continue
        yield Block(start=brace, end=end, body=content[brace + 1 : end])
