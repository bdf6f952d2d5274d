"""
Whitespace helpers using the Unicode White_Space property.

str.split() and str.strip() with no argument also treat the ASCII separators
U+001C to U+001F as whitespace. Those are not White_Space and are kept as text here.
"""

import re

_WHITESPACE_CODEPOINTS = (
    *range(0x09, 0x0E),
    0x20,
    0x85,
    0xA0,
    0x1680,
    *range(0x2000, 0x200B),
    0x2028,
    0x2029,
    0x202F,
    0x205F,
    0x3000,
)
WHITESPACE = "".join(chr(cp) for cp in _WHITESPACE_CODEPOINTS)

_WHITESPACE_RUN_RE = re.compile(f"[{re.escape(WHITESPACE)}]+")


def split_whitespace(text: str) -> list[str]:
    """Split on runs of whitespace, dropping empty pieces."""
    return [piece for piece in _WHITESPACE_RUN_RE.split(text) if piece]


def strip_whitespace(text: str) -> str:
    return text.strip(WHITESPACE)


def is_blank(text: str) -> bool:
    """True when text is empty or whitespace only."""
    return not strip_whitespace(text)
