"""
NoteShare Backend — Note Color Normalization
==============================================

What:  Maps user-supplied color input onto a stored "#RRGGBB" value.
Who:   NoteService on note creation and on content update (same function
       for both paths).

Rules, in order:
    1. trim; missing or empty input          → DEFAULT_COLOR
    2. "#" + exactly 6 hex digits            → upper-cased as given
    3. palette name (case-insensitive)       → its fixed hex value
    4. anything else                         → DEFAULT_COLOR

The function is pure and total, and normalize(normalize(c)) == normalize(c):
every output is already an upper-case "#RRGGBB" string, which rule 2 maps
to itself.
"""

import string
from typing import Optional

from app.models.note import DEFAULT_NOTE_COLOR

DEFAULT_COLOR = DEFAULT_NOTE_COLOR

PALETTE = {
    "yellow": "#FFFF88",
    "pink": "#FBCFE8",
    "green": "#BBF7D0",
    "blue": "#BFDBFE",
    "orange": "#FED7AA",
    "purple": "#E9D5FF",
}

_HEX_DIGITS = frozenset(string.hexdigits)


def is_hex_color(value: str) -> bool:
    """True for "#" followed by exactly six hex digits (either case)."""
    return (
        len(value) == 7
        and value.startswith("#")
        and all(ch in _HEX_DIGITS for ch in value[1:])
    )


def normalize_color(value: Optional[str]) -> str:
    if value is None:
        return DEFAULT_COLOR
    trimmed = value.strip()
    if not trimmed:
        return DEFAULT_COLOR
    if is_hex_color(trimmed):
        return trimmed.upper()
    return PALETTE.get(trimmed.lower(), DEFAULT_COLOR)
