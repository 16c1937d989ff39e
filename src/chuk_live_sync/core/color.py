"""
Track colors - named colors and hex strings to the session's 0xRRGGBB ints.
"""

from __future__ import annotations

import re

NAMED_COLORS: dict[str, str] = {
    "red": "#ff0000",
    "green": "#00ff00",
    "blue": "#0000ff",
    "white": "#ffffff",
    "black": "#000000",
    "yellow": "#ffff00",
    "orange": "#ffa500",
    "purple": "#800080",
    "cyan": "#00ffff",
    "magenta": "#ff00ff",
    "gray": "#808080",
    "brown": "#a52a2a",
    "pink": "#ffc0cb",
    "navy": "#000080",
    "teal": "#008080",
    "olive": "#808000",
}

_HEX_PATTERN = re.compile(r"^[0-9a-f]{6}$")

# Fallback for unrecognised color names
GRAY_VALUE = 0x808080


def hex_to_int(value: str) -> int | None:
    """
    Parse "#rrggbb", "rrggbb" or "0xrrggbb" (any case) into 0xRRGGBB.

    Returns None for anything else.
    """
    text = value.strip().lower()
    if text.startswith("#"):
        text = text[1:]
    elif text.startswith("0x"):
        text = text[2:]
    if not _HEX_PATTERN.match(text):
        return None
    return int(text, 16)


def parse_color(color: str | None) -> int | None:
    """
    Resolve a color name or hex string.

    Names are looked up case-insensitively; anything that is neither a known
    name nor a hex string yields None.
    """
    if not color:
        return None
    named = NAMED_COLORS.get(color.strip().lower())
    if named is not None:
        return hex_to_int(named)
    return hex_to_int(color)

