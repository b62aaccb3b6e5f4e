"""Comment box sizing from its text content.

Width is estimated per UTF-16 code unit, the unit the editor's text fields
count in: half-width units are 7 px, anything above U+00FF (CJK, full-width
forms, either half of a surrogate pair) counts 1.4 times that.  Line breaks
use the same unit budget but never split a character.
"""

import math

MAX_CHARS_PER_LINE = 20

_HALF_WIDTH_CHAR = 7.0
_FULL_WIDTH_RATIO = 1.4
_LINE_HEIGHT = 16
_HORIZONTAL_PADDING = 18
_VERTICAL_PADDING = 12
_MIN_WIDTH = 26
_MIN_HEIGHT = 28

# Measured in place of empty content so an empty box still has room for the caret.
_PLACEHOLDER = "あ"


def _utf16_units(ch: str) -> int:
    # Characters outside the BMP are a surrogate pair
    return 2 if ord(ch) > 0xFFFF else 1


def apply_auto_line_breaks(text: str, max_chars_per_line: int = MAX_CHARS_PER_LINE) -> str:
    """Hard-wrap every line of *text* into chunks of at most *max_chars_per_line* UTF-16 units.

    A character that would straddle the limit starts the next chunk.
    """
    wrapped: list[str] = []
    for line in text.split("\n"):
        start = 0
        used = 0
        for i, ch in enumerate(line):
            units = _utf16_units(ch)
            if used + units > max_chars_per_line and i > start:
                wrapped.append(line[start:i])
                start, used = i, 0
            used += units
        wrapped.append(line[start:])
    return "\n".join(wrapped)


def _line_width(line: str) -> float:
    if not line:
        return _HALF_WIDTH_CHAR * 3
    return sum(
        (_HALF_WIDTH_CHAR * _FULL_WIDTH_RATIO if ord(ch) > 255 else _HALF_WIDTH_CHAR)
        * _utf16_units(ch)
        for ch in line
    )


def calculate_box_size(content: str | None) -> tuple[int, int]:
    """Return ``(width, height)`` in px of a comment box showing *content*."""
    lines = (content or _PLACEHOLDER).split("\n")
    widest = max(_line_width(line) for line in lines)

    width = max(widest + _HORIZONTAL_PADDING, _MIN_WIDTH)
    height = max(len(lines) * _LINE_HEIGHT + _VERTICAL_PADDING, _MIN_HEIGHT)
    return math.ceil(width), math.ceil(height)
