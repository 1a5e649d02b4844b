from __future__ import annotations

from typing import Sequence

from textgraphics.constants import NARROW_CHAR_WIDTH, WIDE_CHAR_WIDTH


def char_width(char: str, uniform: bool = False) -> float:
    """Width factor of one character relative to the font size.

    ASCII characters count as half width, everything else as full width.
    With ``uniform`` every character counts as full width.
    """
    if uniform:
        return WIDE_CHAR_WIDTH
    return NARROW_CHAR_WIDTH if 0 <= ord(char) < 128 else WIDE_CHAR_WIDTH


def string_width(text: str, uniform: bool = False) -> float:
    return sum(char_width(char, uniform=uniform) for char in text)


def line_pixel_width(
    text: str,
    font_size: float,
    letter_spacing: float = 0,
    uniform: bool = False,
) -> float:
    if not text:
        return 0
    return string_width(text, uniform=uniform) * font_size + letter_spacing * (len(text) - 1)


def widest_line(lines: Sequence[str], uniform: bool = False) -> str:
    # 宽度相同时取后一行，结果数值一致
    widest = ""
    widest_width = -1.0
    for line in lines:
        width = string_width(line, uniform=uniform)
        if width >= widest_width:
            widest = line
            widest_width = width
    return widest
