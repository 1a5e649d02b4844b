from __future__ import annotations

import logging
from typing import Sequence

from textgraphics.constants import TEXT_ALIGN_CENTER, TEXT_ALIGN_LEFT, TEXT_ALIGN_RIGHT
from textgraphics.models import FULL, Capabilities, Edges, FontStyle, Line, ResolvedLayout
from textgraphics.render.canvas import Canvas
from textgraphics.render.metrics import char_width, line_pixel_width
from textgraphics.render.typography import font_description, load_font

LOGGER = logging.getLogger("textgraphics.render")


def align_offset(available: float, line_width: float, align: str) -> float:
    if align == TEXT_ALIGN_CENTER:
        return (available - line_width) / 2
    if align == TEXT_ALIGN_RIGHT:
        return available - line_width
    return 0


def layout_lines(
    lines: Sequence[str],
    font: FontStyle,
    *,
    padding: Edges,
    available_width: float,
    capabilities: Capabilities = FULL,
) -> list[Line]:
    """Measure every row and place it.

    Rows are stacked from ``padding.top`` with a middle baseline at half the
    font size; the horizontal offset follows the text alignment inside
    ``available_width``.
    """
    size = float(font.size)
    letter_spacing = (font.letter_spacing or 0) if capabilities.letter_spacing else 0
    align = font.text_align if capabilities.alignment else TEXT_ALIGN_LEFT
    row_gap = font.row_gap or 0
    uniform = not capabilities.per_char_width

    result: list[Line] = []
    for index, text in enumerate(lines):
        width = line_pixel_width(text, size, letter_spacing, uniform=uniform)
        left = padding.left + align_offset(available_width, width, align)
        baseline = padding.top + size / 2 + index * (size + row_gap)
        result.append(Line(text=text, index=index, width=width, left=left, baseline=baseline))
    return result


def _draw_row(
    ctx: Canvas,
    line: Line,
    *,
    size: float,
    letter_spacing: float,
    stroke: bool,
    uniform: bool,
) -> None:
    cursor = line.left
    for char in line.text:
        if not char.isspace():
            ctx.fill_text(char, cursor, line.baseline, outlined=stroke)
        cursor += char_width(char, uniform=uniform) * size + letter_spacing


def paint_text(
    ctx: Canvas,
    layout: ResolvedLayout,
    font: FontStyle,
    capabilities: Capabilities = FULL,
) -> None:
    if not layout.lines:
        return
    size = float(font.size)
    ctx.set_font(
        load_font(font.family, size),
        font_description(
            size=size,
            family=str(font.family),
            style=font.style,
            variant=font.variant,
            weight=font.weight,
            line_height=font.line_height,
        ),
    )
    ctx.fill_style = str(font.color)
    ctx.stroke_style = str(font.border_color)
    ctx.line_width = float(font.border_width or 0)
    stroke = bool(font.border_width) and capabilities.text_stroke
    letter_spacing = (font.letter_spacing or 0) if capabilities.letter_spacing else 0

    LOGGER.debug("painting %d row(s) with %s", len(layout.lines), ctx.font_description)
    for line in layout.lines:
        _draw_row(
            ctx,
            line,
            size=size,
            letter_spacing=letter_spacing,
            stroke=stroke,
            uniform=not capabilities.per_char_width,
        )
