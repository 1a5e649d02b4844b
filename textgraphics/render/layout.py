from __future__ import annotations

import logging
from dataclasses import fields, replace
from typing import Any

from textgraphics.config import default_style
from textgraphics.constants import (
    AUTO,
    HEIGHT_CORRECTION_EVEN,
    HEIGHT_CORRECTION_ODD,
    TEXT_ALIGN_LEFT,
    VALID_TEXT_ALIGNS,
)
from textgraphics.models import (
    FULL,
    BackgroundStyle,
    BorderStyle,
    BoxSpec,
    Capabilities,
    CornerRadii,
    Edges,
    FontStyle,
    ResolvedLayout,
)
from textgraphics.render.metrics import line_pixel_width, widest_line
from textgraphics.render.text import layout_lines
from textgraphics.render.typography import parse_font_size

LOGGER = logging.getLogger("textgraphics.render")


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def normalize_padding(value: Any) -> Edges:
    """Expand a scalar, ``(vertical, horizontal)`` or ``(top, right, bottom, left)``."""
    if value is None:
        return Edges()
    if not _is_sequence(value):
        amount = float(value)
        return Edges(amount, amount, amount, amount)
    if len(value) == 1:
        return normalize_padding(value[0])
    if len(value) == 2:
        vertical, horizontal = (float(item) for item in value)
        return Edges(top=vertical, right=horizontal, bottom=vertical, left=horizontal)
    if len(value) == 4:
        top, right, bottom, left = (float(item) for item in value)
        return Edges(top=top, right=right, bottom=bottom, left=left)
    raise ValueError(f"padding must have 1, 2 or 4 values, got {len(value)}")


def normalize_radii(value: Any) -> CornerRadii:
    if value is None:
        return CornerRadii()
    if not _is_sequence(value):
        radius = float(value)
        return CornerRadii(radius, radius, radius, radius)
    if len(value) == 1:
        return normalize_radii(value[0])
    if len(value) == 4:
        top_left, top_right, bottom_right, bottom_left = (float(item) for item in value)
        return CornerRadii(top_left, top_right, bottom_right, bottom_left)
    raise ValueError(f"radius must have 1 or 4 values, got {len(value)}")


def height_correction(rows: int) -> int:
    return HEIGHT_CORRECTION_EVEN if rows % 2 == 0 else HEIGHT_CORRECTION_ODD


def parse_dimension(value: Any) -> float | None:
    """Return a pixel value, or ``None`` for automatic sizing.

    Strings that are neither ``"auto"`` nor numeric are treated as automatic.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return max(0.0, float(value))
    text = str(value).strip().lower()
    if text == AUTO:
        return None
    try:
        return max(0.0, float(text.removesuffix("px")))
    except ValueError:
        LOGGER.debug("unparsable dimension %r, using auto", value)
        return None


def _number(value: Any, default: float) -> float:
    if isinstance(value, bool) or value is None:
        return default
    if isinstance(value, (int, float)):
        return value
    try:
        return float(str(value).strip().removesuffix("px"))
    except ValueError:
        LOGGER.debug("unparsable style number %r, using %s", value, default)
        return default


def _fill_unset(record: Any, defaults: dict[str, Any]) -> Any:
    values = {
        item.name: defaults[item.name]
        for item in fields(record)
        if getattr(record, item.name) is None and defaults.get(item.name) is not None
    }
    return replace(record, **values) if values else record


def resolve_font(font: FontStyle, style: dict[str, Any] | None = None) -> FontStyle:
    """Fill unset font fields from the default style record.

    Numeric fields that are still missing or unparsable after the fill fall
    back to neutral values, so a template with ``letter_spacing: null``
    renders like one without the key.
    """
    defaults = (style or default_style())["font"]
    font = _fill_unset(font, defaults)
    align = str(font.text_align or TEXT_ALIGN_LEFT).lower()
    if align not in VALID_TEXT_ALIGNS:
        LOGGER.warning("unknown text align %r, using left", align)
        align = TEXT_ALIGN_LEFT
    return replace(
        font,
        family=font.family or defaults.get("family"),
        size=parse_font_size(font.size, default=parse_font_size(defaults.get("size"))),
        weight=font.weight or "normal",
        variant=font.variant or "normal",
        style=font.style or "normal",
        line_height=_number(font.line_height, 1),
        color=font.color or defaults.get("color") or "#000000",
        border_color=font.border_color or defaults.get("border_color") or "#000000",
        border_width=_number(font.border_width, 0),
        letter_spacing=_number(font.letter_spacing, 0),
        row_gap=_number(font.row_gap, 0),
        text_align=align,
    )


def resolve_border(border: BorderStyle, style: dict[str, Any] | None = None) -> BorderStyle:
    border = _fill_unset(border, (style or default_style())["border"])
    return replace(border, width=_number(border.width, 0))


def resolve_background(background: BackgroundStyle, style: dict[str, Any] | None = None) -> BackgroundStyle:
    return _fill_unset(background, (style or default_style())["background"])


def resolve_spec(spec: BoxSpec, style: dict[str, Any] | None = None) -> BoxSpec:
    """Return a copy of ``spec`` with every unset style field taken from ``style``."""
    style = style or default_style()
    return replace(
        spec,
        background=resolve_background(spec.background, style),
        border=resolve_border(spec.border, style),
        font=resolve_font(spec.font, style),
    )


def content_padding(spec: BoxSpec) -> Edges:
    padding = normalize_padding(spec.font.padding)
    if spec.border.width:
        padding = padding.expand(spec.border.width)
    return padding


def resolve_layout(
    spec: BoxSpec,
    capabilities: Capabilities = FULL,
    *,
    text_width: float | None = None,
    style: dict[str, Any] | None = None,
) -> ResolvedLayout:
    spec = resolve_spec(spec, style)
    font = spec.font
    font_size = font.size
    letter_spacing = font.letter_spacing if capabilities.letter_spacing else 0
    row_gap = font.row_gap
    uniform = not capabilities.per_char_width
    padding = content_padding(spec)
    lines = spec.lines()

    width = parse_dimension(spec.width)
    height = parse_dimension(spec.height)

    if width is None:
        if lines:
            widest = widest_line(lines, uniform=uniform)
            width = line_pixel_width(widest, font_size, letter_spacing, uniform=uniform) + padding.horizontal
        else:
            width = 0
    if height is None:
        if lines:
            rows = len(lines)
            height = rows * font_size + padding.vertical + (rows - 1) * row_gap
            if capabilities.height_correction:
                height -= height_correction(rows)
        else:
            height = 0

    resolved_width = max(0, int(width))
    resolved_height = max(0, int(height))
    LOGGER.debug("resolved box %sx%s for %d line(s)", resolved_width, resolved_height, len(lines))

    available = text_width or (resolved_width - padding.horizontal)
    laid_out = layout_lines(
        lines,
        font,
        padding=padding,
        available_width=available,
        capabilities=capabilities,
    )
    return ResolvedLayout(
        width=resolved_width,
        height=resolved_height,
        padding=padding,
        font_size=font_size,
        lines=tuple(laid_out),
    )
