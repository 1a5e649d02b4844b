from __future__ import annotations

import logging
from typing import Any, Mapping

from PIL import Image

from textgraphics.models import FULL, BackgroundStyle, Capabilities
from textgraphics.render.canvas import Canvas
from textgraphics.render.geometry import BoxPath

LOGGER = logging.getLogger("textgraphics.render")


def gradient_stops(mapping: Mapping[Any, str]) -> list[tuple[float, str]]:
    """Gradient stops sorted by numeric offset, whatever the key order."""
    stops: list[tuple[float, str]] = []
    for key, color in mapping.items():
        try:
            offset = float(key)
        except (TypeError, ValueError):
            LOGGER.debug("ignoring gradient stop with non-numeric key %r", key)
            continue
        stops.append((offset, color))
    stops.sort(key=lambda stop: stop[0])
    return stops


def _pair(value: Any) -> tuple[Any, Any]:
    if isinstance(value, (list, tuple)):
        if len(value) >= 2:
            return value[0], value[1]
        if len(value) == 1:
            return value[0], value[0]
    return value, value


def _resolve_axis(token: Any, natural: float) -> float:
    if isinstance(token, bool) or token is None:
        return natural
    if isinstance(token, (int, float)):
        return float(token)
    text = str(token).strip()
    try:
        if text.endswith("%"):
            return float(text[:-1]) * natural / 100
        return float(text.removesuffix("px"))
    except ValueError:
        LOGGER.debug("unparsable image size %r, keeping natural size", token)
        return natural


def resolve_image_size(size: Any, natural: tuple[int, int]) -> tuple[float, float]:
    """Resolve background size per axis: pixels, ``"N%"`` of the natural size, or natural."""
    natural_width, natural_height = natural
    if size is None or size == "":
        return float(natural_width), float(natural_height)
    width_token, height_token = _pair(size)
    return _resolve_axis(width_token, natural_width), _resolve_axis(height_token, natural_height)


def resolve_image_position(position: Any) -> tuple[float, float]:
    if position is None:
        return 0.0, 0.0
    x, y = _pair(position)
    return float(x or 0), float(y or 0)


def _apply_color(ctx: Canvas, color: Any, width: int, height: int, capabilities: Capabilities) -> None:
    if isinstance(color, Mapping):
        stops = gradient_stops(color)
        if not stops:
            return
        if capabilities.gradient:
            gradient = ctx.create_linear_gradient(0, 0, width, height)
            for offset, stop_color in stops:
                gradient.add_color_stop(offset, stop_color, ctx.fallback_color)
            ctx.fill_style = gradient
        else:
            ctx.fill_style = stops[0][1]
    else:
        ctx.fill_style = str(color)
    ctx.fill_rect(0, 0, width, height)


def paint_background(
    ctx: Canvas,
    path: BoxPath,
    style: BackgroundStyle,
    width: int,
    height: int,
    image: Image.Image | None = None,
    capabilities: Capabilities = FULL,
) -> bool:
    """Fill the clipped box with the background color and/or image.

    ``image`` is the already-decoded background image. Returns ``False``
    when there is nothing to paint.
    """
    draw_image = image is not None and capabilities.image
    if not style.color and not draw_image:
        LOGGER.debug("background pass skipped")
        return False

    ctx.save()
    ctx.clip(path)
    try:
        if style.color:
            _apply_color(ctx, style.color, width, height, capabilities)
        if draw_image:
            x, y = resolve_image_position(style.position)
            image_width, image_height = resolve_image_size(style.size, image.size)
            ctx.draw_image(image, x, y, image_width, image_height)
    finally:
        ctx.restore()
    return True
