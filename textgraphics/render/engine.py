from __future__ import annotations

import asyncio
import enum
import logging
from typing import Any, Callable

from PIL import Image

from textgraphics.config import default_style
from textgraphics.decoders.image_loader import ImageLoader, load_image
from textgraphics.models import FULL, BoxSpec, Capabilities
from textgraphics.render.background import paint_background
from textgraphics.render.border import paint_border
from textgraphics.render.canvas import Canvas, new_surface
from textgraphics.render.geometry import build_box_path
from textgraphics.render.layout import normalize_radii, resolve_layout, resolve_spec
from textgraphics.render.text import paint_text

LOGGER = logging.getLogger("textgraphics.render")

SurfaceFactory = Callable[[int, int], Image.Image]


class RenderState(enum.Enum):
    UNSIZED = "unsized"
    SIZED = "sized"
    PAINTED = "painted"
    DONE = "done"


def _enter(state: RenderState) -> RenderState:
    LOGGER.debug("render state -> %s", state.value)
    return state


async def render(
    spec: BoxSpec,
    *,
    capabilities: Capabilities = FULL,
    text_width: float | None = None,
    image_loader: ImageLoader | None = None,
    surface_factory: SurfaceFactory | None = None,
    style: dict[str, Any] | None = None,
) -> Image.Image:
    """Render ``spec`` onto a new RGBA surface.

    Loading the background image is the only suspension point; it is
    awaited before any pass runs, so a failed load raises without
    producing a surface. A zero resolved dimension returns an empty 0x0
    surface and runs no painter.
    """
    style = style or default_style()
    factory = surface_factory or new_surface
    _enter(RenderState.UNSIZED)

    spec = resolve_spec(spec, style)
    layout = resolve_layout(spec, capabilities, text_width=text_width, style=style)
    if layout.is_empty:
        _enter(RenderState.DONE)
        return factory(0, 0)
    _enter(RenderState.SIZED)

    background_image = None
    # 空字符串等假值视为未设置图片
    if spec.background.image and capabilities.image:
        loader = image_loader or (lambda source: load_image(source, timeout=float(style["image_timeout"])))
        background_image = await loader(spec.background.image)

    surface = factory(layout.width, layout.height)
    ctx = Canvas(surface, fallback_color=str(style["fallback_color"]))
    path = build_box_path(layout.width, layout.height, normalize_radii(spec.border.radius))

    paint_background(
        ctx,
        path,
        spec.background,
        layout.width,
        layout.height,
        image=background_image,
        capabilities=capabilities,
    )
    paint_border(ctx, path, spec.border)
    paint_text(ctx, layout, spec.font, capabilities)
    _enter(RenderState.PAINTED)

    _enter(RenderState.DONE)
    return surface


def render_sync(spec: BoxSpec, **kwargs: Any) -> Image.Image:
    return asyncio.run(render(spec, **kwargs))
