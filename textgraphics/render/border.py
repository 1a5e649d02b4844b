from __future__ import annotations

import logging

from textgraphics.models import BorderStyle
from textgraphics.render.canvas import Canvas
from textgraphics.render.geometry import BoxPath

LOGGER = logging.getLogger("textgraphics.render")


def paint_border(ctx: Canvas, path: BoxPath, style: BorderStyle) -> bool:
    """Stroke the box outline; the line is centered on the path.

    Returns ``False`` when the pass is skipped (no width or no color).
    """
    if not style.width or not style.color:
        LOGGER.debug("border pass skipped")
        return False
    ctx.line_width = float(style.width)
    ctx.stroke_style = style.color
    ctx.stroke_path(path)
    return True
