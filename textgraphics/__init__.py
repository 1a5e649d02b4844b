from textgraphics.decoders.image_loader import ImageLoadError
from textgraphics.models import (
    FULL,
    MINIMAL,
    BackgroundStyle,
    BorderStyle,
    BoxSpec,
    Capabilities,
    FontStyle,
)
from textgraphics.render.engine import render, render_sync

__all__ = [
    "FULL",
    "MINIMAL",
    "BackgroundStyle",
    "BorderStyle",
    "BoxSpec",
    "Capabilities",
    "FontStyle",
    "ImageLoadError",
    "render",
    "render_sync",
]
