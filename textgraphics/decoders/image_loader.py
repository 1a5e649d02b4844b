from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Awaitable, Callable

import httpx
from PIL import Image

from textgraphics.decoders.image_decoder import decode_bytes, decode_image
from textgraphics.models import ImageSource

LOGGER = logging.getLogger("textgraphics.images")

DEFAULT_TIMEOUT = 30.0

ImageLoader = Callable[[ImageSource], Awaitable[Image.Image]]


class ImageLoadError(RuntimeError):
    """A background image could not be fetched or decoded."""

    def __init__(self, source: object, reason: str) -> None:
        super().__init__(f"failed to load image {source!r}: {reason}")
        self.source = source
        self.reason = reason


def is_remote(source: str) -> bool:
    return source.startswith(("http://", "https://"))


async def _fetch(url: str, timeout: float) -> bytes:
    async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as client:
        response = await client.get(url)
        response.raise_for_status()
        return response.content


async def load_image(source: ImageSource, *, timeout: float = DEFAULT_TIMEOUT) -> Image.Image:
    """Fetch and decode a background image.

    Accepts an http(s) URL, a local path, raw bytes or an already decoded
    ``PIL.Image.Image``. Any failure is raised as :class:`ImageLoadError`.
    """
    if isinstance(source, Image.Image):
        return source.convert("RGBA")
    if source is None:
        raise ImageLoadError(source, "no image source given")

    try:
        if isinstance(source, (bytes, bytearray)):
            return await asyncio.to_thread(decode_bytes, bytes(source))
        text = str(source)
        if is_remote(text):
            LOGGER.debug("fetching image %s", text)
            data = await _fetch(text, timeout)
            return await asyncio.to_thread(decode_bytes, data)
        path = Path(text).expanduser()
        if not path.is_file():
            raise ImageLoadError(source, "file not found")
        LOGGER.debug("decoding image %s", path)
        return await asyncio.to_thread(decode_image, path)
    except ImageLoadError:
        raise
    except (httpx.HTTPError, OSError, RuntimeError) as exc:
        raise ImageLoadError(source, str(exc) or exc.__class__.__name__) from exc
