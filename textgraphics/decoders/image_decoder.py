from __future__ import annotations

import io
from pathlib import Path

from PIL import Image, ImageOps, UnidentifiedImageError

from textgraphics.constants import HEIF_EXTENSIONS, SUPPORTED_EXTENSIONS

_HEIF_REGISTERED = False


def _register_heif_opener() -> bool:
    global _HEIF_REGISTERED
    if _HEIF_REGISTERED:
        return True
    try:
        from pillow_heif import register_heif_opener
    except ImportError:
        return False
    register_heif_opener()
    _HEIF_REGISTERED = True
    return True


def _decode_opened(image: Image.Image) -> Image.Image:
    return ImageOps.exif_transpose(image).convert("RGBA").copy()


def decode_bytes(data: bytes) -> Image.Image:
    # 远程图片没有扩展名可判断，先尝试注册 HEIF 解码器
    _register_heif_opener()
    try:
        with Image.open(io.BytesIO(data)) as image:
            return _decode_opened(image)
    except UnidentifiedImageError as exc:
        raise RuntimeError("image data could not be identified") from exc


def decode_image(path: Path) -> Image.Image:
    ext = path.suffix.lower()
    if ext not in SUPPORTED_EXTENSIONS:
        raise RuntimeError(f"unsupported image format: {path.suffix}")
    if ext in HEIF_EXTENSIONS and not _register_heif_opener():
        raise RuntimeError("pillow-heif is required to decode HEIF/HEIC/HIF")
    with Image.open(path) as image:
        return _decode_opened(image)
