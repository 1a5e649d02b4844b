from __future__ import annotations

import os
import platform
import re
from functools import lru_cache
from pathlib import Path
from typing import Any

from PIL import ImageFont

from textgraphics.constants import DEFAULT_FONT_SIZE

_FONT_FILE_SUFFIXES = {".ttf", ".ttc", ".otf", ".otc"}
_FONT_SIZE_PATTERN = re.compile(r"(\d+(?:\.\d+)?)")

# 常见中文字体名到文件名的映射，family 传中文名时使用
_FAMILY_ALIASES: dict[str, tuple[str, ...]] = {
    "微软雅黑": ("msyh", "microsoft yahei"),
    "黑体": ("simhei",),
    "宋体": ("simsun",),
    "苹方": ("pingfang",),
    "思源黑体": ("sourcehansans", "notosanscjk"),
}


def _system_font_candidates() -> list[Path]:
    system = platform.system().lower()
    if "windows" in system:
        return [
            Path(r"C:\Windows\Fonts\msyh.ttc"),
            Path(r"C:\Windows\Fonts\simhei.ttf"),
            Path(r"C:\Windows\Fonts\simsun.ttc"),
            Path(r"C:\Windows\Fonts\arial.ttf"),
        ]
    if "darwin" in system:
        return [
            Path("/System/Library/Fonts/PingFang.ttc"),
            Path("/System/Library/Fonts/Hiragino Sans GB.ttc"),
            Path("/Library/Fonts/Arial Unicode.ttf"),
        ]
    return [
        Path("/usr/share/fonts/opentype/noto/NotoSansCJK-Regular.ttc"),
        Path("/usr/share/fonts/truetype/noto/NotoSansCJK-Regular.ttc"),
        Path("/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf"),
    ]


def _system_font_directories() -> list[Path]:
    system = platform.system().lower()
    roots: list[Path] = []
    if "windows" in system:
        windows_dir = Path(os.environ.get("WINDIR", r"C:\Windows"))
        roots.append(windows_dir / "Fonts")
        local_app_data = os.environ.get("LOCALAPPDATA")
        if local_app_data:
            roots.append(Path(local_app_data) / "Microsoft" / "Windows" / "Fonts")
    elif "darwin" in system:
        roots.extend(
            [
                Path("/System/Library/Fonts"),
                Path("/Library/Fonts"),
                Path.home() / "Library" / "Fonts",
            ]
        )
    else:
        roots.extend(
            [
                Path("/usr/share/fonts"),
                Path("/usr/local/share/fonts"),
                Path.home() / ".fonts",
                Path.home() / ".local" / "share" / "fonts",
            ]
        )
    return roots


@lru_cache(maxsize=1)
def list_available_font_paths() -> list[Path]:
    available: list[Path] = []
    seen: set[str] = set()

    for root in _system_font_directories():
        try:
            if not root.exists() or not root.is_dir():
                continue
        except OSError:
            continue

        for dir_path, _dir_names, file_names in os.walk(root, onerror=lambda _err: None):
            for file_name in file_names:
                if Path(file_name).suffix.lower() not in _FONT_FILE_SUFFIXES:
                    continue
                candidate = Path(dir_path) / file_name
                key = str(candidate).lower()
                if key in seen:
                    continue
                seen.add(key)
                available.append(candidate)

    available.sort(key=lambda path: (path.stem.lower(), str(path).lower()))
    return available


def _normalize_family_key(text: str) -> str:
    return re.sub(r"[\s_\-]+", "", text).lower()


def find_font_path(family: str | None) -> Path | None:
    """Resolve a family name or a font file path to an installed font file."""
    if not family:
        return None
    family = family.strip().strip("'\"")
    direct = Path(family)
    if direct.suffix.lower() in _FONT_FILE_SUFFIXES and direct.exists():
        return direct

    keys = [_normalize_family_key(family)]
    keys.extend(_normalize_family_key(alias) for alias in _FAMILY_ALIASES.get(family, ()))
    paths = list_available_font_paths()
    for key in keys:
        for path in paths:
            if _normalize_family_key(path.stem) == key:
                return path
    for key in keys:
        for path in paths:
            if _normalize_family_key(path.stem).startswith(key):
                return path
    return None


def load_font(family: str | None, size: float) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    pixel_size = max(1, int(round(size)))
    candidates: list[Path] = []
    resolved = find_font_path(family)
    if resolved is not None:
        candidates.append(resolved)
    candidates.extend(_system_font_candidates())
    for candidate in candidates:
        if candidate.exists():
            try:
                return ImageFont.truetype(str(candidate), size=pixel_size)
            except OSError:
                continue
    return ImageFont.load_default(size=pixel_size)


def parse_font_size(value: Any, default: float = DEFAULT_FONT_SIZE) -> float:
    """Read a font size from a number or a CSS-like string such as ``"14px"``.

    Anything without a usable number falls back to ``default``.
    """
    if isinstance(value, bool) or value is None:
        return default
    if isinstance(value, (int, float)):
        return value if value > 0 else default
    match = _FONT_SIZE_PATTERN.search(str(value))
    if not match:
        return default
    parsed = float(match.group(1))
    if parsed <= 0:
        return default
    return int(parsed) if parsed.is_integer() else parsed


def font_description(
    *,
    size: float,
    family: str,
    style: str = "normal",
    variant: str = "normal",
    weight: str = "normal",
    line_height: float = 1,
) -> str:
    size_text = int(size) if float(size).is_integer() else size
    return f"{style} {variant} {weight} {size_text}px/{line_height} {family}"
