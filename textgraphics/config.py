from __future__ import annotations

import copy
import os
import platform
from pathlib import Path
from typing import Any

import yaml

from textgraphics.constants import DEFAULT_FONT_SIZE, TEXT_ALIGN_LEFT

APP_DIR_NAME = "TextGraphics"

# 渲染默认值集中在这里，每次渲染开始时读取一份副本
DEFAULT_STYLE: dict[str, Any] = {
    "font": {
        "family": "微软雅黑",
        "size": DEFAULT_FONT_SIZE,
        "weight": "normal",
        "variant": "normal",
        "style": "normal",
        "line_height": 1,
        "color": "#000000",
        "border_color": "#000000",
        "border_width": 0,
        "letter_spacing": 0,
        "row_gap": 0,
        "text_align": TEXT_ALIGN_LEFT,
        "padding": 0,
    },
    "border": {
        "color": None,
        "width": 0,
        "radius": 0,
    },
    "background": {
        "color": None,
        "image": None,
        "size": None,
        "position": None,
    },
    "fallback_color": "#000000",
    "image_timeout": 30.0,
}

DEFAULT_CONFIG: dict[str, Any] = {
    "template": None,
    "out": ".",
    "name_template": "{text}_{width}x{height}.{ext}",
    "output_format": "png",
    "log_level": "info",
    "style": DEFAULT_STYLE,
}


def default_style() -> dict[str, Any]:
    return copy.deepcopy(DEFAULT_STYLE)


def get_user_data_dir() -> Path:
    system_name = platform.system().lower()
    if system_name == "windows":
        base = (
            os.environ.get("APPDATA")
            or os.environ.get("LOCALAPPDATA")
            or str(Path.home() / "AppData" / "Roaming")
        )
        return Path(base) / APP_DIR_NAME
    if system_name == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_DIR_NAME

    xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config_home:
        return Path(xdg_config_home) / APP_DIR_NAME
    return Path.home() / ".config" / APP_DIR_NAME


def get_config_path() -> Path:
    return get_user_data_dir() / "config.yaml"


def deep_merge(base: dict[str, Any], incoming: dict[str, Any]) -> dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in incoming.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def merge_style(overrides: dict[str, Any] | None) -> dict[str, Any]:
    if not overrides:
        return default_style()
    return deep_merge(DEFAULT_STYLE, overrides)


def load_config(path: Path | None = None) -> dict[str, Any]:
    cfg_path = path or get_config_path()
    if not cfg_path.exists():
        return copy.deepcopy(DEFAULT_CONFIG)

    text = cfg_path.read_text(encoding="utf-8")
    loaded = yaml.safe_load(text) or {}
    if not isinstance(loaded, dict):
        loaded = {}
    return deep_merge(DEFAULT_CONFIG, loaded)


def write_default_config(path: Path | None = None, force: bool = False) -> Path:
    cfg_path = path or get_config_path()
    cfg_path.parent.mkdir(parents=True, exist_ok=True)
    if cfg_path.exists() and not force:
        return cfg_path
    cfg = copy.deepcopy(DEFAULT_CONFIG)
    cfg_path.write_text(yaml.safe_dump(cfg, sort_keys=False, allow_unicode=True), encoding="utf-8")
    return cfg_path
