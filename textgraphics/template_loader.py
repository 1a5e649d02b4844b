from __future__ import annotations

import json
import re
from dataclasses import fields
from importlib import resources
from pathlib import Path
from typing import Any

import yaml

from textgraphics.config import deep_merge
from textgraphics.models import BackgroundStyle, BorderStyle, BoxSpec, FontStyle

_CAMEL_PATTERN = re.compile(r"(?<!^)(?=[A-Z])")


def list_builtin_templates() -> list[str]:
    files = resources.files("textgraphics.templates")
    names = []
    for item in files.iterdir():
        if item.name.endswith((".yaml", ".yml", ".json")):
            names.append(Path(item.name).stem)
    return sorted(set(names))


def _parse_text(text: str, suffix: str) -> Any:
    if suffix == ".json":
        return json.loads(text)
    return yaml.safe_load(text)


def _load_file(path: Path) -> dict[str, Any]:
    data = _parse_text(path.read_text(encoding="utf-8"), path.suffix.lower())
    if not isinstance(data, dict):
        raise ValueError(f"template file is not a dict: {path}")
    return data


def _load_builtin(name: str) -> dict[str, Any]:
    pkg = resources.files("textgraphics.templates")
    for suffix in (".yaml", ".yml", ".json"):
        candidate = pkg / f"{name}{suffix}"
        if candidate.is_file():
            data = _parse_text(candidate.read_text(encoding="utf-8"), suffix)
            if isinstance(data, dict):
                return data
    raise FileNotFoundError(f"built-in template not found: {name}")


def _snake_keys(data: dict[str, Any] | None) -> dict[str, Any]:
    # 兼容 textAlign / letterSpacing 这类驼峰写法
    return {_CAMEL_PATTERN.sub("_", str(key)).lower(): value for key, value in (data or {}).items()}


def _build(cls: type, data: dict[str, Any] | None) -> Any:
    allowed = {item.name for item in fields(cls)}
    values = {key: value for key, value in _snake_keys(data).items() if key in allowed}
    return cls(**values)


def _content(value: Any) -> str | list[str] | None:
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value]
    return str(value)


_SECTION_ALIASES = {"background_style": "background", "border_style": "border", "font_style": "font"}


def _canonical(data: dict[str, Any]) -> dict[str, Any]:
    canonical: dict[str, Any] = {}
    for key, value in _snake_keys(data).items():
        if isinstance(value, dict):
            value = _snake_keys(value)
        canonical[_SECTION_ALIASES.get(key, key)] = value
    return canonical


def normalize_template_dict(data: dict[str, Any]) -> BoxSpec:
    data = _canonical(data)
    background = data.get("background")
    if isinstance(background, str):
        background = {"color": background}
    return BoxSpec(
        content=_content(data.get("content")),
        width=data.get("width", "auto"),
        height=data.get("height", "auto"),
        background=_build(BackgroundStyle, background),
        border=_build(BorderStyle, data.get("border")),
        font=_build(FontStyle, data.get("font")),
    )


def load_template_dict(template_name_or_path: str) -> dict[str, Any]:
    path = Path(template_name_or_path)
    if path.exists():
        return _load_file(path)
    return _load_builtin(template_name_or_path)


def load_template(template_name_or_path: str, overrides: dict[str, Any] | None = None) -> BoxSpec:
    raw = load_template_dict(template_name_or_path)
    if overrides:
        raw = deep_merge(_canonical(raw), _canonical(overrides))
    return normalize_template_dict(raw)
