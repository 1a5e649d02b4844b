from __future__ import annotations

import re
from pathlib import Path

from textgraphics.models import BoxSpec

INVALID_FILENAME_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1F]')
MAX_TEXT_TOKEN_LENGTH = 40


def sanitize_token(value: str | None, fallback: str = "NA") -> str:
    text = (value or "").strip()
    if not text:
        text = fallback
    text = INVALID_FILENAME_CHARS.sub("_", text)
    text = re.sub(r"\s+", "_", text)
    text = text.strip(" ._")
    return text or fallback


def sanitize_filename(value: str, fallback: str = "output") -> str:
    text = INVALID_FILENAME_CHARS.sub("_", value).strip()
    text = text.strip(" .")
    return text or fallback


def build_output_name(
    name_template: str,
    spec: BoxSpec,
    size: tuple[int, int],
    extension: str,
    template_name: str | None = None,
) -> str:
    ext = extension.lower().lstrip(".")
    text = "_".join(spec.lines())[:MAX_TEXT_TOKEN_LENGTH]
    values = {
        "text": sanitize_token(text, fallback="box"),
        "width": str(size[0]),
        "height": str(size[1]),
        "template": sanitize_token(template_name, fallback="custom"),
        "ext": ext,
    }
    try:
        rendered = name_template.format(**values)
    except KeyError as exc:
        missing = str(exc).strip("'")
        raise ValueError(f"name template contains unknown key: {missing}") from exc

    rendered = sanitize_filename(rendered, fallback=f"box_{size[0]}x{size[1]}.{ext}")
    if not Path(rendered).suffix:
        rendered = f"{rendered}.{ext}"
    return rendered
