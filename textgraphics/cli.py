from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import typer

from textgraphics.config import load_config, merge_style, write_default_config
from textgraphics.constants import OUTPUT_FORMATS
from textgraphics.decoders.image_loader import ImageLoadError
from textgraphics.models import FULL, MINIMAL
from textgraphics.naming import build_output_name
from textgraphics.render.engine import render_sync
from textgraphics.render.layout import resolve_layout
from textgraphics.template_loader import list_builtin_templates, load_template, normalize_template_dict

app = typer.Typer(add_completion=False, no_args_is_help=True, help="Render styled text boxes to images.")
LOGGER = logging.getLogger("textgraphics")


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )


def _parse_numbers(value: str | None) -> float | list[float] | None:
    if value is None:
        return None
    items = [float(item) for item in str(value).split(",") if item.strip()]
    if not items:
        return None
    return items[0] if len(items) == 1 else items


def _parse_gradient(values: list[str]) -> dict[float, str]:
    stops: dict[float, str] = {}
    for value in values:
        for item in str(value).split(","):
            offset, sep, color = item.partition(":")
            if not sep:
                raise ValueError(f"gradient stop must look like OFFSET:COLOR, got {item!r}")
            stops[float(offset)] = color.strip()
    return stops


def _parse_size_tokens(value: str | None) -> str | list[str] | None:
    if not value:
        return None
    items = [item.strip() for item in value.split(",") if item.strip()]
    return items[0] if len(items) == 1 else items


def _drop_none(data: dict[str, Any]) -> dict[str, Any]:
    cleaned: dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, dict):
            value = _drop_none(value)
            if not value:
                continue
        if value is None:
            continue
        cleaned[key] = value
    return cleaned


def _build_payload(
    text: list[str],
    *,
    width: str | None,
    height: str | None,
    font_size: float | None,
    font_family: str | None,
    color: str | None,
    background: str | None,
    gradient: list[str],
    image: str | None,
    image_size: str | None,
    image_position: str | None,
    border_color: str | None,
    border_width: float | None,
    radius: str | None,
    padding: str | None,
    align: str | None,
    letter_spacing: float | None,
    row_gap: float | None,
    text_border_color: str | None,
    text_border_width: float | None,
) -> dict[str, Any]:
    background_color: Any = background
    if gradient:
        background_color = _parse_gradient(gradient)
    payload = {
        "content": text or None,
        "width": width,
        "height": height,
        "background": {
            "color": background_color,
            "image": image,
            "size": _parse_size_tokens(image_size),
            "position": _parse_numbers(image_position),
        },
        "border": {
            "color": border_color,
            "width": border_width,
            "radius": _parse_numbers(radius),
        },
        "font": {
            "size": font_size,
            "family": font_family,
            "color": color,
            "padding": _parse_numbers(padding),
            "text_align": align,
            "letter_spacing": letter_spacing,
            "row_gap": row_gap,
            "border_color": text_border_color,
            "border_width": text_border_width,
        },
    }
    return _drop_none(payload)


def _load_spec(template: str | None, payload: dict[str, Any]):
    if template:
        return load_template(template, overrides=payload)
    return normalize_template_dict(payload)


@app.command()
def render(
    text: list[str] = typer.Argument(None, help="Text lines, one argument per line."),
    template: str | None = typer.Option(None, "--template", help="Built-in template name or .yaml/.json path."),
    width: str | None = typer.Option(None, "--width", help="Width in pixels or 'auto'."),
    height: str | None = typer.Option(None, "--height", help="Height in pixels or 'auto'."),
    font_size: float | None = typer.Option(None, "--font-size", min=1),
    font_family: str | None = typer.Option(None, "--font-family", help="Font family name or font file path."),
    color: str | None = typer.Option(None, "--color", help="Text color."),
    background: str | None = typer.Option(None, "--background", help="Solid background color."),
    gradient: list[str] = typer.Option([], "--gradient", help='Gradient stops, e.g. "0:#fff,1:#000".'),
    image: str | None = typer.Option(None, "--image", help="Background image path or URL."),
    image_size: str | None = typer.Option(None, "--image-size", help='Pixels or percent, e.g. "50%,50%".'),
    image_position: str | None = typer.Option(None, "--image-position", help='Offset, e.g. "10,4".'),
    border_color: str | None = typer.Option(None, "--border-color"),
    border_width: float | None = typer.Option(None, "--border-width", min=0),
    radius: str | None = typer.Option(None, "--radius", help='One radius or "tl,tr,br,bl".'),
    padding: str | None = typer.Option(None, "--padding", help='One value, "v,h" or "t,r,b,l".'),
    align: str | None = typer.Option(None, "--align", help="left|center|right"),
    letter_spacing: float | None = typer.Option(None, "--letter-spacing"),
    row_gap: float | None = typer.Option(None, "--row-gap"),
    text_border_color: str | None = typer.Option(None, "--text-border-color"),
    text_border_width: float | None = typer.Option(None, "--text-border-width", min=0),
    minimal: bool = typer.Option(False, "--minimal", help="Use the solid-background-only preset."),
    out: Path | None = typer.Option(None, "--out", help="Output directory."),
    name_template: str | None = typer.Option(None, "--name", help='Output filename template, e.g. "{text}.{ext}"'),
    output_format: str | None = typer.Option(None, "--format", help="png|webp"),
    log_level: str | None = typer.Option(None, "--log-level"),
) -> None:
    """Render one text box and save it as an image."""
    cfg = load_config()
    _setup_logging(log_level or str(cfg.get("log_level", "info")))

    fmt = (output_format or str(cfg.get("output_format", "png"))).lower()
    if fmt not in OUTPUT_FORMATS:
        typer.secho(f"output format must be one of {sorted(OUTPUT_FORMATS)}, got: {fmt!r}", err=True, fg=typer.colors.RED)
        raise typer.Exit(1)

    template_name = template or cfg.get("template")
    try:
        payload = _build_payload(
            text,
            width=width,
            height=height,
            font_size=font_size,
            font_family=font_family,
            color=color,
            background=background,
            gradient=gradient,
            image=image,
            image_size=image_size,
            image_position=image_position,
            border_color=border_color,
            border_width=border_width,
            radius=radius,
            padding=padding,
            align=align,
            letter_spacing=letter_spacing,
            row_gap=row_gap,
            text_border_color=text_border_color,
            text_border_width=text_border_width,
        )
        spec = _load_spec(template_name, payload)
    except (ValueError, FileNotFoundError) as exc:
        typer.secho(f"Invalid style: {exc}", err=True, fg=typer.colors.RED)
        raise typer.Exit(1)

    try:
        surface = render_sync(
            spec,
            capabilities=MINIMAL if minimal else FULL,
            style=merge_style(cfg.get("style")),
        )
    except ImageLoadError as exc:
        typer.secho(str(exc), err=True, fg=typer.colors.RED)
        raise typer.Exit(1)
    except ValueError as exc:
        typer.secho(f"Render failed: {exc}", err=True, fg=typer.colors.RED)
        raise typer.Exit(1)

    if surface.width == 0 or surface.height == 0:
        typer.echo("Nothing to render: box resolved to an empty size.")
        raise typer.Exit(0)

    out_dir = out or Path(str(cfg.get("out") or "."))
    out_dir.mkdir(parents=True, exist_ok=True)
    name_tmpl = name_template or str(cfg.get("name_template"))
    try:
        output_name = build_output_name(name_tmpl, spec, surface.size, extension=fmt, template_name=template_name)
    except ValueError as exc:
        typer.secho(str(exc), err=True, fg=typer.colors.RED)
        raise typer.Exit(1)
    output_file = out_dir / output_name
    surface.save(output_file, format=fmt.upper())
    LOGGER.info("OK   %s (%dx%d)", output_file, surface.width, surface.height)
    typer.echo(str(output_file))


@app.command("inspect")
def inspect_layout(
    text: list[str] = typer.Argument(None, help="Text lines, one argument per line."),
    template: str | None = typer.Option(None, "--template"),
    width: str | None = typer.Option(None, "--width"),
    height: str | None = typer.Option(None, "--height"),
    font_size: float | None = typer.Option(None, "--font-size", min=1),
    padding: str | None = typer.Option(None, "--padding"),
    border_width: float | None = typer.Option(None, "--border-width", min=0),
    align: str | None = typer.Option(None, "--align"),
    letter_spacing: float | None = typer.Option(None, "--letter-spacing"),
    row_gap: float | None = typer.Option(None, "--row-gap"),
    minimal: bool = typer.Option(False, "--minimal"),
) -> None:
    """Print the resolved box size and line placement as JSON."""
    try:
        payload = _drop_none(
            {
                "content": text or None,
                "width": width,
                "height": height,
                "border": {"width": border_width},
                "font": {
                    "size": font_size,
                    "padding": _parse_numbers(padding),
                    "text_align": align,
                    "letter_spacing": letter_spacing,
                    "row_gap": row_gap,
                },
            }
        )
        spec = _load_spec(template, payload)
        cfg = load_config()
        layout = resolve_layout(spec, MINIMAL if minimal else FULL, style=merge_style(cfg.get("style")))
    except (ValueError, FileNotFoundError) as exc:
        typer.secho(f"Invalid style: {exc}", err=True, fg=typer.colors.RED)
        raise typer.Exit(1)
    typer.echo(json.dumps(layout.to_dict(), ensure_ascii=False, indent=2))


@app.command("templates")
def list_templates() -> None:
    """List built-in style templates."""
    for name in list_builtin_templates():
        typer.echo(name)


@app.command("init-config")
def init_config(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config file."),
) -> None:
    path = write_default_config(force=force)
    typer.echo(f"Config initialized: {path}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
