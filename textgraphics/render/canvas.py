from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

from PIL import Image, ImageChops, ImageColor, ImageDraw, ImageFont, ImageMath

from textgraphics.render.geometry import BoxPath

# 多边形与描边先在放大画布上绘制再缩小，得到平滑边缘
SUPERSAMPLE = 4

RGBA = tuple[int, int, int, int]


def new_surface(width: int, height: int) -> Image.Image:
    return Image.new("RGBA", (max(0, int(width)), max(0, int(height))), (0, 0, 0, 0))


def parse_color(value: str | None, fallback: str = "#000000") -> RGBA:
    text = (value or "").strip()
    try:
        rgb = ImageColor.getrgb(text or fallback)
    except ValueError:
        rgb = ImageColor.getrgb(fallback)
    if len(rgb) == 4:
        return int(rgb[0]), int(rgb[1]), int(rgb[2]), int(rgb[3])
    return int(rgb[0]), int(rgb[1]), int(rgb[2]), 255


def _lerp(a: int, b: int, t: float) -> int:
    return int(round(a + (b - a) * t))


@dataclass(slots=True)
class LinearGradient:
    x0: float
    y0: float
    x1: float
    y1: float
    stops: list[tuple[float, RGBA]] = field(default_factory=list)

    def add_color_stop(self, offset: float, color: str, fallback: str = "#000000") -> None:
        offset = max(0.0, min(1.0, float(offset)))
        self.stops.append((offset, parse_color(color, fallback)))

    def color_at(self, t: float) -> RGBA:
        if not self.stops:
            return (0, 0, 0, 0)
        stops = sorted(self.stops, key=lambda stop: stop[0])
        if t <= stops[0][0]:
            return stops[0][1]
        if t >= stops[-1][0]:
            return stops[-1][1]
        for (left_pos, left_rgba), (right_pos, right_rgba) in zip(stops, stops[1:]):
            if left_pos <= t <= right_pos:
                span = right_pos - left_pos
                local = 0.0 if span <= 0 else (t - left_pos) / span
                return tuple(_lerp(a, b, local) for a, b in zip(left_rgba, right_rgba))  # type: ignore[return-value]
        return stops[-1][1]

    def render(self, size: tuple[int, int]) -> Image.Image:
        width, height = size
        dx = self.x1 - self.x0
        dy = self.y1 - self.y0
        length_sq = dx * dx + dy * dy
        if width <= 0 or height <= 0 or length_sq <= 0:
            return Image.new("RGBA", (max(0, width), max(0, height)), self.color_at(0.0))
        # 投影位置对 x、y 线性可分：先算一行一列，拉伸后相加得到 0..255 的参数图
        scale = 255.0 / length_sq
        row = Image.new("F", (width, 1))
        row.putdata([(x + 0.5 - self.x0) * dx * scale for x in range(width)])
        column = Image.new("F", (1, height))
        column.putdata([(y + 0.5 - self.y0) * dy * scale for y in range(height)])
        levels = ImageMath.lambda_eval(
            lambda args: args["min"](args["max"](args["row"] + args["column"] + 0.5, 0), 255),
            row=row.resize((width, height), resample=Image.Resampling.NEAREST),
            column=column.resize((width, height), resample=Image.Resampling.NEAREST),
        ).convert("L")
        # 256 级查找表按通道映射
        lut = [self.color_at(level / 255.0) for level in range(256)]
        channels = [levels.point([color[index] for color in lut]) for index in range(4)]
        return Image.merge("RGBA", channels)


FillStyle = Union[str, LinearGradient]


class Canvas:
    """Immediate-mode 2D context over a Pillow RGBA image.

    Every paint call draws into a transparent layer, masks it with the
    current clip and composites it over the surface (source-over).
    """

    def __init__(self, image: Image.Image, fallback_color: str = "#000000") -> None:
        if image.mode != "RGBA":
            raise ValueError(f"canvas surface must be RGBA, got {image.mode}")
        self.image = image
        self.fallback_color = fallback_color
        self.fill_style: FillStyle = fallback_color
        self.stroke_style: str = fallback_color
        self.line_width: float = 1.0
        self.font: ImageFont.FreeTypeFont | ImageFont.ImageFont | None = None
        self.font_description: str = ""
        self._clip: Image.Image | None = None
        self._saved: list[Image.Image | None] = []

    @property
    def size(self) -> tuple[int, int]:
        return self.image.size

    def save(self) -> None:
        self._saved.append(self._clip.copy() if self._clip is not None else None)

    def restore(self) -> None:
        if self._saved:
            self._clip = self._saved.pop()

    def create_linear_gradient(self, x0: float, y0: float, x1: float, y1: float) -> LinearGradient:
        return LinearGradient(x0, y0, x1, y1)

    def _path_mask(self, path: BoxPath) -> Image.Image:
        width, height = self.size
        big = Image.new("L", (width * SUPERSAMPLE, height * SUPERSAMPLE), 0)
        points = [(x * SUPERSAMPLE, y * SUPERSAMPLE) for x, y in path.points()]
        if len(points) >= 3:
            ImageDraw.Draw(big).polygon(points, fill=255)
        return big.resize((width, height), resample=Image.Resampling.LANCZOS)

    def clip(self, path: BoxPath) -> None:
        mask = self._path_mask(path)
        self._clip = mask if self._clip is None else ImageChops.multiply(self._clip, mask)

    def _composite(self, layer: Image.Image, mask: Image.Image | None = None) -> None:
        for extra in (mask, self._clip):
            if extra is None:
                continue
            alpha = ImageChops.multiply(layer.getchannel("A"), extra)
            layer.putalpha(alpha)
        self.image.alpha_composite(layer)

    def _paint_fill(self, mask: Image.Image) -> None:
        if isinstance(self.fill_style, LinearGradient):
            layer = self.fill_style.render(self.size)
        else:
            layer = Image.new("RGBA", self.size, parse_color(self.fill_style, self.fallback_color))
        self._composite(layer, mask)

    def fill_rect(self, x: float, y: float, width: float, height: float) -> None:
        if width <= 0 or height <= 0:
            return
        mask = Image.new("L", self.size, 0)
        ImageDraw.Draw(mask).rectangle(
            [(int(round(x)), int(round(y))), (int(round(x + width)) - 1, int(round(y + height)) - 1)],
            fill=255,
        )
        self._paint_fill(mask)

    def fill_path(self, path: BoxPath) -> None:
        self._paint_fill(self._path_mask(path))

    def stroke_path(self, path: BoxPath) -> None:
        if self.line_width <= 0:
            return
        width, height = self.size
        points = [(x * SUPERSAMPLE, y * SUPERSAMPLE) for x, y in path.points()]
        if len(points) < 2:
            return
        big = Image.new("L", (width * SUPERSAMPLE, height * SUPERSAMPLE), 0)
        line_px = max(1, int(round(self.line_width * SUPERSAMPLE)))
        ImageDraw.Draw(big).line(points + [points[0], points[1]], fill=255, width=line_px, joint="curve")
        mask = big.resize((width, height), resample=Image.Resampling.LANCZOS)
        layer = Image.new("RGBA", self.size, parse_color(self.stroke_style, self.fallback_color))
        self._composite(layer, mask)

    def draw_image(self, image: Image.Image, x: float, y: float, width: float, height: float) -> None:
        target = (int(round(width)), int(round(height)))
        if target[0] <= 0 or target[1] <= 0:
            return
        source = image.convert("RGBA")
        if source.size != target:
            source = source.resize(target, resample=Image.Resampling.LANCZOS)
        layer = Image.new("RGBA", self.size, (0, 0, 0, 0))
        layer.paste(source, (int(round(x)), int(round(y))))
        self._composite(layer)

    def set_font(self, font: ImageFont.FreeTypeFont | ImageFont.ImageFont, description: str) -> None:
        self.font = font
        self.font_description = description

    def _text_origin(self, x: float, y: float) -> tuple[tuple[float, float], str | None]:
        # 基线居中（middle）：FreeType 字体用锚点，位图字体手动上移半个字号
        if isinstance(self.font, ImageFont.FreeTypeFont):
            return (x, y), "lm"
        _, top, _, bottom = self.font.getbbox("Ag") if self.font is not None else (0, 0, 0, 0)
        return (x, y - (bottom - top) / 2), None

    def fill_text(self, text: str, x: float, y: float, *, outlined: bool = False) -> None:
        """Draw ``text`` with the fill style; ``outlined`` adds a glyph outline.

        The outline is drawn in the same call as the fill, ``line_width``
        pixels wide around the glyph, in the stroke style.
        """
        layer = Image.new("RGBA", self.size, (0, 0, 0, 0))
        origin, anchor = self._text_origin(x, y)
        color = parse_color(self.fill_style if isinstance(self.fill_style, str) else None, self.fallback_color)
        options: dict[str, Any] = {}
        if outlined and self.line_width > 0:
            options["stroke_width"] = max(1, int(round(self.line_width)))
            options["stroke_fill"] = parse_color(self.stroke_style, self.fallback_color)
        ImageDraw.Draw(layer).text(origin, text, font=self.font, fill=color, anchor=anchor, **options)
        self._composite(layer)
