from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence, Union

from PIL import Image

Dimension = Union[int, float, str]
ColorValue = Union[str, Mapping[float, str], None]
ImageSource = Union[str, bytes, Image.Image, None]


@dataclass(slots=True, frozen=True)
class Edges:
    top: float = 0
    right: float = 0
    bottom: float = 0
    left: float = 0

    @property
    def horizontal(self) -> float:
        return self.left + self.right

    @property
    def vertical(self) -> float:
        return self.top + self.bottom

    def expand(self, amount: float) -> "Edges":
        return Edges(
            top=self.top + amount,
            right=self.right + amount,
            bottom=self.bottom + amount,
            left=self.left + amount,
        )


@dataclass(slots=True, frozen=True)
class CornerRadii:
    top_left: float = 0
    top_right: float = 0
    bottom_right: float = 0
    bottom_left: float = 0

    @property
    def is_square(self) -> bool:
        return not any((self.top_left, self.top_right, self.bottom_right, self.bottom_left))


# 样式字段为 None 表示未设置，渲染前由 DEFAULT_STYLE 补齐
@dataclass(slots=True)
class BackgroundStyle:
    color: ColorValue = None
    image: ImageSource = None
    size: Any = None
    position: Any = None


@dataclass(slots=True)
class BorderStyle:
    color: str | None = None
    width: float | None = None
    radius: Any = None


@dataclass(slots=True)
class FontStyle:
    family: str | None = None
    size: Any = None
    weight: str | None = None
    variant: str | None = None
    style: str | None = None
    line_height: float | None = None
    color: str | None = None
    border_color: str | None = None
    border_width: float | None = None
    letter_spacing: float | None = None
    row_gap: float | None = None
    text_align: str | None = None
    padding: Any = None


@dataclass(slots=True)
class BoxSpec:
    content: str | Sequence[str] | None = None
    width: Dimension = "auto"
    height: Dimension = "auto"
    background: BackgroundStyle = field(default_factory=BackgroundStyle)
    border: BorderStyle = field(default_factory=BorderStyle)
    font: FontStyle = field(default_factory=FontStyle)

    def lines(self) -> list[str]:
        if not self.content:
            return []
        if isinstance(self.content, str):
            raw = [self.content]
        else:
            raw = list(self.content)
        return [str(line) for line in raw if line]


@dataclass(slots=True, frozen=True)
class Line:
    text: str
    index: int
    width: float
    left: float
    baseline: float


@dataclass(slots=True, frozen=True)
class ResolvedLayout:
    width: int
    height: int
    padding: Edges
    font_size: float
    lines: tuple[Line, ...] = ()

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "width": self.width,
            "height": self.height,
            "font_size": self.font_size,
            "padding": {
                "top": self.padding.top,
                "right": self.padding.right,
                "bottom": self.padding.bottom,
                "left": self.padding.left,
            },
            "lines": [
                {
                    "text": line.text,
                    "width": line.width,
                    "left": line.left,
                    "baseline": line.baseline,
                }
                for line in self.lines
            ],
        }


@dataclass(slots=True, frozen=True)
class Capabilities:
    """Feature switches shared by one render engine.

    ``FULL`` enables everything. ``MINIMAL`` is the solid-background variant:
    uniform per-character width, fixed rows, no letter spacing, no alignment,
    no glyph outline and no height correction.
    """

    name: str = "full"
    gradient: bool = True
    image: bool = True
    per_char_width: bool = True
    letter_spacing: bool = True
    alignment: bool = True
    text_stroke: bool = True
    height_correction: bool = True


FULL = Capabilities()
MINIMAL = Capabilities(
    name="minimal",
    gradient=False,
    image=False,
    per_char_width=False,
    letter_spacing=False,
    alignment=False,
    text_stroke=False,
    height_correction=False,
)
