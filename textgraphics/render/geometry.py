from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, Union

from textgraphics.constants import ARC_MIN_SEGMENTS
from textgraphics.models import CornerRadii

HALF_PI = math.pi / 2


@dataclass(slots=True, frozen=True)
class MoveTo:
    x: float
    y: float


@dataclass(slots=True, frozen=True)
class LineTo:
    x: float
    y: float


@dataclass(slots=True, frozen=True)
class Arc:
    cx: float
    cy: float
    radius: float
    start: float
    end: float

    @property
    def sweep(self) -> float:
        return self.end - self.start

    def point_at(self, angle: float) -> tuple[float, float]:
        return (
            self.cx + self.radius * math.cos(angle),
            self.cy + self.radius * math.sin(angle),
        )


@dataclass(slots=True, frozen=True)
class Close:
    pass


PathCommand = Union[MoveTo, LineTo, Arc, Close]


class BoxPath:
    """Closed outline of a rounded box.

    The same instance is used as the clip/fill region and as the stroke path,
    so background and border always follow identical geometry.
    """

    __slots__ = ("width", "height", "radii", "commands")

    def __init__(self, width: float, height: float, radii: CornerRadii) -> None:
        self.width = width
        self.height = height
        self.radii = radii
        self.commands: list[PathCommand] = []

    def __iter__(self) -> Iterator[PathCommand]:
        return iter(self.commands)

    def __len__(self) -> int:
        return len(self.commands)

    def move_to(self, x: float, y: float) -> None:
        self.commands.append(MoveTo(x, y))

    def line_to(self, x: float, y: float) -> None:
        self.commands.append(LineTo(x, y))

    def arc(self, cx: float, cy: float, radius: float, start: float, end: float) -> None:
        self.commands.append(Arc(cx, cy, radius, start, end))

    def close(self) -> None:
        self.commands.append(Close())

    @property
    def arcs(self) -> list[Arc]:
        return [command for command in self.commands if isinstance(command, Arc)]

    def points(self, segments: int | None = None) -> list[tuple[float, float]]:
        """Flatten the outline into a polygon.

        Arcs are sampled with ``segments`` steps, or with a step count
        proportional to the radius when not given.
        """
        result: list[tuple[float, float]] = []
        for command in self.commands:
            if isinstance(command, (MoveTo, LineTo)):
                _append_point(result, (command.x, command.y))
            elif isinstance(command, Arc):
                steps = segments or max(ARC_MIN_SEGMENTS, int(math.ceil(command.radius / 2)))
                for step in range(steps + 1):
                    angle = command.start + command.sweep * step / steps
                    _append_point(result, command.point_at(angle))
        if len(result) > 1 and _same_point(result[0], result[-1]):
            result.pop()
        return result


def _same_point(a: tuple[float, float], b: tuple[float, float]) -> bool:
    return abs(a[0] - b[0]) < 1e-9 and abs(a[1] - b[1]) < 1e-9


def _append_point(points: list[tuple[float, float]], point: tuple[float, float]) -> None:
    if points and _same_point(points[-1], point):
        return
    points.append(point)


def build_box_path(width: float, height: float, radii: CornerRadii) -> BoxPath:
    """Trace the box clockwise starting right after the top-left corner.

    A zero radius turns its corner into a plain line-to, keeping it sharp.
    Radii larger than half the shorter side are not clamped.
    """
    lt, rt, rb, lb = radii.top_left, radii.top_right, radii.bottom_right, radii.bottom_left
    path = BoxPath(width, height, radii)

    path.move_to(lt, 0)
    # 右上
    if rt:
        path.line_to(width - rt, 0)
        path.arc(width - rt, rt, rt, -HALF_PI, 0)
    else:
        path.line_to(width, 0)
    # 右下
    if rb:
        path.line_to(width, height - rb)
        path.arc(width - rb, height - rb, rb, 0, HALF_PI)
    else:
        path.line_to(width, height)
    # 左下
    if lb:
        path.line_to(lb, height)
        path.arc(lb, height - lb, lb, HALF_PI, math.pi)
    else:
        path.line_to(0, height)
    # 左上
    if lt:
        path.line_to(0, lt)
        path.arc(lt, lt, lt, math.pi, math.pi + HALF_PI)
    else:
        path.line_to(0, 0)
    path.close()
    return path
