from textgraphics.models import BorderStyle, CornerRadii
from textgraphics.render.border import paint_border
from textgraphics.render.canvas import Canvas, new_surface
from textgraphics.render.geometry import build_box_path


def test_zero_width_border_makes_no_paint_calls(monkeypatch) -> None:
    calls: list[str] = []
    monkeypatch.setattr(Canvas, "stroke_path", lambda self, path: calls.append("stroke"))
    ctx = Canvas(new_surface(20, 20))
    path = build_box_path(20, 20, CornerRadii())

    assert paint_border(ctx, path, BorderStyle(color="#ff0000", width=0)) is False
    assert paint_border(ctx, path, BorderStyle(color=None, width=3)) is False
    assert calls == []


def test_border_is_stroked_on_the_outline() -> None:
    ctx = Canvas(new_surface(40, 20))
    path = build_box_path(40, 20, CornerRadii())

    assert paint_border(ctx, path, BorderStyle(color="#ff0000", width=4)) is True

    edge = ctx.image.getpixel((0, 10))
    assert edge[:3] == (255, 0, 0)
    assert edge[3] > 0
    assert ctx.image.getpixel((20, 10))[3] == 0
