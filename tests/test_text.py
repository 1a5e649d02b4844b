from textgraphics.models import FULL, MINIMAL, BoxSpec, FontStyle
from textgraphics.render.canvas import Canvas, new_surface
from textgraphics.render.layout import resolve_font, resolve_layout
from textgraphics.render.text import align_offset, paint_text


class RecordingCanvas(Canvas):
    def __init__(self, image) -> None:
        super().__init__(image)
        self.calls: list[tuple[str, str, float, float]] = []

    def fill_text(self, text: str, x: float, y: float, *, outlined: bool = False) -> None:
        self.calls.append(("outlined" if outlined else "fill", text, x, y))


def _paint(spec: BoxSpec, capabilities=FULL) -> RecordingCanvas:
    layout = resolve_layout(spec, capabilities)
    ctx = RecordingCanvas(new_surface(max(1, layout.width), max(1, layout.height)))
    paint_text(ctx, layout, resolve_font(spec.font), capabilities)
    return ctx


def test_align_offset() -> None:
    assert align_offset(20, 5, "left") == 0
    assert align_offset(20, 5, "center") == 7.5
    assert align_offset(20, 5, "right") == 15
    assert align_offset(20, 5, "justify") == 0


def test_characters_advance_by_their_own_width() -> None:
    ctx = _paint(BoxSpec(content="a文b", font=FontStyle(size=10, letter_spacing=1)))

    assert [(text, x) for _, text, x, _ in ctx.calls] == [("a", 0), ("文", 6), ("b", 17)]
    assert {y for *_, y in ctx.calls} == {5}


def test_glyph_outline_only_when_border_width_set() -> None:
    plain = _paint(BoxSpec(content="ab", font=FontStyle(size=10)))
    outlined = _paint(BoxSpec(content="ab", font=FontStyle(size=10, border_width=1, border_color="#fff")))

    assert [kind for kind, *_ in plain.calls] == ["fill", "fill"]
    assert [kind for kind, *_ in outlined.calls] == ["outlined", "outlined"]


def test_minimal_preset_skips_outline_and_alignment() -> None:
    spec = BoxSpec(
        content="ab",
        width=100,
        font=FontStyle(size=10, border_width=1, text_align="right"),
    )

    ctx = _paint(spec, MINIMAL)

    assert [(kind, x) for kind, _, x, _ in ctx.calls] == [("fill", 0), ("fill", 10)]


def test_spaces_advance_without_painting() -> None:
    ctx = _paint(BoxSpec(content="a b", font=FontStyle(size=10)))

    assert [(text, x) for _, text, x, _ in ctx.calls] == [("a", 0), ("b", 10)]


def test_font_description_uses_css_shorthand() -> None:
    ctx = _paint(BoxSpec(content="a", font=FontStyle(size=14, family="Arial", weight="bold")))

    assert ctx.font_description == "normal normal bold 14px/1 Arial"


def test_text_is_painted_onto_the_surface() -> None:
    spec = BoxSpec(content="HH", width=40, height=30, font=FontStyle(size=20, color="#ff0000", padding=4))
    layout = resolve_layout(spec)
    ctx = Canvas(new_surface(layout.width, layout.height))

    paint_text(ctx, layout, resolve_font(spec.font))

    assert ctx.image.getextrema()[3][1] > 0


def test_null_letter_spacing_paints_like_zero() -> None:
    ctx = _paint(BoxSpec(content="ab", font=FontStyle(size=10, letter_spacing=None)))

    assert [(text, x) for _, text, x, _ in ctx.calls] == [("a", 0), ("b", 5)]
