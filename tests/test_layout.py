import pytest

from textgraphics.config import merge_style
from textgraphics.models import MINIMAL, BorderStyle, BoxSpec, Edges, FontStyle
from textgraphics.render.layout import (
    normalize_padding,
    normalize_radii,
    parse_dimension,
    resolve_layout,
    resolve_spec,
)
from textgraphics.render.typography import parse_font_size
from textgraphics.template_loader import normalize_template_dict


def test_single_ascii_line_auto_size() -> None:
    layout = resolve_layout(BoxSpec(content="OK", font=FontStyle(size=12)))

    assert (layout.width, layout.height) == (12, 8)


def test_absent_content_resolves_to_empty_box() -> None:
    layout = resolve_layout(BoxSpec(content=None))

    assert (layout.width, layout.height) == (0, 0)
    assert layout.is_empty
    assert layout.lines == ()


def test_empty_lines_are_filtered_before_measuring() -> None:
    layout = resolve_layout(BoxSpec(content=["", "OK", ""], font=FontStyle(size=12)))

    assert (layout.width, layout.height) == (12, 8)
    assert [line.text for line in layout.lines] == ["OK"]


def test_multi_line_height_uses_row_gap_and_even_correction() -> None:
    spec = BoxSpec(content=["ab", "cd"], font=FontStyle(size=10, row_gap=4))

    layout = resolve_layout(spec)

    assert layout.height == 2 * 10 + 4 - 2


def test_border_width_is_added_to_every_padding_side() -> None:
    spec = BoxSpec(
        content="OK",
        border=BorderStyle(color="#000", width=2),
        font=FontStyle(size=12, padding=3),
    )

    layout = resolve_layout(spec)

    assert layout.padding == Edges(5, 5, 5, 5)
    assert layout.width == 12 + 10
    assert layout.height == 12 + 10 - 4


def test_explicit_dimensions_pass_through() -> None:
    layout = resolve_layout(BoxSpec(content=None, width=100, height="50"))

    assert (layout.width, layout.height) == (100, 50)


def test_letter_spacing_uses_widest_line_length() -> None:
    spec = BoxSpec(content=["abc", "a"], font=FontStyle(size=10, letter_spacing=2))

    layout = resolve_layout(spec)

    assert layout.width == 19


def test_auto_width_grows_with_font_size_and_padding() -> None:
    widths = [resolve_layout(BoxSpec(content="Hello 世界", font=FontStyle(size=size))).width for size in range(6, 40)]
    assert widths == sorted(widths)

    padded = [
        resolve_layout(BoxSpec(content="Hello", font=FontStyle(size=12, padding=pad))).width for pad in range(0, 20)
    ]
    assert padded == sorted(padded)


def test_minimal_preset_uses_uniform_width_and_no_correction() -> None:
    layout = resolve_layout(BoxSpec(content="OK", font=FontStyle(size=12, letter_spacing=3)), MINIMAL)

    assert (layout.width, layout.height) == (24, 12)


def test_right_alignment_lines_up_right_edges() -> None:
    spec = BoxSpec(content=["A", "文"], font=FontStyle(size=10, text_align="right"))

    layout = resolve_layout(spec, text_width=20)

    first, second = layout.lines
    assert first.left == 20 - 0.5 * 10
    assert second.left == 20 - 1.0 * 10
    assert first.left + first.width == 20
    assert second.left + second.width == 20


def test_baselines_are_centered_per_row() -> None:
    spec = BoxSpec(content=["a", "b"], font=FontStyle(size=10, row_gap=4, padding=5))

    layout = resolve_layout(spec)

    assert [line.baseline for line in layout.lines] == [10, 24]


def test_normalize_padding_shapes() -> None:
    assert normalize_padding(4) == Edges(4, 4, 4, 4)
    assert normalize_padding([4, 8]) == Edges(top=4, right=8, bottom=4, left=8)
    assert normalize_padding((1, 2, 3, 4)) == Edges(top=1, right=2, bottom=3, left=4)
    with pytest.raises(ValueError):
        normalize_padding([1, 2, 3])


def test_normalize_radii_shapes() -> None:
    radii = normalize_radii([1, 2, 3, 4])
    assert (radii.top_left, radii.top_right, radii.bottom_right, radii.bottom_left) == (1, 2, 3, 4)
    assert normalize_radii(6).bottom_left == 6
    assert normalize_radii(0).is_square
    with pytest.raises(ValueError):
        normalize_radii([1, 2])


def test_font_size_falls_back_to_default() -> None:
    assert parse_font_size("14px") == 14
    assert parse_font_size("bogus") == 12
    assert parse_font_size(None) == 12
    assert parse_font_size(0) == 12
    layout = resolve_layout(BoxSpec(content="OK", font=FontStyle(size="not-a-size")))
    assert layout.font_size == 12


def test_parse_dimension_treats_garbage_as_auto() -> None:
    assert parse_dimension("auto") is None
    assert parse_dimension("AUTO") is None
    assert parse_dimension("wide") is None
    assert parse_dimension("120px") == 120
    assert parse_dimension(-5) == 0


def test_unknown_alignment_falls_back_to_left() -> None:
    spec = BoxSpec(content=["A", "文"], font=FontStyle(size=10, text_align="justify"))

    layout = resolve_layout(spec)

    assert [line.left for line in layout.lines] == [0, 0]


def test_configured_style_fills_unset_font_fields() -> None:
    spec = BoxSpec(content="OK", font=FontStyle(size=12))

    plain = resolve_layout(spec)
    styled = resolve_layout(spec, style=merge_style({"font": {"padding": 10, "letter_spacing": 2}}))

    assert (plain.width, plain.height) == (12, 8)
    assert styled.padding == Edges(10, 10, 10, 10)
    assert (styled.width, styled.height) == (34, 28)


def test_explicit_font_fields_win_over_configured_style() -> None:
    spec = BoxSpec(content="OK", font=FontStyle(size=12, padding=0, letter_spacing=0))

    layout = resolve_layout(spec, style=merge_style({"font": {"padding": 10, "letter_spacing": 2}}))

    assert (layout.width, layout.height) == (12, 8)


def test_configured_border_width_is_added_to_padding() -> None:
    layout = resolve_layout(
        BoxSpec(content="OK", font=FontStyle(size=12)),
        style=merge_style({"border": {"width": 3, "color": "#000"}}),
    )

    assert layout.padding == Edges(3, 3, 3, 3)


def test_null_letter_spacing_from_template_counts_as_zero() -> None:
    spec = normalize_template_dict({"content": "OK", "font": {"letter_spacing": None, "size": 12}})

    layout = resolve_layout(spec)

    assert (layout.width, layout.height) == (12, 8)


def test_resolve_spec_fills_every_section_from_style() -> None:
    style = merge_style({"background": {"color": "#123456"}, "border": {"radius": 6}})

    spec = resolve_spec(BoxSpec(content="OK"), style)

    assert spec.background.color == "#123456"
    assert spec.border.radius == 6
    assert spec.border.width == 0
    assert spec.font.weight == "normal"
    assert spec.font.line_height == 1
    assert spec.font.text_align == "left"
