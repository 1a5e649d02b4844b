import math

from textgraphics.models import CornerRadii
from textgraphics.render.geometry import Arc, Close, LineTo, MoveTo, build_box_path


def test_square_corners_produce_plain_rectangle() -> None:
    path = build_box_path(40, 20, CornerRadii())

    assert path.arcs == []
    assert path.points() == [(0, 0), (40, 0), (40, 20), (0, 20)]
    assert isinstance(path.commands[-1], Close)


def test_path_starts_right_after_top_left_corner() -> None:
    path = build_box_path(100, 50, CornerRadii(8, 4, 4, 4))

    assert path.commands[0] == MoveTo(8, 0)
    assert path.commands[1] == LineTo(96, 0)
    assert isinstance(path.commands[2], Arc)


def test_every_arc_sweeps_a_quarter_turn() -> None:
    path = build_box_path(100, 60, CornerRadii(10, 12, 14, 16))

    assert len(path.arcs) == 4
    for arc in path.arcs:
        assert math.isclose(arc.sweep, math.pi / 2)


def test_zero_radius_corner_stays_sharp() -> None:
    path = build_box_path(40, 20, CornerRadii(5, 0, 5, 0))

    assert len(path.arcs) == 2
    assert LineTo(40, 0) in path.commands
    assert LineTo(0, 20) in path.commands
    points = path.points()
    assert (40, 0) in points
    assert (0, 20) in points


def test_half_size_radius_traces_inscribed_circle() -> None:
    path = build_box_path(20, 20, CornerRadii(10, 10, 10, 10))

    assert len(path.arcs) == 4
    points = path.points(segments=16)
    assert len(points) > 16
    for x, y in points:
        assert math.isclose(math.hypot(x - 10, y - 10), 10, abs_tol=1e-9)


def test_oversized_radius_is_not_clamped() -> None:
    path = build_box_path(20, 10, CornerRadii(8, 8, 8, 8))

    assert all(arc.radius == 8 for arc in path.arcs)
