import pytest

from textgraphics.models import BoxSpec
from textgraphics.naming import build_output_name


def test_build_output_name_with_tokens() -> None:
    name = build_output_name(
        "{text}_{width}x{height}.{ext}",
        BoxSpec(content=["Hello world", "灰喜鹊"]),
        (30, 10),
        extension="PNG",
    )

    assert name == "Hello_world_灰喜鹊_30x10.png"


def test_build_output_name_sanitizes_and_adds_extension() -> None:
    name = build_output_name("{template}-{text}", BoxSpec(content="a/b:c"), (1, 1), extension="webp", template_name="badge")

    assert name == "badge-a_b_c.webp"


def test_build_output_name_rejects_unknown_tokens() -> None:
    with pytest.raises(ValueError):
        build_output_name("{bird}.{ext}", BoxSpec(content="x"), (1, 1), extension="png")
