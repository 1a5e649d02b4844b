from pathlib import Path

import yaml

from textgraphics.config import DEFAULT_STYLE, load_config, merge_style, write_default_config


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    cfg = load_config(tmp_path / "missing.yaml")

    assert cfg["output_format"] == "png"
    assert cfg["style"]["font"]["size"] == DEFAULT_STYLE["font"]["size"]


def test_load_config_deep_merges_style(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump({"style": {"font": {"size": 20}}}), encoding="utf-8")

    cfg = load_config(path)

    assert cfg["style"]["font"]["size"] == 20
    assert cfg["style"]["font"]["family"] == DEFAULT_STYLE["font"]["family"]


def test_write_default_config_does_not_overwrite(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "config.yaml"

    assert write_default_config(path) == path
    path.write_text("log_level: debug\n", encoding="utf-8")
    write_default_config(path)

    assert load_config(path)["log_level"] == "debug"


def test_merge_style_leaves_defaults_untouched() -> None:
    merged = merge_style({"font": {"color": "#ff0000"}})

    assert merged["font"]["color"] == "#ff0000"
    assert DEFAULT_STYLE["font"]["color"] == "#000000"
