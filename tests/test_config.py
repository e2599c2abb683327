from pathlib import Path

import pytest

from inkwell.config import (
    DEFAULT_CONFIG,
    ConfigOrigin,
    default_config,
    load_config,
    merge_config,
    resolve_context,
)


def test_missing_config_uses_defaults(tmp_path):
    result = load_config(tmp_path / "missing.yaml")
    assert result.origin is ConfigOrigin.DEFAULT
    assert result.error is None
    assert result.config == DEFAULT_CONFIG


def test_config_file_is_merged_over_defaults(tmp_path):
    path = tmp_path / "inkwell.yaml"
    path.write_text(
        "out_dir: public\nsite:\n  title: My Blog\n", encoding="utf-8"
    )
    result = load_config(path)
    assert result.origin is ConfigOrigin.FILE
    assert result.config["out_dir"] == "public"
    assert result.config["src_dir"] == "src"
    assert result.config["site"]["title"] == "My Blog"
    assert result.config["site"]["url"] == DEFAULT_CONFIG["site"]["url"]


@pytest.mark.parametrize(
    "text",
    [
        "site: [unclosed\n",
        "- just\n- a list\n",
    ],
)
def test_broken_config_falls_back_and_reports(tmp_path, text):
    path = tmp_path / "inkwell.yaml"
    path.write_text(text, encoding="utf-8")
    result = load_config(path)
    assert result.origin is ConfigOrigin.INVALID
    assert result.error is not None
    assert result.config == DEFAULT_CONFIG


def test_empty_config_file_counts_as_loaded(tmp_path):
    path = tmp_path / "inkwell.yaml"
    path.write_text("", encoding="utf-8")
    result = load_config(path)
    assert result.origin is ConfigOrigin.FILE
    assert result.config == DEFAULT_CONFIG


def test_default_config_is_a_copy():
    config = default_config()
    config["site"]["title"] = "changed"
    assert DEFAULT_CONFIG["site"]["title"] != "changed"


def test_resolve_context_relative_rules(tmp_path):
    root = tmp_path.resolve()
    config = merge_config(
        {
            "base_dir": "site",
            "src_dir": "source",
            "out_dir": "build",
            "asset_dir": "static",
            "page_dir": "content",
            "layout_dir": "layouts",
        }
    )
    context = resolve_context(config, cwd=root)
    assert context.base_dir == root / "site"
    assert context.src_dir == root / "site" / "source"
    assert context.out_dir == root / "site" / "build"
    assert context.asset_dir == root / "site" / "source" / "static"
    assert context.page_dir == root / "site" / "source" / "content"
    assert context.layout_dir == root / "site" / "source" / "layouts"
    for path in (
        context.base_dir,
        context.src_dir,
        context.out_dir,
        context.asset_dir,
        context.page_dir,
        context.layout_dir,
    ):
        assert path.is_absolute()


def test_resolve_context_keeps_absolute_paths(tmp_path):
    root = tmp_path.resolve()
    elsewhere = root / "elsewhere"
    config = merge_config({"out_dir": str(elsewhere), "layout_dir": str(root / "l")})
    context = resolve_context(config, cwd=root)
    assert context.out_dir == elsewhere
    assert context.layout_dir == root / "l"
    assert context.page_dir == root / "src" / "page"


def test_context_is_immutable(context):
    with pytest.raises(AttributeError):
        context.out_dir = Path("/tmp")
    with pytest.raises(TypeError):
        context.site["url"] = "https://other.example"


def test_context_is_hashable(context):
    assert hash(context) == hash(context)
    assert {context: "built"}[context] == "built"


def test_template_vars_spread_every_field(context):
    values = context.as_template_vars()
    assert values["site"]["url"] == "https://example.com"
    assert values["page_dir"] == context.page_dir
    assert values["layout_ext"] == ".ejs"
    assert set(values) == {
        "base_dir",
        "src_dir",
        "out_dir",
        "asset_dir",
        "page_dir",
        "layout_dir",
        "layout_ext",
        "site",
    }
