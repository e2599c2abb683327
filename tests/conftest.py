from pathlib import Path

import pytest

from inkwell.config import default_config, resolve_context


def create_project(root: Path) -> Path:
    src = root / "src"
    (src / "page" / "blog").mkdir(parents=True)
    (src / "layout").mkdir(parents=True)
    (src / "asset" / "css").mkdir(parents=True)

    (src / "layout" / "default.ejs").write_text(
        "<title>{{ site.title }}</title><a href=\"{{ page.url }}\"></a>{{ page.main }}",
        encoding="utf-8",
    )
    (src / "layout" / "post.ejs").write_text(
        "<article><h2>{{ page.title }}</h2>{{ page.main }}</article>",
        encoding="utf-8",
    )
    (src / "page" / "index.html").write_text(
        "<p>{{ 1 + 1 }}</p>", encoding="utf-8"
    )
    (src / "page" / "blog" / "index.md").write_text(
        "# Blog\n\nAll posts.\n", encoding="utf-8"
    )
    (src / "page" / "blog" / "post.md").write_text(
        "---\nlayout: post\ntitle: Hi\n---\n# Hi\n", encoding="utf-8"
    )
    (src / "asset" / "favicon.png").write_bytes(b"\x89PNG\r\n\x1a\nfake")
    (src / "asset" / "css" / "site.css").write_text(
        "body { margin: 0; }", encoding="utf-8"
    )
    return root


@pytest.fixture
def project(tmp_path):
    return create_project(tmp_path.resolve())


@pytest.fixture
def context(project):
    config = default_config()
    config["site"]["url"] = "https://example.com"
    return resolve_context(config, cwd=project)
