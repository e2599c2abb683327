from click.testing import CliRunner

from inkwell import __version__
from inkwell.build import BuildError, BuildResult
from inkwell.cli import cli

CONFIG = "site:\n  url: https://example.com\n"


def invoke(project, *args):
    (project / "inkwell.yaml").write_text(CONFIG, encoding="utf-8")
    runner = CliRunner()
    return runner.invoke(
        cli, ["--config", str(project / "inkwell.yaml"), *args], catch_exceptions=False
    )


def test_cli_build(monkeypatch, project):
    monkeypatch.chdir(project)
    result = invoke(project, "build")
    assert result.exit_code == 0
    assert "config: file" in result.output
    assert "Built 3 pages" in result.output
    post = project / "out" / "blog" / "post.html"
    assert post.read_text(encoding="utf-8") == "<article><h2>Hi</h2><h1>Hi</h1>\n</article>"
    index = (project / "out" / "index.html").read_text(encoding="utf-8")
    assert 'href="https://example.com/"' in index


def test_cli_build_uses_defaults_without_config(monkeypatch, project):
    monkeypatch.chdir(project)
    result = CliRunner().invoke(cli, ["build"], catch_exceptions=False)
    assert result.exit_code == 0
    assert "config: default" in result.output
    index = (project / "out" / "index.html").read_text(encoding="utf-8")
    assert 'href="https://day1co.github.io/"' in index


def test_cli_warns_about_invalid_config(monkeypatch, project):
    monkeypatch.chdir(project)
    (project / "broken.yaml").write_text("site: [oops\n", encoding="utf-8")
    result = CliRunner().invoke(cli, ["--config", "broken.yaml", "build"])
    assert result.exit_code == 0
    assert "Ignoring invalid config" in result.output
    assert "config: invalid" in result.output


def test_cli_build_failure_exit_code(monkeypatch, project):
    monkeypatch.chdir(project)
    (project / "src" / "page" / "bad.md").write_text(
        "---\nlayout: nope\n---\nx", encoding="utf-8"
    )
    result = invoke(project, "build")
    assert result.exit_code == 1
    assert "Build failed:" in result.output
    assert "src/page/bad.md" in result.output.replace("\\", "/")


def test_cli_build_keep_going(monkeypatch, project):
    monkeypatch.chdir(project)
    (project / "src" / "page" / "bad.md").write_text(
        "---\nlayout: nope\n---\nx", encoding="utf-8"
    )
    result = invoke(project, "build", "--keep-going")
    assert result.exit_code == 1
    assert "Built 3 pages with 1 failures" in result.output
    assert (project / "out" / "index.html").exists()


def test_cli_build_passes_flags(monkeypatch, project):
    monkeypatch.chdir(project)
    seen = {}

    def fake_build_site(context, clean=False, keep_going=False):
        seen.update(clean=clean, keep_going=keep_going)
        return BuildResult(pages=[], output_dir=context.out_dir)

    monkeypatch.setattr("inkwell.build.build_site", fake_build_site)
    result = invoke(project, "build", "--clean")
    assert result.exit_code == 0
    assert seen == {"clean": True, "keep_going": False}


def test_cli_build_error_outside_base_dir(monkeypatch, project, tmp_path_factory):
    monkeypatch.chdir(project)
    outside = tmp_path_factory.mktemp("elsewhere") / "page.md"

    def fake_build_site(context, clean=False, keep_going=False):
        raise BuildError(outside, "boom")

    monkeypatch.setattr("inkwell.build.build_site", fake_build_site)
    result = invoke(project, "build")
    assert result.exit_code == 1
    assert "boom" in result.output


def test_cli_watch_builds_then_watches(monkeypatch, project):
    monkeypatch.chdir(project)
    called = {}

    class DummyWatcher:
        def __init__(self, context, clean=False):
            called["clean"] = clean
            called["context"] = context

        def run_forever(self, build_first=False):
            called["build_first"] = build_first

    monkeypatch.setattr("inkwell.watcher.SiteWatcher", DummyWatcher)
    result = invoke(project, "watch", "--clean")
    assert result.exit_code == 0
    assert called["clean"] is True
    assert called["build_first"] is True
    assert called["context"].src_dir == project / "src"


def test_cli_version():
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_module_main_entrypoint():
    from inkwell.__main__ import main

    assert callable(main)
