"""Command-line interface for Inkwell.

This module defines the CLI commands using Click framework.

Commands:
- build: Build the site into the output directory once.
- watch: Build the site, then rebuild on every source change.

The global --config option selects the YAML config file.
"""

from __future__ import annotations

from pathlib import Path

import click

from . import __version__
from .config import (
    DEFAULT_CONFIG_FILE,
    ConfigOrigin,
    Context,
    load_config,
    resolve_context,
)


@click.group()
@click.version_option(version=__version__, prog_name="inkwell")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_CONFIG_FILE,
    show_default=True,
    help="Config file to load.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path):
    """Inkwell static site generator."""
    ctx.obj = _load_context(config_path)


@cli.command()
@click.option("--clean", is_flag=True, help="Empty the output directory first")
@click.option(
    "--keep-going",
    is_flag=True,
    help="Render every page and report all failures at the end",
)
@click.pass_obj
def build(context: Context, clean: bool, keep_going: bool):
    """Build the site into the output directory."""
    from .build import BuildError, build_site

    try:
        result = build_site(context, clean=clean, keep_going=keep_going)
    except BuildError as exc:
        _report_failure(context, exc)
        raise SystemExit(1) from None
    if result.failures:
        for failure in result.failures:
            _report_failure(context, failure)
        click.echo(
            click.style(
                f"Built {len(result.pages)} pages with {len(result.failures)} failures",
                fg="red",
                bold=True,
            ),
            err=True,
        )
        raise SystemExit(1)
    click.echo(f"Built {len(result.pages)} pages into {result.output_dir}")


@cli.command()
@click.option("--clean", is_flag=True, help="Empty the output directory before each build")
@click.pass_obj
def watch(context: Context, clean: bool):
    """Build the site, then rebuild whenever the source tree changes."""
    from .watcher import SiteWatcher

    watcher = SiteWatcher(context, clean=clean)
    watcher.run_forever(build_first=True)


def main():
    """Entry point for the CLI application."""
    cli()


def _load_context(config_path: Path) -> Context:
    """Load the config file and resolve it, warning when it is broken."""
    loaded = load_config(config_path)
    if loaded.origin is ConfigOrigin.INVALID:
        click.echo(
            click.style(
                f"Ignoring invalid config {config_path}: {loaded.error}; using defaults.",
                fg="yellow",
            ),
            err=True,
        )
    context = resolve_context(loaded.config)
    click.echo(f"config: {loaded.origin.value} ({config_path})")
    click.echo(f"context: {context}")
    return context


def _report_failure(context: Context, exc) -> None:
    """Display a user-friendly build error."""
    try:
        shown = exc.source_path.relative_to(context.base_dir)
    except ValueError:
        shown = exc.source_path
    click.echo(click.style("Build failed:", fg="red", bold=True), err=True)
    click.echo(click.style(f"  File: {shown}", fg="yellow"), err=True)
    click.echo(click.style(f"  Error: {exc.message}", fg="white"), err=True)
