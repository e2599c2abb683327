"""Site building functionality for Inkwell.

This module contains the core logic for building a static site from source files.
A build runs three steps in a fixed order: clean the output directory, copy the
asset tree into it, then render every page into its layout.

Key functions:
- build_site: Main function to build the entire site.
- clean_output: Prepares the output directory.
- copy_assets: Copies static assets verbatim.
- render_pages: Renders and writes every page.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from jinja2 import TemplateSyntaxError

from .config import Context
from .content import ContentProcessor, Page
from .templates import LayoutEngine
from .utils import collect_files, copy_tree, ensure_clean_dir, ensure_dir


class BuildError(Exception):
    """Error during site build with file context.

    Attributes:
        source_path: Path to the source file that caused the error.
        message: Human-readable error message.
        original_error: The original exception that was caught.
    """

    def __init__(
        self,
        source_path: Path,
        message: str,
        original_error: Exception | None = None,
    ):
        self.source_path = source_path
        self.message = message
        self.original_error = original_error
        super().__init__(f"{source_path}: {message}")


class BuildCancelled(Exception):
    """Raised when a build is superseded before it finishes."""


@dataclass
class BuildResult:
    """Result of a site build operation.

    Attributes:
        pages: Pages written successfully, in render order.
        output_dir: Directory where the site was built.
        failures: Per-page errors collected when building with keep_going.
    """

    pages: list[Page]
    output_dir: Path
    failures: list[BuildError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


def build_site(
    context: Context,
    clean: bool = False,
    keep_going: bool = False,
    should_cancel: Callable[[], bool] | None = None,
) -> BuildResult:
    """Build the entire static site.

    Args:
        context: Resolved build context.
        clean: Whether to empty the output directory first. The default only
            makes sure it exists and leaves earlier output in place.
        keep_going: Collect per-page failures and continue instead of
            aborting on the first one.
        should_cancel: Polled before each page; a true result aborts the
            build with BuildCancelled.

    Returns:
        BuildResult with written pages and any collected failures.

    Raises:
        BuildError: On the first failing page, unless keep_going is set.
        BuildCancelled: If should_cancel returned true.
    """
    print(f"generate: {context.src_dir} -> {context.out_dir}")
    clean_output(context.out_dir, clean=clean)
    copy_assets(context.asset_dir, context.out_dir)
    return render_pages(
        context, keep_going=keep_going, should_cancel=should_cancel
    )


def clean_output(out_dir: Path, clean: bool = False) -> None:
    """Prepare the output directory.

    Args:
        out_dir: Output directory.
        clean: Remove existing contents before recreating the directory.
    """
    print(f"clean out: {out_dir}")
    if clean:
        ensure_clean_dir(out_dir)
    else:
        ensure_dir(out_dir)


def copy_assets(asset_dir: Path, out_dir: Path) -> list[Path]:
    """Copy the asset tree into the output root, overwriting conflicts.

    Args:
        asset_dir: Directory holding static assets.
        out_dir: Output directory.

    Returns:
        List of copied destination paths.
    """
    print(f"copy assets: {asset_dir} -> {out_dir}")
    if not asset_dir.is_dir():
        print(f"No asset directory at {asset_dir}; skipping assets.")
        return []
    return copy_tree(asset_dir, out_dir)


def render_pages(
    context: Context,
    keep_going: bool = False,
    should_cancel: Callable[[], bool] | None = None,
    processor: ContentProcessor | None = None,
) -> BuildResult:
    """Render every file under the page directory into its layout.

    Pages are rendered one at a time in sorted path order.

    Args:
        context: Resolved build context.
        keep_going: Collect failures instead of raising the first one.
        should_cancel: Polled before each page.
        processor: Content processor to load pages with.

    Returns:
        BuildResult for the pages step.
    """
    print(f"render pages: {context.page_dir} -> {context.out_dir}")
    processor = processor or ContentProcessor()
    engine = LayoutEngine(context)
    result = BuildResult(pages=[], output_dir=context.out_dir)
    for path in collect_files(context.page_dir):
        if should_cancel is not None and should_cancel():
            raise BuildCancelled(f"Build cancelled before {path}")
        try:
            page = processor.load(path)
            engine.write_page(page)
        except TemplateSyntaxError as exc:
            error = BuildError(
                path,
                f"Template syntax error on line {exc.lineno}: {exc.message}",
                exc,
            )
        except Exception as exc:
            error = BuildError(path, _format_error_message(exc), exc)
        else:
            result.pages.append(page)
            continue
        if not keep_going:
            raise error from error.original_error
        print(f"Failed: {error}")
        result.failures.append(error)
    return result


def _format_error_message(exc: Exception) -> str:
    """Format an exception into a user-friendly error message.

    Args:
        exc: The exception to format.

    Returns:
        A human-readable error message.
    """
    error_type = type(exc).__name__
    error_msg = str(exc)

    if error_type == "UndefinedError":
        return f"Undefined variable: {error_msg}"
    if error_type == "FrontmatterError":
        return error_msg
    if error_type == "LayoutNotFoundError":
        return error_msg

    return f"{error_type}: {error_msg}"
