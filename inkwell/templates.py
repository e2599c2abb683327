"""Layout rendering for Inkwell.

This module uses Jinja2 to wrap rendered pages in their layouts. It works out
where each page is written and what its public URL is, renders the layout with
the site context and writes the result.

Key class:
- LayoutEngine: Resolves layouts, computes output paths/URLs and writes pages.
"""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from .config import Context
from .content import Page
from .utils import ensure_dir, is_index, join_root_url


class LayoutNotFoundError(FileNotFoundError):
    """Raised when a page names a layout that has no file."""


class LayoutEngine:
    """Template engine that composes pages into layouts.

    Attributes:
        context: Resolved build context.
        env: Jinja2 environment; its loader lets layouts include or extend
            other files in the layout directory.
    """

    def __init__(self, context: Context):
        self.context = context
        self.env = Environment(
            loader=FileSystemLoader(str(context.layout_dir)),
            autoescape=True,
        )

    def layout_path(self, page: Page) -> Path:
        """Return the layout file for a page."""
        return self.context.layout_dir / f"{page.layout}{self.context.layout_ext}"

    def output_path(self, page: Page) -> Path:
        """Return where a page is written: its path under the page directory,
        re-rooted under the output directory with an .html suffix.
        """
        rel = page.path.relative_to(self.context.page_dir)
        return (self.context.out_dir / rel).with_suffix(".html")

    def page_url(self, page: Page) -> str:
        """Return the public URL of a page.

        Index pages get the clean directory URL (``/blog/``); other pages
        link to their output file (``/blog/post.html``).
        """
        target = self.output_path(page)
        base = str(self.context.site.get("url") or "")
        if is_index(page.path):
            rel = target.parent.relative_to(self.context.out_dir).as_posix()
            path = "/" if rel == "." else f"/{rel}/"
        else:
            path = "/" + target.relative_to(self.context.out_dir).as_posix()
        return join_root_url(base, path)

    def render_page(self, page: Page) -> str:
        """Render a page with its layout.

        The layout file is read fresh on every call.

        Args:
            page: Rendered page; its ``url`` is filled in here.

        Returns:
            Final HTML.

        Raises:
            LayoutNotFoundError: If the page's layout file does not exist.
        """
        layout_file = self.layout_path(page)
        try:
            source = layout_file.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise LayoutNotFoundError(
                f"Layout '{page.layout}' not found: {layout_file}"
            ) from exc
        page.url = self.page_url(page)
        template = self.env.from_string(source)
        return template.render(**self.context.as_template_vars(), page=page.as_context())

    def write_page(self, page: Page) -> Path:
        """Render a page into its layout and write it to the output directory.

        Existing files at the target path are overwritten.

        Args:
            page: Rendered page.

        Returns:
            Path of the written HTML file.
        """
        html = self.render_page(page)
        target = self.output_path(page)
        print(f"  + {self.layout_path(page)} -> {target}")
        ensure_dir(target.parent)
        target.write_text(html, encoding="utf-8")
        return target
