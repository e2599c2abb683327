"""Page renderers for Inkwell.

This module contains implementations of the PageRenderer protocol for the
supported source formats. Dispatch is by exact, case-sensitive suffix.

Key classes:
- TemplateRenderer: Renders .ejs/.html/.htm pages as Jinja templates.
- MarkdownRenderer: Splits front-matter and renders Markdown to HTML.
- RendererRegistry: Picks the renderer for a source file.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import mistune
from jinja2 import Environment

from .extractors import extract_frontmatter
from .protocols import PageRenderer

TEMPLATE_SUFFIXES = (".ejs", ".html", ".htm")
MARKDOWN_SUFFIXES = (".md", ".markdown")


class _HighlightRenderer(mistune.HTMLRenderer):
    """Markdown HTML renderer with Pygments highlighting for fenced code."""

    def __init__(self):
        super().__init__(escape=False)

    def block_code(self, code: str, info: str | None = None) -> str:
        """Render a code block with Pygments syntax highlighting.

        Args:
            code: The code content.
            info: Language identifier (e.g., 'python', 'javascript').

        Returns:
            HTML string with highlighted code.
        """
        lang = info.strip().split(None, 1)[0] if info and info.strip() else None
        if lang:
            from pygments import highlight
            from pygments.formatters import HtmlFormatter
            from pygments.lexers import get_lexer_by_name
            from pygments.util import ClassNotFound

            try:
                lexer = get_lexer_by_name(lang, stripall=True)
            except ClassNotFound:
                lexer = None
            if lexer is not None:
                formatter = HtmlFormatter(nowrap=False, cssclass="highlight")
                return highlight(code, lexer, formatter)
        escaped = code.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
        lang_class = f' class="language-{lang}"' if lang else ""
        return f"<pre><code{lang_class}>{escaped}</code></pre>\n"


class MarkdownRenderer:
    """Renders Markdown pages with optional YAML front-matter.

    The front-matter becomes the page attributes; the body is rendered
    to HTML with mistune.
    """

    suffixes = MARKDOWN_SUFFIXES

    @property
    def source_type(self) -> str:
        """Return the source type identifier."""
        return "markdown"

    def can_render(self, path: Path) -> bool:
        return path.suffix in self.suffixes

    def render(self, content: str) -> tuple[dict[str, Any], str]:
        """Render Markdown content to HTML.

        Args:
            content: Markdown source, possibly with front-matter.

        Returns:
            Tuple of (front-matter attributes, rendered HTML).

        Raises:
            FrontmatterError: If the front-matter block is malformed.
        """
        attributes, body = extract_frontmatter(content)
        markdown = mistune.create_markdown(
            renderer=_HighlightRenderer(),
            plugins=["strikethrough", "footnotes", "table", "url"],
        )
        return attributes, markdown(body)


class TemplateRenderer:
    """Renders template pages with Jinja2.

    Pages are rendered with an empty context: no site data or page
    attributes are bound, so any variables they use are undefined.
    """

    suffixes = TEMPLATE_SUFFIXES

    def __init__(self, env: Environment | None = None):
        self.env = env or Environment(autoescape=False)

    @property
    def source_type(self) -> str:
        """Return the source type identifier."""
        return "template"

    def can_render(self, path: Path) -> bool:
        return path.suffix in self.suffixes

    def render(self, content: str) -> tuple[dict[str, Any], str]:
        return {}, self.env.from_string(content).render()


class RendererRegistry:
    """Registry for page renderers.

    Renderers are consulted in registration order; the first one that
    can handle a file wins.
    """

    def __init__(self):
        """Initialize the registry with default renderers."""
        self._renderers: list[PageRenderer] = []
        self.register(TemplateRenderer())
        self.register(MarkdownRenderer())

    def register(self, renderer: PageRenderer) -> None:
        """Register a new renderer.

        Args:
            renderer: A PageRenderer implementation.
        """
        self._renderers.append(renderer)

    def get_renderer(self, path: Path) -> PageRenderer | None:
        """Get the appropriate renderer for a file.

        Args:
            path: Path to the source file.

        Returns:
            The first renderer that can handle the file, or None.
        """
        for renderer in self._renderers:
            if renderer.can_render(path):
                return renderer
        return None


# Default renderer registry instance
default_renderer_registry = RendererRegistry()
