"""Content loading for Inkwell.

This module turns a single source file into a Page: it reads the file,
dispatches it to the renderer registered for its suffix and keeps the
resulting attributes and HTML together.

Key classes:
- Page: Dataclass representing one rendered source page.
- ContentProcessor: Loads pages using a renderer registry.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from markupsafe import Markup

from .renderers import RendererRegistry, default_renderer_registry

DEFAULT_LAYOUT = "default"


@dataclass
class Page:
    """Represents a rendered source page.

    Attributes:
        path: Path to the source file.
        attributes: Front-matter attributes (empty for template pages).
        main: Rendered body HTML, or None when the format is not supported.
        url: Absolute site URL, set once the output location is known.
        source_type: "markdown", "template", or "" for unknown formats.
    """

    path: Path
    attributes: dict[str, Any] = field(default_factory=dict)
    main: str | None = None
    url: str = ""
    source_type: str = ""

    @property
    def layout(self) -> str:
        """Layout name, from the front-matter or "default"."""
        return str(self.attributes.get("layout") or DEFAULT_LAYOUT)

    def as_context(self) -> dict[str, Any]:
        """Return the mapping exposed to layouts as ``page``.

        Attributes come first; ``main`` always holds the rendered body and is
        left out entirely when nothing was rendered.
        """
        context = dict(self.attributes)
        context.pop("main", None)
        if self.main is not None:
            context["main"] = Markup(self.main)
        context["layout"] = self.layout
        context["url"] = self.url
        return context


class ContentProcessor:
    """Loads source files into Page objects.

    Attributes:
        registry: Renderer registry used for dispatch.
    """

    def __init__(self, registry: RendererRegistry | None = None):
        self.registry = registry or default_renderer_registry

    def load(self, path: Path) -> Page:
        """Read and render one source file.

        Args:
            path: Path to the source file.

        Returns:
            Rendered Page. Unsupported formats yield a Page with no ``main``.
        """
        print(f"render page: {path}")
        renderer = self.registry.get_renderer(path)
        if renderer is None:
            return Page(path=path)
        attributes, html = renderer.render(path.read_text(encoding="utf-8"))
        return Page(
            path=path,
            attributes=attributes,
            main=html,
            source_type=renderer.source_type,
        )
