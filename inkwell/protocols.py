"""Protocol definitions for Inkwell.

These protocols describe the seams between the build pipeline and the
format-specific page renderers, so tests and callers can supply their own.
"""

from __future__ import annotations

from abc import abstractmethod
from pathlib import Path
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class PageRenderer(Protocol):
    """Protocol for rendering one kind of source page.

    Implementations handle specific source formats (templates, Markdown).
    """

    @abstractmethod
    def can_render(self, path: Path) -> bool:
        """Check if this renderer can handle the given file.

        Args:
            path: Path to the source file.

        Returns:
            True if this renderer can process the file.
        """
        ...

    @abstractmethod
    def render(self, content: str) -> tuple[dict[str, Any], str]:
        """Render page content to HTML.

        Args:
            content: Source content to render.

        Returns:
            Tuple of (page attributes, rendered HTML).
        """
        ...

    @property
    @abstractmethod
    def source_type(self) -> str:
        """Return the source type identifier (e.g., 'markdown', 'template')."""
        ...
