"""Inkwell static site generator.

This package builds a static site from a source tree of pages, layouts and assets.
Pages are Jinja templates or Markdown documents with YAML front-matter; each one is
wrapped in a layout and written as HTML into the output directory.

The main entry point is the CLI module, which provides commands for building the
site once and for rebuilding it whenever the source tree changes.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
