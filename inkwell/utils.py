"""Utility functions for Inkwell.

This module contains the file-system and URL helpers used by the build pipeline.

Key functions:
    collect_files: Recursively list regular files under a directory.
    ensure_dir: Create a directory, tolerating only "already exists".
    ensure_clean_dir: Ensure a directory exists and is empty.
    copy_tree: Copy a directory tree over another, overwriting conflicts.
    join_root_url: Join a site URL and a path without doubling slashes.
    is_index: Check whether a page is a directory index.
"""

from __future__ import annotations

import os
import shutil
from pathlib import Path


def collect_files(directory: Path) -> list[Path]:
    """Recursively collect all regular files under a directory.

    Directories are descended into but not returned. Symlinked directories are
    not followed, so link cycles cannot recurse forever.

    Args:
        directory: Root directory to scan.

    Returns:
        Sorted list of file paths.

    Raises:
        OSError: If the directory does not exist or cannot be read.
    """
    files: list[Path] = []
    with os.scandir(directory) as entries:
        for entry in entries:
            child = Path(directory) / entry.name
            if entry.is_dir(follow_symlinks=False):
                files.extend(collect_files(child))
            elif entry.is_file():
                files.append(child)
    return sorted(files)


def ensure_dir(path: Path) -> None:
    """Ensure a directory exists.

    An existing directory is fine. Any other failure (a file in the way,
    permissions, a full disk) propagates.

    Args:
        path: Directory path to create.
    """
    path.mkdir(parents=True, exist_ok=True)


def ensure_clean_dir(path: Path) -> None:
    """Ensure a directory exists and is empty.

    If the directory exists, removes all contents. Creates the
    directory if it doesn't exist.

    Args:
        path: Directory path to clean or create.
    """
    if path.exists():
        shutil.rmtree(path)
    ensure_dir(path)


def copy_tree(source: Path, target: Path) -> list[Path]:
    """Copy the whole tree under source into target, overwriting existing files.

    Symlinked directories are copied as real directories and empty
    directories are recreated.

    Args:
        source: Directory to copy from.
        target: Directory to copy into; created if missing.

    Returns:
        List of destination file paths written.
    """
    written: list[Path] = []

    def copy_file(src: str, dst: str) -> str:
        written.append(Path(dst))
        return shutil.copy2(src, dst)

    shutil.copytree(source, target, copy_function=copy_file, dirs_exist_ok=True)
    return written


def join_root_url(root_url: str, path: str) -> str:
    """Safely join a root URL and a path, avoiding double slashes.

    Args:
        root_url: Base URL (e.g., https://example.com/blog).
        path: Path beginning with or without a leading slash.

    Returns:
        Combined URL with proper slash handling.

    Examples:
        >>> join_root_url('https://example.com', '/about')
        'https://example.com/about'

        >>> join_root_url('https://example.com/', 'about')
        'https://example.com/about'
    """
    base = (root_url or "").rstrip("/")
    suffix = path if path.startswith("/") else f"/{path}"
    return f"{base}{suffix}"


def is_index(path: Path) -> bool:
    """Check if a page is a directory index (its stem is "index")."""
    return path.stem == "index"
