"""Configuration loading for Inkwell.

This module reads the optional YAML config file and resolves it into a Context:
the immutable set of absolute directories plus site metadata that every build
step receives.

Key functions:
- load_config: Loads inkwell.yaml, falling back to the built-in defaults.
- resolve_context: Turns a config mapping into a Context of absolute paths.
"""

from __future__ import annotations

import copy
import enum
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml

DEFAULT_CONFIG_FILE = "inkwell.yaml"

DEFAULT_CONFIG: dict[str, Any] = {
    "base_dir": ".",
    "src_dir": "src",  # absolute or relative to base_dir
    "out_dir": "out",  # absolute or relative to base_dir
    "asset_dir": "asset",  # absolute or relative to src_dir
    "page_dir": "page",  # absolute or relative to src_dir
    "layout_dir": "layout",  # absolute or relative to src_dir
    "layout_ext": ".ejs",
    "site": {
        "url": "https://day1co.github.io",
        "title": "DAY1 COMPANY Tech Blog",
        "description": "Development for Life Changing Education",
        "image": "/favicon.png",
    },
}


class ConfigOrigin(enum.Enum):
    """Where a loaded configuration came from."""

    FILE = "file"
    DEFAULT = "default"
    INVALID = "invalid"


@dataclass
class ConfigResult:
    """Outcome of loading a config file.

    Attributes:
        config: Configuration values, always complete.
        origin: Whether the values came from the file or from the defaults.
        path: Config file that was looked up.
        error: The load error when origin is INVALID.
    """

    config: dict[str, Any]
    origin: ConfigOrigin
    path: Path | None = None
    error: Exception | None = None


@dataclass(frozen=True, eq=False)
class Context:
    """Resolved configuration shared by every build step.

    Attributes:
        base_dir: Base directory the source and output dirs are relative to.
        src_dir: Source tree root; watched in watch mode.
        out_dir: Output directory for the rendered site.
        asset_dir: Static files copied verbatim into out_dir.
        page_dir: Source pages.
        layout_dir: Layout templates.
        site: Site metadata (url, title, description, image).
        layout_ext: Suffix of layout files.
    """

    base_dir: Path
    src_dir: Path
    out_dir: Path
    asset_dir: Path
    page_dir: Path
    layout_dir: Path
    site: Mapping[str, Any] = field(default_factory=dict)
    layout_ext: str = ".ejs"

    def as_template_vars(self) -> dict[str, Any]:
        """Return the context fields as layout template variables."""
        return {
            "base_dir": self.base_dir,
            "src_dir": self.src_dir,
            "out_dir": self.out_dir,
            "asset_dir": self.asset_dir,
            "page_dir": self.page_dir,
            "layout_dir": self.layout_dir,
            "layout_ext": self.layout_ext,
            "site": dict(self.site),
        }


def default_config() -> dict[str, Any]:
    """Return a fresh copy of the built-in configuration."""
    return copy.deepcopy(DEFAULT_CONFIG)


def load_config(config_path: Path | str | None = None) -> ConfigResult:
    """Load configuration from a YAML file.

    A missing file yields the defaults. A file that cannot be read or parsed,
    or that does not hold a mapping, also yields the defaults but is reported
    as INVALID along with the error. This function never raises.

    Args:
        config_path: Path to the config file. Defaults to inkwell.yaml.

    Returns:
        ConfigResult describing the loaded configuration.
    """
    path = Path(config_path if config_path is not None else DEFAULT_CONFIG_FILE)
    if not path.exists():
        return ConfigResult(default_config(), ConfigOrigin.DEFAULT, path)
    try:
        with open(path, encoding="utf-8") as f:
            loaded = yaml.safe_load(f)
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as exc:
        return ConfigResult(default_config(), ConfigOrigin.INVALID, path, exc)
    if loaded is None:
        loaded = {}
    if not isinstance(loaded, dict):
        error = ValueError(f"Expected a mapping in {path}, got {type(loaded).__name__}")
        return ConfigResult(default_config(), ConfigOrigin.INVALID, path, error)
    return ConfigResult(merge_config(loaded), ConfigOrigin.FILE, path)


def merge_config(loaded: Mapping[str, Any]) -> dict[str, Any]:
    """Merge loaded values over the defaults.

    Top-level keys replace defaults; the site mapping is merged one level deep.
    """
    config = default_config()
    for key, value in loaded.items():
        if key == "site" and isinstance(value, dict):
            config["site"].update(value)
        else:
            config[key] = value
    return config


def resolve_context(config: Mapping[str, Any], cwd: Path | None = None) -> Context:
    """Resolve directory settings into absolute paths.

    src_dir and out_dir are relative to base_dir; asset_dir, page_dir and
    layout_dir are relative to the resolved src_dir. base_dir itself is
    relative to the working directory.

    Args:
        config: Configuration mapping, usually ConfigResult.config.
        cwd: Directory to resolve base_dir against. Defaults to Path.cwd().

    Returns:
        Immutable Context for one build invocation.
    """
    defaults = DEFAULT_CONFIG
    root = cwd or Path.cwd()

    def setting(key: str) -> str:
        return str(config.get(key) or defaults[key])

    base_dir = (root / setting("base_dir")).resolve()
    src_dir = (base_dir / setting("src_dir")).resolve()
    out_dir = (base_dir / setting("out_dir")).resolve()
    site = config.get("site")
    return Context(
        base_dir=base_dir,
        src_dir=src_dir,
        out_dir=out_dir,
        asset_dir=(src_dir / setting("asset_dir")).resolve(),
        page_dir=(src_dir / setting("page_dir")).resolve(),
        layout_dir=(src_dir / setting("layout_dir")).resolve(),
        site=MappingProxyType(dict(site if isinstance(site, dict) else defaults["site"])),
        layout_ext=setting("layout_ext"),
    )
