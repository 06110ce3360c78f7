"""
Configuration and path management.

Provides site root detection, standard paths and the per-site settings
file. blogidx keeps its own data in a .blogidx/ directory at the site root.

Resolution order for site root:
  1. BLOGIDX_SITE_ROOT environment variable (highest priority)
  2. Walk up from cwd looking for .blogidx/ directory
  3. Global config file (~/.config/blogidx/config.yaml) site_root key
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

from blogidx.content.validator import Schema

logger = logging.getLogger(__name__)

MARKER_DIR = ".blogidx"
DEFAULT_CONTENT_DIR = "src/content/blog"
DEFAULT_PAGE_SIZE = 10


@dataclass(frozen=True)
class SitePaths:
    """Standard paths for the blog site and blogidx data."""

    root: Path
    data_dir: Path
    config_file: Path


@dataclass(frozen=True)
class SiteConfig:
    """Settings from .blogidx/config.yaml."""

    content_dir: str = DEFAULT_CONTENT_DIR
    categories: tuple[str, ...] | None = None
    page_size: int = DEFAULT_PAGE_SIZE
    include_drafts: bool = False

    def schema(self) -> Schema:
        """Validation schema for this site."""
        if self.categories is None:
            return Schema()
        return Schema(categories=frozenset(self.categories))

    def content_path(self, site_root: Path) -> Path:
        return site_root / self.content_dir

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "content_dir": self.content_dir,
            "page_size": self.page_size,
            "include_drafts": self.include_drafts,
        }
        if self.categories is not None:
            result["categories"] = list(self.categories)
        return result


def get_global_config_path() -> Path:
    """Return the path to the global blogidx config file.

    Respects XDG_CONFIG_HOME if set, otherwise defaults to
    ~/.config/blogidx/config.yaml.
    """
    xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config_home:
        base = Path(xdg_config_home)
    else:
        base = Path.home() / ".config"
    return base / "blogidx" / "config.yaml"


def _read_yaml_mapping(path: Path) -> dict:
    """Read a YAML mapping, returning {} if missing or invalid."""
    if not path.is_file():
        return {}
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Ignoring unreadable config %s: %s", path, e)
        return {}
    if isinstance(data, dict):
        return data
    if data is not None:
        logger.warning("Ignoring config %s: not a mapping", path)
    return {}


def load_global_config() -> dict:
    """Load the global blogidx configuration.

    Returns:
        Configuration dict, or empty dict if file is missing or invalid.
    """
    return _read_yaml_mapping(get_global_config_path())


def _walk_up_for_marker(start_path: Path) -> Path | None:
    current = start_path.resolve()
    while current != current.parent:
        if (current / MARKER_DIR).is_dir():
            return current
        current = current.parent
    return None


def find_site_root(start_path: Path | None = None) -> Path:
    """Find the site root using 3-tier resolution.

    Args:
        start_path: Starting path for .blogidx/ directory walk (defaults to cwd)

    Returns:
        Path to site root

    Raises:
        FileNotFoundError: If .blogidx/ directory not found by any method
    """
    # Tier 1: environment variable
    env_root = os.environ.get("BLOGIDX_SITE_ROOT")
    if env_root:
        env_path = Path(env_root).resolve()
        if (env_path / MARKER_DIR).is_dir():
            return env_path
        raise FileNotFoundError(
            f"BLOGIDX_SITE_ROOT={env_root} does not contain a {MARKER_DIR}/ directory."
        )

    # Tier 2: walk up
    if start_path is None:
        start_path = Path.cwd()
    result = _walk_up_for_marker(Path(start_path))
    if result is not None:
        return result

    # Tier 3: global config file
    site_root_str = load_global_config().get("site_root")
    if site_root_str:
        global_path = Path(site_root_str).expanduser().resolve()
        if (global_path / MARKER_DIR).is_dir():
            return global_path
        raise FileNotFoundError(
            f"Global config site_root={site_root_str} does not contain a {MARKER_DIR}/ directory."
        )

    raise FileNotFoundError(
        f"Could not find {MARKER_DIR}/ directory starting from {start_path}. "
        f"Run 'blogidx init' to initialize, set BLOGIDX_SITE_ROOT, or configure "
        f"site_root in {get_global_config_path()}."
    )


@lru_cache(maxsize=1)
def get_site_root() -> Path:
    """Get the cached site root path."""
    return find_site_root()


def get_paths(site_root: Path | None = None) -> SitePaths:
    """Get all standard paths for the site.

    Args:
        site_root: Site root path (uses cached default if not provided)
    """
    if site_root is None:
        site_root = get_site_root()

    site_root = Path(site_root)
    data_dir = site_root / MARKER_DIR

    return SitePaths(
        root=site_root,
        data_dir=data_dir,
        config_file=data_dir / "config.yaml",
    )


def load_site_config(site_root: Path | None = None) -> SiteConfig:
    """Load .blogidx/config.yaml.

    Unknown keys are ignored; keys with the wrong type fall back to their
    defaults with a warning.
    """
    paths = get_paths(site_root)
    data = _read_yaml_mapping(paths.config_file)
    defaults = SiteConfig()

    content_dir = data.get("content_dir", defaults.content_dir)
    if not isinstance(content_dir, str) or not content_dir.strip():
        logger.warning("Invalid content_dir %r, using %s", content_dir, defaults.content_dir)
        content_dir = defaults.content_dir

    categories = data.get("categories")
    if categories is not None:
        if isinstance(categories, list) and all(isinstance(c, str) for c in categories):
            categories = tuple(categories)
        else:
            logger.warning("Invalid categories %r, allowing any category", categories)
            categories = None

    page_size = data.get("page_size", defaults.page_size)
    if not isinstance(page_size, int) or isinstance(page_size, bool) or page_size <= 0:
        logger.warning("Invalid page_size %r, using %d", page_size, defaults.page_size)
        page_size = defaults.page_size

    include_drafts = data.get("include_drafts", defaults.include_drafts)
    if not isinstance(include_drafts, bool):
        logger.warning("Invalid include_drafts %r, using false", include_drafts)
        include_drafts = defaults.include_drafts

    return SiteConfig(
        content_dir=content_dir,
        categories=categories,
        page_size=page_size,
        include_drafts=include_drafts,
    )


def write_default_config(path: Path) -> None:
    """Write a starter config.yaml."""
    text = yaml.dump(
        SiteConfig().to_dict(),
        default_flow_style=False,
        allow_unicode=True,
        sort_keys=False,
    )
    path.write_text(text, encoding="utf-8")
