"""Core utilities for blogidx."""

from blogidx.core.config import (
    SiteConfig,
    SitePaths,
    find_site_root,
    get_paths,
    get_site_root,
    load_site_config,
)

__all__ = [
    "SiteConfig",
    "SitePaths",
    "find_site_root",
    "get_site_root",
    "get_paths",
    "load_site_config",
]
