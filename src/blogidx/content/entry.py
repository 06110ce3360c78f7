"""
Content entry value objects.

A RawEntry is what the scanner (or a caller) hands to the validator; a
ContentEntry is the validated, immutable result.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class RawEntry:
    """Unvalidated front matter plus opaque body for one content file."""

    slug: str
    front_matter: dict[str, Any] = field(default_factory=dict)
    body: str = ""
    source: Path | None = None


@dataclass(frozen=True)
class ContentEntry:
    """A single validated blog article."""

    slug: str
    title: str
    description: str
    publish_date: date
    category: str
    tags: frozenset[str] = frozenset()
    hero_image: str | None = None
    updated_date: date | None = None
    draft: bool = False
    body: str = field(default="", compare=False, repr=False)
    source: Path | None = field(default=None, compare=False, repr=False)

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags

    @property
    def sort_key(self) -> tuple[int, str]:
        """Key giving newest-first order, ties broken by slug ascending."""
        return (-self.publish_date.toordinal(), self.slug)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        result: dict[str, Any] = {
            "slug": self.slug,
            "title": self.title,
            "description": self.description,
            "pubDate": self.publish_date.isoformat(),
            "category": self.category,
            "tags": sorted(self.tags),
        }
        if self.hero_image is not None:
            result["heroImage"] = self.hero_image
        if self.updated_date is not None:
            result["updatedDate"] = self.updated_date.isoformat()
        if self.draft:
            result["draft"] = True
        if self.source is not None:
            result["source"] = str(self.source)
        return result
