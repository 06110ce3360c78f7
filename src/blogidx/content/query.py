"""
Read-only queries over a registry snapshot.

Used by renderers for listing pages, category pages and tag pages.
"""

from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass

from blogidx.content.entry import ContentEntry
from blogidx.content.errors import InvalidPageError
from blogidx.content.registry import Registry


@dataclass(frozen=True)
class Page:
    """One page of a paginated listing."""

    entries: tuple[ContentEntry, ...]
    number: int
    size: int
    total_entries: int

    @property
    def total_pages(self) -> int:
        return max(1, math.ceil(self.total_entries / self.size))

    @property
    def has_next(self) -> bool:
        return self.number < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.number > 1


class ContentQuery:
    """Query interface bound to one registry snapshot."""

    def __init__(self, registry: Registry):
        self.registry = registry

    def all(self) -> tuple[ContentEntry, ...]:
        return self.registry.entries

    def by_category(self, category: str) -> tuple[ContentEntry, ...]:
        """All entries in a category, in registry order."""
        return tuple(e for e in self.registry if e.category == category)

    def by_tag(self, tag: str) -> tuple[ContentEntry, ...]:
        """All entries carrying a tag, in registry order."""
        return tuple(e for e in self.registry if e.has_tag(tag))

    def page(self, offset: int, limit: int) -> tuple[ContentEntry, ...]:
        """Slice of the full ordering.

        Args:
            offset: Index of the first entry (0-based)
            limit: Maximum number of entries

        Raises:
            InvalidPageError: If offset is negative or limit is not positive
        """
        if offset < 0:
            raise InvalidPageError(f"offset must not be negative, got {offset}")
        if limit <= 0:
            raise InvalidPageError(f"limit must be positive, got {limit}")
        return self.registry.entries[offset:offset + limit]

    def paginate(self, number: int, size: int) -> Page:
        """1-based listing page of the given size.

        Raises:
            InvalidPageError: If number < 1, size < 1, or number is past the last page
        """
        if size <= 0:
            raise InvalidPageError(f"page size must be positive, got {size}")
        if number < 1:
            raise InvalidPageError(f"page number must be at least 1, got {number}")

        total = len(self.registry)
        last = max(1, math.ceil(total / size))
        if number > last:
            raise InvalidPageError(f"page {number} is past the last page ({last})")

        return Page(
            entries=self.page((number - 1) * size, size),
            number=number,
            size=size,
            total_entries=total,
        )

    def neighbours(self, slug: str) -> tuple[ContentEntry | None, ContentEntry | None]:
        """Entries either side of slug, as (newer, older).

        Raises:
            KeyError: If slug is not in the registry
        """
        index = self.registry.index_of(slug)
        entries = self.registry.entries
        newer = entries[index - 1] if index > 0 else None
        older = entries[index + 1] if index + 1 < len(entries) else None
        return newer, older

    def categories(self) -> dict[str, int]:
        """Category -> entry count, most used first."""
        counts = Counter(e.category for e in self.registry)
        return _sorted_counts(counts)

    def tags(self) -> dict[str, int]:
        """Tag -> entry count, most used first."""
        counts: Counter[str] = Counter()
        for entry in self.registry:
            counts.update(entry.tags)
        return _sorted_counts(counts)


def _sorted_counts(counts: Counter[str]) -> dict[str, int]:
    return dict(sorted(counts.items(), key=lambda kv: (-kv[1], kv[0])))
