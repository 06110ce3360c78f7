"""
Content entry registry.

A Registry is an immutable snapshot of validated entries in newest-first
order. ContentStore holds the snapshot currently in use and swaps it
atomically when a rebuild finishes, so readers see either the old set or
the new one in full.
"""

from __future__ import annotations

import logging
import threading
from collections import Counter
from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING

from blogidx.content.entry import ContentEntry
from blogidx.content.errors import DuplicateSlugError

if TYPE_CHECKING:
    from blogidx.content.entry import RawEntry
    from blogidx.content.query import ContentQuery
    from blogidx.content.validator import Schema

logger = logging.getLogger(__name__)


class Registry:
    """Immutable, ordered collection of content entries keyed by slug."""

    __slots__ = ("_entries", "_by_slug")

    def __init__(self, entries: tuple[ContentEntry, ...] = ()):
        # Use Registry.load() to build from unchecked input
        self._entries = entries
        self._by_slug = {entry.slug: entry for entry in entries}

    @classmethod
    def load(cls, entries: Iterable[ContentEntry]) -> Registry:
        """Build a fresh registry from validated entries.

        Args:
            entries: Validated entries in any order

        Returns:
            New Registry ordered by publish date descending, then slug

        Raises:
            DuplicateSlugError: If any slug appears more than once
        """
        entries = list(entries)
        counts = Counter(entry.slug for entry in entries)
        duplicates = [slug for slug, count in counts.items() if count > 1]
        if duplicates:
            raise DuplicateSlugError(duplicates)

        ordered = tuple(sorted(entries, key=lambda e: e.sort_key))
        logger.debug("Loaded registry with %d entries", len(ordered))
        return cls(ordered)

    @property
    def entries(self) -> tuple[ContentEntry, ...]:
        return self._entries

    def get(self, slug: str) -> ContentEntry | None:
        return self._by_slug.get(slug)

    def index_of(self, slug: str) -> int:
        """Position of slug in registry order.

        Raises:
            KeyError: If slug is not in the registry
        """
        entry = self._by_slug[slug]
        return self._entries.index(entry)

    def __contains__(self, slug: object) -> bool:
        return slug in self._by_slug

    def __iter__(self) -> Iterator[ContentEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"Registry({len(self._entries)} entries)"


class ContentStore:
    """Holds the active registry snapshot for a site build.

    Pass one ContentStore explicitly to whatever needs content; reads go
    through ``current`` and take no lock.
    """

    def __init__(self, registry: Registry | None = None):
        self._current = registry if registry is not None else Registry()
        self._write_lock = threading.Lock()

    @property
    def current(self) -> Registry:
        return self._current

    def swap(self, registry: Registry) -> Registry:
        """Replace the active snapshot.

        Returns:
            The previous snapshot
        """
        with self._write_lock:
            previous = self._current
            self._current = registry
        logger.debug("Swapped registry: %d -> %d entries", len(previous), len(registry))
        return previous

    def reload(
        self,
        raws: Iterable[RawEntry],
        schema: Schema | None = None,
        include_drafts: bool = False,
    ) -> Registry:
        """Ingest raw entries and swap in the result.

        The active snapshot is left untouched if ingestion fails.

        Raises:
            LoadError: With every failure in the batch
        """
        from blogidx.content.pipeline import ingest

        with self._write_lock:
            registry = ingest(raws, schema=schema, include_drafts=include_drafts)
            self._current = registry
        return registry

    def query(self) -> ContentQuery:
        """Query interface over the current snapshot."""
        from blogidx.content.query import ContentQuery

        return ContentQuery(self._current)
