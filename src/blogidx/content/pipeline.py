"""
Ingestion pipeline: raw entries -> validator -> registry.

Every entry in a batch is validated independently and all failures are
reported together in a single LoadError.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable
from pathlib import Path

from blogidx.content.entry import RawEntry
from blogidx.content.errors import ContentError, DuplicateSlugError, LoadError
from blogidx.content.registry import Registry
from blogidx.content.scanner import ContentScanner
from blogidx.content.validator import Schema, validate_all

logger = logging.getLogger(__name__)


def ingest(
    raws: Iterable[RawEntry],
    schema: Schema | None = None,
    include_drafts: bool = False,
    extra_failures: Iterable[tuple[str, ContentError]] = (),
) -> Registry:
    """Validate a batch of raw entries and load them into a new registry.

    Args:
        raws: Raw entries for the whole site
        schema: Site validation settings
        include_drafts: Keep entries marked ``draft: true``
        extra_failures: Failures found upstream (e.g. by the scanner) to
            report alongside validation failures

    Returns:
        New Registry

    Raises:
        LoadError: If any entry failed; carries every (slug, error) pair
    """
    raws = list(raws)
    entries, validation_failures = validate_all(raws, schema)
    extra_failures = list(extra_failures)
    failures: list[tuple[str, ContentError]] = list(extra_failures)
    failures.extend(validation_failures)

    # Duplicates are checked across every slug in the batch, valid or not,
    # including files the scanner could not split
    counts = Counter([raw.slug for raw in raws] + [slug for slug, _ in extra_failures])
    duplicates = sorted(slug for slug, count in counts.items() if count > 1)
    for slug in duplicates:
        failures.append((slug, DuplicateSlugError([slug])))

    if failures:
        logger.warning("Ingestion failed: %d failure(s) in %d entries", len(failures), len(raws))
        raise LoadError(failures)

    if not include_drafts:
        drafts = [e for e in entries if e.draft]
        if drafts:
            logger.debug("Excluding %d draft(s)", len(drafts))
        entries = [e for e in entries if not e.draft]

    return Registry.load(entries)


def ingest_directory(
    content_dir: Path,
    schema: Schema | None = None,
    include_drafts: bool = False,
) -> Registry:
    """Scan a content directory and ingest everything found.

    Raises:
        LoadError: With scanner and validation failures combined
    """
    scan = ContentScanner(content_dir).scan()
    if not scan.ok:
        logger.warning("%d file(s) in %s could not be parsed", len(scan.errors), content_dir)
    return ingest(
        scan.entries,
        schema=schema,
        include_drafts=include_drafts,
        extra_failures=scan.errors,
    )
