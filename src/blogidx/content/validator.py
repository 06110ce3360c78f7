"""
Front matter schema validation.

Turns a raw front matter mapping into a ContentEntry, or into the first
ValidationError found. Validation does no I/O and never raises: callers
get a ValidationResult they can inspect.

Accepted date grammar (fixed, independent of the process locale):
- YAML-native dates and datetimes
- "Jan 13 2025", "January 13 2025", "Jan 13, 2025", "January 13, 2025"
- "2025-01-13"
- "2025-01-13T10:00:00", optionally followed by "Z" or a UTC offset
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Any

from blogidx.content.entry import ContentEntry, RawEntry
from blogidx.content.errors import (
    InvalidDateError,
    InvalidFieldError,
    InvalidTagError,
    MissingFieldError,
    ValidationError,
)

REQUIRED_FIELDS = ("title", "description", "pubDate", "category")

# Checked in order; the first key present wins
PUBLISH_DATE_KEYS = ("pubDate", "publishDate", "date")

# Numeric formats only; month names are handled by _MONTH_NAME_DATE
DATE_FORMATS = [
    "%Y-%m-%d",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%dT%H:%M:%SZ",
    "%Y-%m-%dT%H:%M:%S%z",
]

MONTHS = {
    "jan": 1, "feb": 2, "mar": 3, "apr": 4, "may": 5, "jun": 6,
    "jul": 7, "aug": 8, "sep": 9, "oct": 10, "nov": 11, "dec": 12,
}
MONTH_NAMES = {
    "january": 1, "february": 2, "march": 3, "april": 4, "may": 5, "june": 6,
    "july": 7, "august": 8, "september": 9, "october": 10, "november": 11,
    "december": 12,
}

_MONTH_NAME_DATE = re.compile(r"^([A-Za-z]+) (\d{1,2}),? (\d{4})$")


@dataclass(frozen=True)
class Schema:
    """Site-specific validation settings."""

    categories: frozenset[str] | None = None


DEFAULT_SCHEMA = Schema()


@dataclass(frozen=True)
class ValidationResult:
    """Either a validated entry or the error that stopped validation."""

    slug: str
    entry: ContentEntry | None = None
    error: ValidationError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> ContentEntry:
        """Return the entry, raising the stored error if validation failed."""
        if self.error is not None:
            raise self.error
        return self.entry


def parse_date(value: Any, field: str = "pubDate") -> date:
    """Parse a front matter date value.

    Args:
        value: Raw value (YAML may already have produced a date)
        field: Field name used in the error

    Returns:
        The calendar date

    Raises:
        InvalidDateError: If value does not match the accepted grammar
    """
    # datetime is a date subclass, so check it first
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise InvalidDateError(field, value)

    text = value.strip()

    match = _MONTH_NAME_DATE.match(text)
    if match:
        month_word, day, year = match.groups()
        lowered = month_word.lower()
        month = MONTHS.get(lowered) or MONTH_NAMES.get(lowered)
        if month is None:
            raise InvalidDateError(field, value)
        try:
            return date(int(year), month, int(day))
        except ValueError:
            raise InvalidDateError(field, value) from None

    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue

    raise InvalidDateError(field, value)


def _require_text(front_matter: Mapping[str, Any], field: str) -> str:
    value = front_matter.get(field)
    if value is None:
        raise MissingFieldError(field)
    if not isinstance(value, str):
        raise InvalidFieldError(field, f"expected text, got {type(value).__name__}")
    value = value.strip()
    if not value:
        raise MissingFieldError(field)
    return value


def _publish_date(front_matter: Mapping[str, Any]) -> date:
    for key in PUBLISH_DATE_KEYS:
        value = front_matter.get(key)
        if value is None:
            continue
        if isinstance(value, str) and not value.strip():
            continue
        return parse_date(value, field=key)
    raise MissingFieldError("pubDate")


def _tags(value: Any) -> frozenset[str]:
    if value is None:
        return frozenset()
    if not isinstance(value, (list, tuple)):
        raise InvalidTagError(value, "tags must be a list")

    tags = set()
    for tag in value:
        if not isinstance(tag, str):
            raise InvalidTagError(value, f"tag {tag!r} is not a string")
        tag = tag.strip()
        if not tag:
            raise InvalidTagError(value, "tags must not be empty")
        tags.add(tag)
    return frozenset(tags)


def _hero_image(value: Any) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str) or not value.strip():
        raise InvalidFieldError("heroImage", "expected a non-empty path")
    return value.strip()


def _validate(
    front_matter: Mapping[str, Any],
    slug: str,
    schema: Schema,
    body: str,
    source: Path | None,
) -> ContentEntry:
    title = _require_text(front_matter, "title")
    description = _require_text(front_matter, "description")
    publish_date = _publish_date(front_matter)
    category = _require_text(front_matter, "category")
    if schema.categories is not None and category not in schema.categories:
        allowed = ", ".join(sorted(schema.categories))
        raise InvalidFieldError("category", f"{category!r} is not one of: {allowed}")

    tags = _tags(front_matter.get("tags"))
    hero_image = _hero_image(front_matter.get("heroImage"))

    updated_raw = front_matter.get("updatedDate")
    updated_date = parse_date(updated_raw, field="updatedDate") if updated_raw is not None else None

    draft = front_matter.get("draft", False)
    if not isinstance(draft, bool):
        raise InvalidFieldError("draft", "expected true or false")

    return ContentEntry(
        slug=slug,
        title=title,
        description=description,
        publish_date=publish_date,
        category=category,
        tags=tags,
        hero_image=hero_image,
        updated_date=updated_date,
        draft=draft,
        body=body,
        source=source,
    )


def validate(
    front_matter: Mapping[str, Any],
    slug: str,
    *,
    schema: Schema | None = None,
    body: str = "",
    source: Path | None = None,
) -> ValidationResult:
    """Validate one front matter mapping.

    Args:
        front_matter: Raw field name to value mapping
        slug: Identifier for the entry
        schema: Site validation settings (defaults to free-text categories)
        body: Body text, passed through untouched
        source: Backing file, if any

    Returns:
        ValidationResult holding the entry or the first error
    """
    try:
        entry = _validate(front_matter, slug, schema or DEFAULT_SCHEMA, body, source)
    except ValidationError as e:
        return ValidationResult(slug=slug, error=e)
    return ValidationResult(slug=slug, entry=entry)


def validate_raw(raw: RawEntry, schema: Schema | None = None) -> ValidationResult:
    """Validate a RawEntry produced by the scanner."""
    return validate(
        raw.front_matter,
        raw.slug,
        schema=schema,
        body=raw.body,
        source=raw.source,
    )


def validate_all(
    raws: Iterable[RawEntry],
    schema: Schema | None = None,
) -> tuple[list[ContentEntry], list[tuple[str, ValidationError]]]:
    """Validate every raw entry independently.

    Returns:
        Tuple of (valid entries, (slug, error) failures)
    """
    entries: list[ContentEntry] = []
    failures: list[tuple[str, ValidationError]] = []

    for raw in raws:
        result = validate_raw(raw, schema)
        if result.error is None:
            entries.append(result.unwrap())
        else:
            failures.append((raw.slug, result.error))

    return entries, failures
