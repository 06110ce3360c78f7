"""
Error types for content validation and loading.

All failures are data-level: fixing the offending entry and re-running
ingestion recovers from any of them.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any


class ContentError(Exception):
    """Base class for all blogidx content errors."""

    kind = "content_error"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {"kind": self.kind, "message": str(self)}


class ValidationError(ContentError):
    """A front matter field failed schema validation."""

    kind = "validation_error"

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["field"] = self.field
        return result


class MissingFieldError(ValidationError):
    """A required field is absent or blank."""

    kind = "missing_field"

    def __init__(self, field: str):
        super().__init__(field, f"Missing required field: {field}")


class InvalidDateError(ValidationError):
    """A date field does not match the accepted date grammar."""

    kind = "invalid_date"

    def __init__(self, field: str, value: Any):
        super().__init__(
            field,
            f"Invalid date in {field}: {value!r} "
            "(expected e.g. 'Jan 13 2025' or '2025-01-13')",
        )
        self.value = value


class InvalidTagError(ValidationError):
    """The tags field is not a sequence of non-empty strings."""

    kind = "invalid_tag"

    def __init__(self, value: Any, reason: str = "tags must be a list of non-empty strings"):
        super().__init__("tags", f"Invalid tags {value!r}: {reason}")
        self.value = value


class InvalidFieldError(ValidationError):
    """A field is present but has the wrong type or a disallowed value."""

    kind = "invalid_field"

    def __init__(self, field: str, reason: str):
        super().__init__(field, f"Invalid {field}: {reason}")


class FrontMatterParseError(ContentError):
    """A content file has no front matter block or it is not valid YAML."""

    kind = "front_matter_parse"

    def __init__(self, path: Path | str, reason: str):
        super().__init__(f"{path}: {reason}")
        self.path = Path(path)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["path"] = str(self.path)
        return result


class DuplicateSlugError(ContentError):
    """Two or more entries share a slug."""

    kind = "duplicate_slug"

    def __init__(self, slugs: list[str] | tuple[str, ...]):
        self.slugs = tuple(sorted(set(slugs)))
        super().__init__(f"Duplicate slug(s): {', '.join(self.slugs)}")

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["slugs"] = list(self.slugs)
        return result


class InvalidPageError(ContentError, ValueError):
    """Pagination arguments are out of range."""

    kind = "invalid_page"


class LoadError(ContentError):
    """An ingestion pass failed; carries every failure in the batch."""

    kind = "load_error"

    def __init__(self, failures: list[tuple[str, ContentError]]):
        self.failures = list(failures)
        count = len(self.failures)
        noun = "entry" if count == 1 else "entries"
        super().__init__(f"{count} content {noun} failed to load")

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["failures"] = [
            {"slug": slug, **error.to_dict()} for slug, error in self.failures
        ]
        return result
