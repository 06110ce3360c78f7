"""
Blog content index.

Provides tools for:
- Scanning .md/.mdx content files
- Validating front matter against the blog schema
- Building an immutable, date-ordered registry of entries
- Querying entries by category, tag and page
"""

from blogidx.content.entry import ContentEntry, RawEntry
from blogidx.content.errors import (
    ContentError,
    DuplicateSlugError,
    FrontMatterParseError,
    InvalidDateError,
    InvalidFieldError,
    InvalidPageError,
    InvalidTagError,
    LoadError,
    MissingFieldError,
    ValidationError,
)
from blogidx.content.pipeline import ingest, ingest_directory
from blogidx.content.query import ContentQuery, Page
from blogidx.content.registry import ContentStore, Registry
from blogidx.content.scanner import ContentScanner, ScanResult
from blogidx.content.validator import Schema, ValidationResult, validate, validate_all

__all__ = [
    "ContentEntry",
    "RawEntry",
    "ContentScanner",
    "ScanResult",
    "Schema",
    "ValidationResult",
    "validate",
    "validate_all",
    "Registry",
    "ContentStore",
    "ContentQuery",
    "Page",
    "ingest",
    "ingest_directory",
    # Errors
    "ContentError",
    "ValidationError",
    "MissingFieldError",
    "InvalidDateError",
    "InvalidTagError",
    "InvalidFieldError",
    "FrontMatterParseError",
    "DuplicateSlugError",
    "InvalidPageError",
    "LoadError",
]
