"""
Blog content scanner.

Scans the blog content directory and splits each file into front matter
and body. Nothing here validates fields; see blogidx.content.validator.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from blogidx.content.entry import RawEntry
from blogidx.content.errors import FrontMatterParseError

logger = logging.getLogger(__name__)

CONTENT_SUFFIXES = (".md", ".mdx")
INDEX_NAMES = ("index", "_index")

FRONT_MATTER_RE = re.compile(
    r"^---[ \t]*\r?\n(?:(.*?)\r?\n)??---[ \t]*(?:\r?\n|$)(.*)$",
    re.DOTALL,
)


class _FrontMatterLoader(yaml.SafeLoader):
    """SafeLoader that keeps impossible timestamps as plain text."""


def _timestamp_or_text(loader: yaml.SafeLoader, node: yaml.ScalarNode) -> Any:
    # "2025-13-45" looks like a timestamp to the resolver but is not a date;
    # leave it as a string so the validator reports the field
    try:
        return loader.construct_yaml_timestamp(node)
    except ValueError:
        return loader.construct_scalar(node)


_FrontMatterLoader.add_constructor("tag:yaml.org,2002:timestamp", _timestamp_or_text)


@dataclass
class ScanResult:
    """Raw entries found by a scan plus files that could not be split."""

    entries: list[RawEntry] = field(default_factory=list)
    errors: list[tuple[str, FrontMatterParseError]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def split_front_matter(content: str, path: Path | str = "<string>") -> tuple[dict[str, Any], str]:
    """Split content into front matter and body.

    Args:
        content: Raw file content
        path: File path for error messages

    Returns:
        Tuple of (front matter dict, body string); body is returned as-is

    Raises:
        FrontMatterParseError: If there is no front matter block, the YAML
            is invalid, or it does not describe a mapping
    """
    match = FRONT_MATTER_RE.match(content.removeprefix("\ufeff"))
    if not match:
        raise FrontMatterParseError(path, "no front matter block")

    fm_text, body = match.group(1) or "", match.group(2)
    try:
        loaded = yaml.load(fm_text, Loader=_FrontMatterLoader)
    except (yaml.YAMLError, ValueError) as e:
        raise FrontMatterParseError(path, f"YAML error: {e}") from e

    if loaded is None:
        loaded = {}
    if not isinstance(loaded, dict):
        raise FrontMatterParseError(path, "front matter is not a mapping")

    return loaded, body


def slug_for(path: Path, content_dir: Path) -> str:
    """Derive the slug for a content file from its location.

    ``sycl-opengl.mdx`` and ``sycl-opengl/index.mdx`` both map to
    ``sycl-opengl``; nested directories keep their POSIX path.
    """
    relative = path.relative_to(content_dir).with_suffix("")
    if relative.name in INDEX_NAMES:
        relative = relative.parent
    return relative.as_posix()


class ContentScanner:
    """Scans a blog content directory."""

    def __init__(self, content_dir: Path):
        """Initialize scanner.

        Args:
            content_dir: Directory holding the blog's .md/.mdx files
        """
        self.content_dir = Path(content_dir)

    def scan(self) -> ScanResult:
        """Read every content file under the content directory.

        Returns:
            ScanResult with one RawEntry per readable file and one error per
            file whose front matter could not be split or parsed
        """
        result = ScanResult()
        if not self.content_dir.is_dir():
            logger.warning("Content directory does not exist: %s", self.content_dir)
            return result

        for path in self._content_files():
            slug = slug_for(path, self.content_dir)
            try:
                result.entries.append(self.parse_file(path, slug))
            except FrontMatterParseError as e:
                logger.debug("Skipping %s: %s", path, e)
                result.errors.append((slug, e))

        logger.debug(
            "Scanned %s: %d entries, %d errors",
            self.content_dir, len(result.entries), len(result.errors),
        )
        return result

    def _content_files(self) -> Iterator[Path]:
        """Yield content files in a stable order.

        Skips dotfiles, symlinks and the directory's own index file.
        """
        for path in sorted(self.content_dir.rglob("*")):
            if path.suffix not in CONTENT_SUFFIXES:
                continue
            if path.is_dir() or path.is_symlink():
                continue
            relative = path.relative_to(self.content_dir)
            if any(part.startswith(".") for part in relative.parts):
                continue
            if path.parent == self.content_dir and path.stem in INDEX_NAMES:
                logger.debug("Skipping section index %s", path)
                continue
            yield path

    def parse_file(self, path: Path, slug: str | None = None) -> RawEntry:
        """Parse a single content file.

        Raises:
            FrontMatterParseError: If the file cannot be split
        """
        if slug is None:
            slug = slug_for(path, self.content_dir)
        try:
            content = path.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as e:
            raise FrontMatterParseError(path, f"unreadable: {e}") from e

        front_matter, body = split_front_matter(content, path=path)
        return RawEntry(slug=slug, front_matter=front_matter, body=body, source=path)
