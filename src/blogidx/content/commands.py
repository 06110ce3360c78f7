"""CLI commands for validating and querying blog content."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import click
from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from pathlib import Path

    from blogidx.content.entry import ContentEntry
    from blogidx.content.errors import LoadError
    from blogidx.content.registry import Registry
    from blogidx.core.config import SiteConfig

console = Console()


@click.group(name="content")
def content() -> None:
    """Validate and query blog content.

    Reads front matter from the configured content directory.
    """
    pass


def _site() -> tuple[Path, SiteConfig]:
    """Resolve the site root and its config, exiting with status 1 if absent."""
    from blogidx.core.config import get_paths, load_site_config

    try:
        paths = get_paths()
    except FileNotFoundError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)

    return paths.root, load_site_config(paths.root)


def _load() -> tuple[Registry, SiteConfig]:
    """Ingest the site's content, exiting with status 1 on failure."""
    from blogidx.content.errors import LoadError
    from blogidx.content.pipeline import ingest_directory

    root, config = _site()
    try:
        registry = ingest_directory(
            config.content_path(root),
            schema=config.schema(),
            include_drafts=config.include_drafts,
        )
    except LoadError as e:
        _print_failures(e)
        raise SystemExit(1)

    return registry, config


def _print_failures(error: LoadError) -> None:
    table = Table(title=f"[red]{error}[/red]")
    table.add_column("Slug", style="cyan", no_wrap=True)
    table.add_column("Kind", style="magenta", no_wrap=True)
    table.add_column("Field")
    table.add_column("Message")

    for slug, failure in error.failures:
        details = failure.to_dict()
        table.add_row(slug, details["kind"], details.get("field", ""), details["message"])

    console.print(table)


def _print_entries(entries: tuple[ContentEntry, ...], title: str) -> None:
    if not entries:
        console.print(f"[yellow]No entries for {title}[/yellow]")
        return

    table = Table(title=title)
    table.add_column("Date", style="dim")
    table.add_column("Slug", style="cyan", no_wrap=True)
    table.add_column("Title")
    table.add_column("Category", style="green")
    table.add_column("Tags", style="dim")

    for entry in entries:
        table.add_row(
            entry.publish_date.isoformat(),
            entry.slug,
            entry.title,
            entry.category,
            ", ".join(sorted(entry.tags)),
        )

    console.print(table)


def _echo_json(data) -> None:
    click.echo(json.dumps(data, indent=2))


@content.command(name="validate")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option("--drafts", is_flag=True, help="Include draft entries")
def validate_content(as_json: bool, drafts: bool) -> None:
    """Validate front matter of every content file.

    Exits with status 1 if any entry fails.

    \b
    Examples:
        blogidx content validate
        blogidx content validate --json
    """
    from blogidx.content.errors import LoadError
    from blogidx.content.pipeline import ingest_directory

    root, config = _site()
    content_dir = config.content_path(root)

    try:
        registry = ingest_directory(
            content_dir,
            schema=config.schema(),
            include_drafts=drafts or config.include_drafts,
        )
    except LoadError as e:
        if as_json:
            _echo_json(e.to_dict())
        else:
            _print_failures(e)
        raise SystemExit(1)

    if as_json:
        _echo_json({"valid": True, "entries": len(registry)})
        return

    console.print(f"[green]✓ {len(registry)} entries valid[/green] [dim]({content_dir})[/dim]")


@content.command(name="list")
@click.option("--offset", type=int, default=None, help="Index of first entry")
@click.option("--limit", type=int, default=None, help="Maximum entries (default: page_size)")
@click.option("--page", "page_number", type=int, default=None, help="1-based page number")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def list_entries(
    offset: int | None,
    limit: int | None,
    page_number: int | None,
    as_json: bool,
) -> None:
    """List entries newest first.

    \b
    Examples:
        blogidx content list
        blogidx content list --page 2
        blogidx content list --offset 5 --limit 5 --json
    """
    from blogidx.content.errors import InvalidPageError
    from blogidx.content.query import ContentQuery

    registry, config = _load()
    query = ContentQuery(registry)
    size = limit if limit is not None else config.page_size

    try:
        if page_number is not None:
            if offset is not None:
                raise click.UsageError("--page and --offset are mutually exclusive")
            page = query.paginate(page_number, size)
            entries = page.entries
            title = f"Page {page.number} of {page.total_pages}"
        else:
            entries = query.page(offset or 0, size)
            title = f"Entries {offset or 0}-{(offset or 0) + len(entries)} of {len(registry)}"
    except InvalidPageError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)

    if as_json:
        _echo_json([entry.to_dict() for entry in entries])
        return

    _print_entries(entries, title)


@content.command(name="category")
@click.argument("name")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def by_category(name: str, as_json: bool) -> None:
    """List entries in a category.

    \b
    Examples:
        blogidx content category Programming
    """
    from blogidx.content.query import ContentQuery

    registry, _ = _load()
    entries = ContentQuery(registry).by_category(name)

    if as_json:
        _echo_json([entry.to_dict() for entry in entries])
        return

    _print_entries(entries, f"category '{name}'")


@content.command(name="tag")
@click.argument("name")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def by_tag(name: str, as_json: bool) -> None:
    """List entries carrying a tag.

    \b
    Examples:
        blogidx content tag cuda
    """
    from blogidx.content.query import ContentQuery

    registry, _ = _load()
    entries = ContentQuery(registry).by_tag(name)

    if as_json:
        _echo_json([entry.to_dict() for entry in entries])
        return

    _print_entries(entries, f"tag '{name}'")


@content.command(name="taxonomy")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def taxonomy(as_json: bool) -> None:
    """Show category and tag usage counts."""
    from blogidx.content.query import ContentQuery

    registry, _ = _load()
    query = ContentQuery(registry)
    categories = query.categories()
    tags = query.tags()

    if as_json:
        _echo_json({"categories": categories, "tags": tags})
        return

    for label, counts in (("Categories", categories), ("Tags", tags)):
        table = Table(title=label)
        table.add_column("Term", style="cyan")
        table.add_column("Entries", justify="right")
        for term, count in counts.items():
            table.add_row(term, str(count))
        console.print(table)
