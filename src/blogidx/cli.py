"""
Main CLI dispatcher for blogidx.

Usage:
    blogidx init                         # Initialize .blogidx/ directory
    blogidx content [validate|list|category|tag|taxonomy]
"""

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from blogidx import __version__

console = Console()


class Context:
    """Shared context for all commands."""

    def __init__(self, verbose: bool = False):
        self.verbose = verbose
        self.console = console


@click.group()
@click.version_option(version=__version__, prog_name="blogidx")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """Blog content index tools.

    Validate front matter and query articles for a static blog.
    """
    ctx.obj = Context(verbose=verbose)

    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )


@main.command()
@click.option("--force", "-f", is_flag=True, help="Overwrite existing config.yaml")
def init(force: bool) -> None:
    """Initialize .blogidx/ directory with a default config.yaml."""
    from pathlib import Path

    from blogidx.core.config import MARKER_DIR, write_default_config

    site_root = Path.cwd()
    data_dir = site_root / MARKER_DIR
    config_file = data_dir / "config.yaml"

    if config_file.exists() and not force:
        console.print(f"[yellow]{config_file} already exists[/yellow]")
        console.print("[dim]Use --force to overwrite.[/dim]")
        return

    data_dir.mkdir(parents=True, exist_ok=True)
    write_default_config(config_file)
    console.print(f"  [green]Created[/green] {config_file.relative_to(site_root)}")
    console.print("[green]Done![/green] .blogidx/ directory initialized.")


# Import and register command groups (imports after main definition intentional)
from blogidx.content.commands import content  # noqa: E402

main.add_command(content)


if __name__ == "__main__":
    main()
