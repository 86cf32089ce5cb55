"""
Main CLI dispatcher for serieslink.

Usage:
    serieslink links DRAFT_DIR PUBLISHED_DIR     # Embed/refresh series link blocks
    serieslink publish DRAFT_DIR PUBLISHED_DIR   # Merge drafts into published set
    serieslink pull-remote PUBLISHED_DIR         # Copy fetched files over published ones
"""

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from serieslink import __version__

console = Console()


class Context:
    """Shared context for all commands."""

    def __init__(self, verbose: bool = False, dry_run: bool = False):
        self.verbose = verbose
        self.dry_run = dry_run
        self.console = console


def setup_logging(verbose: bool) -> None:
    """Route serieslink debug logging to the console when verbose."""
    logger = logging.getLogger("serieslink")
    logger.handlers = []
    logger.propagate = False
    if verbose:
        handler = RichHandler(console=console, show_time=False, show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
        logger.setLevel(logging.DEBUG)
    else:
        logger.addHandler(logging.NullHandler())
        logger.setLevel(logging.WARNING)


@click.group()
@click.version_option(version=__version__, prog_name="serieslink")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.option("-n", "--dry-run", is_flag=True, help="Preview without making changes")
@click.pass_context
def main(ctx: click.Context, verbose: bool, dry_run: bool) -> None:
    """Keep series navigation links current across published articles."""
    ctx.ensure_object(dict)
    ctx.obj = Context(verbose=verbose, dry_run=dry_run)
    setup_logging(verbose)

    if dry_run:
        console.print("[yellow]DRY RUN MODE - No changes will be made[/yellow]")


# Import and register commands (imports after main definition intentional)
from serieslink.publish.commands import publish, pull_remote  # noqa: E402
from serieslink.series.commands import links  # noqa: E402

main.add_command(links)
main.add_command(publish)
main.add_command(pull_remote)


if __name__ == "__main__":
    main()
