"""CLI commands for publishing drafts and pulling remote copies."""

from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console

console = Console()


@click.command(name="publish")
@click.argument("draft_dir", type=click.Path(path_type=Path))
@click.argument("published_dir", type=click.Path(path_type=Path))
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Config file with a `publish:` defaults section",
)
@click.option(
    "--compare-field",
    help="Published timestamp field compared against the draft's local_updated_at",
)
@click.pass_obj
def publish(
    ctx,
    draft_dir: Path,
    published_dir: Path,
    config_path: Path | None,
    compare_field: str | None,
) -> None:
    """Copy new or newer drafts into the published directory.

    Existing articles keep their front matter; only the body is replaced.
    New articles get default front matter (tags, id, private, ...).
    """
    from dataclasses import replace

    from serieslink.core.config import load_publish_defaults
    from serieslink.core.errors import SeriesLinkError
    from serieslink.publish.merge import execute_publish, plan_publish

    dry_run = ctx.dry_run if ctx else False

    try:
        defaults = load_publish_defaults(config_path)
        if compare_field:
            defaults = replace(defaults, timestamp_field=compare_field)
        items = plan_publish(draft_dir, published_dir, defaults)
    except SeriesLinkError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise SystemExit(1) from e

    if not items:
        console.print("[yellow]No drafts found.[/yellow]")
        return

    success, failures = execute_publish(items, published_dir, dry_run=dry_run)
    console.print(f"[bold]Done:[/bold] {success} written, {failures} failed")

    if dry_run:
        console.print("[yellow]DRY RUN - no changes made[/yellow]")
    if failures:
        raise SystemExit(1)


@click.command(name="pull-remote")
@click.argument("published_dir", type=click.Path(path_type=Path))
@click.option(
    "--remote-dir",
    type=click.Path(path_type=Path),
    help="Directory of fetched files (default: PUBLISHED_DIR/.remote)",
)
@click.pass_obj
def pull_remote(ctx, published_dir: Path, remote_dir: Path | None) -> None:
    """Overwrite published files with their fetched remote copies."""
    from serieslink.core.errors import SeriesLinkError
    from serieslink.publish.remote import REMOTE_SUBDIR, execute_remote_pull, plan_remote_pull

    dry_run = ctx.dry_run if ctx else False
    remote_dir = remote_dir or published_dir / REMOTE_SUBDIR

    try:
        items = plan_remote_pull(remote_dir, published_dir)
    except SeriesLinkError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise SystemExit(1) from e

    copied, skipped = execute_remote_pull(items, dry_run=dry_run)
    console.print(f"[bold]Done:[/bold] {copied} updated, {skipped} without a match")

    if dry_run:
        console.print("[yellow]DRY RUN - no changes made[/yellow]")
