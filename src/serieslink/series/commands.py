"""CLI command for series link synchronization."""

from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console

console = Console()


@click.command(name="links")
@click.argument("draft_dir", type=click.Path(path_type=Path))
@click.argument("published_dir", type=click.Path(path_type=Path))
@click.option(
    "--strict/--skip-missing",
    default=None,
    help="Abort when a title has no published article (default: skip it)",
)
@click.option(
    "--marker",
    type=click.Choice(["sentinel", "heading"]),
    default=None,
    help="Marker convention for the link block",
)
@click.option("--url-template", help="Link URL template, e.g. https://qiita.com/me/items/{id}")
@click.option("--numbered/--plain", default=None, help="Prefix links with series and rank")
@click.option("--no-inline", is_flag=True, help="Leave <<<Title>>> references untouched")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Config file (default: .serieslink.yaml or the global config)",
)
@click.pass_obj
def links(
    ctx,
    draft_dir: Path,
    published_dir: Path,
    strict: bool | None,
    marker: str | None,
    url_template: str | None,
    numbered: bool | None,
    no_inline: bool,
    config_path: Path | None,
) -> None:
    """Embed or refresh series link blocks in published articles.

    DRAFT_DIR holds the drafts declaring `series:`; PUBLISHED_DIR holds the
    published articles (with `id:`) that are rewritten in place.
    """
    from serieslink.core.config import MarkerStyle, MissingPolicy, load_config
    from serieslink.core.errors import SeriesLinkError
    from serieslink.series.syncer import (
        execute_plan,
        plan_from_directories,
        print_issues,
        print_link_plan,
    )

    dry_run = ctx.dry_run if ctx else False
    verbose = ctx.verbose if ctx else False

    try:
        config = load_config(config_path).with_overrides(
            marker_style=MarkerStyle(marker) if marker else None,
            missing_policy=(
                None if strict is None
                else MissingPolicy.STRICT if strict else MissingPolicy.SKIP
            ),
            url_template=url_template,
            numbered=numbered,
            resolve_inline=False if no_inline else None,
        )

        plan = plan_from_directories(draft_dir, published_dir, config)

        if not plan.series:
            # Drafts dropped during planning (duplicate titles) still count
            # against the strict policy
            print_issues(plan)
            plan.check_policy(config)
            if plan.issues:
                console.print("[yellow]No series left to link after the issues above. Nothing to do.[/yellow]")
            else:
                console.print("[yellow]No drafts with a series found. Nothing to do.[/yellow]")
            return

        if verbose or dry_run:
            print_link_plan(plan, verbose=verbose)
        else:
            print_issues(plan)

        _written, failures = execute_plan(plan, config, dry_run=dry_run)
    except SeriesLinkError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise SystemExit(1) from e

    if dry_run:
        console.print("[yellow]DRY RUN - no changes made[/yellow]")

    if failures:
        raise SystemExit(1)
