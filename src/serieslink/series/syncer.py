"""
Series link synchronization.

Computes, for every published article belonging to a series, the block of
links to its siblings and embeds or refreshes it in the article body.

The run is split into a plan step, which decides every outcome in memory,
and an execute step, which writes only the articles whose body changed.
Policy decisions (skip vs abort on unresolved titles) are taken between
the two, so a strict-mode abort never leaves a partial batch behind.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from serieslink.content.frontmatter import Document, write_document
from serieslink.content.repository import load_documents, require_directory
from serieslink.core.config import SyncConfig
from serieslink.core.errors import UnresolvedTitleMatch, UnterminatedBlock
from serieslink.series.grouper import (
    DraftArticle,
    PublishedArticle,
    TitleIndex,
    find_duplicate_drafts,
    group_by_series,
    index_by_title,
)
from serieslink.series.inline import resolve_inline_refs
from serieslink.series.locator import DecisionKind, decide
from serieslink.series.renderer import render_block
from serieslink.series.splice import apply_decision

console = Console()
logger = logging.getLogger(__name__)


class SyncAction(Enum):
    """Outcome for a single published article."""

    INSERT = "insert"
    UPDATE = "update"
    UNCHANGED = "unchanged"
    SKIP = "skip"


class IssueKind(Enum):
    """Problems reported during planning."""

    UNRESOLVED = "unresolved"
    DUPLICATE = "duplicate"
    PARSE = "parse"
    BLOCK = "block"
    SERIES = "series"


# Rich markup style per action, used when reporting
ACTION_STYLES = {
    SyncAction.INSERT: "green",
    SyncAction.UPDATE: "yellow",
    SyncAction.UNCHANGED: "dim",
    SyncAction.SKIP: "red",
}

ACTION_LABELS = {
    SyncAction.INSERT: "Inserted",
    SyncAction.UPDATE: "Updated",
    SyncAction.UNCHANGED: "Unchanged",
    SyncAction.SKIP: "Skipped",
}


@dataclass(frozen=True)
class Issue:
    """A non-fatal problem found while planning."""

    kind: IssueKind
    subject: str
    detail: str = ""

    @property
    def aborts_strict(self) -> bool:
        return self.kind in (IssueKind.UNRESOLVED, IssueKind.DUPLICATE)


@dataclass
class ArticleSyncItem:
    """Planned outcome for one series member."""

    series: str
    draft: DraftArticle
    published: PublishedArticle | None = None
    action: SyncAction = SyncAction.UNCHANGED
    reason: str = ""
    new_body: str | None = None
    unresolved: list[str] = field(default_factory=list)
    inline_resolved: list[str] = field(default_factory=list)

    @property
    def filename(self) -> str:
        return self.published.filename if self.published else self.draft.filename

    @property
    def needs_write(self) -> bool:
        return self.action in (SyncAction.INSERT, SyncAction.UPDATE)

    def updated_document(self) -> Document:
        assert self.published is not None and self.new_body is not None
        return self.published.document.with_body(self.new_body)


@dataclass
class LinkPlan:
    """Plan for synchronizing link blocks across all series."""

    published_dir: Path | None = None
    items: list[ArticleSyncItem] = field(default_factory=list)
    issues: list[Issue] = field(default_factory=list)
    series: dict[str, list[DraftArticle]] = field(default_factory=dict)

    def add_issue(self, kind: IssueKind, subject: str, detail: str = "") -> None:
        # First report of a (kind, subject) pair wins
        if any(i.kind == kind and i.subject == subject for i in self.issues):
            return
        self.issues.append(Issue(kind, subject, detail))

    def count(self, action: SyncAction) -> int:
        return sum(1 for item in self.items if item.action == action)

    @property
    def has_changes(self) -> bool:
        return any(item.needs_write for item in self.items)

    @property
    def unresolved_titles(self) -> list[str]:
        """Titles that block a strict run, in the order they were found."""
        return [issue.subject for issue in self.issues if issue.aborts_strict]

    def check_policy(self, config: SyncConfig) -> None:
        """Raise UnresolvedTitleMatch if the strict policy forbids this plan.

        Raises:
            UnresolvedTitleMatch: In strict mode, when any title is unresolved
        """
        if config.strict and self.unresolved_titles:
            raise UnresolvedTitleMatch(self.unresolved_titles)


def _plan_member(
    series: str,
    draft: DraftArticle,
    group: list[DraftArticle],
    index: TitleIndex,
    config: SyncConfig,
    plan: LinkPlan,
) -> ArticleSyncItem:
    item = ArticleSyncItem(series=series, draft=draft)

    if not draft.title:
        item.action = SyncAction.SKIP
        item.reason = "draft has no title"
        plan.add_issue(IssueKind.UNRESOLVED, draft.filename, item.reason)
        return item

    published = index.get(draft.title)
    if published is None:
        item.action = SyncAction.SKIP
        if index.is_duplicate(draft.title):
            files = ", ".join(index.duplicates[draft.title])
            item.reason = f"title matches several published articles ({files})"
            plan.add_issue(IssueKind.DUPLICATE, draft.title, item.reason)
        else:
            item.reason = "no published article with this title"
            plan.add_issue(IssueKind.UNRESOLVED, draft.title, item.reason)
        return item

    item.published = published
    rendered = render_block(series, draft, group, index, config)
    item.unresolved = rendered.unresolved
    for title in rendered.unresolved:
        if index.is_duplicate(title):
            plan.add_issue(IssueKind.DUPLICATE, title, "title matches several published articles")
        else:
            plan.add_issue(IssueKind.UNRESOLVED, title, "sibling has no published id")

    body = published.document.body
    try:
        decision = decide(body, rendered.text, series, config)
    except UnterminatedBlock as e:
        item.action = SyncAction.SKIP
        item.reason = str(e)
        plan.add_issue(IssueKind.BLOCK, published.filename, item.reason)
        return item

    new_body = apply_decision(body, decision)
    if config.resolve_inline:
        new_body, item.inline_resolved = resolve_inline_refs(new_body, index, config)

    if decision.kind is DecisionKind.INSERT:
        item.action = SyncAction.INSERT
        item.reason = f"{len(rendered.links)} links"
    elif decision.kind is DecisionKind.REPLACE:
        item.action = SyncAction.UPDATE
        item.reason = f"{len(rendered.links)} links"
    elif new_body != body:
        item.action = SyncAction.UPDATE
        item.reason = f"{len(item.inline_resolved)} inline references resolved"
    else:
        item.action = SyncAction.UNCHANGED
        item.reason = "links up to date"

    if item.needs_write:
        item.new_body = new_body
    logger.debug("%s [%s]: %s (%s)", published.filename, series, item.action.value, item.reason)
    return item


def plan_links(
    drafts: list[DraftArticle],
    published: list[PublishedArticle],
    config: SyncConfig,
    published_dir: Path | None = None,
) -> LinkPlan:
    """Plan link block updates for every series member.

    Args:
        drafts: Draft articles declaring series membership
        published: Published articles to update
        config: Sync settings
        published_dir: Directory the published articles are written back to

    Returns:
        LinkPlan with one item per series member
    """
    plan = LinkPlan(published_dir=published_dir)

    for draft in drafts:
        if draft.ignored_series:
            plan.add_issue(
                IssueKind.SERIES,
                draft.filename,
                f"several series declared ({', '.join(draft.ignored_series)}), only one is supported",
            )

    duplicate_drafts = find_duplicate_drafts(d for d in drafts if d.series)
    for title, files in duplicate_drafts.items():
        plan.add_issue(IssueKind.DUPLICATE, title, f"declared by several drafts ({', '.join(files)})")
    members = [d for d in drafts if d.title not in duplicate_drafts]

    index = index_by_title(published)
    plan.series = group_by_series(members)

    for series, group in plan.series.items():
        for draft in group:
            plan.items.append(_plan_member(series, draft, group, index, config, plan))

    return plan


def plan_from_directories(draft_dir: Path, published_dir: Path, config: SyncConfig) -> LinkPlan:
    """Load both document sets and plan the sync.

    Raises:
        DirectoryNotFound: If either directory is missing (checked before reading)
    """
    draft_dir = require_directory(draft_dir)
    published_dir = require_directory(published_dir)

    draft_docs, draft_failures = load_documents(draft_dir)
    published_docs, published_failures = load_documents(published_dir)

    drafts = [DraftArticle.from_document(doc) for doc in draft_docs]
    published = [PublishedArticle.from_document(doc) for doc in published_docs]

    plan = plan_links(drafts, published, config, published_dir=published_dir)
    for failure in [*draft_failures, *published_failures]:
        plan.add_issue(IssueKind.PARSE, failure.path.name, failure.reason)
    return plan


def execute_plan(plan: LinkPlan, config: SyncConfig, dry_run: bool = False) -> tuple[int, int]:
    """Write every changed article of a plan.

    Each body is fully computed before its file is touched. A failure
    writing one article does not undo earlier writes.

    Args:
        plan: The plan to execute
        config: Sync settings (policy check)
        dry_run: Report only, don't write

    Returns:
        Tuple of (written_count, failure_count)

    Raises:
        UnresolvedTitleMatch: In strict mode, before anything is written
    """
    plan.check_policy(config)

    written = 0
    failures = 0

    for item in plan.items:
        label = ACTION_LABELS[item.action]
        style = ACTION_STYLES[item.action]

        if not item.needs_write:
            console.print(f"  [{style}]{label}:[/{style}] {item.filename} - {item.reason}")
            continue

        if dry_run:
            console.print(f"  [{style}]Would {item.action.value}:[/{style}] {item.filename}")
            written += 1
            continue

        assert plan.published_dir is not None
        try:
            write_document(plan.published_dir / item.filename, item.updated_document())
        except OSError as e:
            console.print(f"  [red]error:[/red] {item.filename} - {e}")
            failures += 1
            continue

        console.print(f"  [{style}]{label}:[/{style}] {item.filename} - {item.reason}")
        written += 1

    console.print(
        f"[bold]Done:[/bold] {plan.count(SyncAction.INSERT)} inserted, "
        f"{plan.count(SyncAction.UPDATE)} updated, "
        f"{plan.count(SyncAction.UNCHANGED)} unchanged, "
        f"{plan.count(SyncAction.SKIP)} skipped"
        + (f", {failures} failed" if failures else "")
    )
    return written, failures


def print_link_plan(plan: LinkPlan, verbose: bool = False) -> None:
    """Print a plan summary.

    Args:
        plan: The plan to display
        verbose: Show unchanged articles too
    """
    panel_content = (
        f"[cyan]Series:[/cyan] {len(plan.series)}\n"
        f"[cyan]Articles:[/cyan] {len(plan.items)} total\n"
        f"  [green]Insert:[/green] {plan.count(SyncAction.INSERT)}\n"
        f"  [yellow]Update:[/yellow] {plan.count(SyncAction.UPDATE)}\n"
        f"  [red]Skip:[/red] {plan.count(SyncAction.SKIP)}\n"
        f"  [dim]Unchanged:[/dim] {plan.count(SyncAction.UNCHANGED)}"
    )
    console.print(Panel(panel_content, title="Link Plan"))

    table = Table(title="Articles")
    table.add_column("Series", style="cyan")
    table.add_column("Article")
    table.add_column("Action", style="bold")
    table.add_column("Reason")

    for item in plan.items:
        if item.action == SyncAction.UNCHANGED and not verbose:
            continue
        style = ACTION_STYLES[item.action]
        table.add_row(
            item.series,
            item.filename,
            f"[{style}]{item.action.value}[/{style}]",
            item.reason,
        )

    if table.row_count > 0:
        console.print(table)

    print_issues(plan)


def print_issues(plan: LinkPlan) -> None:
    """Print every problem found while planning."""
    for issue in plan.issues:
        console.print(f"[yellow]{issue.kind.value}:[/yellow] {issue.subject} - {issue.detail}")
