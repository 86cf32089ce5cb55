"""
Draft to published merge.

Brings the published directory up to date with the drafts: a draft whose
``local_updated_at`` is newer than its published counterpart replaces that
article's body (the published header, with its ``id``, is kept as is); a
draft without a counterpart is published as a new file with default
front matter filled in.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from pathlib import Path
from typing import Any

import frontmatter
from rich.console import Console

from serieslink.content.frontmatter import Document, atomic_write_text
from serieslink.content.repository import load_documents, require_directory
from serieslink.core.config import PublishDefaults
from serieslink.core.errors import ParseFailure
from serieslink.series.grouper import PublishedArticle, index_by_title, normalize_title

console = Console()
logger = logging.getLogger(__name__)

SOURCE_TIMESTAMP_FIELD = "local_updated_at"


class PublishAction(Enum):
    """Possible outcomes for a draft."""

    CREATE = "create"
    UPDATE = "update"
    UNCHANGED = "unchanged"
    SKIP = "skip"


@dataclass
class PublishItem:
    """Planned outcome for one draft."""

    source: str
    target: str | None = None
    action: PublishAction = PublishAction.UNCHANGED
    reason: str = ""
    content: str | None = None


def format_with_timezone(moment: datetime) -> str:
    """Format a datetime as ``YYYY-MM-DDTHH:MM:SS+HH:MM`` in local time."""
    return moment.astimezone().isoformat(timespec="seconds")


def parse_timestamp(value: Any) -> datetime | None:
    """Interpret a front matter timestamp.

    YAML may hand back a datetime, a date, or a string depending on quoting.
    Naive values are taken as local time.

    Returns:
        Timezone-aware datetime, or None if the value is missing or unparseable
    """
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, date):
        moment = datetime(value.year, value.month, value.day)
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            moment = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if moment.tzinfo is None:
        moment = moment.astimezone()
    return moment


def render_new_document(body: str, metadata: dict[str, Any]) -> str:
    """Serialize a brand-new published document."""
    post = frontmatter.Post(body.strip(), **metadata)
    return frontmatter.dumps(post, sort_keys=False) + "\n"


def build_metadata(draft: Document, defaults: PublishDefaults, now: str) -> dict[str, Any]:
    """Overlay a draft's front matter on the publish defaults."""
    metadata = {**defaults.as_metadata(now), **draft.metadata}
    if not metadata.get("tags"):
        metadata["tags"] = list(defaults.tags)
    return metadata


def _plan_existing(
    draft: Document,
    target: PublishedArticle,
    defaults: PublishDefaults,
) -> PublishItem:
    item = PublishItem(source=draft.filename, target=target.filename)

    source_time = parse_timestamp(draft.metadata.get(SOURCE_TIMESTAMP_FIELD))
    target_time = parse_timestamp(target.document.metadata.get(defaults.timestamp_field))

    if source_time is None or target_time is None or source_time <= target_time:
        item.action = PublishAction.UNCHANGED
        item.reason = "no updates detected"
        return item

    updated = target.document.with_body(draft.body)
    if updated.body == target.document.body:
        item.action = PublishAction.UNCHANGED
        item.reason = "content identical"
        return item

    item.action = PublishAction.UPDATE
    item.reason = "newer version detected"
    item.content = updated.render()
    return item


def plan_publish(
    draft_dir: Path,
    published_dir: Path,
    defaults: PublishDefaults,
    now: datetime | None = None,
) -> list[PublishItem]:
    """Plan publishing drafts into the published directory.

    Args:
        draft_dir: Directory of drafts
        published_dir: Directory of published articles (may not exist yet)
        defaults: Front matter defaults for new articles
        now: Current time, for the default ``local_updated_at``

    Returns:
        One PublishItem per draft, in filename order

    Raises:
        DirectoryNotFound: If the draft directory is missing
    """
    drafts, _failures = load_documents(require_directory(draft_dir))

    published_docs: list[Document] = []
    unparsed: list[ParseFailure] = []
    if Path(published_dir).is_dir():
        published_docs, unparsed = load_documents(published_dir)
    # Unparseable published files still own their names
    taken_names = {doc.filename for doc in published_docs}
    taken_names.update(failure.path.name for failure in unparsed)
    index = index_by_title(PublishedArticle.from_document(doc) for doc in published_docs)

    stamp = format_with_timezone(now or datetime.now())
    items: list[PublishItem] = []

    for draft in drafts:
        title = normalize_title(draft.metadata.get("title"))
        if not title or draft.metadata.get(SOURCE_TIMESTAMP_FIELD) in (None, ""):
            items.append(PublishItem(
                source=draft.filename,
                action=PublishAction.SKIP,
                reason="missing required fields (title or local_updated_at)",
            ))
            continue

        if index.is_duplicate(title):
            items.append(PublishItem(
                source=draft.filename,
                action=PublishAction.SKIP,
                reason=f"title matches several published articles ({', '.join(index.duplicates[title])})",
            ))
            continue

        target = index.get(title)
        if target is not None:
            items.append(_plan_existing(draft, target, defaults))
            continue

        if draft.filename in taken_names:
            items.append(PublishItem(
                source=draft.filename,
                target=draft.filename,
                action=PublishAction.SKIP,
                reason="file name already used by another published article",
            ))
            continue

        metadata = build_metadata(draft, defaults, stamp)
        items.append(PublishItem(
            source=draft.filename,
            target=draft.filename,
            action=PublishAction.CREATE,
            reason="new article",
            content=render_new_document(draft.body, metadata),
        ))

    return items


def execute_publish(
    items: list[PublishItem],
    published_dir: Path,
    dry_run: bool = False,
) -> tuple[int, int]:
    """Write planned creates and updates.

    Returns:
        Tuple of (success_count, failure_count)
    """
    published_dir = Path(published_dir)
    if not dry_run:
        published_dir.mkdir(parents=True, exist_ok=True)

    success = 0
    failures = 0

    for item in items:
        if item.action == PublishAction.SKIP:
            console.print(f"  [red]skipped:[/red] {item.source} - {item.reason}")
            continue
        if item.action == PublishAction.UNCHANGED:
            console.print(f"  [dim]unchanged:[/dim] {item.target} - {item.reason}")
            continue

        assert item.target is not None and item.content is not None
        if not dry_run:
            try:
                atomic_write_text(published_dir / item.target, item.content)
            except OSError as e:
                console.print(f"  [red]error:[/red] {item.target} - {e}")
                failures += 1
                continue
        logger.debug("%s -> %s (%s)", item.source, item.target, item.action.value)
        console.print(f"  [green]{item.action.value}:[/green] {item.target} - {item.reason}")
        success += 1

    return success, failures
