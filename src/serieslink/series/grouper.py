"""
Series membership and title lookup.

Drafts declare which series they belong to; published documents carry the
stable ``id`` used in links. The two sets are joined on normalized title.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from serieslink.content.frontmatter import Document

WHITESPACE_RE = re.compile(r"\s+")


def normalize_title(title: Any) -> str:
    """Trim a title and collapse internal runs of whitespace.

    Examples:
        "  Intro   to  Rust " -> "Intro to Rust"
        None                  -> ""
    """
    if title is None:
        return ""
    return WHITESPACE_RE.sub(" ", str(title)).strip()


@dataclass(frozen=True)
class DraftArticle:
    """A pre-publication document, used for grouping and ordering only."""

    filename: str
    title: str
    series: str | None = None
    ignored_series: tuple[str, ...] = ()

    @classmethod
    def from_document(cls, doc: Document) -> DraftArticle:
        series = doc.metadata.get("series")
        ignored: tuple[str, ...] = ()
        if isinstance(series, list):
            # Hugo-style `series: [name]`; only a single series is supported
            if len(series) > 1:
                ignored = tuple(normalize_title(s) for s in series)
            series = series[0] if len(series) == 1 else None
        series_name = normalize_title(series) if series is not None else ""
        return cls(
            filename=doc.filename,
            title=normalize_title(doc.metadata.get("title")),
            series=series_name or None,
            ignored_series=ignored,
        )


@dataclass
class PublishedArticle:
    """A published document whose body carries the link block."""

    filename: str
    title: str
    id: str | None
    document: Document

    @classmethod
    def from_document(cls, doc: Document) -> PublishedArticle:
        raw_id = doc.metadata.get("id")
        return cls(
            filename=doc.filename,
            title=normalize_title(doc.metadata.get("title")),
            id=str(raw_id) if raw_id not in (None, "") else None,
            document=doc,
        )

    @property
    def is_linkable(self) -> bool:
        return self.id is not None


@dataclass
class TitleIndex:
    """Unique-title lookup over published articles."""

    by_title: dict[str, PublishedArticle] = field(default_factory=dict)
    duplicates: dict[str, list[str]] = field(default_factory=dict)

    def get(self, title: str) -> PublishedArticle | None:
        """Return the single article with this title, or None if absent or duplicated."""
        return self.by_title.get(normalize_title(title))

    def is_duplicate(self, title: str) -> bool:
        return normalize_title(title) in self.duplicates

    def linkable(self, title: str) -> PublishedArticle | None:
        """Return the matching article only when it has an id to link to."""
        article = self.get(title)
        if article is None or not article.is_linkable:
            return None
        return article


def index_by_title(articles: Iterable[PublishedArticle]) -> TitleIndex:
    """Index published articles by normalized title.

    Titles shared by more than one article are recorded as duplicates and
    left out of the lookup.
    """
    seen: dict[str, list[PublishedArticle]] = {}
    for article in articles:
        if not article.title:
            continue
        seen.setdefault(article.title, []).append(article)

    index = TitleIndex()
    for title, matches in seen.items():
        if len(matches) == 1:
            index.by_title[title] = matches[0]
        else:
            index.duplicates[title] = sorted(a.filename for a in matches)
    return index


def find_duplicate_drafts(drafts: Iterable[DraftArticle]) -> dict[str, list[str]]:
    """Return titles declared by more than one draft, mapped to their filenames."""
    seen: dict[str, list[str]] = {}
    for draft in drafts:
        if draft.title:
            seen.setdefault(draft.title, []).append(draft.filename)
    return {title: sorted(files) for title, files in seen.items() if len(files) > 1}


def group_by_series(drafts: Iterable[DraftArticle]) -> dict[str, list[DraftArticle]]:
    """Partition drafts by series name.

    Drafts without a series are excluded. Members of each group are sorted
    by filename and groups are ordered by series name, so numbering and
    output never depend on directory enumeration order.
    """
    groups: dict[str, list[DraftArticle]] = {}
    for draft in drafts:
        if not draft.series:
            continue
        groups.setdefault(draft.series, []).append(draft)

    return {
        name: sorted(groups[name], key=lambda d: d.filename)
        for name in sorted(groups)
    }
