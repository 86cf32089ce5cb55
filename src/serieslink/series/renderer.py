"""
Link block rendering.

The rendered block depends only on the series name, the ordered sibling
titles and their resolved ids, so rendering the same inputs twice yields
identical text.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from serieslink.core.config import MarkerStyle, SyncConfig
from serieslink.series.grouper import DraftArticle, TitleIndex


@dataclass(frozen=True)
class SiblingLink:
    """One rendered sibling entry."""

    rank: int
    title: str
    url: str


@dataclass
class RenderedBlock:
    """A freshly rendered link block for one series member."""

    series: str
    text: str
    links: list[SiblingLink] = field(default_factory=list)
    unresolved: list[str] = field(default_factory=list)


def format_link(link: SiblingLink, series: str, numbered: bool) -> str:
    label = f"{series} #{link.rank} {link.title}" if numbered else link.title
    return f"[{label}]({link.url})"


def resolve_siblings(
    member: DraftArticle,
    group: list[DraftArticle],
    index: TitleIndex,
    config: SyncConfig,
) -> tuple[list[SiblingLink], list[str]]:
    """Resolve every other member of the group to a link.

    Args:
        member: The article the block is rendered for
        group: All members of the series, in filename order
        index: Published articles by title
        config: Sync settings (url template)

    Returns:
        Tuple of (links in group order, titles that could not be resolved)
    """
    links: list[SiblingLink] = []
    unresolved: list[str] = []

    for rank, sibling in enumerate(group, start=1):
        if sibling.filename == member.filename:
            continue
        target = index.linkable(sibling.title)
        if target is None:
            unresolved.append(sibling.title)
            continue
        links.append(SiblingLink(rank=rank, title=sibling.title, url=config.url_for(target.id)))

    return links, unresolved


def frame_block(series: str, link_lines: list[str], config: SyncConfig) -> str:
    """Wrap rendered link lines in the configured marker convention."""
    heading = config.heading_for(series)

    if config.marker_style is MarkerStyle.HEADING:
        # No blank lines inside: the block ends at the first blank line
        return "\n".join([heading, *link_lines])

    # Empty sections are dropped so the block never holds a blank-line run
    # that splicing would collapse
    sections = [config.start_marker, heading, "\n".join(link_lines), config.end_marker]
    return "\n\n".join(s for s in sections if s)


def render_block(
    series: str,
    member: DraftArticle,
    group: list[DraftArticle],
    index: TitleIndex,
    config: SyncConfig,
) -> RenderedBlock:
    """Render the link block for one member of a series."""
    links, unresolved = resolve_siblings(member, group, index, config)
    lines = [format_link(link, series, config.numbered) for link in links]
    return RenderedBlock(
        series=series,
        text=frame_block(series, lines, config),
        links=links,
        unresolved=unresolved,
    )
