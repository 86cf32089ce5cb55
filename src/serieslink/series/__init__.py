"""Series link synchronization for serieslink.

Groups drafts by series, renders sibling link blocks and keeps them
current inside published articles.
"""

from serieslink.series.commands import links
from serieslink.series.grouper import (
    DraftArticle,
    PublishedArticle,
    TitleIndex,
    group_by_series,
    index_by_title,
    normalize_title,
)
from serieslink.series.inline import resolve_inline_refs
from serieslink.series.locator import BlockRange, DecisionKind, SpliceDecision, decide, locate_block
from serieslink.series.renderer import RenderedBlock, render_block
from serieslink.series.splice import apply_decision, collapse_blank_lines
from serieslink.series.syncer import (
    ArticleSyncItem,
    Issue,
    IssueKind,
    LinkPlan,
    SyncAction,
    execute_plan,
    plan_from_directories,
    plan_links,
    print_issues,
    print_link_plan,
)

__all__ = [
    "links",
    "DraftArticle",
    "PublishedArticle",
    "TitleIndex",
    "normalize_title",
    "group_by_series",
    "index_by_title",
    "RenderedBlock",
    "render_block",
    "BlockRange",
    "DecisionKind",
    "SpliceDecision",
    "locate_block",
    "decide",
    "apply_decision",
    "collapse_blank_lines",
    "resolve_inline_refs",
    "SyncAction",
    "Issue",
    "IssueKind",
    "ArticleSyncItem",
    "LinkPlan",
    "plan_links",
    "plan_from_directories",
    "execute_plan",
    "print_issues",
    "print_link_plan",
]
