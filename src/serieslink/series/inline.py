"""
Inline cross-reference resolution.

``<<<Some Title>>>`` in a body becomes a link to the published article with
that title. Markers naming unknown or not-yet-published articles are left
as they are.
"""

from __future__ import annotations

import re

from serieslink.core.config import SyncConfig
from serieslink.series.grouper import TitleIndex, normalize_title

INLINE_REF_RE = re.compile(r"<<<([^>]+)>>>")


def resolve_inline_refs(body: str, index: TitleIndex, config: SyncConfig) -> tuple[str, list[str]]:
    """Replace inline reference markers with links.

    Args:
        body: Document body
        index: Published articles by title
        config: Sync settings (url template)

    Returns:
        Tuple of (new body, titles that were resolved)
    """
    resolved: list[str] = []

    def _substitute(match: re.Match[str]) -> str:
        title = normalize_title(match.group(1))
        target = index.linkable(title)
        if target is None:
            return match.group(0)
        resolved.append(title)
        return f"[{title}]({config.url_for(target.id)})"

    return INLINE_REF_RE.sub(_substitute, body), resolved
