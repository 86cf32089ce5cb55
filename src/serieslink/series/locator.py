"""
Locating a previously inserted link block and deciding what to do with it.

Two marker conventions are supported. The sentinel pair is the default;
the heading convention (heading line through the next blank line) is kept
for bodies written by older tooling.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from serieslink.core.config import MarkerStyle, SyncConfig
from serieslink.core.errors import UnterminatedBlock


@dataclass(frozen=True)
class BlockRange:
    """Line range of a block within a body (end is exclusive)."""

    start: int
    end: int

    def extract(self, lines: list[str]) -> str:
        return "\n".join(lines[self.start:self.end])


class DecisionKind(Enum):
    """What the splice step should do."""

    INSERT = "insert"
    REPLACE = "replace"
    NOOP = "noop"


@dataclass(frozen=True)
class SpliceDecision:
    """Outcome of comparing a body against a freshly rendered block."""

    kind: DecisionKind
    block: str
    range: BlockRange | None = None


def _locate_sentinel(lines: list[str], config: SyncConfig) -> BlockRange | None:
    start = next(
        (i for i, line in enumerate(lines) if line.strip() == config.start_marker),
        None,
    )
    if start is None:
        return None

    for i in range(start + 1, len(lines)):
        if lines[i].strip() == config.end_marker:
            return BlockRange(start, i + 1)

    raise UnterminatedBlock(start)


def _locate_heading(lines: list[str], heading: str) -> BlockRange | None:
    start = next((i for i, line in enumerate(lines) if line.strip() == heading), None)
    if start is None:
        return None

    end = start + 1
    while end < len(lines) and lines[end].strip():
        end += 1
    return BlockRange(start, end)


def locate_block(body: str, series: str, config: SyncConfig) -> BlockRange | None:
    """Find the full line range of an existing link block.

    Args:
        body: Document body
        series: Series name (used by the heading convention)
        config: Sync settings selecting the marker convention

    Returns:
        BlockRange, or None if the body has no block

    Raises:
        UnterminatedBlock: If a start sentinel has no matching end sentinel
    """
    lines = body.split("\n")
    if config.marker_style is MarkerStyle.HEADING:
        return _locate_heading(lines, config.heading_for(series))
    return _locate_sentinel(lines, config)


def decide(body: str, block: str, series: str, config: SyncConfig) -> SpliceDecision:
    """Compare the body's existing block with a freshly rendered one."""
    found = locate_block(body, series, config)
    if found is None:
        return SpliceDecision(DecisionKind.INSERT, block)

    existing = found.extract(body.split("\n"))
    if existing == block:
        return SpliceDecision(DecisionKind.NOOP, block, found)
    return SpliceDecision(DecisionKind.REPLACE, block, found)
