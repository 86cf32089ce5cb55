"""Applying a splice decision to a document body."""

from __future__ import annotations

import re

from serieslink.series.locator import DecisionKind, SpliceDecision

BLANK_RUN_RE = re.compile(r"\n{3,}")


def collapse_blank_lines(text: str) -> str:
    """Collapse runs of three or more newlines into a single blank line."""
    return BLANK_RUN_RE.sub("\n\n", text)


def apply_decision(body: str, decision: SpliceDecision) -> str:
    """Produce the updated body for a decision.

    Insert puts the block at the top followed by a blank line; Replace
    substitutes exactly the located line range; NoOp returns the body as is.
    """
    if decision.kind is DecisionKind.NOOP:
        return body

    if decision.kind is DecisionKind.INSERT:
        return collapse_blank_lines(f"{decision.block}\n\n{body}")

    assert decision.range is not None
    lines = body.split("\n")
    lines[decision.range.start:decision.range.end] = decision.block.split("\n")
    return collapse_blank_lines("\n".join(lines))
