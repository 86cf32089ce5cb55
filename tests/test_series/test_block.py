"""Tests for locating, diffing and splicing link blocks."""

import pytest

from serieslink.core.config import MarkerStyle, SyncConfig
from serieslink.core.errors import UnterminatedBlock
from serieslink.series.locator import BlockRange, DecisionKind, decide, locate_block
from serieslink.series.splice import apply_decision, collapse_blank_lines

SENTINEL = SyncConfig(heading="{series} series:")
HEADING = SyncConfig(marker_style=MarkerStyle.HEADING, heading="{series} series:")

BLOCK = "<!-- START_SERIES -->\n\nS series:\n\n[B](u/2)\n\n<!-- END_SERIES -->"
NEW_BLOCK = "<!-- START_SERIES -->\n\nS series:\n\n[B](u/2)\n[C](u/3)\n\n<!-- END_SERIES -->"


class TestLocateSentinel:
    """Tests for the sentinel marker convention."""

    def test_not_found(self):
        assert locate_block("Just text.\n", "S", SENTINEL) is None

    def test_full_range(self):
        body = f"Intro\n{BLOCK}\n\nRest\n"
        found = locate_block(body, "S", SENTINEL)
        assert found == BlockRange(1, 8)
        assert found.extract(body.split("\n")) == BLOCK

    def test_unterminated(self):
        with pytest.raises(UnterminatedBlock) as exc_info:
            locate_block("<!-- START_SERIES -->\n[B](u/2)\n", "S", SENTINEL)
        assert exc_info.value.line == 0

    def test_markers_with_trailing_spaces(self):
        body = "<!-- START_SERIES -->  \nx\n<!-- END_SERIES -->"
        assert locate_block(body, "S", SENTINEL) == BlockRange(0, 3)


class TestLocateHeading:
    """Tests for the heading marker convention."""

    def test_extends_to_blank_line(self):
        body = "S series:\n[A](u/1)\n[B](u/2)\n\nText\n"
        assert locate_block(body, "S", HEADING) == BlockRange(0, 3)

    def test_extends_to_end_of_body(self):
        body = "Text\n\nS series:\n[A](u/1)"
        assert locate_block(body, "S", HEADING) == BlockRange(2, 4)

    def test_other_series_heading_not_matched(self):
        assert locate_block("T series:\n[A](u/1)\n", "S", HEADING) is None


class TestDecide:
    """Tests for the insert/replace/noop decision."""

    def test_insert_when_absent(self):
        decision = decide("Text\n", BLOCK, "S", SENTINEL)
        assert decision.kind is DecisionKind.INSERT
        assert decision.range is None

    def test_noop_when_equal(self):
        decision = decide(f"{BLOCK}\n\nText\n", BLOCK, "S", SENTINEL)
        assert decision.kind is DecisionKind.NOOP

    def test_replace_when_different(self):
        decision = decide(f"{BLOCK}\n\nText\n", NEW_BLOCK, "S", SENTINEL)
        assert decision.kind is DecisionKind.REPLACE
        assert decision.range == BlockRange(0, 7)


class TestApplyDecision:
    """Tests for splicing a block into a body."""

    def test_insert_at_top(self):
        body = "\nText\n"
        result = apply_decision(body, decide(body, BLOCK, "S", SENTINEL))
        assert result == f"{BLOCK}\n\nText\n"

    def test_insert_into_empty_body(self):
        result = apply_decision("", decide("", BLOCK, "S", SENTINEL))
        assert result == f"{BLOCK}\n\n"

    def test_replace_keeps_surrounding_content(self):
        body = f"Intro line\n\n{BLOCK}\n\nRest of the article.\n\n## Heading\n"
        result = apply_decision(body, decide(body, NEW_BLOCK, "S", SENTINEL))
        assert result == f"Intro line\n\n{NEW_BLOCK}\n\nRest of the article.\n\n## Heading\n"

    def test_replace_shorter_block_leaves_no_orphans(self):
        body = f"{NEW_BLOCK}\n\nText\n"
        result = apply_decision(body, decide(body, BLOCK, "S", SENTINEL))
        assert result == f"{BLOCK}\n\nText\n"
        assert "[C]" not in result

    def test_noop_returns_body_unchanged(self):
        body = f"{BLOCK}\n\n\n\nText\n"
        result = apply_decision(body, decide(body, BLOCK, "S", SENTINEL))
        assert result == body

    def test_second_pass_is_noop(self):
        body = "Text\n\n\n\nMore\n"
        once = apply_decision(body, decide(body, BLOCK, "S", SENTINEL))
        assert decide(once, BLOCK, "S", SENTINEL).kind is DecisionKind.NOOP

    def test_heading_replace(self):
        body = "S series:\n[A](u/1)\n\nText\n"
        new_block = "S series:\n[A](u/1)\n[B](u/2)"
        result = apply_decision(body, decide(body, new_block, "S", HEADING))
        assert result == "S series:\n[A](u/1)\n[B](u/2)\n\nText\n"


@pytest.mark.parametrize(
    "text, expected",
    [
        ("a\n\n\nb", "a\n\nb"),
        ("a\n\n\n\n\nb", "a\n\nb"),
        ("a\n\nb", "a\n\nb"),
        ("a\nb", "a\nb"),
    ],
)
def test_collapse_blank_lines(text, expected):
    assert collapse_blank_lines(text) == expected
