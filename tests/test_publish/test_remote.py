"""Tests for copying remote files over published ones."""

from pathlib import Path

import pytest

from serieslink.core.errors import DirectoryNotFound
from serieslink.publish.remote import execute_remote_pull, match_published_file, plan_remote_pull


@pytest.fixture
def remote_dir(published_dir):
    path = published_dir / ".remote"
    path.mkdir()
    return path


def test_match_prefers_longest_stem():
    files = [Path("intro.md"), Path("intro-part-2.md"), Path("other.md")]
    assert match_published_file("intro-part-2.md", files).name == "intro-part-2.md"
    assert match_published_file("intro.md", files).name == "intro.md"
    assert match_published_file("unknown.md", files) is None


def test_copies_matching_files(published_dir, remote_dir):
    (published_dir / "rust.md").write_text("old", encoding="utf-8")
    (remote_dir / "rust.md").write_text("new", encoding="utf-8")
    (remote_dir / "orphan.md").write_text("x", encoding="utf-8")
    (remote_dir / "subdir").mkdir()

    items = plan_remote_pull(remote_dir, published_dir)
    copied, skipped = execute_remote_pull(items)

    assert (copied, skipped) == (1, 1)
    assert (published_dir / "rust.md").read_text(encoding="utf-8") == "new"
    assert not (published_dir / "orphan.md").exists()


def test_identical_file_not_counted(published_dir, remote_dir):
    (published_dir / "rust.md").write_text("same", encoding="utf-8")
    (remote_dir / "rust.md").write_text("same", encoding="utf-8")

    items = plan_remote_pull(remote_dir, published_dir)

    assert items[0].identical is True
    assert execute_remote_pull(items) == (0, 0)


def test_dry_run(published_dir, remote_dir):
    (published_dir / "rust.md").write_text("old", encoding="utf-8")
    (remote_dir / "rust.md").write_text("new", encoding="utf-8")

    copied, _skipped = execute_remote_pull(plan_remote_pull(remote_dir, published_dir), dry_run=True)

    assert copied == 1
    assert (published_dir / "rust.md").read_text(encoding="utf-8") == "old"


def test_missing_remote_dir(published_dir):
    with pytest.raises(DirectoryNotFound):
        plan_remote_pull(published_dir / ".remote", published_dir)
