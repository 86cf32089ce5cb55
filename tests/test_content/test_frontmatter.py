"""Tests for front matter parsing and writing."""

import pytest

from serieslink.content.frontmatter import (
    Document,
    atomic_write_text,
    parse_document,
    read_document,
    write_document,
)
from serieslink.core.errors import ParseFailure


def test_parse_basic(tmp_path):
    """Test splitting header and body."""
    doc = parse_document("---\ntitle: Hello\nid: abc\n---\n\nBody.\n", tmp_path / "a.md")
    assert doc.filename == "a.md"
    assert doc.metadata == {"title": "Hello", "id": "abc"}
    assert doc.title == "Hello"
    assert doc.body == "\nBody.\n"


def test_render_is_byte_identical(tmp_path):
    """Test that an untouched document renders to its original text."""
    text = "---\ntitle: 'Quoted'\ndate: 2024-01-01T10:00:00+09:00\ntags:   [a, b]\n---\n\nBody.\n"
    doc = parse_document(text, tmp_path / "a.md")
    assert doc.render() == text


def test_render_keeps_blank_line_in_header(tmp_path):
    text = "---\ntitle: A\n\n---\nBody"
    assert parse_document(text, tmp_path / "a.md").render() == text


def test_empty_header(tmp_path):
    doc = parse_document("---\n---\nBody", tmp_path / "a.md")
    assert doc.metadata == {}
    assert doc.body == "Body"


def test_horizontal_rule_in_body(tmp_path):
    """Test that only the first closing delimiter ends the header."""
    doc = parse_document("---\ntitle: A\n---\nOne\n---\nTwo\n", tmp_path / "a.md")
    assert doc.metadata == {"title": "A"}
    assert doc.body == "One\n---\nTwo\n"


def test_crlf_normalized(tmp_path):
    doc = parse_document("---\r\ntitle: A\r\n---\r\nBody\r\n", tmp_path / "a.md")
    assert doc.title == "A"
    assert doc.body == "Body\n"
    assert doc.newline == "\r\n"


def test_crlf_restored_on_render(tmp_path):
    text = "---\r\ntitle: A\r\n---\r\nBody\r\n"
    doc = parse_document(text, tmp_path / "a.md")
    assert doc.render() == text
    assert doc.with_body("New\n\nText\n").render() == "---\r\ntitle: A\r\n---\r\nNew\r\n\r\nText\r\n"


def test_crlf_file_round_trip(tmp_path):
    """Test that reading and rewriting a CRLF file keeps its line endings."""
    path = tmp_path / "a.md"
    path.write_bytes(b"---\r\ntitle: A\r\n---\r\nOld\r\n")

    doc = read_document(path)
    write_document(path, doc.with_body("New\n"))

    assert path.read_bytes() == b"---\r\ntitle: A\r\n---\r\nNew\r\n"


def test_mixed_line_endings_become_lf(tmp_path):
    doc = parse_document("---\r\ntitle: A\n---\nBody\r\n", tmp_path / "a.md")
    assert doc.newline == "\n"
    assert doc.render() == "---\ntitle: A\n---\nBody\n"


def test_with_body_keeps_header(tmp_path):
    doc = parse_document("---\ntitle: A\n---\nOld\n", tmp_path / "a.md")
    updated = doc.with_body("New\n")
    assert updated.render() == "---\ntitle: A\n---\nNew\n"
    assert doc.body == "Old\n"


@pytest.mark.parametrize(
    "text, reason",
    [
        ("No front matter here.", "no front matter"),
        ("---\ntitle: A\nnever closed\n", "invalid front matter format"),
        ("---\ntitle: [unclosed\n---\nBody\n", "YAML error"),
        ("---\n- a\n- b\n---\nBody\n", "not a mapping"),
    ],
)
def test_parse_failures(tmp_path, text, reason):
    with pytest.raises(ParseFailure) as exc_info:
        parse_document(text, tmp_path / "bad.md")
    assert reason in exc_info.value.reason
    assert exc_info.value.path.name == "bad.md"


def test_read_document(tmp_path):
    path = tmp_path / "a.md"
    path.write_text("---\ntitle: Ünïcode\n---\nText\n", encoding="utf-8")
    assert read_document(path).title == "Ünïcode"


def test_read_missing_file(tmp_path):
    with pytest.raises(ParseFailure, match="unreadable"):
        read_document(tmp_path / "missing.md")


def test_write_document(tmp_path):
    path = tmp_path / "a.md"
    path.write_text("---\ntitle: A\n---\nOld\n", encoding="utf-8")
    doc = read_document(path)
    write_document(path, doc.with_body("New\n"))
    assert path.read_text(encoding="utf-8") == "---\ntitle: A\n---\nNew\n"


def test_atomic_write_leaves_no_temp_files(tmp_path):
    path = tmp_path / "out.md"
    atomic_write_text(path, "content")
    assert path.read_text(encoding="utf-8") == "content"
    assert [p.name for p in tmp_path.iterdir()] == ["out.md"]


def test_atomic_write_failure_keeps_original(tmp_path, monkeypatch):
    """Test that a failed replace leaves the original file and no temp file."""
    import os

    path = tmp_path / "out.md"
    path.write_text("original", encoding="utf-8")

    def _boom(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(os, "replace", _boom)
    with pytest.raises(OSError):
        atomic_write_text(path, "new")

    assert path.read_text(encoding="utf-8") == "original"
    assert [p.name for p in tmp_path.iterdir()] == ["out.md"]


def test_document_title_none():
    assert Document(filename="a.md").title is None
