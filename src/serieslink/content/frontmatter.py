"""
Front matter parsing and safe writing.

A document is split into its YAML header and its body. The header text is
kept verbatim so that rewriting the body never reformats metadata.
"""

from __future__ import annotations

import contextlib
import os
import re
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from serieslink.core.errors import ParseFailure

FRONT_MATTER_RE = re.compile(r"\A---\n(.*?)^---(?:\n|\Z)(.*)\Z", re.DOTALL | re.MULTILINE)


@dataclass
class Document:
    """A markdown document with YAML front matter."""

    filename: str
    metadata: dict[str, Any] = field(default_factory=dict)
    body: str = ""
    raw_header: str = ""
    newline: str = "\n"

    @property
    def title(self) -> str | None:
        val = self.metadata.get("title")
        return str(val) if val is not None else None

    def with_body(self, body: str) -> Document:
        """Return a copy holding a new body and the same header."""
        return Document(
            filename=self.filename,
            metadata=self.metadata,
            body=body,
            raw_header=self.raw_header,
            newline=self.newline,
        )

    def render(self) -> str:
        """Reassemble the file content in its original line ending style."""
        text = f"---\n{self.raw_header}---\n{self.body}"
        if self.newline != "\n":
            text = text.replace("\n", self.newline)
        return text


def detect_newline(text: str) -> str:
    """Return "\\r\\n" when every line of text ends in CRLF, else "\\n".

    Files mixing both styles are written back with LF endings.
    """
    crlf = text.count("\r\n")
    if crlf and crlf == text.count("\n"):
        return "\r\n"
    return "\n"


def parse_document(text: str, path: Path) -> Document:
    """Split file content into header and body.

    Args:
        text: Full file content
        path: Path the content was read from (used for naming and errors)

    Returns:
        Parsed Document

    Raises:
        ParseFailure: If there is no front matter or the YAML is invalid
    """
    path = Path(path)
    newline = detect_newline(text)
    text = text.replace("\r\n", "\n")

    if not text.startswith("---"):
        raise ParseFailure(path, "no front matter")

    match = FRONT_MATTER_RE.match(text)
    if not match:
        raise ParseFailure(path, "invalid front matter format")

    raw_header = match.group(1)
    try:
        metadata = yaml.safe_load(raw_header) or {}
    except yaml.YAMLError as e:
        raise ParseFailure(path, f"YAML error: {e}") from e

    if not isinstance(metadata, dict):
        raise ParseFailure(path, "front matter is not a mapping")

    return Document(
        filename=path.name,
        metadata=metadata,
        body=match.group(2),
        raw_header=raw_header,
        newline=newline,
    )


def read_document(path: Path) -> Document:
    """Read and parse a single document."""
    path = Path(path)
    try:
        # read_text would translate CRLF before it can be detected
        text = path.read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ParseFailure(path, f"unreadable: {e}") from e
    return parse_document(text, path)


def atomic_write_text(path: Path, content: str) -> None:
    """Write content to path through a temp file and an atomic replace.

    A crash mid-write leaves the original file untouched.
    """
    path = Path(path)
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, suffix=".tmp", prefix=".serieslink_")
    try:
        os.write(fd, content.encode("utf-8"))
        os.close(fd)
        fd = -1  # mark closed
        os.replace(tmp_path, path)
    except Exception:
        if fd >= 0:
            os.close(fd)
        with contextlib.suppress(OSError):
            os.unlink(tmp_path)
        raise


def write_document(path: Path, document: Document) -> None:
    """Render a document fully in memory, then write it atomically."""
    atomic_write_text(path, document.render())
