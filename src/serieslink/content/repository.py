"""
Document directory reader.

Loads every markdown document of a flat directory, skipping files whose
front matter cannot be parsed.
"""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console

from serieslink.content.frontmatter import Document, read_document
from serieslink.core.errors import DirectoryNotFound, ParseFailure

console = Console()
logger = logging.getLogger(__name__)

MARKDOWN_SUFFIX = ".md"


def require_directory(directory: Path) -> Path:
    """Return directory as a Path, raising DirectoryNotFound if it is missing."""
    directory = Path(directory)
    if not directory.is_dir():
        raise DirectoryNotFound(directory)
    return directory


def iter_markdown_files(directory: Path) -> list[Path]:
    """List markdown files in a directory, sorted by filename."""
    return sorted(
        (p for p in directory.iterdir() if p.is_file() and p.suffix == MARKDOWN_SUFFIX),
        key=lambda p: p.name,
    )


def load_documents(directory: Path) -> tuple[list[Document], list[ParseFailure]]:
    """Load all markdown documents in a directory.

    Args:
        directory: Directory to scan (not recursive)

    Returns:
        Tuple of (documents sorted by filename, parse failures)

    Raises:
        DirectoryNotFound: If the directory does not exist
    """
    directory = require_directory(directory)

    documents: list[Document] = []
    failures: list[ParseFailure] = []

    for path in iter_markdown_files(directory):
        try:
            documents.append(read_document(path))
        except ParseFailure as e:
            logger.debug("Skipping %s: %s", path, e.reason)
            console.print(f"  [yellow]skipped:[/yellow] {path.name} - {e.reason}")
            failures.append(e)

    logger.debug("Loaded %d documents from %s", len(documents), directory)
    return documents, failures
