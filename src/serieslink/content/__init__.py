"""
Document handling for serieslink.

Provides tools for:
- Splitting documents into front matter and body
- Writing documents back without touching their metadata
- Loading a directory of documents
"""

from serieslink.content.frontmatter import (
    Document,
    atomic_write_text,
    parse_document,
    read_document,
    write_document,
)
from serieslink.content.repository import load_documents, require_directory

__all__ = [
    "Document",
    "parse_document",
    "read_document",
    "write_document",
    "atomic_write_text",
    "load_documents",
    "require_directory",
]
