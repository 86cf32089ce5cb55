"""
Error types.

Fatal conditions (missing input roots, strict-mode title misses) propagate
to the command layer; per-document conditions are caught by the batch
driver and reported as skips.
"""

from __future__ import annotations

from pathlib import Path


class SeriesLinkError(Exception):
    """Base class for all serieslink errors."""


class ConfigError(SeriesLinkError):
    """Configuration file holds an invalid value."""


class DirectoryNotFound(SeriesLinkError, FileNotFoundError):
    """An input root does not exist."""

    def __init__(self, path: Path):
        self.path = Path(path)
        super().__init__(f"Directory not found: {self.path}")


class ParseFailure(SeriesLinkError):
    """A document's front matter is missing or malformed."""

    def __init__(self, path: Path, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{self.path.name}: {reason}")


class UnresolvedTitleMatch(SeriesLinkError):
    """One or more titles have no unique published counterpart (strict mode)."""

    def __init__(self, titles: list[str]):
        self.titles = list(titles)
        joined = ", ".join(repr(t) for t in self.titles)
        super().__init__(f"No published article for: {joined}")


class UnterminatedBlock(SeriesLinkError):
    """A start sentinel was found without a matching end sentinel."""

    def __init__(self, line: int):
        self.line = line
        super().__init__(f"start marker on line {line + 1} has no end marker")
