"""
Remote cache to published copy.

Files fetched from the publishing service land in a cache directory
(``<published>/.remote`` by default). Each one is copied over the
published file whose name stem it starts with.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass
from pathlib import Path

from rich.console import Console

from serieslink.content.repository import require_directory

console = Console()

REMOTE_SUBDIR = ".remote"


@dataclass
class RemoteCopyItem:
    """One remote file and the published file it maps to."""

    remote_path: Path
    target_path: Path | None = None
    identical: bool = False


def match_published_file(remote_name: str, published_files: list[Path]) -> Path | None:
    """Find the published file whose stem prefixes the remote file name.

    When several stems match, the longest one wins so that ``intro`` never
    shadows ``intro-part-2``.
    """
    candidates = [p for p in published_files if remote_name.startswith(p.stem)]
    if not candidates:
        return None
    return max(candidates, key=lambda p: (len(p.stem), p.name))


def plan_remote_pull(remote_dir: Path, published_dir: Path) -> list[RemoteCopyItem]:
    """Pair every remote file with its published counterpart.

    Raises:
        DirectoryNotFound: If the remote directory is missing
    """
    remote_dir = require_directory(remote_dir)
    published_dir = Path(published_dir)

    published_files: list[Path] = []
    if published_dir.is_dir():
        published_files = sorted(p for p in published_dir.iterdir() if p.is_file())

    items: list[RemoteCopyItem] = []
    for remote_path in sorted(remote_dir.iterdir()):
        if not remote_path.is_file():
            continue
        target = match_published_file(remote_path.name, published_files)
        identical = target is not None and target.read_bytes() == remote_path.read_bytes()
        items.append(RemoteCopyItem(remote_path=remote_path, target_path=target, identical=identical))
    return items


def execute_remote_pull(items: list[RemoteCopyItem], dry_run: bool = False) -> tuple[int, int]:
    """Copy remote files over their published counterparts.

    Returns:
        Tuple of (copied_count, skipped_count)
    """
    copied = 0
    skipped = 0

    for item in items:
        if item.target_path is None:
            console.print(f"  [yellow]skipped:[/yellow] {item.remote_path.name} - no matching published file")
            skipped += 1
            continue
        if item.identical:
            console.print(f"  [dim]unchanged:[/dim] {item.target_path.name}")
            continue
        if not dry_run:
            shutil.copy2(item.remote_path, item.target_path)
        console.print(f"  [green]updated:[/green] {item.target_path.name}")
        copied += 1

    return copied, skipped
