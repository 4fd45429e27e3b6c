"""File walker for discovering notes in the vault."""

import hashlib
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path


@dataclass
class FileInfo:
    """Information about a discovered note file."""

    path: Path  # Absolute path
    relative_path: str  # Relative to the vault root, always "/"-separated
    filename: str
    mtime: float
    content_hash: str


def compute_hash(content: bytes) -> str:
    """Compute SHA-256 hash of content."""
    return hashlib.sha256(content).hexdigest()


def walk_vault(vault_root: Path) -> Iterator[FileInfo]:
    """
    Walk the vault and yield FileInfo for each markdown note.

    Notes may live at any depth:
    <NOTES_ROOT>/
    ├── inbox.md
    ├── projects/
    │   ├── search.md
    │   └── archive/
    │       └── old-idea.md
    └── .obsidian/          (hidden, skipped)
    """
    if not vault_root.is_dir():
        return

    for file_path in sorted(vault_root.rglob("*.md")):
        if not file_path.is_file():
            continue

        # Skip hidden files and directories
        relative = file_path.relative_to(vault_root)
        if any(part.startswith(".") for part in relative.parts):
            continue

        stat = file_path.stat()
        content = file_path.read_bytes()

        yield FileInfo(
            path=file_path,
            relative_path=relative.as_posix(),
            filename=file_path.name,
            mtime=stat.st_mtime,
            content_hash=compute_hash(content),
        )
