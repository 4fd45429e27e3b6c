"""Vault indexer that keeps the search index in step with the filesystem."""

import logging
import threading
from pathlib import Path

from notes_mcp.search import Note, SearchIndex
from notes_mcp.vault.parser import parse_note
from notes_mcp.vault.walker import FileInfo, walk_vault

logger = logging.getLogger(__name__)


class VaultIndexer:
    """
    Indexer that loads the markdown vault into a SearchIndex.

    The filesystem is always the source of truth. The search index is
    derived, in-memory, and can be regenerated at any time.

    Thread Safety:
        reindex, sync, index_file and remove_file are serialised by a lock
        so the per-file bookkeeping never diverges from the index. Searches
        go straight to the SearchIndex and are not blocked by the lock.
    """

    def __init__(self, vault_root: Path, index: SearchIndex | None = None):
        """
        Initialize the indexer.

        Args:
            vault_root: Path to the notes vault
            index: Search index to populate (a fresh one by default)
        """
        self.vault_root = vault_root
        self.index = index if index is not None else SearchIndex()
        # relative path -> (mtime, content hash) of the indexed version
        self._files: dict[str, tuple[float, str]] = {}
        self._write_lock = threading.Lock()

    def reindex(self) -> int:
        """
        Rebuild the whole index from the vault.

        Returns the number of documents indexed.
        """
        with self._write_lock:
            logger.info("Starting full reindex of %s", self.vault_root)

            notes: list[Note] = []
            files: dict[str, tuple[float, str]] = {}
            for file_info in walk_vault(self.vault_root):
                note = self._load_note(file_info)
                if note is None:
                    continue
                notes.append(note)
                files[file_info.relative_path] = (file_info.mtime, file_info.content_hash)

            count = self.index.index_all(notes)
            self._files = files

            logger.info("Reindex complete: %d documents indexed", count)
            return count

    def sync(self) -> tuple[int, int, int]:
        """
        Sync the index with filesystem changes.

        Uses mtime as fast-path and content hash for edge cases.

        Returns:
            Tuple of (added, updated, deleted) counts.
        """
        with self._write_lock:
            logger.debug("Syncing index with filesystem")

            added = 0
            updated = 0
            deleted = 0

            seen_paths: set[str] = set()

            for file_info in walk_vault(self.vault_root):
                seen_paths.add(file_info.relative_path)

                known = self._files.get(file_info.relative_path)
                if known is None:
                    if self._index_file(file_info):
                        added += 1
                    continue

                known_mtime, known_hash = known
                if abs(file_info.mtime - known_mtime) <= 0.001:
                    continue

                if known_hash != file_info.content_hash:
                    if self._index_file(file_info):
                        updated += 1
                else:
                    # Touched but unchanged
                    self._files[file_info.relative_path] = (file_info.mtime, known_hash)

            for path in list(self._files):
                if path not in seen_paths:
                    self._remove_file(path)
                    deleted += 1

            logger.debug(
                "Sync complete: %d added, %d updated, %d deleted",
                added,
                updated,
                deleted,
            )
            return added, updated, deleted

    def index_file(self, file_info: FileInfo) -> bool:
        """
        Index a single file (thread-safe).

        Returns:
            True if the file was indexed, False if it was skipped.
        """
        with self._write_lock:
            return self._index_file(file_info)

    def remove_file(self, relative_path: str) -> bool:
        """
        Remove a single file from the index (thread-safe).

        Returns:
            True if the file was indexed before.
        """
        with self._write_lock:
            return self._remove_file(relative_path)

    def _index_file(self, file_info: FileInfo) -> bool:
        note = self._load_note(file_info)
        if note is None:
            return False
        self.index.index_document(note)
        self._files[file_info.relative_path] = (file_info.mtime, file_info.content_hash)
        return True

    def _remove_file(self, relative_path: str) -> bool:
        self._files.pop(relative_path, None)
        return self.index.remove_document(relative_path)

    def _load_note(self, file_info: FileInfo) -> Note | None:
        """Read and parse a file, or None if it must be skipped."""
        # Validate path is within the vault (prevent symlink escapes)
        try:
            file_info.path.resolve().relative_to(self.vault_root.resolve())
        except ValueError:
            logger.warning("Skipping file outside vault root: %s", file_info.relative_path)
            return None
        except OSError as e:
            logger.warning("Cannot resolve path %s: %s", file_info.relative_path, e)
            return None

        try:
            content = file_info.path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            logger.warning(
                "Skipping file with invalid UTF-8 encoding: %s (%s)",
                file_info.relative_path,
                e,
            )
            return None

        return parse_note(content, file_info.relative_path, file_info.mtime)
