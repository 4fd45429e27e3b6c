"""Background sync of the search index with the vault on disk.

Notes are edited outside the server, so a daemon thread periodically
diffs the vault against the index and applies the changes. Every pass,
scheduled or requested, is recorded in a SyncStatus.
"""

import dataclasses
import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timezone

from notes_mcp.vault import VaultIndexer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SyncStatus:
    """Outcome of the most recent sync pass."""

    last_run: datetime | None = None
    added: int = 0
    updated: int = 0
    deleted: int = 0
    documents: int = 0  # Notes indexed after the pass
    consecutive_failures: int = 0
    last_error: str | None = None

    @property
    def changed(self) -> bool:
        return bool(self.added or self.updated or self.deleted)


class SyncManager:
    """Keeps a VaultIndexer in step with the vault.

    The sync thread is a daemon, so it automatically terminates when the
    main process exits. A failing pass is logged and counted; the next
    scheduled pass retries from scratch.
    """

    def __init__(self, indexer: VaultIndexer, interval: int):
        """Initialize the sync manager.

        Args:
            indexer: The vault indexer to sync.
            interval: Seconds between passes. Must be > 0.
        """
        if interval <= 0:
            raise ValueError(f"Sync interval must be positive, got {interval}")

        self._indexer = indexer
        self._interval = interval
        self._status = SyncStatus()
        self._status_lock = threading.Lock()
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def status(self) -> SyncStatus:
        with self._status_lock:
            return self._status

    def sync_now(self) -> SyncStatus:
        """Run one sync pass on the calling thread and record its outcome."""
        now = datetime.now(timezone.utc)
        try:
            added, updated, deleted = self._indexer.sync()
        except Exception as e:
            logger.exception("Error during vault sync")
            with self._status_lock:
                self._status = dataclasses.replace(
                    self._status,
                    last_run=now,
                    consecutive_failures=self._status.consecutive_failures + 1,
                    last_error=str(e),
                )
                return self._status

        status = SyncStatus(
            last_run=now,
            added=added,
            updated=updated,
            deleted=deleted,
            documents=len(self._indexer.index),
        )
        with self._status_lock:
            self._status = status

        if status.changed:
            logger.info(
                "Vault sync: %d added, %d updated, %d deleted (%d notes indexed)",
                added,
                updated,
                deleted,
                status.documents,
            )
        else:
            logger.debug("Vault sync: no changes detected")
        return status

    def start(self) -> None:
        """Start the background sync thread."""
        if self.running:
            logger.warning("Sync thread already running")
            return

        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name="notes-sync", daemon=True)
        self._thread.start()
        logger.info("Sync manager started (interval: %ds)", self._interval)

    def stop(self) -> None:
        """Stop the background sync thread, waiting for a pass in progress."""
        if not self.running:
            return

        self._stop_event.set()
        self._thread.join(timeout=self._interval + 1)
        if self._thread.is_alive():
            logger.warning("Sync thread did not stop cleanly")
        else:
            logger.info("Sync manager stopped")
        self._thread = None

    def _run(self) -> None:
        while not self._stop_event.wait(timeout=self._interval):
            self.sync_now()
