"""Configuration module for notes-mcp.

Loads configuration from environment variables with sensible defaults.
"""

import os
from dataclasses import dataclass
from pathlib import Path


def _int_from_env(name: str, default: str) -> int:
    value = os.getenv(name, default)
    try:
        return int(value)
    except ValueError as e:
        raise ValueError(f"Invalid {name} value '{value}': {e}") from e


@dataclass
class Config:
    """Application configuration."""

    notes_root: Path
    notes_port: int
    sync_interval: int
    search_limit: int

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        default_root = str(Path.home() / "notes")
        notes_root = Path(os.getenv("NOTES_ROOT", default_root)).expanduser()

        port_str = os.getenv("NOTES_PORT", "8080")
        try:
            notes_port = int(port_str)
            if not 1 <= notes_port <= 65535:
                raise ValueError(f"Port must be between 1 and 65535, got {notes_port}")
        except ValueError as e:
            raise ValueError(f"Invalid NOTES_PORT value '{port_str}': {e}") from e

        # Background sync interval in seconds, 0 disables it
        sync_interval = _int_from_env("NOTES_SYNC_INTERVAL", "30")
        if sync_interval < 0:
            raise ValueError(f"Sync interval must be >= 0, got {sync_interval}")

        # Default number of search results, 0 means unlimited
        search_limit = _int_from_env("NOTES_SEARCH_LIMIT", "20")
        if search_limit < 0:
            raise ValueError(f"Search limit must be >= 0, got {search_limit}")

        return cls(
            notes_root=notes_root,
            notes_port=notes_port,
            sync_interval=sync_interval,
            search_limit=search_limit,
        )
