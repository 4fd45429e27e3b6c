"""
Vault module for notes-mcp.

Discovers markdown notes on disk, parses their frontmatter and feeds them
to the search index.
"""

from notes_mcp.vault.indexer import VaultIndexer
from notes_mcp.vault.parser import parse_note
from notes_mcp.vault.walker import FileInfo, walk_vault

__all__ = [
    "FileInfo",
    "VaultIndexer",
    "parse_note",
    "walk_vault",
]
