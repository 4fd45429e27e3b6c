"""MCP tools for notes-mcp server.

This module defines the tools exposed by the MCP server:
- search: Ranked full-text search with tag, path and date filters
- list_tags: All tags in the vault with their note counts
- reindex: Rebuild the search index from the vault
"""

from datetime import datetime

from fastmcp import FastMCP

from notes_mcp.search import SearchQuery
from notes_mcp.search.models import as_utc
from notes_mcp.vault import VaultIndexer


def parse_datetime(value: str | None, name: str) -> datetime | None:
    """Parse an ISO-8601 date or datetime; naive values are taken as UTC."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as e:
        raise ValueError(f"Invalid {name} value '{value}': {e}") from e
    return as_utc(parsed)


def register_tools(mcp: FastMCP, indexer: VaultIndexer, default_limit: int = 20) -> None:
    """Register all tools with the FastMCP server.

    Args:
        mcp: FastMCP server instance
        indexer: Vault indexer owning the search index
        default_limit: Result limit used when search is called without one
    """

    @mcp.tool()
    def search(
        query: str = "",
        tags: list[str] | None = None,
        path_prefix: str | None = None,
        date_from: str | None = None,
        date_to: str | None = None,
        limit: int | None = None,
    ) -> list[dict]:
        """Search notes in the vault.

        Ranking combines:
        - BM25 relevance over title, body, aliases, type and frontmatter
        - A boost when the whole query appears verbatim in the title or body
        - Partial credit for misspelled terms (edit distance)

        An empty query lists every note that passes the filters.

        Args:
            query: Free-text query (may be empty)
            tags: Only notes carrying all of these tags
            path_prefix: Only notes whose path starts with this prefix
            date_from: Only notes modified at or after this ISO-8601 date
            date_to: Only notes modified at or before this ISO-8601 date
            limit: Maximum number of results (0 for unlimited)

        Returns:
            List of results with:
            - id, title, path: Note identity
            - score: Relevance score (higher is better, 0 for listings)
            - tags: Note tags
            - modified_at: Last modification time (ISO-8601)
            - snippet: Excerpt with matches highlighted ([[match]])
        """
        search_query = SearchQuery(
            query=query,
            tags=tags or [],
            path_prefix=path_prefix,
            date_from=parse_datetime(date_from, "date_from"),
            date_to=parse_datetime(date_to, "date_to"),
            limit=default_limit if limit is None else limit,
        )
        return [result.to_dict() for result in indexer.index.search(search_query)]

    @mcp.tool()
    def list_tags() -> list[dict]:
        """List all tags used in the vault.

        Returns:
            List of tags sorted by name, each with:
            - name: Tag name
            - count: Number of notes carrying the tag
        """
        return [
            {"name": name, "count": count}
            for name, count in indexer.index.tag_counts().items()
        ]

    @mcp.tool()
    def reindex() -> dict:
        """Rebuild the search index from the notes on disk.

        Returns:
            - documents: Number of notes indexed
        """
        return {"documents": indexer.reindex()}
