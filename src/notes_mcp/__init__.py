"""
notes-mcp - MCP server for searching a vault of markdown notes.

Stack:
- Python + FastMCP
- In-memory BM25 index (rank-bm25) with exact-phrase and fuzzy boosting
- Markdown + YAML frontmatter (source of truth)
"""

__version__ = "0.1.0"
