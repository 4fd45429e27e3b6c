"""Main entry point for notes-mcp MCP server."""

import argparse
import logging
import sys

from fastmcp import FastMCP

from notes_mcp import __version__
from notes_mcp.config import Config
from notes_mcp.sync import SyncManager
from notes_mcp.tools import register_tools
from notes_mcp.vault import VaultIndexer

logger = logging.getLogger(__name__)


def create_server(config: Config, indexer: VaultIndexer | None = None) -> FastMCP:
    """Create and configure the MCP server with all components.

    Args:
        config: Configuration instance with all settings.
        indexer: Vault indexer to serve; one is created and loaded from
            config.notes_root when omitted.
    """
    mcp = FastMCP(
        name="notesMCP",
        instructions=(
            "notesMCP provides ranked search over a vault of markdown notes. "
            "Use the search tool with free text and optional tag, path and date "
            "filters, and list_tags to discover the tags in use."
        ),
    )

    if indexer is None:
        indexer = VaultIndexer(config.notes_root)
        logger.info("Building initial index...")
        doc_count = indexer.reindex()
        logger.info("Initial index complete: %d documents indexed", doc_count)

    logger.info("Registering tools...")
    register_tools(mcp, indexer, default_limit=config.search_limit)

    logger.info("Server configured successfully")
    return mcp


def main() -> None:
    """Main function - starts the MCP server."""
    # Configure logging here to avoid side effects on import
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="notes-mcp - MCP search server for markdown notes")
    parser.add_argument(
        "--no-sync",
        action="store_true",
        help="Disable background sync with the vault",
    )
    args = parser.parse_args()

    config = Config.from_env()

    logger.info("=" * 50)
    logger.info("notes-mcp %s starting...", __version__)
    logger.info("  NOTES_ROOT:    %s", config.notes_root)
    logger.info("  NOTES_PORT:    %s", config.notes_port)
    logger.info("  SYNC_INTERVAL: %s", "disabled" if args.no_sync or not config.sync_interval else config.sync_interval)
    logger.info("  SEARCH_LIMIT:  %s", config.search_limit or "unlimited")
    logger.info("=" * 50)

    sync_manager: SyncManager | None = None
    try:
        indexer = VaultIndexer(config.notes_root)
        doc_count = indexer.reindex()
        logger.info("Initial index complete: %d documents indexed", doc_count)

        mcp = create_server(config, indexer)

        if config.sync_interval and not args.no_sync:
            sync_manager = SyncManager(indexer, config.sync_interval)
            sync_manager.start()

        logger.info("Starting MCP server on port %s...", config.notes_port)
        mcp.run(transport="sse", host="0.0.0.0", port=config.notes_port)
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
        sys.exit(0)
    except Exception:
        logger.exception("Server error")
        sys.exit(1)
    finally:
        if sync_manager is not None:
            sync_manager.stop()


if __name__ == "__main__":
    main()
