"""file_index_status and file_reindex MCP tools."""

import logging
from typing import TYPE_CHECKING

from fastmcp import FastMCP
from fastmcp.server.context import Context

from local_search.sources.provider import EnumerationError
from local_search.tools.formatters import format_stats

if TYPE_CHECKING:
    from local_search.index.search_index import SearchIndex

logger = logging.getLogger(__name__)


def register_index_tools(mcp: FastMCP) -> None:
    """Register the index status and rebuild tools with the MCP server."""

    @mcp.tool()
    async def file_index_status(ctx: Context | None = None) -> str:
        """Report how many files are indexed and whether a build is running."""
        if ctx is None:
            raise RuntimeError("Context not injected")

        index: SearchIndex = ctx.lifespan_context["index"]
        return format_stats(index.get_stats(), index.has_index)

    @mcp.tool()
    async def file_reindex(ctx: Context | None = None) -> str:
        """Rescan the indexed folder and rebuild the search index.

        Returns immediately if a rebuild is already running.
        """
        if ctx is None:
            raise RuntimeError("Context not injected")

        index: SearchIndex = ctx.lifespan_context["index"]
        if index.is_indexing:
            return "Index build already in progress."

        try:
            await index.build_index()
        except EnumerationError as e:
            logger.warning("Reindex failed: %s", e)
            return f"Error: Failed to list files: {e}"

        return f"Index rebuilt: {index.get_stats().total_files} files"
