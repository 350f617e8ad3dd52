"""file_search MCP tool: ranked filename, path, and content search."""

import logging
import time
from typing import TYPE_CHECKING, Annotated

from fastmcp import FastMCP
from fastmcp.server.context import Context
from pydantic import Field

from local_search.config import get_max_snippets, get_snippet_context
from local_search.models.search import SearchOptions
from local_search.tools.formatters import format_result_list

if TYPE_CHECKING:
    from local_search.index.search_index import SearchIndex

logger = logging.getLogger(__name__)

STARTING_UP = "Index is still building, please try again in a moment."
NOT_BUILT = "Index has not been built. Run file_reindex to build it."


def register_file_search(mcp: FastMCP) -> None:
    """Register the file_search tool with the MCP server."""

    @mcp.tool()
    async def file_search(
        query: Annotated[str, Field(description="Filename, folder name, or words in the file")],
        file_types: Annotated[
            list[str] | None,
            Field(description="Only return these extensions, e.g. ['pdf', 'txt']"),
        ] = None,
        ctx: Context | None = None,
    ) -> str:
        """Search local files by name, folder, and extracted text.

        Exact filename matches rank first, then fuzzy filename matches, then
        folder-path matches, then documents whose text contains the query.
        Content matches include short highlighted passages. At most 10
        results are returned.
        """
        if ctx is None:
            raise RuntimeError("Context not injected")

        index: SearchIndex = ctx.lifespan_context["index"]
        if not index.has_index:
            return STARTING_UP if index.is_indexing else NOT_BUILT

        if not query.strip():
            return "Error: Search query is required."

        options = SearchOptions(
            file_types=file_types,
            snippet_context_size=get_snippet_context(),
            max_snippets=get_max_snippets(),
        )
        start = time.perf_counter()
        results = index.search(query, options)
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info("Search completed in %.1f ms, %d results", elapsed_ms, len(results))

        return format_result_list(results, elapsed_ms, file_types)
