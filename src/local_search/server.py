"""FastMCP server with lifespan management and tool registration."""

import asyncio
import logging
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastmcp import FastMCP

from local_search.config import get_log_level, get_root_dir, is_build_on_start
from local_search.index.search_index import SearchIndex
from local_search.sources.filesystem import FilesystemSource
from local_search.tools.file_access import register_file_access
from local_search.tools.file_search import register_file_search
from local_search.tools.index_tools import register_index_tools

logger = logging.getLogger(__name__)


def _log_build_outcome(task: asyncio.Task[None]) -> None:
    """Done-callback for the startup build: surface failures in the log."""
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.error("Initial index build failed: %s", exc)
    else:
        logger.info("Initial index build finished")


@asynccontextmanager
async def lifespan(server: FastMCP) -> AsyncIterator[dict[str, Any]]:
    """Create the file source and index, and start the first build."""
    # Configure logging to stderr (stdout is MCP stdio transport)
    logging.basicConfig(
        level=getattr(logging, get_log_level()),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )

    root = get_root_dir()
    logger.info("Indexing files under %s", root)
    source = FilesystemSource(root)
    index = SearchIndex(source)

    build_task: asyncio.Task[None] | None = None
    if is_build_on_start():
        build_task = asyncio.create_task(index.build_index())
        build_task.add_done_callback(_log_build_outcome)
    else:
        logger.info("Startup build disabled; waiting for file_reindex")

    try:
        yield {"source": source, "index": index}
    finally:
        if build_task is not None and not build_task.done():
            build_task.cancel()
            logger.info("Cancelled in-flight index build")


_INSTRUCTIONS = """\
Searches the user's local files (by default the Downloads folder) using an \
in-memory index of filenames, folder paths, and extracted document text \
(plain text, PDF, Word).

- file_search: Find files by name, folder, or words inside them. Results are \
ranked exact > fuzzy filename > folder path > content, and content matches \
include short passages. Use file_types to narrow by extension.
- file_read: Read the extracted text of a specific file from the results.
- file_list: List every file under the indexed folder.
- file_index_status: Check whether the index is ready and how many files it holds.
- file_reindex: Rescan the folder after files were added or changed.
"""


def create_server() -> FastMCP:
    """Create and configure the MCP server with all tools."""
    mcp = FastMCP(
        "local-file-search",
        instructions=_INSTRUCTIONS,
        lifespan=lifespan,
    )

    register_file_search(mcp)
    register_file_access(mcp)
    register_index_tools(mcp)

    return mcp
