"""file_list and file_read MCP tools: direct access to the file source."""

import logging
from typing import TYPE_CHECKING, Annotated

from fastmcp import FastMCP
from fastmcp.server.context import Context
from pydantic import Field

from local_search.sources.provider import EnumerationError
from local_search.tools.formatters import format_size, format_timestamp

if TYPE_CHECKING:
    from local_search.index.search_index import SearchIndex
    from local_search.models.entry import IndexEntry
    from local_search.sources.provider import FileMeta, FileSource

logger = logging.getLogger(__name__)

_MAX_LISTED = 200
_MAX_CHARS = 4000


def format_file_list(files: list[str], limit: int = _MAX_LISTED) -> str:
    """Count header + one path per line, truncated to limit."""
    if not files:
        return "No files found."
    lines = [f"{len(files)} file(s)"]
    lines.extend(f"  {f}" for f in files[:limit])
    if len(files) > limit:
        lines.append(f"  ... and {len(files) - limit} more")
    return "\n".join(lines)


def register_file_access(mcp: FastMCP) -> None:
    """Register the file_list and file_read tools with the MCP server."""

    @mcp.tool()
    async def file_list(ctx: Context | None = None) -> str:
        """List the files under the indexed folder."""
        if ctx is None:
            raise RuntimeError("Context not injected")

        source: FileSource = ctx.lifespan_context["source"]
        try:
            files = await source.list_files()
        except EnumerationError as e:
            logger.warning("Listing files failed: %s", e)
            return f"Error: Failed to list files: {e}"
        return format_file_list(files)

    @mcp.tool()
    async def file_read(
        path: Annotated[str, Field(description="Absolute path of the file to read")],
        ctx: Context | None = None,
    ) -> str:
        """Read one file's metadata and extracted text (truncated).

        Indexed files are served from the index; others are read from disk.
        """
        if ctx is None:
            raise RuntimeError("Context not injected")

        if not path.strip():
            return "Error: Path is required."

        index: SearchIndex = ctx.lifespan_context["index"]
        meta: IndexEntry | FileMeta | None = index.get_entry(path)
        if meta is None:
            source: FileSource = ctx.lifespan_context["source"]
            try:
                meta = await source.read_file_meta(path)
            except OSError as e:
                logger.warning("Reading %s failed: %s", path, e)
                return f"Error: Failed to read file: {e}"

        lines = [
            path,
            f"  {format_size(meta.size)}, modified {format_timestamp(meta.last_modified)}",
        ]
        if meta.content is None:
            lines.append("  (no extractable text)")
            return "\n".join(lines)

        text = meta.content
        if len(text) > _MAX_CHARS:
            text = text[:_MAX_CHARS] + f"\n... ({len(meta.content) - _MAX_CHARS} more chars)"
        lines.append("")
        lines.append(text)
        return "\n".join(lines)
