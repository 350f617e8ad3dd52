"""Compact output formatters for MCP tool responses."""

from datetime import UTC, datetime

from local_search.models.search import IndexStats, SearchResult, Snippet

_SNIPPET_WIDTH = 200


def format_timestamp(epoch_ms: int) -> str:
    """Format epoch milliseconds as a UTC date and time."""
    return datetime.fromtimestamp(epoch_ms / 1000, tz=UTC).strftime("%Y-%m-%d %H:%M")


def format_size(size: int) -> str:
    """Format a byte count: 512 B, 1.5 KB, 2.0 MB."""
    if size < 1024:
        return f"{size} B"
    value = size / 1024
    for unit in ("KB", "MB"):
        if value < 1024:
            return f"{value:.1f} {unit}"
        value /= 1024
    return f"{value:.1f} GB"


def format_snippet(snippet: Snippet) -> str:
    """One-line snippet with whitespace collapsed."""
    text = " ".join(snippet.text.split())
    if len(text) > _SNIPPET_WIDTH:
        text = text[:_SNIPPET_WIDTH] + "..."
    return f"    > {text}"


def format_result(result: SearchResult) -> str:
    """Format: [content 0.40] report.pdf (1.5 KB, 2025-01-01 12:00) + path + snippets."""
    header = (
        f"[{result.match_type.value} {result.score:.2f}] {result.filename} "
        f"({format_size(result.size)}, {format_timestamp(result.last_modified)})"
    )
    lines = [header, f"  {result.path}"]
    if result.snippets:
        lines.extend(format_snippet(s) for s in result.snippets)
    return "\n".join(lines)


def format_result_list(
    results: list[SearchResult],
    search_time_ms: float | None = None,
    file_types: list[str] | None = None,
) -> str:
    """Count + timing + filters + results joined by blank lines."""
    if not results:
        return "No results found."

    summary = f"{len(results)} result(s)"
    if search_time_ms is not None:
        summary += f" in {search_time_ms:.0f} ms"
    lines = [summary]
    if file_types:
        lines.append(f"Filtered by file types: {', '.join(file_types)}")
    lines.append("")
    lines.append("\n\n".join(format_result(r) for r in results))
    return "\n".join(lines)


def format_stats(stats: IndexStats, ready: bool) -> str:
    """Format index health: file count, build state, readiness."""
    state = "indexing" if stats.is_indexing else "idle"
    readiness = "ready" if ready else "starting up"
    return f"Index {readiness}: {stats.total_files} files ({state})"
