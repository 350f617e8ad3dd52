"""Search-related models."""

from pydantic import BaseModel, Field

from local_search.models.entry import IndexEntry, MatchType


class SearchOptions(BaseModel):
    """Parameters for a file search."""

    file_types: list[str] | None = None
    snippet_context_size: int = Field(default=60, ge=1)
    max_snippets: int = Field(default=3, ge=1)

    @property
    def normalized_file_types(self) -> set[str]:
        """Extensions lower-cased and without a leading dot; empty means no filter."""
        return {t.lower().lstrip(".") for t in self.file_types or [] if t.strip()}


class Snippet(BaseModel):
    """An excerpt of document text with its relevance inside that document."""

    text: str
    score: float
    position: int


class SearchResult(BaseModel):
    """A ranked match. Never carries the document body."""

    path: str
    filename: str
    last_modified: int
    size: int
    score: float = Field(ge=0.0, le=1.0)
    match_type: MatchType
    snippets: list[Snippet] | None = None

    @classmethod
    def from_entry(
        cls,
        entry: IndexEntry,
        score: float,
        match_type: MatchType,
        snippets: list[Snippet] | None = None,
    ) -> "SearchResult":
        """Build a result from an entry, dropping its content."""
        return cls(
            path=entry.path,
            filename=entry.filename,
            last_modified=entry.last_modified,
            size=entry.size,
            score=score,
            match_type=match_type,
            snippets=snippets or None,
        )


class IndexStats(BaseModel):
    """Point-in-time index statistics."""

    total_files: int
    is_indexing: bool
