"""In-memory search index: content store, build lifecycle, and ranked queries."""

import asyncio
import logging
import os
from collections.abc import Callable
from dataclasses import dataclass, field

from local_search.config import get_fuzzy_threshold, is_representative_matches
from local_search.models.entry import IndexEntry
from local_search.models.events import IndexEvent, IndexEventKind
from local_search.models.search import IndexStats, SearchOptions, SearchResult
from local_search.search.fuzzy import FilenameMatcher
from local_search.search.scoring import score_entry
from local_search.sources.provider import FileSource

logger = logging.getLogger(__name__)

MAX_RESULTS = 10
MIN_QUERY_LENGTH = 2
PROGRESS_INTERVAL = 100

IndexListener = Callable[[IndexEvent], None]


@dataclass(frozen=True)
class IndexSnapshot:
    """One complete index generation: entries plus the matcher over their names.

    Replaced wholesale by each build so readers never see a half-built store.
    """

    entries: dict[str, IndexEntry] = field(default_factory=dict)
    matcher: FilenameMatcher = field(default_factory=FilenameMatcher)


class SearchIndex:
    """Owns the live index snapshot and the at-most-one in-flight build."""

    def __init__(
        self,
        source: FileSource,
        *,
        fuzzy_threshold: float | None = None,
        representative_matches: bool | None = None,
    ) -> None:
        """Initialize with an empty index over the given file source."""
        self._source = source
        self._fuzzy_threshold = (
            fuzzy_threshold if fuzzy_threshold is not None else get_fuzzy_threshold()
        )
        self._representative = (
            representative_matches
            if representative_matches is not None
            else is_representative_matches()
        )
        self._snapshot = IndexSnapshot(matcher=FilenameMatcher(threshold=self._fuzzy_threshold))
        self._build_task: asyncio.Task[None] | None = None
        self._listeners: list[IndexListener] = []
        self._generation = 0

    # --- lifecycle events ---

    def subscribe(self, listener: IndexListener) -> Callable[[], None]:
        """Register a build event listener. Returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, event: IndexEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.warning("Index listener failed on %s event", event.kind, exc_info=True)

    # --- build ---

    @property
    def is_indexing(self) -> bool:
        return self._build_task is not None and not self._build_task.done()

    @property
    def has_index(self) -> bool:
        """True once at least one build has completed."""
        return self._generation > 0

    async def build_index(self) -> None:
        """Rebuild the index from the file source.

        A call made while a build is running returns immediately without
        starting another one. Enumeration failures propagate to the caller
        that started the build and leave the previous index in place.
        """
        if self.is_indexing:
            logger.info("Index build already in progress, skipping")
            return

        self._build_task = asyncio.create_task(self._build())
        await self._build_task

    async def _build(self) -> None:
        logger.info("Starting index build")
        self._emit(IndexEvent(kind=IndexEventKind.START))

        try:
            await self._populate()
        except Exception as e:
            logger.error("Error building index: %s", e)
            self._emit(IndexEvent(kind=IndexEventKind.ERROR, error=str(e)))
            raise

    async def _populate(self) -> None:
        files = await self._source.list_files()
        logger.info("Found %d files", len(files))
        total = len(files)
        entries: dict[str, IndexEntry] = {}
        for processed, file_path in enumerate(files, start=1):
            entry = await self._read_entry(file_path)
            if entry is not None:
                entries[entry.path] = entry

            if processed % PROGRESS_INTERVAL == 0:
                logger.info("Indexed %d/%d files", processed, total)
                self._emit(IndexEvent(kind=IndexEventKind.PROGRESS, current=processed, total=total))

        matcher = FilenameMatcher(
            (e.filename for e in entries.values()), threshold=self._fuzzy_threshold
        )
        self._snapshot = IndexSnapshot(entries=entries, matcher=matcher)
        self._generation += 1

        logger.info("Index build complete. Total files indexed: %d", len(entries))
        self._emit(IndexEvent(kind=IndexEventKind.COMPLETE, total_files=len(entries)))

    async def _read_entry(self, file_path: str) -> IndexEntry | None:
        try:
            meta = await self._source.read_file_meta(file_path)
        except OSError:
            logger.warning("Skipping unreadable file %s", file_path, exc_info=True)
            return None

        logger.debug("Indexed %s", file_path)
        return IndexEntry(
            path=file_path,
            filename=os.path.basename(file_path),
            last_modified=meta.last_modified,
            size=meta.size,
            content=meta.content or None,
        )

    # --- queries ---

    def search(self, query: str, options: SearchOptions | None = None) -> list[SearchResult]:
        """Rank indexed files against a query.

        Queries shorter than two characters after trimming return []. At
        most MAX_RESULTS results are returned, best first, ties going to
        the most recently modified file.
        """
        options = options or SearchOptions()
        normalized = query.strip().lower()
        if len(normalized) < MIN_QUERY_LENGTH:
            return []

        snapshot = self._snapshot
        file_types = options.normalized_file_types
        logger.debug("Searching %d files for %r", len(snapshot.entries), normalized)

        fuzzy_candidates = snapshot.matcher.search(normalized)
        results: list[SearchResult] = []
        for entry in snapshot.entries.values():
            if file_types and entry.extension not in file_types:
                continue
            result = score_entry(
                entry,
                normalized,
                fuzzy_candidates,
                max_snippets=options.max_snippets,
                context_size=options.snippet_context_size,
                representative=self._representative,
            )
            if result is not None:
                results.append(result)

        results.sort(key=lambda r: (r.score, r.last_modified), reverse=True)
        logger.info(
            "Found %d matches for %r, returning top %d",
            len(results),
            normalized,
            min(len(results), MAX_RESULTS),
        )
        return results[:MAX_RESULTS]

    def get_stats(self) -> IndexStats:
        """Return the live file count and whether a build is running."""
        return IndexStats(total_files=len(self._snapshot.entries), is_indexing=self.is_indexing)

    def get_entry(self, path: str) -> IndexEntry | None:
        """Look up an indexed file by absolute path."""
        return self._snapshot.entries.get(path)
