"""Shared test fixtures."""

import asyncio

import pytest
import pytest_asyncio

from local_search.index.search_index import SearchIndex
from local_search.sources.provider import EnumerationError, FileMeta

MOCK_FILES = [
    "/downloads/test1.txt",
    "/downloads/test2.pdf",
    "/downloads/subfolder/test3.doc",
]


class FakeSource:
    """Controllable in-memory file source for testing.

    Files map path -> FileMeta. Set ``fail_listing`` to make list_files raise,
    or clear ``gate`` to hold a build inside list_files until it is set.
    """

    def __init__(self, files: dict[str, FileMeta] | None = None):
        self.files: dict[str, FileMeta] = dict(files or {})
        self.fail_listing = False
        self.unreadable: set[str] = set()
        self.gate = asyncio.Event()
        self.gate.set()
        self.list_count = 0
        self.read_count = 0

    async def list_files(self) -> list[str]:
        self.list_count += 1
        await self.gate.wait()
        await asyncio.sleep(0)
        if self.fail_listing:
            raise EnumerationError("Cannot list /downloads: Permission denied")
        return list(self.files)

    async def read_file_meta(self, path: str) -> FileMeta:
        self.read_count += 1
        if path in self.unreadable or path not in self.files:
            raise FileNotFoundError(path)
        return self.files[path]


def make_meta(
    content: str | None = None,
    last_modified: int = 1_700_000_000_000,
    size: int = 1000,
) -> FileMeta:
    return FileMeta(size=size, last_modified=last_modified, content=content)


@pytest.fixture
def source():
    """Fake source with three files and no extractable content."""
    return FakeSource({path: make_meta() for path in MOCK_FILES})


@pytest.fixture
def index(source):
    """Unbuilt index over the fake source, with config-independent settings."""
    return SearchIndex(source, fuzzy_threshold=0.4, representative_matches=True)


@pytest_asyncio.fixture
async def built_index(index):
    """Index over the three mock files, already built."""
    await index.build_index()
    return index
