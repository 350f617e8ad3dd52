"""Filesystem-backed file source."""

import asyncio
import logging
import os
from pathlib import Path

from local_search.config import get_max_file_size
from local_search.sources.extractor import extract_text
from local_search.sources.provider import EnumerationError, FileMeta

logger = logging.getLogger(__name__)


class FilesystemSource:
    """Enumerates every regular file under a root directory."""

    def __init__(self, root: Path, max_file_size: int | None = None) -> None:
        """Initialize with the root directory to walk."""
        self.root = root.expanduser()
        self.max_file_size = max_file_size if max_file_size is not None else get_max_file_size()

    async def list_files(self) -> list[str]:
        """Walk the root recursively and return sorted absolute file paths."""
        logger.info("Scanning files in %s", self.root)
        files = await asyncio.to_thread(self._walk)
        logger.info("Found %d files", len(files))
        return files

    def _walk(self) -> list[str]:
        root = self.root.resolve()
        if not root.is_dir():
            raise EnumerationError(f"Index root is not a readable directory: {root}")

        def on_error(err: OSError) -> None:
            if Path(err.filename or "") == root:
                raise EnumerationError(f"Cannot list {root}: {err.strerror}") from err
            logger.warning("Skipping unreadable directory %s: %s", err.filename, err.strerror)

        files: list[str] = []
        for dirpath, _dirnames, filenames in os.walk(root, onerror=on_error):
            for name in filenames:
                full = os.path.join(dirpath, name)
                if os.path.isfile(full):
                    files.append(full)
        return sorted(files)

    async def read_file_meta(self, path: str) -> FileMeta:
        """Stat the file and extract its text when it is small enough."""
        return await asyncio.to_thread(self._read, Path(path))

    def _read(self, path: Path) -> FileMeta:
        stat = path.stat()
        meta = FileMeta(size=stat.st_size, last_modified=int(stat.st_mtime * 1000))

        if stat.st_size > self.max_file_size:
            logger.debug("Skipping content of %s: %d bytes", path, stat.st_size)
            return meta

        try:
            content = extract_text(path)
        except Exception:
            logger.warning("Failed to extract text from %s", path, exc_info=True)
            return meta

        logger.debug("Read %s (%d chars)", path, len(content or ""))
        return meta.model_copy(update={"content": content})
