"""File sources that feed the index."""

from local_search.sources.filesystem import FilesystemSource
from local_search.sources.provider import EnumerationError, FileMeta, FileSource

__all__ = ["EnumerationError", "FileMeta", "FileSource", "FilesystemSource"]
