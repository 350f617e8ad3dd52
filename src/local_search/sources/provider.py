"""File source protocol: the collaborator that enumerates and reads files."""

from typing import Protocol, runtime_checkable

from pydantic import BaseModel, Field


class EnumerationError(OSError):
    """Listing the files under the index root failed."""


class FileMeta(BaseModel):
    """Metadata and extracted text for one file."""

    size: int = Field(ge=0)
    last_modified: int  # epoch milliseconds
    content: str | None = None


@runtime_checkable
class FileSource(Protocol):
    """Protocol for anything that can feed files into the index."""

    async def list_files(self) -> list[str]:
        """Return absolute paths of every file to index.

        Raises EnumerationError when the listing itself fails.
        """
        ...

    async def read_file_meta(self, path: str) -> FileMeta:
        """Return size, mtime and extracted text for a path.

        Unextractable files yield content=None. Raises OSError only for I/O
        failures such as a vanished file.
        """
        ...
