"""Index build lifecycle events."""

from enum import StrEnum

from pydantic import BaseModel


class IndexEventKind(StrEnum):
    """Stage of an index build."""

    START = "start"
    PROGRESS = "progress"
    COMPLETE = "complete"
    ERROR = "error"


class IndexEvent(BaseModel):
    """A status update emitted while building the index."""

    kind: IndexEventKind
    current: int | None = None
    total: int | None = None
    total_files: int | None = None
    error: str | None = None
