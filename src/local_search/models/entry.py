"""Index entry models."""

import os
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class MatchType(StrEnum):
    """How a result matched the query, in priority order."""

    EXACT = "exact"
    FUZZY = "fuzzy"
    PATH = "path"
    CONTENT = "content"


class IndexEntry(BaseModel):
    """A single indexed file. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    path: str
    filename: str
    last_modified: int  # epoch milliseconds
    size: int = Field(ge=0)
    content: str | None = None

    @property
    def stem(self) -> str:
        """Lower-cased filename without its extension."""
        return os.path.splitext(self.filename)[0].lower()

    @property
    def extension(self) -> str:
        """Lower-cased extension without the leading dot ("" when absent)."""
        return os.path.splitext(self.filename)[1].lower()[1:]
