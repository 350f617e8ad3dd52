"""Approximate filename matching backed by rapidfuzz."""

import logging
from collections.abc import Iterable

from rapidfuzz import fuzz, process
from rapidfuzz.utils import default_process

logger = logging.getLogger(__name__)

# 0.0 = perfect match, 1.0 = match anything
DEFAULT_THRESHOLD = 0.4
MIN_MATCH_CHARS = 2


def filename_similarity(
    query: str, filename: str, *, score_cutoff: float | None = None, **kwargs
) -> float:
    """Similarity of a query to a filename on a 0-100 scale.

    A query no longer than the filename may match any part of it. A longer
    query is compared whole, so a short filename that merely appears inside
    a long query is not a match.
    """
    if len(query) > len(filename):
        return fuzz.ratio(query, filename, score_cutoff=score_cutoff)
    return fuzz.partial_ratio(query, filename, score_cutoff=score_cutoff)


class FilenameMatcher:
    """Fuzzy matcher over a fixed set of filenames.

    Built once per index generation and never mutated. Distances are
    normalized to [0, 1] where 0 is a perfect match.
    """

    def __init__(self, filenames: Iterable[str] = (), threshold: float = DEFAULT_THRESHOLD):
        """Initialize over the given filenames (duplicates collapse)."""
        if not 0.0 <= threshold < 1.0:
            raise ValueError(f"Fuzzy threshold must be in [0, 1), got {threshold}")
        self._filenames = sorted(set(filenames))
        self.threshold = threshold

    def __len__(self) -> int:
        return len(self._filenames)

    def search(self, query: str) -> dict[str, float]:
        """Return {filename: distance} for every filename within the threshold."""
        if len(query.strip()) < MIN_MATCH_CHARS or not self._filenames:
            return {}

        cutoff = (1.0 - self.threshold) * 100
        matches = process.extract(
            query,
            self._filenames,
            scorer=filename_similarity,
            processor=default_process,
            score_cutoff=cutoff,
            limit=None,
        )
        candidates = {choice: round(1.0 - score / 100.0, 4) for choice, score, _idx in matches}
        logger.debug("Fuzzy filename candidates for %r: %d", query, len(candidates))
        return candidates
