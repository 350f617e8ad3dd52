"""Per-entry ranking policy: exact, then fuzzy, then path, then content.

The score bands never overlap, so the match type alone orders results:
exact (1.0) > fuzzy (0.6, 0.9] > path (0.5) > content [0.15, 0.4].
"""

import logging

from local_search.models.entry import IndexEntry, MatchType
from local_search.models.search import SearchResult
from local_search.search.snippets import extract_snippets, query_tokens

logger = logging.getLogger(__name__)

EXACT_SCORE = 1.0
FUZZY_BASE = 0.6
FUZZY_RANGE = 0.3
PATH_SCORE = 0.5
CONTENT_PHRASE_BASE = 0.3
CONTENT_PHRASE_STEP = 0.1
CONTENT_PHRASE_MAX = 0.4
CONTENT_TOKEN_BASE = 0.2
CONTENT_TOKEN_RANGE = 0.2
CONTENT_TOKEN_MAX = 0.35
REPRESENTATIVE_SCORE = 0.15


def fuzzy_score(distance: float) -> float:
    """Map a matcher distance in [0, 1] onto the fuzzy band."""
    return FUZZY_BASE + FUZZY_RANGE * (1 - distance)


def content_phrase_score(occurrences: int) -> float:
    return min(CONTENT_PHRASE_BASE + CONTENT_PHRASE_STEP * occurrences, CONTENT_PHRASE_MAX)


def content_token_score(matched: int, total: int) -> float:
    return min(CONTENT_TOKEN_BASE + CONTENT_TOKEN_RANGE * (matched / total), CONTENT_TOKEN_MAX)


def score_entry(
    entry: IndexEntry,
    query: str,
    fuzzy_candidates: dict[str, float],
    *,
    max_snippets: int = 3,
    context_size: int = 60,
    representative: bool = True,
) -> SearchResult | None:
    """Score one entry against a normalized (lower-cased, trimmed) query.

    The first rule that applies wins. Returns None when nothing matches.
    """
    if entry.stem == query:
        return SearchResult.from_entry(entry, EXACT_SCORE, MatchType.EXACT)

    distance = fuzzy_candidates.get(entry.filename)
    if distance is not None:
        return SearchResult.from_entry(entry, fuzzy_score(distance), MatchType.FUZZY)

    path = entry.path.lower()
    directory = path[: len(path) - len(entry.filename)]
    if query in directory:
        return SearchResult.from_entry(entry, PATH_SCORE, MatchType.PATH)

    if not entry.content:
        return None
    return _score_content(entry, entry.content, query, max_snippets, context_size, representative)


def _score_content(
    entry: IndexEntry,
    text: str,
    query: str,
    max_snippets: int,
    context_size: int,
    representative: bool,
) -> SearchResult | None:
    content = text.lower()
    snippets = extract_snippets(text, query, max_snippets, context_size)

    occurrences = content.count(query)
    if occurrences:
        score = content_phrase_score(occurrences)
        return SearchResult.from_entry(entry, score, MatchType.CONTENT, snippets)

    tokens = query_tokens(query)
    if tokens:
        matched = [t for t in tokens if t in content]
        if matched:
            logger.debug(
                "Partial match for %r in %s: %d/%d words",
                query,
                entry.filename,
                len(matched),
                len(tokens),
            )
            score = content_token_score(len(matched), len(tokens))
            return SearchResult.from_entry(entry, score, MatchType.CONTENT, snippets)

    if representative and snippets:
        logger.debug(
            "No direct match for %r in %s, returning representative snippets", query, entry.filename
        )
        return SearchResult.from_entry(entry, REPRESENTATIVE_SCORE, MatchType.CONTENT, snippets)

    return None
