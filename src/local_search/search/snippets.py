"""Snippet extraction: locate and rank relevant passages in document text.

Three passes, each only when the previous one came up short:

1. exact phrase occurrences with surrounding context,
2. paragraphs containing individual query tokens,
3. the opening paragraphs of the document as representative content.

Candidates are de-duplicated by text and by overlapping position, then
ranked by score.
"""

import logging
import re

from local_search.models.search import Snippet

logger = logging.getLogger(__name__)

ELLIPSIS = "..."

# Flat bonus that keeps exact-phrase snippets above token-level ones
EXACT_PHRASE_BONUS = 0.5
TERM_WEIGHT = 0.2
POSITION_DECAY = 0.3
PARAGRAPH_STRIDE = 1000
MAX_REPRESENTATIVE = 3
REPRESENTATIVE_BASE = 0.3
REPRESENTATIVE_STEP = 0.1

_PARAGRAPH_SPLIT = re.compile(r"\n\s*\n")


def query_tokens(query: str) -> list[str]:
    """Distinct lower-cased query words longer than two characters, in order."""
    return list(dict.fromkeys(w for w in query.lower().split() if len(w) > 2))


def split_paragraphs(content: str) -> list[str]:
    """Split text on blank lines."""
    return _PARAGRAPH_SPLIT.split(content)


def _bounded(text: str, start: int, end: int) -> str:
    """Slice text[start:end], marking truncated sides with an ellipsis."""
    snippet = text[start:end]
    if start > 0:
        snippet = ELLIPSIS + snippet
    if end < len(text):
        snippet = snippet + ELLIPSIS
    return snippet


def _pattern(term: str) -> re.Pattern[str]:
    return re.compile(re.escape(term), re.IGNORECASE)


def _exact_phrase_snippets(content: str, query: str, context_size: int) -> list[Snippet]:
    matches: list[Snippet] = []
    if not query:
        return matches

    # Offsets index the original text, not a lower-cased copy
    pattern = _pattern(query)
    for match in pattern.finditer(content):
        index = match.start()
        start = max(0, index - context_size)
        end = min(len(content), match.end() + context_size)
        text = _bounded(content, start, end)

        position_score = 1 - index / len(content)
        term_score = len(pattern.findall(text)) * TERM_WEIGHT
        matches.append(
            Snippet(
                text=text,
                score=position_score + term_score + EXACT_PHRASE_BONUS,
                position=index,
            )
        )
    return matches


def _token_snippets(content: str, tokens: list[str], context_size: int) -> list[Snippet]:
    matches: list[Snippet] = []
    if not tokens:
        return matches

    patterns = [_pattern(t) for t in tokens]
    paragraphs = split_paragraphs(content)
    for i, paragraph in enumerate(paragraphs):
        if not paragraph.strip():
            continue
        hits = [m for m in (p.search(paragraph) for p in patterns) if m is not None]
        if not hits:
            continue

        text = paragraph
        if len(text) > context_size * 3:
            first = min(m.start() for m in hits)
            start = max(0, first - context_size)
            end = min(len(paragraph), first + context_size * 2)
            text = _bounded(paragraph, start, end)

        position_score = 1 - (i / len(paragraphs)) * POSITION_DECAY
        matches.append(
            Snippet(
                text=text,
                score=len(hits) * TERM_WEIGHT + position_score,
                position=i * PARAGRAPH_STRIDE,
            )
        )
    return matches


def _representative_snippets(content: str, context_size: int) -> list[Snippet]:
    sections = [s for s in split_paragraphs(content) if s.strip()]
    matches: list[Snippet] = []
    for idx, section in enumerate(sections[:MAX_REPRESENTATIVE]):
        text = section
        if len(text) > context_size * 2:
            text = text[: context_size * 2] + ELLIPSIS
        matches.append(
            Snippet(
                text=text,
                score=REPRESENTATIVE_BASE - idx * REPRESENTATIVE_STEP,
                position=idx * PARAGRAPH_STRIDE,
            )
        )
    return matches


def _is_duplicate(candidate: Snippet, kept: list[Snippet], context_size: int) -> bool:
    for existing in kept:
        if existing.text == candidate.text:
            return True
        if (
            abs(existing.position - candidate.position) < context_size / 2
            and existing.text
            and candidate.text
            and (existing.text in candidate.text or candidate.text in existing.text)
        ):
            return True
    return False


def dedupe_snippets(candidates: list[Snippet], context_size: int) -> list[Snippet]:
    """Keep the first of any identical or overlapping snippets."""
    unique: list[Snippet] = []
    for candidate in candidates:
        if not _is_duplicate(candidate, unique, context_size):
            unique.append(candidate)
    return unique


def extract_snippets(
    content: str,
    query: str,
    max_snippets: int = 3,
    context_size: int = 60,
) -> list[Snippet]:
    """Return up to max_snippets excerpts of content ranked by relevance.

    Deterministic for fixed inputs. Returns [] only for blank content.
    """
    if not content or not content.strip():
        logger.warning("Attempted to extract snippets from empty content")
        return []

    matches = _exact_phrase_snippets(content, query, context_size)

    if len(matches) < max_snippets:
        tokens = query_tokens(query)
        logger.debug("Trying token matches for %r with tokens: %s", query, tokens)
        matches.extend(_token_snippets(content, tokens, context_size))

    if not matches:
        logger.debug("No matches for %r, using representative content", query)
        matches = _representative_snippets(content, context_size)

    unique = dedupe_snippets(matches, context_size)
    unique.sort(key=lambda s: s.score, reverse=True)
    return unique[:max_snippets]
