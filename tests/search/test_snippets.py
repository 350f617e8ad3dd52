"""Tests for snippet extraction."""

import pytest

from local_search.models.search import Snippet
from local_search.search.snippets import (
    dedupe_snippets,
    extract_snippets,
    query_tokens,
    split_paragraphs,
)


class TestQueryTokens:
    def test_drops_short_words(self):
        assert query_tokens("an API for the web") == ["api", "for", "the", "web"]

    def test_distinct_in_order(self):
        assert query_tokens("Budget budget FORECAST") == ["budget", "forecast"]

    def test_no_tokens(self):
        assert query_tokens("a b c") == []


def test_split_paragraphs_on_blank_lines():
    assert split_paragraphs("one\n\ntwo\n   \nthree\nstill three") == [
        "one",
        "two",
        "three\nstill three",
    ]


class TestExactPhrase:
    def test_context_with_ellipses(self):
        content = "x" * 100 + "needle" + "y" * 100
        snippets = extract_snippets(content, "needle", max_snippets=1, context_size=10)

        assert len(snippets) == 1
        snippet = snippets[0]
        assert snippet.text == "..." + "x" * 10 + "needle" + "y" * 10 + "..."
        assert snippet.position == 100
        assert snippet.score == pytest.approx((1 - 100 / 206) + 0.2 + 0.5)

    def test_no_ellipsis_at_document_bounds(self):
        content = "the needle in a haystack"
        snippets = extract_snippets(content, "needle")
        assert snippets[0].text == content

    def test_case_insensitive_keeps_original_text(self):
        snippets = extract_snippets("Find the NEEDLE here", "needle")
        assert "NEEDLE" in snippets[0].text

    def test_earlier_occurrence_scores_higher(self):
        content = "needle" + " filler" * 50 + " needle" + " filler" * 50
        snippets = extract_snippets(content, "needle", max_snippets=2, context_size=10)

        assert [s.position for s in snippets] == [0, 357]
        assert snippets[0].score > snippets[1].score

    def test_overlapping_occurrences_collapse(self):
        snippets = extract_snippets("needle needle", "needle")
        assert len(snippets) == 1
        assert snippets[0].text == "needle needle"
        # Both occurrences fall inside the one snippet
        assert snippets[0].score == pytest.approx(1.0 + 2 * 0.2 + 0.5)

    def test_enough_phrase_matches_skip_token_pass(self):
        paragraphs = [f"Part: the annual report {i} follows." for i in range(3)]
        paragraphs.append("Another paragraph about the report alone.")
        content = "\n\n".join(paragraphs)

        snippets = extract_snippets(content, "annual report", max_snippets=3, context_size=5)

        assert len(snippets) == 3
        assert all("annual report" in s.text for s in snippets)

    def test_non_ascii_case_folding_keeps_offsets(self):
        content = "\u0130" * 100 + " the budget line"
        snippets = extract_snippets(content, "budget", max_snippets=3, context_size=5)

        phrase = next(s for s in snippets if s.position == 105)
        assert phrase.text == "... the budget line"
        assert all("budget" in s.text for s in snippets)
        assert all(s.score > 0 for s in snippets)


class TestTokenPass:
    def test_scores_paragraphs_by_token_and_position(self):
        content = "Intro paragraph.\n\nThe budget is tight.\n\nForecast says rain."
        snippets = extract_snippets(content, "budget forecast")

        assert [s.text for s in snippets] == ["The budget is tight.", "Forecast says rain."]
        assert snippets[0].position == 1000
        assert snippets[1].position == 2000
        assert snippets[0].score == pytest.approx(0.2 + 1 - (1 / 3) * 0.3)
        assert snippets[1].score == pytest.approx(0.2 + 1 - (2 / 3) * 0.3)

    def test_counts_each_distinct_token(self):
        content = "Budget and forecast together.\n\nOnly budget here."
        snippets = extract_snippets(content, "forecast budget")

        assert snippets[0].text == "Budget and forecast together."
        assert snippets[0].score == pytest.approx(0.4 + 1.0)

    def test_repeated_query_word_counts_once(self):
        snippets = extract_snippets("The budget is tight.", "budget budget")
        assert snippets[0].score == pytest.approx(0.2 + 1.0)

    def test_long_paragraph_windowed_around_first_match(self):
        paragraph = "a" * 200 + " budget " + "b" * 200
        snippets = extract_snippets(paragraph, "budget plan", context_size=20)

        text = snippets[0].text
        assert text.startswith("...")
        assert text.endswith("...")
        assert "budget" in text
        assert len(text) == 60 + 6

    def test_phrase_and_token_matches_combined(self):
        content = "Our budget plan is final.\n\nA budget appendix follows."
        snippets = extract_snippets(content, "budget plan")

        assert len(snippets) == 2
        assert "budget plan" in snippets[0].text
        assert snippets[0].score > 1.5
        assert snippets[1].text == "A budget appendix follows."


class TestRepresentativeFallback:
    def test_first_three_paragraphs(self):
        content = "First.\n\nSecond.\n\n\n\nThird.\n\nFourth."
        snippets = extract_snippets(content, "zzz")

        assert [s.text for s in snippets] == ["First.", "Second.", "Third."]
        assert [s.score for s in snippets] == pytest.approx([0.3, 0.2, 0.1])

    def test_long_section_truncated(self):
        snippets = extract_snippets("w" * 500, "zzz", context_size=10)
        assert snippets[0].text == "w" * 20 + "..."

    def test_short_query_without_tokens_falls_back(self):
        snippets = extract_snippets("Some text.", "zq")
        assert snippets[0].text == "Some text."
        assert snippets[0].score == pytest.approx(0.3)


class TestDedupe:
    def test_identical_text_dropped(self):
        snippets = [
            Snippet(text="same", score=1.0, position=0),
            Snippet(text="same", score=0.5, position=5000),
        ]
        assert dedupe_snippets(snippets, 60) == snippets[:1]

    def test_nearby_substring_dropped(self):
        snippets = [
            Snippet(text="alpha beta gamma", score=0.5, position=100),
            Snippet(text="beta", score=0.9, position=110),
        ]
        assert dedupe_snippets(snippets, 60) == snippets[:1]

    def test_distant_substring_kept(self):
        snippets = [
            Snippet(text="alpha beta gamma", score=0.5, position=100),
            Snippet(text="beta", score=0.9, position=130),
        ]
        assert dedupe_snippets(snippets, 60) == snippets

    def test_nearby_unrelated_kept(self):
        snippets = [
            Snippet(text="alpha", score=0.5, position=100),
            Snippet(text="gamma", score=0.9, position=101),
        ]
        assert dedupe_snippets(snippets, 60) == snippets


class TestExtractSnippets:
    @pytest.mark.parametrize("content", ["", "   ", "\n\n"])
    def test_blank_content(self, content):
        assert extract_snippets(content, "anything") == []

    def test_truncated_to_max_and_sorted(self):
        content = ("target " + "z" * 80 + " ") * 5
        snippets = extract_snippets(content, "target", max_snippets=2, context_size=10)

        assert len(snippets) == 2
        assert snippets[0].score >= snippets[1].score
        assert snippets[0].position == 0

    def test_deterministic(self):
        content = "Alpha beta.\n\nGamma alpha delta.\n\nBeta gamma."
        first = extract_snippets(content, "alpha gamma")
        second = extract_snippets(content, "alpha gamma")
        assert first == second
