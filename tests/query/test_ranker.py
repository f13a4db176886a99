"""
Tests for the Ranker: term-frequency scoring and stable top-N ranking.
"""

from __future__ import annotations

from scripture_qa.query.ranker import (
    PARTIAL_WEIGHT,
    TOP_N_PER_COLLECTION,
    WHOLE_WORD_WEIGHT,
    rank_records,
    score,
)
from scripture_qa.records.models import SayingRecord, VerseRecord


def _verse(n: int, text: str, title: str = "") -> VerseRecord:
    return VerseRecord(collection_number=1, item_number=n, primary_text=text, collection_title=title)


class TestScore:
    """score(text, terms)."""

    def test_whole_word_match(self) -> None:
        assert score("Seek help in patience", {"patience"}) == WHOLE_WORD_WEIGHT

    def test_partial_match(self) -> None:
        assert score("impatience", {"patience"}) == PARTIAL_WEIGHT

    def test_whole_and_partial_counted_separately(self) -> None:
        text = "patience and impatience"

        assert score(text, {"patience"}) == WHOLE_WORD_WEIGHT + PARTIAL_WEIGHT

    def test_case_insensitive(self) -> None:
        assert score("PATIENCE", {"Patience"}) == WHOLE_WORD_WEIGHT

    def test_short_terms_ignored(self) -> None:
        assert score("go to it", {"go", "to", "it"}) == 0

    def test_three_letter_term_counts(self) -> None:
        assert score("the sin", {"sin"}) == WHOLE_WORD_WEIGHT

    def test_sums_over_terms(self) -> None:
        text = "prayer and charity"

        assert score(text, {"prayer", "charity", "fasting"}) == 2 * WHOLE_WORD_WEIGHT

    def test_no_match_scores_zero(self) -> None:
        assert score("light upon light", {"mercy"}) == 0

    def test_regex_characters_in_terms_are_literal(self) -> None:
        text = "what does the quran say about patience?"

        assert score(text, {"patience?"}) > 0
        assert score("a.b", {"a+b"}) == 0

    def test_extra_whole_word_adds_exactly_ten(self) -> None:
        terms = {"patience", "mercy"}
        base = "patience brings mercy"
        more = base + " and patience"

        assert score(more, terms) - score(base, terms) == WHOLE_WORD_WEIGHT


class TestRankRecords:
    """rank_records(records, terms)."""

    def test_excludes_zero_scores(self) -> None:
        records = [_verse(1, "patience"), _verse(2, "light")]

        assert rank_records(records, {"patience"}) == [records[0]]

    def test_sorted_by_score_descending(self) -> None:
        records = [
            _verse(1, "impatience"),
            _verse(2, "patience patience"),
            _verse(3, "patience"),
        ]

        ranked = rank_records(records, {"patience"})

        assert [r.item_number for r in ranked] == [2, 3, 1]

    def test_ties_keep_load_order(self) -> None:
        records = [_verse(n, "be steadfast in patience") for n in (7, 3, 9, 1)]

        ranked = rank_records(records, {"patience"})

        assert [r.item_number for r in ranked] == [7, 3, 9, 1]

    def test_capped_at_top_n(self) -> None:
        records = [_verse(n, "patience") for n in range(10)]

        assert len(rank_records(records, {"patience"})) == TOP_N_PER_COLLECTION

    def test_collection_title_is_searched(self) -> None:
        records = [_verse(1, "Say: He is One", title="The Unity")]

        assert rank_records(records, {"unity"}) == records

    def test_saying_category_is_searched(self) -> None:
        saying = SayingRecord(category="Book of Fasting", identifier="1", body_text="x")

        assert rank_records([saying], {"fasting"}) == [saying]

    def test_only_short_terms_returns_nothing(self) -> None:
        assert rank_records([_verse(1, "an ox")], {"an", "ox"}) == []
