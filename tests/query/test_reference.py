"""
Tests for the Reference Resolver: citation parsing and exact verse lookup.
"""

from __future__ import annotations

import pytest

from scripture_qa.query.reference import Citation, lookup_reference, parse_reference
from scripture_qa.records.models import VerseRecord


@pytest.fixture
def verses() -> tuple[VerseRecord, ...]:
    """Surah 2 with 12 verses, then surah 3 verse 1."""
    surah_two = tuple(
        VerseRecord(collection_number=2, item_number=n, primary_text=f"verse {n}")
        for n in range(1, 13)
    )
    return surah_two + (VerseRecord(collection_number=3, item_number=1, primary_text="alif"),)


class TestParseReference:
    """Citation shapes and their precedence."""

    @pytest.mark.parametrize(
        "text",
        ["Surah 2:255", "Surah 2 verse 255", "surah 2 ayah 255", "2:255", "sura 2:255"],
    )
    def test_surah_and_verse(self, text: str) -> None:
        assert parse_reference(text) == Citation(number=2, item=255)

    def test_surah_word_optional_with_verse_keyword(self) -> None:
        assert parse_reference("2 verse 255") == Citation(number=2, item=255)

    def test_surah_alone(self) -> None:
        assert parse_reference("surah 18") == Citation(number=18, item=None)

    def test_surah_without_space(self) -> None:
        assert parse_reference("surah18") == Citation(number=18)

    def test_no_citation(self) -> None:
        assert parse_reference("mercy") is None

    def test_bare_number_is_not_a_citation(self) -> None:
        assert parse_reference("the 5 pillars") is None

    def test_embedded_citation_found(self) -> None:
        assert parse_reference("tell me about 2:255 and patience") == Citation(2, 255)

    def test_out_of_range_numbers_not_validated(self) -> None:
        assert parse_reference("surah 999 verse 9999") == Citation(number=999, item=9999)


class TestLookupReference:
    """Exact lookup against the verse collection."""

    def test_exact_verse(self, verses: tuple[VerseRecord, ...]) -> None:
        result = lookup_reference(verses, Citation(number=2, item=7))

        assert [(v.collection_number, v.item_number) for v in result] == [(2, 7)]

    def test_whole_surah_capped_at_ten_in_order(self, verses: tuple[VerseRecord, ...]) -> None:
        result = lookup_reference(verses, Citation(number=2))

        assert [v.item_number for v in result] == list(range(1, 11))

    def test_other_surah(self, verses: tuple[VerseRecord, ...]) -> None:
        result = lookup_reference(verses, Citation(number=3))

        assert [v.primary_text for v in result] == ["alif"]

    def test_out_of_range_yields_nothing(self, verses: tuple[VerseRecord, ...]) -> None:
        assert lookup_reference(verses, Citation(number=2, item=255)) == ()
        assert lookup_reference(verses, Citation(number=114)) == ()

    def test_custom_limit(self, verses: tuple[VerseRecord, ...]) -> None:
        assert len(lookup_reference(verses, Citation(number=2), limit=3)) == 3
