"""
Ranker - term-frequency scoring over the loaded records.

Scoring, per expanded term longer than MIN_TERM_LENGTH characters:
- whole-word occurrence (word-boundary delimited): WHOLE_WORD_WEIGHT each
- in-word occurrence (substring that is not a whole word): PARTIAL_WEIGHT each

Ties keep load order: sorted() is stable and only the score is used as key.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Final, TypeVar

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from scripture_qa.records.models import SayingRecord, VerseRecord

WHOLE_WORD_WEIGHT: Final[int] = 10
PARTIAL_WEIGHT: Final[int] = 3
MIN_TERM_LENGTH: Final[int] = 2
TOP_N_PER_COLLECTION: Final[int] = 5

RecordT = TypeVar("RecordT", "VerseRecord", "SayingRecord")


def searchable_terms(terms: Iterable[str]) -> list[str]:
    """Lowercased terms long enough to score."""
    return [term.lower() for term in terms if len(term) > MIN_TERM_LENGTH]


def score(text: str, terms: Iterable[str]) -> int:
    """Score text against a set of search terms.

    Args:
        text: Text to scan (any case).
        terms: Expanded search terms; terms of two characters or fewer are ignored.

    Returns:
        Sum over terms of whole-word hits x 10 plus in-word hits x 3.

    Example:
        >>> score("Be patient, for patience is light", {"patience"})
        10
        >>> score("impatience", {"patience"})
        3
    """
    lower_text = text.lower()
    total = 0
    for term in searchable_terms(terms):
        escaped = re.escape(term)
        whole = len(re.findall(rf"\b{escaped}\b", lower_text))
        anywhere = len(re.findall(escaped, lower_text))
        total += whole * WHOLE_WORD_WEIGHT + max(anywhere - whole, 0) * PARTIAL_WEIGHT
    return total


def rank_records(
    records: Sequence[RecordT],
    terms: Iterable[str],
    limit: int = TOP_N_PER_COLLECTION,
) -> list[RecordT]:
    """Rank records by score, dropping non-matches.

    Args:
        records: One collection, in load order.
        terms: Expanded search terms.
        limit: Maximum records returned.

    Returns:
        Up to ``limit`` records with score > 0, highest score first; ties
        keep load order.
    """
    term_list = searchable_terms(terms)
    if not term_list:
        return []

    scored = [(score(record.searchable_text, term_list), record) for record in records]
    ranked = sorted(
        (item for item in scored if item[0] > 0),
        key=lambda item: item[0],
        reverse=True,
    )
    return [record for _, record in ranked[:limit]]
