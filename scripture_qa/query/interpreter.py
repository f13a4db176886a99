"""
Query Interpreter - turns raw user text into a StructuredQuery.

Classification rules, first match wins:
1. citation present (see reference.parse_reference) -> quran / reference
2. any hadith marker                                -> hadith / detect_query_type
3. any quran marker                                 -> quran  / detect_query_type
4. otherwise                                        -> both   / detect_query_type

The citation check runs before the marker checks, so mixed text such as
"tell me about 2:255 and patience" is treated as a reference lookup.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from scripture_qa.query.reference import Citation, parse_reference
from scripture_qa.query.vocabulary import QueryVocabulary


class QueryScope(str, Enum):
    """Which collection(s) a query searches."""

    QURAN = "quran"
    HADITH = "hadith"
    BOTH = "both"


class QueryKind(str, Enum):
    """How a query is answered.

    MEANING and SEARCH are ranked the same way today; the split is kept for
    API consumers.
    """

    REFERENCE = "reference"
    MEANING = "meaning"
    SEARCH = "search"


@dataclass(frozen=True, slots=True)
class StructuredQuery:
    """Interpreted form of one user query. Built fresh per call."""

    scope: QueryScope
    kind: QueryKind
    normalized_text: str
    expanded_terms: frozenset[str]
    citation: Citation | None = None


class QueryInterpreter:
    """Rule-based query classifier and term expander.

    Usage:
        interpreter = QueryInterpreter(QueryVocabulary.default())
        query = interpreter.interpret("Hadith about charity")
        query.scope   # QueryScope.HADITH
    """

    __slots__ = ("_vocabulary",)

    def __init__(self, vocabulary: QueryVocabulary | None = None) -> None:
        self._vocabulary = vocabulary or QueryVocabulary.default()

    @property
    def vocabulary(self) -> QueryVocabulary:
        return self._vocabulary

    def interpret(self, raw: str) -> StructuredQuery:
        """Classify a raw query and expand its terms.

        Args:
            raw: Text as typed by the user.

        Returns:
            StructuredQuery with scope, kind, normalized text, expanded
            terms, and a citation for reference queries.
        """
        text = raw.strip().lower()
        terms = self.expand_query(text)

        citation = parse_reference(text)
        if citation is not None:
            return StructuredQuery(
                scope=QueryScope.QURAN,
                kind=QueryKind.REFERENCE,
                normalized_text=text,
                expanded_terms=terms,
                citation=citation,
            )

        if _contains_any(text, self._vocabulary.hadith_markers):
            scope = QueryScope.HADITH
        elif _contains_any(text, self._vocabulary.quran_markers):
            scope = QueryScope.QURAN
        else:
            scope = QueryScope.BOTH

        return StructuredQuery(
            scope=scope,
            kind=self.detect_query_type(text),
            normalized_text=text,
            expanded_terms=terms,
        )

    def detect_query_type(self, text: str) -> QueryKind:
        """MEANING if the text asks for an explanation, else SEARCH."""
        if _contains_any(text.lower(), self._vocabulary.meaning_cues):
            return QueryKind.MEANING
        return QueryKind.SEARCH

    def expand_query(self, text: str) -> frozenset[str]:
        """Expand a query with every synonym group it touches.

        A group is pulled in whole when any of its synonyms occurs anywhere in
        the query as a substring, so "good" brings in all of righteousness.
        The lowercased query itself is always part of the result.
        """
        lowered = text.lower()
        expanded = {lowered}
        for synonyms in self._vocabulary.synonym_groups():
            if _contains_any(lowered, synonyms):
                expanded.update(synonyms)
        return frozenset(expanded)


def _contains_any(text: str, needles: tuple[str, ...]) -> bool:
    return any(needle in text for needle in needles)
