"""Query understanding and ranking: interpreter, reference resolver, ranker."""
from scripture_qa.query.interpreter import (
    QueryInterpreter,
    QueryKind,
    QueryScope,
    StructuredQuery,
)
from scripture_qa.query.ranker import rank_records, score
from scripture_qa.query.reference import Citation, lookup_reference, parse_reference
from scripture_qa.query.vocabulary import QueryVocabulary, load_vocabulary

__all__ = [
    "Citation",
    "QueryInterpreter",
    "QueryKind",
    "QueryScope",
    "QueryVocabulary",
    "StructuredQuery",
    "load_vocabulary",
    "lookup_reference",
    "parse_reference",
    "rank_records",
    "score",
]
