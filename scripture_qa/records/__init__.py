"""Record Store: typed collections parsed from the delimited datasets."""
from scripture_qa.records.delimited import parse_delimited, split_fields
from scripture_qa.records.models import (
    RecordCollections,
    SayingRecord,
    SearchResult,
    VerseRecord,
)
from scripture_qa.records.store import (
    build_collections,
    load_records,
    parse_sayings,
    parse_verses,
)

__all__ = [
    "RecordCollections",
    "SayingRecord",
    "SearchResult",
    "VerseRecord",
    "build_collections",
    "load_records",
    "parse_delimited",
    "parse_sayings",
    "parse_verses",
    "split_fields",
]
