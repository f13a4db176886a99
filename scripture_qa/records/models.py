"""
Record models for the two static collections.

Both record types are frozen and carry an explicit ``kind`` discriminant,
so a SearchResult list can be dispatched on ``result.kind`` instead of
probing for fields.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final, Literal, Union

VERSE_KIND: Final = "verse"
SAYING_KIND: Final = "saying"

DEFAULT_HADITH_BOOK: Final[str] = "Hadith"
_BOOK_SUFFIX: Final[str] = " Book"


@dataclass(frozen=True, slots=True)
class VerseRecord:
    """A single Quran verse.

    Identity is (collection_number, item_number).

    Attributes:
        collection_number: Surah number.
        item_number: Verse (ayah) number within the surah.
        primary_text: English translation.
        secondary_text: Arabic text.
        collection_title: English surah name.
    """

    collection_number: int
    item_number: int
    primary_text: str
    secondary_text: str = ""
    collection_title: str = ""
    kind: Literal["verse"] = field(default=VERSE_KIND, init=False)

    @property
    def searchable_text(self) -> str:
        """Text the ranker scores: translation plus surah name."""
        return " ".join(p for p in (self.primary_text, self.collection_title) if p)


@dataclass(frozen=True, slots=True)
class SayingRecord:
    """A single hadith.

    (category, identifier) identifies a saying in practice, but the
    datasets do not guarantee uniqueness.
    """

    category: str
    identifier: str
    body_text: str
    source_url: str = ""
    kind: Literal["saying"] = field(default=SAYING_KIND, init=False)

    @property
    def book(self) -> str:
        """Collection name, e.g. "Sahih al-Bukhari" from "Sahih al-Bukhari Book 2"."""
        return self.category.split(_BOOK_SUFFIX)[0] or DEFAULT_HADITH_BOOK

    @property
    def searchable_text(self) -> str:
        """Text the ranker scores: body plus category."""
        return " ".join(p for p in (self.body_text, self.category) if p)


SearchResult = Union[VerseRecord, SayingRecord]


@dataclass(frozen=True, slots=True)
class RecordCollections:
    """Both collections, read-only once loaded."""

    verses: tuple[VerseRecord, ...] = ()
    sayings: tuple[SayingRecord, ...] = ()

    def counts(self) -> dict[str, int]:
        """Record count per collection."""
        return {"quran": len(self.verses), "hadith": len(self.sayings)}
