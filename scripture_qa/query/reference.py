"""
Reference Resolver - citation detection and exact verse lookup.

Recognized citation shapes, tried in order (first match wins):
1. "surah 2 verse 255", "2 ayah 255", "surah 2:255"  -> surah 2, verse 255
2. "2:255"                                           -> surah 2, verse 255
3. "surah 18", "sura 18"                             -> surah 18, all verses

Numbers are not checked against the collection; an out-of-range citation
simply matches nothing.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Iterable

    from scripture_qa.records.models import VerseRecord

REFERENCE_LOOKUP_LIMIT: Final[int] = 10

CITATION_PATTERNS: Final[tuple[re.Pattern[str], ...]] = (
    re.compile(r"(?:surah?\s*)?(\d+)(?::|\s+(?:verse|ayah)\s+)(\d+)", re.IGNORECASE),
    re.compile(r"(\d+):(\d+)"),
    re.compile(r"surah?\s*(\d+)", re.IGNORECASE),
)


@dataclass(frozen=True, slots=True)
class Citation:
    """A structural reference into the Quran.

    Attributes:
        number: Surah number.
        item: Verse number, or None for the whole surah.
    """

    number: int
    item: int | None = None


def parse_reference(text: str) -> Citation | None:
    """Extract a citation from free text.

    Args:
        text: Query text (any case).

    Returns:
        The first Citation found, or None.

    Example:
        >>> parse_reference("Surah 2:255")
        Citation(number=2, item=255)
        >>> parse_reference("surah 18")
        Citation(number=18, item=None)
    """
    for pattern in CITATION_PATTERNS:
        match = pattern.search(text)
        if match is None:
            continue
        item = match.group(2) if pattern.groups > 1 else None
        return Citation(
            number=int(match.group(1)),
            item=int(item) if item is not None else None,
        )
    return None


def lookup_reference(
    verses: Iterable[VerseRecord],
    citation: Citation,
    limit: int = REFERENCE_LOOKUP_LIMIT,
) -> tuple[VerseRecord, ...]:
    """Return the verses a citation points at, in file order.

    Args:
        verses: The loaded Quran collection.
        citation: Surah (and optionally verse) to match exactly.
        limit: Maximum verses returned.

    Returns:
        At most ``limit`` matching verses.
    """
    matches: list[VerseRecord] = []
    for verse in verses:
        if verse.collection_number != citation.number:
            continue
        if citation.item is not None and verse.item_number != citation.item:
            continue
        matches.append(verse)
        if len(matches) >= limit:
            break
    return tuple(matches)
