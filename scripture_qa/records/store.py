"""
Record Store - builds the typed, immutable collections from raw payloads.

Column mapping (dataset header -> record field):

    quran.csv:  surah_no -> collection_number, ayah_no_surah -> item_number,
                ayah_en -> primary_text, ayah_ar -> secondary_text,
                surah_name_en -> collection_title
    hadith.csv: category, number -> identifier, page_content -> body_text,
                url -> source_url
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from scripture_qa.core.exceptions import DataUnavailableError
from scripture_qa.core.logging import get_logger
from scripture_qa.records.delimited import parse_delimited
from scripture_qa.records.models import RecordCollections, SayingRecord, VerseRecord

if TYPE_CHECKING:
    from scripture_qa.clients import DatasetClientProtocol

logger = get_logger(__name__)

QURAN_REQUIRED_COLUMNS: Final[tuple[str, ...]] = ("surah_no", "ayah_no_surah", "ayah_en")
HADITH_REQUIRED_COLUMNS: Final[tuple[str, ...]] = ("page_content",)


def _rows(text: str, name: str, required: tuple[str, ...]) -> list[dict[str, str]]:
    if not text.strip():
        raise DataUnavailableError(f"{name} dataset is empty", source=name)

    rows = parse_delimited(text)
    if rows:
        missing = [column for column in required if column not in rows[0]]
        if missing:
            raise DataUnavailableError(
                f"{name} dataset is missing columns: {', '.join(missing)}",
                source=name,
            )
    return rows


def parse_verses(text: str) -> tuple[VerseRecord, ...]:
    """Parse the Quran payload into VerseRecords.

    Rows whose surah or ayah number is not an integer are skipped.

    Raises:
        DataUnavailableError: If the payload is empty or lacks required columns.
    """
    verses: list[VerseRecord] = []
    for index, row in enumerate(_rows(text, "quran", QURAN_REQUIRED_COLUMNS), start=1):
        try:
            collection_number = int(row["surah_no"])
            item_number = int(row["ayah_no_surah"])
        except ValueError:
            logger.warning(
                "record_skipped",
                dataset="quran",
                row=index,
                surah_no=row["surah_no"],
                ayah_no_surah=row["ayah_no_surah"],
            )
            continue

        verses.append(
            VerseRecord(
                collection_number=collection_number,
                item_number=item_number,
                primary_text=row["ayah_en"],
                secondary_text=row.get("ayah_ar", ""),
                collection_title=row.get("surah_name_en", ""),
            )
        )
    return tuple(verses)


def parse_sayings(text: str) -> tuple[SayingRecord, ...]:
    """Parse the Hadith payload into SayingRecords.

    Raises:
        DataUnavailableError: If the payload is empty or lacks required columns.
    """
    return tuple(
        SayingRecord(
            category=row.get("category", ""),
            identifier=row.get("number", ""),
            body_text=row["page_content"],
            source_url=row.get("url", ""),
        )
        for row in _rows(text, "hadith", HADITH_REQUIRED_COLUMNS)
    )


def build_collections(quran_text: str, hadith_text: str) -> RecordCollections:
    """Build both collections from already-fetched payloads."""
    return RecordCollections(
        verses=parse_verses(quran_text),
        sayings=parse_sayings(hadith_text),
    )


async def load_records(
    client: DatasetClientProtocol,
    quran_source: str,
    hadith_source: str,
) -> RecordCollections:
    """Fetch and parse both datasets.

    The two fetches run one after the other; a failure in the first means
    the second is never attempted.

    Args:
        client: Client used to fetch each raw payload.
        quran_source: URL or path of the Quran dataset.
        hadith_source: URL or path of the Hadith dataset.

    Returns:
        The loaded RecordCollections.

    Raises:
        DataUnavailableError: If either dataset cannot be fetched or parsed.
    """
    quran_text = await client.fetch_text(quran_source)
    hadith_text = await client.fetch_text(hadith_source)

    collections = build_collections(quran_text, hadith_text)
    logger.info("records_loaded", **collections.counts())
    return collections
