"""
QA Service - the query pipeline over the loaded collections.

    raw text -> QueryInterpreter -> reference lookup (citations)
                                 -> ranker per scope   (everything else)
             -> QueryOutcome (results, or suggestions on no match)

process_query is a pure function of (query, collections, vocabulary): it
keeps no per-query state, so a caller may retry it freely.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final, Protocol

from scripture_qa.clients import DatasetClient
from scripture_qa.core.exceptions import NotReadyError, QueryFailedError
from scripture_qa.core.logging import get_logger
from scripture_qa.query.interpreter import (
    QueryInterpreter,
    QueryKind,
    QueryScope,
    StructuredQuery,
)
from scripture_qa.query.ranker import rank_records
from scripture_qa.query.reference import lookup_reference
from scripture_qa.records.models import RecordCollections
from scripture_qa.records.store import load_records

if TYPE_CHECKING:
    from scripture_qa.clients import DatasetClientProtocol
    from scripture_qa.core.config import Settings
    from scripture_qa.query.vocabulary import QueryVocabulary
    from scripture_qa.records.models import SearchResult

logger = get_logger(__name__)

SUGGESTIONS: Final[tuple[str, ...]] = (
    "Tell me about prayer",
    "What does the Quran say about patience?",
    "Hadith about charity",
    "Verses about forgiveness",
    "Surah 2:255",
    "Paradise in Islam",
    "Fasting in Ramadan",
    "Importance of knowledge",
)


@dataclass(frozen=True, slots=True)
class QueryOutcome:
    """Answer to one query.

    Attributes:
        query: How the query was interpreted.
        results: Matching records; verses before sayings when both are searched.
        suggestions: Example queries, only populated when nothing matched.
    """

    query: StructuredQuery
    results: tuple[SearchResult, ...]
    suggestions: tuple[str, ...] = ()

    @property
    def is_match(self) -> bool:
        return bool(self.results)


# =============================================================================
# Protocol
# =============================================================================


class QAServiceProtocol(Protocol):
    """What the API layer needs from the service."""

    @property
    def is_ready(self) -> bool: ...

    def counts(self) -> dict[str, int]: ...

    async def load(
        self,
        client: DatasetClientProtocol,
        quran_source: str,
        hadith_source: str,
    ) -> RecordCollections: ...

    async def process_query(self, raw: str) -> QueryOutcome: ...

    def get_suggestions(self) -> list[str]: ...


# =============================================================================
# Main Implementation
# =============================================================================


class QAService:
    """Holds the loaded collections and answers queries against them.

    The collections are replaced as a whole on (re)load and never mutated,
    so queries read them without locking. Loads are serialized: a reload
    that arrives while another is fetching waits for it to finish.
    """

    def __init__(self, vocabulary: QueryVocabulary | None = None) -> None:
        self._interpreter = QueryInterpreter(vocabulary)
        self._collections: RecordCollections | None = None
        self._load_lock = asyncio.Lock()

    @property
    def is_ready(self) -> bool:
        return self._collections is not None

    @property
    def interpreter(self) -> QueryInterpreter:
        return self._interpreter

    def counts(self) -> dict[str, int]:
        """Loaded record counts, empty before the first load."""
        if self._collections is None:
            return {}
        return self._collections.counts()

    def set_collections(self, collections: RecordCollections) -> None:
        """Install already-built collections (startup or tests)."""
        self._collections = collections

    async def load(
        self,
        client: DatasetClientProtocol,
        quran_source: str,
        hadith_source: str,
    ) -> RecordCollections:
        """Fetch both datasets and make the service ready.

        On failure the previous collections (if any) stay in place.

        Raises:
            DataUnavailableError: If either dataset cannot be fetched or parsed.
        """
        async with self._load_lock:
            collections = await load_records(client, quran_source, hadith_source)
            self._collections = collections
            return collections

    async def process_query(self, raw: str) -> QueryOutcome:
        """Answer a raw query.

        Args:
            raw: Text as typed by the user.

        Returns:
            QueryOutcome; an empty result set carries the suggestion list.

        Raises:
            NotReadyError: If the collections have not been loaded.
            QueryFailedError: If interpretation or scoring fails unexpectedly.
        """
        collections = self._collections
        if collections is None:
            raise NotReadyError("Record collections are not loaded yet")

        try:
            query = self._interpreter.interpret(raw)
            results = self._search(query, collections)
        except Exception as e:
            logger.error("query_failed", query=raw, error=str(e))
            raise QueryFailedError(f"Failed to process query: {e}") from e

        logger.info(
            "query_processed",
            query=raw,
            scope=query.scope.value,
            kind=query.kind.value,
            result_count=len(results),
        )

        if not results:
            return QueryOutcome(query=query, results=(), suggestions=SUGGESTIONS)
        return QueryOutcome(query=query, results=results)

    def _search(
        self,
        query: StructuredQuery,
        collections: RecordCollections,
    ) -> tuple[SearchResult, ...]:
        if query.kind is QueryKind.REFERENCE and query.citation is not None:
            return lookup_reference(collections.verses, query.citation)

        results: list[SearchResult] = []
        if query.scope in (QueryScope.QURAN, QueryScope.BOTH):
            results.extend(rank_records(collections.verses, query.expanded_terms))
        if query.scope in (QueryScope.HADITH, QueryScope.BOTH):
            results.extend(rank_records(collections.sayings, query.expanded_terms))
        return tuple(results)

    def get_suggestions(self) -> list[str]:
        """Fixed example queries for onboarding and fallback."""
        return list(SUGGESTIONS)


# =============================================================================
# Test Double
# =============================================================================


class FakeQAService:
    """Fake QA service for API tests.

    Raises each exception in ``failures`` on successive process_query calls,
    then returns ``outcome``. load() records its sources and either raises
    ``load_error`` or installs ``collections``.

    Usage:
        fake = FakeQAService(outcome=..., failures=[QueryFailedError("boom")])
    """

    def __init__(
        self,
        outcome: QueryOutcome | None = None,
        failures: list[Exception] | None = None,
        ready: bool = True,
        collections: RecordCollections | None = None,
        load_error: Exception | None = None,
    ) -> None:
        self._outcome = outcome
        self._failures = list(failures) if failures else []
        self._ready = ready
        self._collections = collections or RecordCollections()
        self._load_error = load_error
        self.calls: list[str] = []
        self.loads: list[tuple[str, str]] = []

    @property
    def is_ready(self) -> bool:
        return self._ready

    def counts(self) -> dict[str, int]:
        return self._collections.counts() if self._ready else {}

    async def load(
        self,
        client: DatasetClientProtocol,
        quran_source: str,
        hadith_source: str,
    ) -> RecordCollections:
        await asyncio.sleep(0)
        self.loads.append((quran_source, hadith_source))
        if self._load_error is not None:
            raise self._load_error
        self._ready = True
        return self._collections

    async def process_query(self, raw: str) -> QueryOutcome:
        await asyncio.sleep(0)
        self.calls.append(raw)
        if not self._ready:
            raise NotReadyError("Record collections are not loaded yet")
        if self._failures:
            raise self._failures.pop(0)
        if self._outcome is None:
            raise QueryFailedError("FakeQAService has no outcome configured")
        return self._outcome

    def get_suggestions(self) -> list[str]:
        return list(SUGGESTIONS)


# Process-wide service instance, replaced via dependency overrides in tests
_qa_service = QAService()


def get_qa_service() -> QAService:
    """Get the QA service instance.

    Pattern: Dependency injection per FastAPI patterns
    """
    return _qa_service


async def load_from_settings(
    service: QAServiceProtocol, settings: Settings
) -> RecordCollections:
    """Load (or reload) the service's collections from the configured sources.

    Raises:
        DataUnavailableError: If either dataset cannot be fetched or parsed.
    """
    client = DatasetClient(
        timeout=settings.dataset_timeout,
        max_retries=settings.dataset_max_retries,
        retry_delay=settings.dataset_retry_delay,
    )
    try:
        return await service.load(client, settings.quran_source, settings.hadith_source)
    finally:
        await client.close()


def configure_qa_service(vocabulary: QueryVocabulary | None = None) -> QAService:
    """Replace the process-wide service with one using ``vocabulary``.

    Called once from the application lifespan, before the first load.
    """
    global _qa_service
    _qa_service = QAService(vocabulary)
    return _qa_service
