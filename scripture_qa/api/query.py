"""
Query Endpoints

POST /v1/query        - answer a free-text query
GET  /v1/suggestions  - fixed example queries
POST /v1/reload       - reload both datasets (retry after a failed startup load)

The display concerns live here, not in the QA service:
- bounded retry of QueryFailedError with a fixed delay
- source filter (both / quran / hadith) and max-results cap (5 / 10 / 15)
- fallback message plus suggestions on no match or exhausted retries
"""

import asyncio
import time
from typing import Annotated, Literal, Union

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from scripture_qa.core.config import Settings, get_settings
from scripture_qa.core.exceptions import (
    DataUnavailableError,
    NotReadyError,
    QueryFailedError,
)
from scripture_qa.core.logging import get_logger
from scripture_qa.records.models import SayingRecord, SearchResult, VerseRecord
from scripture_qa.service import (
    QAServiceProtocol,
    QueryOutcome,
    get_qa_service,
    load_from_settings,
)

logger = get_logger(__name__)

NO_MATCH_MESSAGE = "I couldn't find any relevant information matching your query."
ERROR_MESSAGE = (
    "I apologize, but I encountered an error while processing your query. "
    "Please try again."
)

SourceFilter = Literal["both", "quran", "hadith"]
_SOURCE_KINDS: dict[str, str] = {"quran": "verse", "hadith": "saying"}


# =============================================================================
# Request/Response Models
# =============================================================================


class QueryOptions(BaseModel):
    """Display options applied after the core has answered."""

    source: SourceFilter = Field(default="both", description="Collection filter")
    max_results: Literal[5, 10, 15] = Field(default=10, description="Result cap")


class QueryRequest(BaseModel):
    """Request body for the query endpoint."""

    query: str = Field(..., min_length=1, description="Free-text query")
    options: QueryOptions | None = None


class VerseResultItem(BaseModel):
    """A Quran verse in a query response."""

    kind: Literal["verse"] = "verse"
    surah: int
    verse: int
    english: str
    arabic: str = ""
    surah_name: str = ""


class SayingResultItem(BaseModel):
    """A hadith in a query response."""

    kind: Literal["saying"] = "saying"
    book: str
    number: str
    english: str
    category: str = ""
    reference: str = ""


ResultItem = Annotated[
    Union[VerseResultItem, SayingResultItem],
    Field(discriminator="kind"),
]


class QueryMetadata(BaseModel):
    """Metadata about the query execution."""

    processing_time_ms: float
    attempts: int
    total_results: int = 0


class QueryResponse(BaseModel):
    """Response from the query endpoint."""

    outcome: Literal["results", "no_match", "error"]
    results: list[ResultItem] = Field(default_factory=list)
    message: str | None = None
    suggestions: list[str] = Field(default_factory=list)
    metadata: QueryMetadata


class SuggestionsResponse(BaseModel):
    """Example queries."""

    suggestions: list[str]


class ReloadResponse(BaseModel):
    """Result of a dataset reload."""

    status: str
    collections: dict[str, int]


# =============================================================================
# Helpers
# =============================================================================


def to_result_item(result: SearchResult) -> VerseResultItem | SayingResultItem:
    """Convert a core record into its response model."""
    if isinstance(result, VerseRecord):
        return VerseResultItem(
            surah=result.collection_number,
            verse=result.item_number,
            english=result.primary_text,
            arabic=result.secondary_text,
            surah_name=result.collection_title,
        )
    if isinstance(result, SayingRecord):
        return SayingResultItem(
            book=result.book,
            number=result.identifier,
            english=result.body_text,
            category=result.category,
            reference=result.source_url,
        )
    raise TypeError(f"Unsupported result type: {type(result).__name__}")


def apply_display_options(
    results: tuple[SearchResult, ...] | list[SearchResult],
    options: QueryOptions,
) -> list[SearchResult]:
    """Filter results to the chosen collection, then cap them.

    Args:
        results: Results from the core, verses first.
        options: Source filter and max-results cap.

    Returns:
        At most ``options.max_results`` results of the chosen source.
    """
    if options.source == "both":
        filtered = list(results)
    else:
        wanted = _SOURCE_KINDS[options.source]
        filtered = [r for r in results if r.kind == wanted]
    return filtered[: options.max_results]


async def answer_with_retry(
    service: QAServiceProtocol,
    query: str,
    max_retries: int,
    retry_delay: float,
) -> tuple[QueryOutcome | None, int]:
    """Run a query, retrying QueryFailedError up to ``max_retries`` more times.

    Args:
        service: QA service to ask.
        query: Raw query text.
        max_retries: Additional attempts after the first failure.
        retry_delay: Fixed delay between attempts in seconds.

    Returns:
        Tuple of (outcome or None when every attempt failed, attempts made)

    Raises:
        NotReadyError: If the service has no collections loaded.
    """
    attempts = 0
    for attempt in range(max_retries + 1):
        attempts += 1
        try:
            return await service.process_query(query), attempts
        except QueryFailedError as e:
            if attempt < max_retries:
                logger.warning("query_retry", query=query, attempt=attempts, error=str(e))
                await asyncio.sleep(retry_delay)
            else:
                logger.error("query_gave_up", query=query, attempts=attempts, error=str(e))
    return None, attempts


# =============================================================================
# Router
# =============================================================================

query_router = APIRouter(prefix="/v1", tags=["query"])


@query_router.post("/query", response_model=QueryResponse)
async def query(
    request: QueryRequest,
    service: QAServiceProtocol = Depends(get_qa_service),
    settings: Settings = Depends(get_settings),
) -> QueryResponse:
    """Answer a free-text query.

    Returns:
        QueryResponse with outcome "results", "no_match" or "error"

    Raises:
        HTTPException: 503 if the collections are not loaded yet
    """
    start_time = time.perf_counter()
    options = request.options or QueryOptions()

    try:
        outcome, attempts = await answer_with_retry(
            service,
            request.query,
            max_retries=settings.query_max_retries,
            retry_delay=settings.query_retry_delay,
        )
    except NotReadyError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e)
        ) from e

    elapsed_ms = (time.perf_counter() - start_time) * 1000

    if outcome is None:
        return QueryResponse(
            outcome="error",
            message=ERROR_MESSAGE,
            suggestions=service.get_suggestions(),
            metadata=QueryMetadata(processing_time_ms=elapsed_ms, attempts=attempts),
        )

    if not outcome.is_match:
        return QueryResponse(
            outcome="no_match",
            message=NO_MATCH_MESSAGE,
            suggestions=list(outcome.suggestions),
            metadata=QueryMetadata(processing_time_ms=elapsed_ms, attempts=attempts),
        )

    items = [to_result_item(r) for r in apply_display_options(outcome.results, options)]
    return QueryResponse(
        outcome="results",
        results=items,
        metadata=QueryMetadata(
            processing_time_ms=elapsed_ms,
            attempts=attempts,
            total_results=len(items),
        ),
    )


@query_router.get("/suggestions", response_model=SuggestionsResponse)
async def suggestions(
    service: QAServiceProtocol = Depends(get_qa_service),
) -> SuggestionsResponse:
    """Example queries for onboarding chips."""
    return SuggestionsResponse(suggestions=service.get_suggestions())


@query_router.post(
    "/reload",
    response_model=ReloadResponse,
    responses={503: {"description": "A dataset could not be loaded"}},
)
async def reload(
    service: QAServiceProtocol = Depends(get_qa_service),
    settings: Settings = Depends(get_settings),
) -> ReloadResponse:
    """Reload both datasets from the configured sources.

    Raises:
        HTTPException: 503 if either dataset cannot be fetched or parsed
    """
    try:
        collections = await load_from_settings(service, settings)
    except DataUnavailableError as e:
        logger.error("records_load_failed", source=e.source, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e)
        ) from e

    return ReloadResponse(status="loaded", collections=collections.counts())
