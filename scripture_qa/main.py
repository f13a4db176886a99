"""
Scripture QA Service - Main Application Entry Point

uvicorn scripture_qa.main:app

Startup loads the vocabulary and both datasets once. A dataset failure is
logged and leaves the service not-ready (/ready returns 503) instead of
stopping the process; POST /v1/reload retries the whole load.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from scripture_qa.api.health import router as health_router
from scripture_qa.api.query import query_router
from scripture_qa.core.config import get_settings
from scripture_qa.core.exceptions import DataUnavailableError
from scripture_qa.core.logging import configure_logging, get_logger
from scripture_qa.query.vocabulary import load_vocabulary
from scripture_qa.service import configure_qa_service, load_from_settings

settings = get_settings()

configure_logging(
    log_level=settings.log_level,
    json_output=settings.log_json,
    service_name=settings.service_name,
)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Load vocabulary and datasets on startup."""
    logger.info(
        "startup",
        service=settings.service_name,
        version=settings.version,
        environment=settings.environment,
    )

    # ConfigurationError here is fatal: a bad vocabulary file should stop startup
    vocabulary = load_vocabulary(settings.vocabulary_path)
    service = configure_qa_service(vocabulary)

    try:
        await load_from_settings(service, settings)
    except DataUnavailableError as e:
        logger.error("records_load_failed", source=e.source, error=str(e))

    app.state.initialized = True
    app.state.environment = settings.environment

    yield

    logger.info("shutdown", service=settings.service_name)
    app.state.initialized = False


app = FastAPI(
    title="Scripture-QA-Service",
    description="Keyword question answering over Quran verses and Hadith",
    version=settings.version,
    docs_url="/docs" if settings.environment != "production" else None,
    redoc_url="/redoc" if settings.environment != "production" else None,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.environment == "development" else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router)
app.include_router(query_router)


@app.get("/", include_in_schema=False)
async def root() -> dict[str, str]:
    """Root endpoint redirecting to docs."""
    return {
        "service": settings.service_name,
        "version": settings.version,
        "docs": "/docs",
    }
