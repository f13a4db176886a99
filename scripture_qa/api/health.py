"""
Scripture QA Service - Health API Routes

GET /health - liveness, always 200 while the process runs
GET /ready  - readiness, 503 until both collections are loaded

Patterns Applied:
- Health Check Pattern with Pydantic response models
- Readiness derived from the QA service instead of a separate flag
"""

from typing import Any

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from scripture_qa.core.config import Settings, get_settings
from scripture_qa.core.logging import get_logger
from scripture_qa.service import QAServiceProtocol, get_qa_service

router = APIRouter(tags=["health"])

logger = get_logger(__name__)


# =============================================================================
# Response Models
# =============================================================================


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str
    service: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    checks: dict[str, bool]
    collections: dict[str, int] | None = None


def build_readiness(service: QAServiceProtocol) -> tuple[dict[str, Any], bool]:
    """Readiness payload for a QA service.

    Returns:
        Tuple of (readiness dict, is_ready bool)
    """
    checks = {"records_loaded": service.is_ready}
    is_ready = all(checks.values())

    result: dict[str, Any] = {
        "status": "ready" if is_ready else "not_ready",
        "checks": checks,
    }
    if is_ready:
        result["collections"] = service.counts()
    return result, is_ready


# =============================================================================
# Endpoints
# =============================================================================


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health Check",
    description="Basic health check endpoint for liveness probe",
)
async def health_check(settings: Settings = Depends(get_settings)) -> HealthResponse:
    """Health check endpoint."""
    logger.debug("health_check", status="healthy")
    return HealthResponse(
        status="healthy",
        version=settings.version,
        service=settings.service_name,
    )


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={
        200: {"description": "Service is ready"},
        503: {"description": "Record collections are not loaded"},
    },
    summary="Readiness Check",
    description="Readiness check endpoint for readiness probe",
)
async def readiness_check(
    service: QAServiceProtocol = Depends(get_qa_service),
) -> JSONResponse:
    """Readiness check endpoint.

    Returns:
        200 if the collections are loaded, 503 otherwise
    """
    data, is_ready = build_readiness(service)
    status_code = status.HTTP_200_OK if is_ready else status.HTTP_503_SERVICE_UNAVAILABLE

    logger.debug("readiness_check", status=data["status"], is_ready=is_ready)
    return JSONResponse(content=data, status_code=status_code)
