"""
Health check router.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, status
from pydantic import BaseModel

from .. import __version__
from ..config import settings

router = APIRouter(prefix="/api/v1", tags=["health"])


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    timestamp: str
    service: str
    version: str = __version__


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Health check",
)
async def health_check():
    """Returns 200 while the service is running."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc).isoformat(),
        service=settings.SERVICE_NAME,
    )
