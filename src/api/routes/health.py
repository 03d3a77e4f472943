"""Health check endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter

from api.models.responses import HealthResponse
from core.config import API_VERSION, UPSTREAM_API_URL

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint for monitoring."""
    return HealthResponse(
        status="healthy",
        version=API_VERSION,
        upstream_url=UPSTREAM_API_URL,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
