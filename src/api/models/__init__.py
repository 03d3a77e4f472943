"""API Pydantic models."""

from .responses import (
    ErrorCodes,
    ErrorResponse,
    FeedUrlResponse,
    HealthResponse,
    HierarchyResponse,
    LocationResponse,
)

__all__ = [
    "HealthResponse",
    "ErrorResponse",
    "ErrorCodes",
    "FeedUrlResponse",
    "HierarchyResponse",
    "LocationResponse",
]
