"""API route modules."""

from .health import router as health_router
from .locations import router as locations_router
from .times_ics import router as times_ics_router

__all__ = ["health_router", "locations_router", "times_ics_router"]
