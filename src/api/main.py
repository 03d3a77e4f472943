"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.logging import configure_logging
from api.models.responses import ErrorCodes, ErrorResponse
from api.routes import health_router, locations_router, times_ics_router
from core.config import API_DEBUG, API_VERSION
from core.upstream_client import close_upstream_client

configure_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    yield

    # Shutdown: release the shared upstream HTTP client
    await close_upstream_client()


app = FastAPI(
    title="Prayer Times Calendar API",
    description="Subscribable iCalendar feeds of Islamic prayer times from the Ezan Vakti API",
    version=API_VERSION,
    debug=API_DEBUG,
    lifespan=lifespan,
)

# The selection form is served from another origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET"],
    allow_headers=["*"],
)


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Return route errors in the standard error format."""
    if isinstance(exc.detail, dict):
        content = ErrorResponse(**exc.detail).model_dump()
    else:
        content = ErrorResponse(
            error=str(exc.detail),
            code=ErrorCodes.INVALID_REQUEST if exc.status_code < 500 else ErrorCodes.INTERNAL_ERROR,
        ).model_dump()
    return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)


# Global exception handler for unexpected errors
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions with standard error format."""
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error="Internal server error",
            code=ErrorCodes.INTERNAL_ERROR,
            details=[],
        ).model_dump(),
    )


# Include routers
app.include_router(health_router)
app.include_router(times_ics_router)
app.include_router(locations_router)


# Entry point for uvicorn
if __name__ == "__main__":
    import uvicorn

    from core.config import API_HOST, API_PORT

    uvicorn.run(
        "api.main:app",
        host=API_HOST,
        port=API_PORT,
        reload=API_DEBUG,
    )
