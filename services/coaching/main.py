"""
English Coaching Service - Main Application
===========================================

FastAPI application for accounts, authentication and study resources.

Version: 0.1.0
"""

from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shared.config import StorageMode, settings
from shared.database.postgres import close_database, get_database
from shared.errors import AppError, ErrorKind
from shared.logging import get_logger, setup_logging
from shared.models.common import ErrorResponse, HealthResponse

from services.coaching.dependencies import get_memory_store
from services.coaching.routes import admin, auth, resources

SERVICE_NAME = "english-coaching"
VERSION = "0.1.0"

# Setup logging
setup_logging(
    log_level=settings.log_level.value,
    json_logs=settings.is_production,
    service_name=SERVICE_NAME,
    version=VERSION,
)

logger = get_logger(__name__)


def _uses_postgres() -> bool:
    return settings.storage.mode == StorageMode.POSTGRES


@asynccontextmanager
async def lifespan(app: FastAPI) -> Any:
    """Application lifespan manager."""
    logger.info(
        "coaching_starting",
        environment=settings.environment.value,
        storage=settings.storage.mode.value,
        port=settings.api_port,
    )

    if _uses_postgres():
        try:
            get_database()
            logger.info("postgres_connected")
        except Exception as e:
            logger.error("startup_failed", error=str(e))
            raise

    yield

    # Shutdown
    logger.info("coaching_shutting_down")
    if _uses_postgres():
        await close_database()


# Create FastAPI application
app = FastAPI(
    title="English Coaching API",
    description="Accounts, authentication and study resources",
    version=VERSION,
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors.origins_list,
    allow_credentials=settings.cors.allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================================
# Health Check Endpoints
# ============================================================================


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check() -> HealthResponse:
    """
    Service health check.

    Reports the storage backend in use and its status.
    """
    components: dict[str, dict[str, Any]] = {}

    if _uses_postgres():
        components["postgres"] = await get_database().health_check()
    else:
        components["memory"] = {
            "status": "healthy",
            "tables": get_memory_store().stats(),
        }

    all_healthy = all(
        c.get("status") == "healthy" for c in components.values()
    )

    return HealthResponse(
        status="healthy" if all_healthy else "degraded",
        service=SERVICE_NAME,
        version=VERSION,
        components=components,
    )


@app.get("/", tags=["Health"])
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {
        "service": "English Coaching API",
        "version": VERSION,
        "docs": "/docs",
    }


# ============================================================================
# Include Routers
# ============================================================================

app.include_router(auth.router, prefix="/api/auth", tags=["Auth"])
app.include_router(resources.notes, prefix="/api/notes", tags=["Notes"])
app.include_router(resources.words, prefix="/api/words", tags=["Words"])
app.include_router(resources.sentences, prefix="/api/sentences", tags=["Sentences"])
app.include_router(
    resources.word_sentences, prefix="/api/word-sentences", tags=["Word Sentences"],
)
app.include_router(resources.lessons, prefix="/api/lessons", tags=["Lessons"])
app.include_router(admin.router, prefix="/api/admin", tags=["Admin"])


# ============================================================================
# Error Handlers
# ============================================================================


def _error_response(
    status_code: int,
    error: str,
    error_code: str | None = None,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    body = ErrorResponse(error=error, error_code=error_code, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Render domain errors with their status code and kind."""
    log = logger.error if exc.status_code >= 500 else logger.info
    log(
        "request_failed",
        error_code=exc.kind.value,
        status_code=exc.status_code,
        error=exc.message,
        path=request.url.path,
    )
    return _error_response(exc.status_code, exc.message, exc.kind.value, exc.details)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    """Malformed request bodies are client errors, reported as 400."""
    errors = [
        {"field": ".".join(str(p) for p in err.get("loc", ())), "message": err.get("msg", "")}
        for err in exc.errors()
    ]
    logger.info("request_invalid", path=request.url.path, errors=len(errors))
    return _error_response(
        status.HTTP_400_BAD_REQUEST,
        "Invalid request",
        ErrorKind.VALIDATION.value,
        {"errors": errors},
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle HTTP exceptions."""
    logger.warning(
        "http_exception",
        status_code=exc.status_code,
        detail=exc.detail,
        path=request.url.path,
    )
    return _error_response(exc.status_code, str(exc.detail))


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.error(
        "unhandled_exception",
        error=str(exc),
        error_type=type(exc).__name__,
        path=request.url.path,
    )
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Internal server error",
        ErrorKind.INTERNAL.value,
    )


# ============================================================================
# Run with Uvicorn
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "services.coaching.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
        log_level=settings.log_level.value.lower(),
    )
