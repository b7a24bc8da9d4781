"""FastAPI application entry point.

Post Search API - posts with JSONB metadata and ranked full-text search.
"""

from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from postsearch.routes import api_router
from postsearch.schemas import ErrorResponse
from postsearch.services.errors import NotFoundError, StorageError, ValidationError
from postsearch.settings import get_settings
from postsearch.stores.postgres import close_db, init_db, ping_db

logger = logging.getLogger("uvicorn.error")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Handles startup and shutdown events.
    """
    # Startup: a DB outage should not keep the app (and /health) from starting
    try:
        await init_db()
        await ping_db()
        logger.info("Postgres connected")
    except Exception:
        logger.exception("Postgres init failed")

    yield

    # Shutdown
    await close_db()


def _error(status_code: int, code: str, message: str, detail: dict | None = None) -> JSONResponse:
    payload = ErrorResponse.build(code=code, message=message, detail=detail)
    return JSONResponse(status_code=status_code, content=payload.model_dump())


def _request_error_fields(exc: RequestValidationError) -> dict[str, str]:
    """Flatten FastAPI's error list to {field: message}.

    ("query", "page") -> "page", ("body", "title") -> "title"; a malformed
    body as a whole is reported under "body".
    """
    fields: dict[str, str] = {}
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ())]
        name = ".".join(loc[1:]) or (loc[0] if loc else "request")
        fields.setdefault(name, err.get("msg", "Invalid value"))
    return fields


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Posts with ranked full-text search",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
        return _error(
            422,
            "VALIDATION_ERROR",
            "The given data was invalid.",
            {"fields": exc.fields},
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return _error(
            422,
            "VALIDATION_ERROR",
            "The given data was invalid.",
            {"fields": _request_error_fields(exc)},
        )

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
        return _error(404, "NOT_FOUND", str(exc), {"id": exc.post_id})

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
        # Already logged with traceback by the store
        return _error(
            503,
            "STORAGE_ERROR",
            str(exc) if settings.debug else "Storage temporarily unavailable",
        )

    # Exception handler for structured error format
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Global exception handler returning structured error format."""
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return _error(
            500,
            "INTERNAL_ERROR",
            str(exc) if settings.debug else "Internal server error",
        )

    # Health check endpoint
    @app.get("/health", tags=["health"])
    async def health_check() -> dict[str, bool]:
        """Health check endpoint."""
        return {"ok": True}

    # Include API routes
    app.include_router(api_router)

    return app


# Application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "postsearch.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
