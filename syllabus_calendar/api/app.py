"""
FastAPI application factory.
"""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from syllabus_calendar import __version__
from syllabus_calendar.api.dependencies import cleanup_dependencies, get_extraction_config
from syllabus_calendar.api.routes import export, extract, health
from syllabus_calendar.config.settings import get_settings
from syllabus_calendar.observability.logging import bind_context, clear_context, get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    config = get_extraction_config()
    logger.info(
        "Syllabus calendar API starting up",
        llm_configured=config.llm_configured,
        llm_provider=config.llm_provider,
        extractor_version=config.extractor_version,
    )
    if config.llm_enabled and not config.llm_configured:
        logger.warning("LLM extraction enabled but no API key set; using regex only")

    yield

    logger.info("Syllabus calendar API shutting down")
    await cleanup_dependencies()


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application
    """
    settings = get_settings()

    openapi_tags = [
        {"name": "health", "description": "Service health checks"},
        {"name": "extraction", "description": "Syllabus event extraction"},
        {"name": "export", "description": "iCalendar export"},
    ]

    app = FastAPI(
        title="Syllabus Calendar API",
        description="""
API for extracting calendar events (assignments, exams, quizzes, projects,
readings, deadlines) from course syllabus text.

## Extraction

An LLM extractor is tried first when configured; any failure falls back to
deterministic regex patterns. Results are validated and deduplicated.

## Authentication

Requires `X-API-KEY` header for all requests except `/health` when
`API_KEYS` is set.
        """,
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
        openapi_tags=openapi_tags,
    )

    # CORS origins from CORS_ORIGINS env var, comma-separated
    cors_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    # Request logging and correlation ID middleware
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        request_id = (
            request.headers.get("X-Request-ID")
            or request.headers.get("X-Correlation-ID")
            or str(uuid.uuid4())
        )

        bind_context(request_id=request_id)
        start_time = time.perf_counter()

        try:
            response = await call_next(request)
            duration = time.perf_counter() - start_time

            response.headers["X-Request-ID"] = request_id

            logger.info(
                "HTTP request",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                duration_ms=round(duration * 1000, 2),
            )
            return response
        finally:
            clear_context()

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error", "error_type": "internal"},
        )

    app.include_router(health.router, tags=["health"])
    app.include_router(extract.router, tags=["extraction"])
    app.include_router(export.router, tags=["export"])

    @app.get("/", include_in_schema=False)
    async def root():
        return {
            "service": "Syllabus Calendar API",
            "version": __version__,
            "docs": "/docs",
        }

    return app
