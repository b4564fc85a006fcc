"""
Portal API - Main Application Entry Point

This module initializes and configures the FastAPI application including:
- Logging, database and Redis connections
- Default admin seeding
- CORS middleware and uploaded file serving
- Error envelopes for every failure
- API routing and health check endpoints
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy import text
from starlette.exceptions import HTTPException

from app.api import api_router
from app.core.config import settings
from app.core.database import async_session_maker, close_db, init_db
from app.core.exceptions import ServiceError
from app.core.logging import setup_logging
from app.core.redis import close_redis, init_redis, redis_status
from app.modules.admins.service import ensure_default_admin

setup_logging()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """
    Application lifespan manager.

    Handles startup and shutdown events including:
    - Redis connection
    - Database connection
    - Default admin account
    """
    # Startup
    print(f"Starting {settings.app_name} in {settings.python_env} mode...")

    # Initialize Redis
    try:
        await init_redis()
        print("[OK] Redis connected")
    except Exception as e:
        print(f"[FAIL] Redis connection failed: {e}")
        if settings.is_production:
            raise

    # Initialize Database
    try:
        await init_db()
        print("[OK] Database connected")
    except Exception as e:
        print(f"[FAIL] Database connection failed: {e}")
        if settings.is_production:
            raise

    # Seed the default admin account
    if settings.auto_seed_admin:
        try:
            async with async_session_maker() as session:
                created = await ensure_default_admin(session)
            print("[OK] Default admin created" if created else "[OK] Admin account present")
        except Exception as e:
            print(f"[FAIL] Default admin seeding failed: {e}")
            if settings.is_production:
                raise

    yield  # Application runs here

    # Shutdown
    print(f"Shutting down {settings.app_name}...")

    await close_redis()
    await close_db()
    print("[OK] Cleanup complete")


app = FastAPI(
    title=settings.app_name,
    description="Institutional portal API: applications, admin accounts and site content",
    version="0.1.0",
    docs_url="/docs" if settings.is_development else None,
    redoc_url="/redoc" if settings.is_development else None,
    lifespan=lifespan,
)

app.include_router(api_router, prefix="/api/v1")

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Uploaded application documents
Path(settings.upload_dir).mkdir(parents=True, exist_ok=True)
app.mount(settings.uploads_url_prefix, StaticFiles(directory=settings.upload_dir), name="uploads")


def _error_body(message: str, error: str, details: dict | None = None) -> dict:
    body: dict = {"success": False, "message": message, "error": error}
    if details:
        body["details"] = details
    return body


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    body = _error_body(exc.message, exc.error_code, exc.details)
    if exc.status_code >= 500:
        logger.error(
            f"{exc.error_code} on {request.method} {request.url.path}: {exc.message}"
            f" (cause: {exc.__cause__!r})"
        )
        if settings.is_development and exc.__cause__ is not None:
            body["debug"] = str(exc.__cause__)
    return JSONResponse(status_code=exc.status_code, content=body)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    fields = [
        ".".join(str(part) for part in error["loc"] if part not in ("body", "query", "path", "form"))
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=422,
        content=_error_body("Validation error", "VALIDATION_ERROR", {"fields": fields}),
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Wrap errors raised by dependencies (auth, rate limiting) in the error envelope."""
    if isinstance(exc.detail, dict):
        content = {"success": False, **exc.detail}
    else:
        content = _error_body(str(exc.detail), "HTTP_ERROR")
    return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Global exception handler."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    body = _error_body("An unexpected error occurred", "INTERNAL_ERROR")
    if settings.is_development:
        body["debug"] = str(exc)
    return JSONResponse(status_code=500, content=body)


@app.get("/", tags=["Root"])
async def root() -> dict[str, str]:
    """Root endpoint - API welcome message."""
    return {
        "message": f"Welcome to {settings.app_name}",
        "status": "running",
        "environment": settings.python_env,
    }


@app.get("/health", tags=["Health"])
async def health_check() -> dict[str, str]:
    """Health check endpoint for container orchestration."""
    return {"status": "healthy"}


@app.get("/ready", tags=["Health"])
async def readiness_check() -> JSONResponse:
    """Readiness check: the database must answer; Redis is reported but optional."""
    checks = {"redis": await redis_status()}
    try:
        async with async_session_maker() as session:
            await session.execute(text("SELECT 1"))
        checks["database"] = "connected"
    except Exception as e:
        logger.error(f"Readiness check failed: {e}")
        checks["database"] = "error"
        return JSONResponse(status_code=503, content={"status": "not ready", **checks})
    return JSONResponse(status_code=200, content={"status": "ready", **checks})
