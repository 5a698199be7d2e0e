"""FastAPI application entry point for coldcheck.

Cold-storage temperature compliance REST API.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from coldcheck import __version__
from coldcheck.api import register_exception_handlers
from coldcheck.api.middleware import setup_middleware
from coldcheck.config import get_settings
from coldcheck.db import close_all_connections, init_models, ping
from coldcheck.logging import get_logger, setup_logging

# Initialize logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup and shutdown events."""
    settings = get_settings()
    logger.info(
        "Starting coldcheck API",
        extra={
            "environment": settings.environment,
            "debug": settings.api_debug,
        },
    )

    # SQLite development databases are created in place; PostgreSQL
    # deployments are migrated with Alembic.
    if settings.is_sqlite:
        await init_models()

    yield

    logger.info("Shutting down coldcheck API")
    await close_all_connections()


settings = get_settings()

app = FastAPI(
    title="coldcheck API",
    description="Cold-storage temperature compliance records",
    version=__version__,
    docs_url="/docs" if settings.is_development else None,
    redoc_url="/redoc" if settings.is_development else None,
    openapi_url="/openapi.json" if settings.is_development else None,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
setup_middleware(app)
register_exception_handlers(app)


# =========================
# Health Check Endpoints
# =========================


@app.get("/health", tags=["Health"])
async def health_check():
    """Basic health check endpoint."""
    return {"status": "healthy", "service": "coldcheck-api"}


@app.get("/health/ready", tags=["Health"])
async def readiness_check():
    """Readiness check that verifies database connectivity."""
    try:
        await ping()
        database = "healthy"
    except Exception as e:
        database = f"unhealthy: {e}"

    healthy = database == "healthy"
    return JSONResponse(
        status_code=200 if healthy else 503,
        content={
            "status": "ready" if healthy else "not_ready",
            "checks": {"database": database},
        },
    )


@app.get("/health/live", tags=["Health"])
async def liveness_check():
    """Liveness check - just confirms the service is running."""
    return {"status": "alive"}


# =========================
# API Routers
# =========================

from coldcheck.api.reports import router as reports_router  # noqa: E402
from coldcheck.api.sections import router as sections_router  # noqa: E402

app.include_router(sections_router, prefix="/api/v1", tags=["Sections"])
app.include_router(reports_router, prefix="/api/v1", tags=["Reports"])


@app.get("/", tags=["Root"])
async def root():
    """API root endpoint."""
    return {
        "name": "coldcheck API",
        "version": __version__,
        "description": "Cold-storage temperature compliance records",
        "docs": "/docs" if settings.is_development else None,
    }
