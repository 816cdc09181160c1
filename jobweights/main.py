"""jobweights — FastAPI application factory."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from jobweights.adapters.persistence.database import engine
from jobweights.application.ports.errors import MalformedRecordError
from jobweights.config import settings
from jobweights.infrastructure.api.routes_assignments import router as assignments_router
from jobweights.infrastructure.api.routes_health import router as health_router
from jobweights.infrastructure.api.routes_import import router as import_router
from jobweights.infrastructure.api.routes_jobs import router as jobs_router
from jobweights.infrastructure.api.routes_responsibilities import router as responsibilities_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    try:
        async with engine.begin():
            pass  # Connection pool warmed up
        logger.info("Database connection established")
    except Exception as e:
        logger.warning("Database not available on startup: %s", e)
    yield
    await engine.dispose()


def create_app() -> FastAPI:
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s | %(message)s",
    )

    app = FastAPI(
        title="jobweights — Job Responsibility Weighting",
        description="Overlap-aware weight budgeting for job responsibility assignments",
        version="0.1.0",
        lifespan=lifespan,
    )

    @app.exception_handler(MalformedRecordError)
    async def malformed_record_handler(request: Request, exc: MalformedRecordError):
        """Structured 500 for stored rows that fail boundary validation."""
        logger.error("%s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=500,
            content={"detail": {"error": "malformed_record", "message": str(exc)}},
        )

    # Register routers
    app.include_router(health_router, prefix="/api")
    app.include_router(jobs_router, prefix="/api")
    app.include_router(responsibilities_router, prefix="/api")
    app.include_router(assignments_router, prefix="/api")
    app.include_router(import_router, prefix="/api")

    return app


app = create_app()
