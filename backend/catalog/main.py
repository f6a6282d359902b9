"""
Benefits Catalog -- FastAPI Application
Serves the filtered, sorted and paginated benefits catalog.

Run: uvicorn catalog.main:app --port 8890   (from backend/)
"""

from contextlib import asynccontextmanager
import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from catalog.api import health, routes_benefits
from catalog.api.errors import register_exception_handlers
from catalog.core.config import settings
from catalog.core.logging_config import configure_logging
from catalog.core.rate_limiting import limiter
from catalog.db.database import init_db, session_scope
from catalog.db.fixtures import build_sample_benefits
from catalog.db.repositories import BenefitRepository

configure_logging(settings.log_level, settings.log_format)
logger = logging.getLogger(__name__)


def seed_if_empty() -> int:
    """Load the sample catalog into an empty database. Returns rows inserted."""
    with session_scope() as db:
        repo = BenefitRepository(db)
        if repo.count_benefits() > 0:
            return 0
        return repo.add_benefits(build_sample_benefits())


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting {settings.app_name} v{settings.app_version} ({settings.environment})")
    init_db()
    if settings.seed_on_startup:
        seeded = seed_if_empty()
        if seeded:
            logger.info(f"Seeded {seeded} sample benefits")
    yield
    logger.info("Application shutting down")


async def timing_and_headers(request: Request, call_next):
    """Request log line, X-Process-Time and a few hardening headers."""
    start = time.perf_counter()
    response = await call_next(request)
    elapsed = time.perf_counter() - start

    response.headers["X-Process-Time"] = f"{elapsed:.3f}"
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    request_id = request.headers.get("X-Request-ID")
    if request_id:
        response.headers["X-Request-ID"] = request_id

    logger.info(f"{request.method} {request.url.path} -> {response.status_code} in {elapsed:.3f}s")
    return response


def create_app() -> FastAPI:
    application = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Benefits catalog -- filter, search, sort and paginate discounts and perks.",
        docs_url="/docs" if settings.debug else None,
        redoc_url=None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
    )

    application.state.limiter = limiter
    register_exception_handlers(application)

    application.add_middleware(GZipMiddleware, minimum_size=500)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )
    application.middleware("http")(timing_and_headers)

    application.include_router(health.router, prefix=settings.api_prefix)
    application.include_router(routes_benefits.router, prefix=settings.api_prefix)

    @application.get("/")
    async def root():
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "status": "running",
            "health": f"{settings.api_prefix}/health",
            "benefits": f"{settings.api_prefix}/benefits",
        }

    return application


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "catalog.main:app",
        host=settings.api_host,
        port=settings.api_port,
        workers=settings.api_workers,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
