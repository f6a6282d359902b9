"""
Error envelope shared by every endpoint: {"error": str, "success": false}.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging

from catalog.core.config import settings
from catalog.core.rate_limiting import RETRY_AFTER_SECONDS

logger = logging.getLogger(__name__)

SERVICE_UNAVAILABLE = "Service unavailable: database error"


def error_response(status_code: int, message: str, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": message, "success": False},
        headers=headers,
    )


def describe_validation_error(exc: RequestValidationError) -> str:
    """One line per rejected parameter, e.g. `limit: Input should be ...`."""
    problems = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err.get("loc", ()) if part != "query")
        problems.append(f"{field}: {err.get('msg')}")
    return "Invalid query parameters: " + "; ".join(problems)


async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    client_host = request.client.host if request.client else "unknown"
    logger.warning(f"Rate limit exceeded for {client_host}: {request.url.path}")
    return error_response(
        429,
        "Rate limit exceeded. Please slow down.",
        {"Retry-After": str(RETRY_AFTER_SECONDS)},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code >= 500:
        logger.warning(f"{request.url.path} -> {exc.status_code}: {exc.detail}")
    return error_response(exc.status_code, str(exc.detail), getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    message = describe_validation_error(exc)
    logger.info(f"Rejected {request.url.path}: {message}")
    return error_response(400, message)


async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"Database error on {request.url.path}: {exc}")
    return error_response(503, SERVICE_UNAVAILABLE)


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
    return error_response(500, str(exc) if settings.debug else "An unexpected error occurred")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RateLimitExceeded, rate_limit_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, database_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
