"""
Client-side error taxonomy for the benefits API, and how each error is
presented to the user (retry action, "reset filters" action).
"""

from dataclasses import dataclass
from typing import Optional


class CatalogApiError(Exception):
    """Base class for failures talking to the benefits API."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class NetworkError(CatalogApiError):
    """No HTTP status was received (connection refused, DNS, timeout)."""


class ClientError(CatalogApiError):
    """4xx: bad criteria or missing resource. Never retried automatically."""


class NotFound(ClientError):
    """404: the requested resource does not exist."""

    def __init__(self, message: str = "Resource not found", status_code: int = 404):
        super().__init__(message, status_code)


class ServerError(CatalogApiError):
    """5xx: transient backend fault, retried with backoff."""


def error_for_status(status_code: int, message: str) -> CatalogApiError:
    """Map an HTTP error status onto the taxonomy."""
    if status_code == 404:
        return NotFound(message or "Resource not found")
    if 400 <= status_code < 500:
        return ClientError(message, status_code)
    return ServerError(message, status_code)


@dataclass(frozen=True)
class ErrorInfo:
    title: str
    description: str
    is_retryable: bool
    should_reset_filters: bool
    status_code: Optional[int] = None


_CLIENT_ERRORS = {
    400: ErrorInfo("Bad Request", "The request was invalid. Please check your filters and try again.", False, True, 400),
    401: ErrorInfo("Unauthorized", "You need to log in to access this resource.", False, False, 401),
    403: ErrorInfo("Forbidden", "You do not have permission to access this resource.", False, False, 403),
    404: ErrorInfo("Not Found", "The requested resource was not found.", False, True, 404),
    408: ErrorInfo("Request Timeout", "The request took too long to complete. Please try again.", True, True, 408),
    429: ErrorInfo("Too Many Requests", "You have made too many requests. Please wait a moment and try again.", True, False, 429),
}


def describe_error(error: BaseException) -> ErrorInfo:
    """
    Decide how an error is shown.

    Retryable errors get a retry action. Client errors also offer "reset
    filters": an over-narrow criteria set looks the same as a genuine empty
    result from the server's side, so the user gets to choose.
    """
    status_code = getattr(error, "status_code", None)

    if isinstance(error, NetworkError) or not status_code:
        return ErrorInfo(
            "Connection Error",
            "Unable to connect to the server. Please check your internet connection and try again.",
            True,
            True,
            0,
        )

    if status_code >= 500:
        return ErrorInfo(
            "Server Error",
            "Our servers are experiencing issues. Please try again in a few moments.",
            True,
            True,
            status_code,
        )

    if status_code >= 400:
        known = _CLIENT_ERRORS.get(status_code)
        if known:
            return known
        return ErrorInfo(
            "Request Failed",
            "There was an issue with your request. Please try again.",
            False,
            True,
            status_code,
        )

    return ErrorInfo(
        "Unknown Error",
        "An unexpected error occurred. Please try again.",
        True,
        True,
        status_code,
    )

