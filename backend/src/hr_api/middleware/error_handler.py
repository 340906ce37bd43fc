"""Global exception handlers that translate errors into safe JSON responses."""

import logging
from typing import Any

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from hr_api.config import get_settings
from hr_api.exceptions import (
    ConflictError,
    HRAPIError,
    InvalidReferenceError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Safe error messages that can be shown to users
SAFE_ERROR_MESSAGES = {
    400: "Invalid request",
    404: "Resource not found",
    405: "Method not allowed",
    409: "Conflict with existing resource",
    422: "Invalid input data",
    500: "An error occurred processing your request.",
}

# Most specific class first
DOMAIN_STATUS_CODES: list[tuple[type[HRAPIError], int]] = [
    (InvalidReferenceError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (ValidationError, status.HTTP_422_UNPROCESSABLE_ENTITY),
]


def _get_cors_headers(request: Request) -> dict[str, str]:
    """Get CORS headers for error responses.

    Exception handlers run outside the CORS middleware, so allowed origins
    have to be echoed here for browsers to read the error body.
    """
    origin = request.headers.get("origin")
    if origin and origin in get_settings().cors_origins_list:
        return {
            "Access-Control-Allow-Origin": origin,
            "Access-Control-Allow-Credentials": "true",
        }
    return {}


def status_code_for(exc: HRAPIError) -> int:
    """HTTP status code for a domain exception."""
    for exc_type, status_code in DOMAIN_STATUS_CODES:
        if isinstance(exc, exc_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def summarize_validation_errors(errors: list[Any], limit: int = 3) -> str:
    """Reduce pydantic validation errors to ``field: message`` pairs.

    Args:
        errors: Output of ``RequestValidationError.errors()``
        limit: Maximum number of errors included

    Returns:
        Short human-readable summary
    """
    parts = []
    for error in errors:
        if not isinstance(error, dict):
            continue
        loc = error.get("loc", [])
        field = loc[-1] if loc else "field"
        parts.append(f"{field}: {error.get('msg', 'Invalid value')}")
    if not parts:
        return SAFE_ERROR_MESSAGES[422]
    return "; ".join(parts[:limit])


def _internal_error_response(request: Request, exc: Exception) -> JSONResponse:
    content: dict[str, Any] = {"detail": SAFE_ERROR_MESSAGES[500]}
    if get_settings().debug:
        content["type"] = type(exc).__name__
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=content,
        headers=_get_cors_headers(request),
    )


async def hr_api_exception_handler(request: Request, exc: HRAPIError) -> JSONResponse:
    """Handle domain exceptions raised by the services.

    Rule violations become 4xx responses carrying the message and error code.
    Persistence failures are logged and returned as a generic 500.
    """
    status_code = status_code_for(exc)
    if isinstance(exc, PersistenceError) or status_code >= 500:
        logger.error(f"{type(exc).__name__} for {request.method} {request.url.path}", exc_info=exc)
        return _internal_error_response(request, exc)

    logger.info(f"{exc.error_code} for {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, "error_code": exc.error_code},
        headers=_get_cors_headers(request),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTP exceptions raised by routers and the framework."""
    if isinstance(exc.detail, str):
        detail = exc.detail
    else:
        detail = SAFE_ERROR_MESSAGES.get(exc.status_code, "Request failed")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": detail},
        headers=_get_cors_headers(request),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle request validation errors with a compact summary."""
    logger.warning(f"Validation error for {request.method} {request.url.path}: {exc.errors()}")

    detail: Any = exc.errors() if get_settings().debug else summarize_validation_errors(exc.errors())
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": detail, "error_code": "VALIDATION_ERROR"},
        headers=_get_cors_headers(request),
    )


async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Handle database errors that escaped the services without leaking details."""
    logger.error(f"Database error for {request.method} {request.url.path}", exc_info=exc)
    return _internal_error_response(request, exc)


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions without leaking information."""
    logger.error(f"Unhandled exception for {request.method} {request.url.path}", exc_info=exc)
    return _internal_error_response(request, exc)
