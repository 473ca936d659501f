"""
Domain exceptions and global exception handlers.

Services raise the exceptions below; the handlers turn them into
``{"detail": ..., "success": false}`` JSON bodies and prevent stack-trace
leakage to clients.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

GENERIC_SERVER_ERROR = "Internal server error"


class AppError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code = 500

    def __init__(self, message: str = GENERIC_SERVER_ERROR) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(AppError):
    """Missing or malformed input field."""

    status_code = 400


class ConflictError(AppError):
    """Duplicate value for a unique field (reported as 400)."""

    status_code = 400


class AuthenticationError(AppError):
    """Missing/invalid token or bad login credentials."""

    status_code = 401


class NotFoundError(AppError):
    """Identifier does not resolve."""

    status_code = 404


class InternalError(AppError):
    """Unexpected failure. The client only ever sees the generic message."""

    status_code = 500

    def __init__(self, message: str = GENERIC_SERVER_ERROR) -> None:
        super().__init__(message)


def _error_response(
    status_code: int, detail: str, headers: dict[str, str] | None = None
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"detail": detail, "success": False},
        headers=headers,
    )


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    loc = tuple(first.get("loc", ()))
    if first.get("type") == "missing" and loc == ("body",):
        return "Request body is required"
    if first.get("type") == "json_invalid":
        return "Invalid JSON body"
    msg = str(first.get("msg", "Invalid request"))
    return msg.removeprefix("Value error, ")


async def _app_error_handler(_request: Request, exc: AppError) -> JSONResponse:
    if isinstance(exc, InternalError):
        logger.error("Internal error: %s", exc.message)
        return _error_response(500, GENERIC_SERVER_ERROR)
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
    return _error_response(exc.status_code, exc.message, headers)


async def _request_validation_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    return _error_response(400, _validation_message(exc))


async def _http_exception_handler(
    _request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return _error_response(exc.status_code, str(exc.detail), getattr(exc, "headers", None))


async def _rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    logger.warning("Rate limit hit on %s (%s)", request.url.path, exc.detail)
    return _error_response(429, "Too many requests")


async def _integrity_error_handler(_request: Request, exc: IntegrityError) -> JSONResponse:
    logger.error("Database integrity error: %s", exc, exc_info=True)
    return _error_response(400, "Duplicate value")


async def _sqlalchemy_error_handler(_request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("Database error: %s", exc, exc_info=True)
    return _error_response(500, GENERIC_SERVER_ERROR)


async def _generic_exception_handler(_request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception: %s", exc)
    return _error_response(500, GENERIC_SERVER_ERROR)


def register_exception_handlers(app: FastAPI) -> None:
    """Attach all exception handlers to the FastAPI app."""
    app.add_exception_handler(AppError, _app_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _request_validation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RateLimitExceeded, _rate_limit_handler)  # type: ignore[arg-type]
    app.add_exception_handler(IntegrityError, _integrity_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(SQLAlchemyError, _sqlalchemy_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _generic_exception_handler)
