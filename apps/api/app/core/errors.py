"""Error taxonomy shared by services and routers, plus its HTTP mapping.

Every failure leaves the API as ``{"detail": <message>, "code": <code>}`` so
clients can branch on ``code`` regardless of which route raised it.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base class for errors that map onto a fixed HTTP status."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "internal_error"
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def headers(self) -> dict[str, str] | None:
        return None


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "validation_error"
    default_message = "Invalid request data"


class Conflict(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "conflict"
    default_message = "Email already in use"


class AdminLimitExceeded(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "admin_limit_exceeded"
    default_message = "The administrator limit has been reached"


class Unauthenticated(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "unauthenticated"
    default_message = "Missing authentication token"

    @property
    def headers(self) -> dict[str, str] | None:
        return {"WWW-Authenticate": "Bearer"}


class InvalidToken(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "invalid_token"
    default_message = "Invalid token"


class InvalidCredentials(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "invalid_credentials"
    default_message = "Invalid email or password"


class Forbidden(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "forbidden"
    default_message = "Permission denied"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"
    default_message = "Resource not found"


class InternalError(AppError):
    pass


def _error_response(error: AppError) -> JSONResponse:
    return JSONResponse(
        status_code=error.status_code,
        content={"detail": error.message, "code": error.code},
        headers=error.headers,
    )


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return _error_response(exc)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Collapse FastAPI's 422 payloads into the 400 validation envelope."""

    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        problems.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    message = "; ".join(problems) or ValidationError.default_message
    return _error_response(ValidationError(message))


async def database_error_handler(request: Request, exc: PyMongoError) -> JSONResponse:
    logger.error("Database failure on %s %s: %s", request.method, request.url.path, exc)
    return _error_response(InternalError("Database error"))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error_response(InternalError())


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the JSON error mapping to ``app``."""

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(PyMongoError, database_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
