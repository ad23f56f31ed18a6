"""
Domain error taxonomy and the app-wide error mapper.

Services raise the exceptions defined here and never build HTTP responses
themselves; ``register_exception_handlers`` installs the single boundary
that converts them (and FastAPI's own request errors) into the
``{"type": ..., "message": ...}`` envelope.
"""
import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from starlette import status
from starlette.exceptions import HTTPException

from campus_api.schemas import ErrorResponse

logger = logging.getLogger(__name__)


class CampusApiError(Exception):
    """Base class for errors that map to a fixed status and error type."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_type: str = "InternalServerError"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class EntityNotFoundError(CampusApiError):
    status_code = status.HTTP_404_NOT_FOUND
    error_type = "EntityNotFoundException"

    def __init__(self, resource_name: str, key: Any) -> None:
        super().__init__(f"{resource_name} with id {key} not found")
        self.resource_name = resource_name
        self.key = key


class ForbiddenError(CampusApiError):
    status_code = status.HTTP_403_FORBIDDEN
    error_type = "AccessDeniedException"

    def __init__(self, message: str = "Access is denied") -> None:
        super().__init__(message)


class ValidationFailedError(CampusApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    error_type = "ValidationFailed"


class StorageError(CampusApiError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_type = "StorageError"


# ---------------------------------------------------------------------------
# Error mapper
# ---------------------------------------------------------------------------

def _error_response(status_code: int, error_type: str, message: str, details: Any = None) -> JSONResponse:
    body = ErrorResponse(type=error_type, message=message, details=details)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", exclude_none=True),
    )


async def campus_api_error_handler(request: Request, exc: CampusApiError) -> JSONResponse:
    if isinstance(exc, StorageError):
        logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc.message)
    return _error_response(exc.status_code, exc.error_type, exc.message)


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    # The authorization gate signals denial with a plain 403 HTTPException.
    if exc.status_code == status.HTTP_403_FORBIDDEN:
        error_type = ForbiddenError.error_type
    else:
        error_type = "HTTPException"
    message = exc.detail if isinstance(exc.detail, str) else "HTTP error"
    response = _error_response(exc.status_code, error_type, message)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return _error_response(
        ValidationFailedError.status_code,
        ValidationFailedError.error_type,
        "Request validation failed",
        details=jsonable_encoder(exc.errors()),
    )


def internal_error_response() -> JSONResponse:
    return _error_response(500, "InternalServerError", "An unexpected error occurred")


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    # Reached only for errors raised outside RequestContextMiddleware.
    logger.exception("Unhandled error processing %s %s", request.method, request.url.path)
    return internal_error_response()


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CampusApiError, campus_api_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
