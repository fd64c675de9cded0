"""Exception taxonomy and the central FastAPI exception handler.

All API-level failures extend ApiException. The handlers registered by
``register_error_handlers`` catch these (plus FastAPI's RequestValidationError
and any unhandled exception) and return a consistent envelope:
{ success, data, message }.

Status mapping:
- ApiException              -> 400
- ResourceNotFoundException -> 404
- ValidationException       -> 422 (field errors in ``data``)
- RequestValidationError    -> 400 (field errors in ``data``)
- anything else             -> 500 (no internal detail in the body)
"""

from __future__ import annotations

import logging
import traceback
from enum import Enum
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from api_commons.middleware.request_id import REQUEST_ID_HEADER
from api_commons.models.responses import ApiResponse, ErrorResponse

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "internal error"
BINDING_FAILURE_MESSAGE = "Validation failed"

# Location prefixes FastAPI puts in front of the field path.
_LOCATION_PREFIXES = frozenset({"body", "query", "path", "header", "cookie"})


# ---------------------------------------------------------------------------
# Error hierarchy
# ---------------------------------------------------------------------------


class ErrorCode(str, Enum):
    """Canonical error codes. Exceptions also accept any other string."""

    API_EXCEPTION = "API_EXCEPTION"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_TOKEN = "INVALID_TOKEN"
    INTERNAL_ERROR = "INTERNAL_ERROR"


def _code_str(code: ErrorCode | str) -> str:
    return code.value if isinstance(code, ErrorCode) else code


class ApiException(Exception):
    """Base error for all API-level failures."""

    status_code: int = 400

    def __init__(
        self,
        code: ErrorCode | str,
        message: str,
        cause: BaseException | None = None,
    ) -> None:
        self.code = _code_str(code)
        self.message = message
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause


class ResourceNotFoundException(ApiException):
    """The requested resource does not exist."""

    status_code = 404

    def __init__(
        self,
        message: str | None = None,
        *,
        resource_type: str | None = None,
        resource_id: object = None,
        code: ErrorCode | str = ErrorCode.RESOURCE_NOT_FOUND,
    ) -> None:
        if resource_type is not None:
            message = f"{resource_type} with id {resource_id} not found"
        if message is None:
            raise TypeError("either message or resource_type is required")
        super().__init__(code, message)

    @classmethod
    def for_resource(cls, resource_type: str, resource_id: object) -> ResourceNotFoundException:
        """``"{resource_type} with id {resource_id} not found"``."""
        return cls(resource_type=resource_type, resource_id=resource_id)


class ValidationException(ApiException):
    """Semantic validation failure with per-field messages."""

    status_code = 422

    def __init__(
        self,
        message: str,
        errors: dict[str, str] | None = None,
        code: ErrorCode | str = ErrorCode.VALIDATION_ERROR,
    ) -> None:
        super().__init__(code, message)
        self.errors: dict[str, str] = errors if errors is not None else {}


def error_response(exc: ApiException, path: str | None = None) -> ErrorResponse:
    """Build a coded ``ErrorResponse`` for *exc*."""
    details = exc.errors if isinstance(exc, ValidationException) else None
    return ErrorResponse(code=exc.code, message=exc.message, path=path, details=details)


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------


def _envelope(status_code: int, body: ApiResponse[Any]) -> JSONResponse:
    """Serialize an envelope into a JSON response."""
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


async def _api_exception_handler(request: Request, exc: ApiException) -> JSONResponse:
    """Handle ApiException and any subclass without a dedicated handler."""
    logger.error(
        "API Exception: %s - %s",
        exc.code,
        exc.message,
        extra={"error_code": exc.code, "path": request.url.path},
    )
    return _envelope(exc.status_code, ApiResponse.fail(exc.message))


async def _not_found_handler(request: Request, exc: ResourceNotFoundException) -> JSONResponse:
    logger.error(
        "Resource not found: %s - %s",
        exc.code,
        exc.message,
        extra={"error_code": exc.code, "path": request.url.path},
    )
    return _envelope(exc.status_code, ApiResponse.fail(exc.message))


async def _validation_exception_handler(
    request: Request, exc: ValidationException
) -> JSONResponse:
    """Field errors are returned verbatim in ``data``."""
    logger.error(
        "Validation error: %s - %s",
        exc.code,
        exc.message,
        extra={"error_code": exc.code, "path": request.url.path},
    )
    body = ApiResponse(success=False, data=exc.errors, message=exc.message)
    return _envelope(exc.status_code, body)


def _field_name(loc: tuple[Any, ...] | list[Any]) -> str:
    parts = [str(part) for part in loc]
    if len(parts) > 1 and parts[0] in _LOCATION_PREFIXES:
        parts = parts[1:]
    return ".".join(parts)


async def _request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle argument-binding failures (400) with a field -> message map."""
    errors: dict[str, str] = {}
    for err in exc.errors():
        errors[_field_name(err["loc"])] = err["msg"]

    logger.error(
        "Validation error on request parameters: %s",
        errors,
        extra={"error_code": ErrorCode.VALIDATION_ERROR.value, "path": request.url.path},
    )
    body = ApiResponse(success=False, data=errors, message=BINDING_FAILURE_MESSAGE)
    return _envelope(400, body)


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all: log the traceback, return a generic 500.

    Runs outside the request pipeline, after the request-id context has been
    reset, so the id is taken from ``request.state`` for both the log entry
    and the response header.
    """
    request_id = getattr(request.state, "request_id", None)
    logger.error(
        "Unhandled exception: %s\n%s",
        exc,
        "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
        extra={
            "error_code": ErrorCode.INTERNAL_ERROR.value,
            "path": request.url.path,
            "request_id": request_id,
        },
    )
    response = _envelope(500, ApiResponse.fail(INTERNAL_ERROR_MESSAGE))
    if request_id is not None:
        response.headers[REQUEST_ID_HEADER] = request_id
    return response


# ---------------------------------------------------------------------------
# Registration helper
# ---------------------------------------------------------------------------


def register_error_handlers(app: FastAPI) -> None:
    """Wire up the central exception handler on the FastAPI application."""
    app.add_exception_handler(ApiException, _api_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(ResourceNotFoundException, _not_found_handler)  # type: ignore[arg-type]
    app.add_exception_handler(ValidationException, _validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _request_validation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _unhandled_error_handler)  # type: ignore[arg-type]
