"""Middleware package: exception taxonomy, request pipeline and decorators."""

from api_commons.middleware.decorators import log_calls, measure_performance
from api_commons.middleware.error_handler import (
    ApiException,
    ErrorCode,
    ResourceNotFoundException,
    ValidationException,
    error_response,
    register_error_handlers,
)
from api_commons.middleware.pipeline import (
    PerformanceMiddleware,
    RequestLoggingMiddleware,
    build_pipeline,
)
from api_commons.middleware.request_id import RequestIdMiddleware

__all__ = [
    "ApiException",
    "ErrorCode",
    "PerformanceMiddleware",
    "RequestIdMiddleware",
    "RequestLoggingMiddleware",
    "ResourceNotFoundException",
    "ValidationException",
    "build_pipeline",
    "error_response",
    "log_calls",
    "measure_performance",
    "register_error_handlers",
]
