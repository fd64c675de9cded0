"""Shared building blocks for FastAPI services.

Response envelopes, the exception taxonomy and its central handler, field
validators, JWT helpers and the logging/performance request pipeline.
"""

from api_commons.middleware.error_handler import (
    ApiException,
    ResourceNotFoundException,
    ValidationException,
    register_error_handlers,
)
from api_commons.models.responses import ApiResponse, ErrorResponse, PagedApiResponse

__version__ = "1.3.0"

__all__ = [
    "ApiException",
    "ApiResponse",
    "ErrorResponse",
    "PagedApiResponse",
    "ResourceNotFoundException",
    "ValidationException",
    "register_error_handlers",
]
