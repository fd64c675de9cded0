"""Public response models."""

from api_commons.models.responses import (
    ApiResponse,
    ErrorResponse,
    PagedApiResponse,
    error,
    success,
)

__all__ = [
    "ApiResponse",
    "ErrorResponse",
    "PagedApiResponse",
    "error",
    "success",
]
