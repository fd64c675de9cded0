"""Generic API response envelope models.

All API responses are wrapped in an envelope for consistency:
{ success: bool, data: T | None, message: str | None }

Paged responses add ``page``, ``size``, ``totalElements`` and ``totalPages``
as sibling keys. Error payloads that need a machine-readable code use
``ErrorResponse`` instead.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """JSON envelope for all API responses."""

    success: bool
    data: T | None = None
    message: str | None = None

    @classmethod
    def ok(cls, data: Any = None, message: str | None = None) -> ApiResponse[Any]:
        """Successful envelope carrying *data* and an optional message."""
        return cls(success=True, data=data, message=message)

    @classmethod
    def fail(cls, message: str) -> ApiResponse[Any]:
        """Failed envelope; ``data`` is always ``None``."""
        return cls(success=False, data=None, message=message)


class PagedApiResponse(ApiResponse[list[T]], Generic[T]):
    """Envelope for one page of a list result.

    The paging figures are taken as given: ``total_pages`` is not checked
    against ``total_elements / size``.
    """

    model_config = ConfigDict(populate_by_name=True)

    page: int = Field(default=0, ge=0)
    size: int = Field(default=1, gt=0)
    total_elements: int = Field(default=0, ge=0, alias="totalElements")
    total_pages: int = Field(default=0, ge=0, alias="totalPages")

    @classmethod
    def ok(  # type: ignore[override]
        cls,
        data: list[Any],
        page: int,
        size: int,
        total_elements: int,
        total_pages: int,
        message: str | None = None,
    ) -> PagedApiResponse[Any]:
        return cls(
            success=True,
            data=data,
            message=message,
            page=page,
            size=size,
            total_elements=total_elements,
            total_pages=total_pages,
        )


class ErrorResponse(BaseModel):
    """Coded error payload with the request path and optional details."""

    code: str
    message: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    path: str | None = None
    details: Any | None = None


def success(data: Any = None, message: str | None = None) -> ApiResponse[Any]:
    """Shorthand for ``ApiResponse.ok``."""
    return ApiResponse.ok(data, message)


def error(message: str) -> ApiResponse[Any]:
    """Shorthand for ``ApiResponse.fail``."""
    return ApiResponse.fail(message)
