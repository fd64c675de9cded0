"""Imperative field checks that raise ``ValidationException``.

Unlike the format predicates these enforce presence and ranges, and fail
fast with a single-field error map.
"""

from __future__ import annotations

from typing import Any

from api_commons.middleware.error_handler import ValidationException
from api_commons.utils.strings import is_blank
from api_commons.validators.formats import is_valid_email

VALIDATION_ERROR_MESSAGE = "Validation error"


def _fail(field: str, message: str) -> ValidationException:
    return ValidationException(VALIDATION_ERROR_MESSAGE, {field: message})


def validate_not_empty(value: str | None, field: str) -> None:
    if is_blank(value):
        raise _fail(field, "must not be empty")


def validate_not_null(value: Any, field: str) -> None:
    if value is None:
        raise _fail(field, "must not be null")


def validate_range(value: int, minimum: int, maximum: int, field: str) -> None:
    """Inclusive on both bounds."""
    if value < minimum or value > maximum:
        raise _fail(field, f"must be between {minimum} and {maximum}")


def validate_email(value: str | None, field: str) -> None:
    """Required email: a missing value fails too."""
    if not value or not is_valid_email(value):
        raise _fail(field, "is not a valid email address")
