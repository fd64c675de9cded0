"""Declarative field constraints for Pydantic models.

Usage::

    class Customer(BaseModel):
        email: StrictEmail = None
        phone: FrenchPhoneNumber = None

A failing value raises a Pydantic validation error carrying the rule's
message, so request bodies using these types are reported field by field by
the central exception handler.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import AfterValidator
from pydantic_core import PydanticCustomError

from api_commons.validators.registry import (
    EMAIL,
    FRENCH_PHONE,
    FRENCH_POSTAL_CODE,
    IBAN,
    ISO_DATE,
    UUID,
    Constraint,
)


def constraint_validator(constraint: Constraint) -> AfterValidator:
    """Wrap a registered constraint as a Pydantic after-validator."""

    def _check(value: str | None) -> str | None:
        if not constraint.is_valid(value):
            raise PydanticCustomError(constraint.name, constraint.message)
        return value

    return AfterValidator(_check)


StrictEmail = Annotated[str | None, constraint_validator(EMAIL)]
FrenchPhoneNumber = Annotated[str | None, constraint_validator(FRENCH_PHONE)]
FrenchPostalCode = Annotated[str | None, constraint_validator(FRENCH_POSTAL_CODE)]
ValidUUID = Annotated[str | None, constraint_validator(UUID)]
ValidIBAN = Annotated[str | None, constraint_validator(IBAN)]
ValidISODate = Annotated[str | None, constraint_validator(ISO_DATE)]
