"""Named validation rules.

Maps a rule name -> ``Constraint`` (predicate + default message). Adding a
rule requires only a predicate and a ``register()`` call; callers refer to
rules by name, e.g. ``{"email": "email", "zip": ["french_postal_code"]}``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass

from api_commons.middleware.error_handler import ValidationException
from api_commons.validators import formats

logger = logging.getLogger(__name__)

Predicate = Callable[[str | None], bool]


@dataclass(frozen=True)
class Constraint:
    """A named rule and the predicate that enforces it."""

    name: str
    predicate: Predicate
    message: str

    def is_valid(self, value: str | None) -> bool:
        return self.predicate(value)


class ValidatorRegistry:
    """Registry that maps rule names to their constraints."""

    def __init__(self) -> None:
        self._constraints: dict[str, Constraint] = {}

    def register(self, constraint: Constraint) -> None:
        """Register *constraint* under its ``name``.

        Raises
        ------
        ValueError
            If a rule with the same name is already registered.
        """
        if constraint.name in self._constraints:
            raise ValueError(f"Validation rule '{constraint.name}' is already registered")
        self._constraints[constraint.name] = constraint
        logger.debug("Registered validation rule '%s'", constraint.name)

    def get(self, name: str) -> Constraint:
        """Return the constraint registered as *name*.

        Raises
        ------
        KeyError
            If no rule is registered under that name.
        """
        try:
            return self._constraints[name]
        except KeyError:
            raise KeyError(f"No validation rule registered as '{name}'") from None

    def list_rules(self) -> list[str]:
        """Return the names of all registered rules."""
        return list(self._constraints.keys())

    def __contains__(self, name: object) -> bool:
        return name in self._constraints


EMAIL = Constraint("email", formats.is_valid_email, "Invalid email format")
FRENCH_PHONE = Constraint(
    "french_phone", formats.is_valid_french_phone, "Invalid French phone number"
)
FRENCH_POSTAL_CODE = Constraint(
    "french_postal_code",
    formats.is_valid_french_postal_code,
    "Invalid French postal code",
)
UUID = Constraint("uuid", formats.is_valid_uuid, "Invalid UUID format")
IBAN = Constraint("iban", formats.is_valid_iban, "Invalid IBAN format")
ISO_DATE = Constraint(
    "iso_date",
    formats.is_valid_iso_date,
    "Invalid ISO date format (expected yyyy-MM-dd)",
)

default_registry = ValidatorRegistry()
for _constraint in (EMAIL, FRENCH_PHONE, FRENCH_POSTAL_CODE, UUID, IBAN, ISO_DATE):
    default_registry.register(_constraint)


def validate_fields(
    values: Mapping[str, str | None],
    rules: Mapping[str, str | Sequence[str]],
    registry: ValidatorRegistry = default_registry,
) -> dict[str, str]:
    """Apply named rules per field and collect failures.

    Returns a field -> message map holding the first failing rule of each
    field; an empty map means every field passed. Fields missing from
    *values* are checked as ``None``.
    """
    errors: dict[str, str] = {}
    for field, names in rules.items():
        if isinstance(names, str):
            names = [names]
        value = values.get(field)
        for name in names:
            constraint = registry.get(name)
            if not constraint.is_valid(value):
                errors[field] = constraint.message
                break
    return errors


def ensure_valid(
    values: Mapping[str, str | None],
    rules: Mapping[str, str | Sequence[str]],
    message: str = "Validation failed",
    registry: ValidatorRegistry = default_registry,
) -> None:
    """Raise ``ValidationException`` if any field fails its rules."""
    errors = validate_fields(values, rules, registry)
    if errors:
        raise ValidationException(message, errors)
