"""Field validators: format predicates, named rules and model constraints."""

from api_commons.validators.checks import (
    validate_email,
    validate_not_empty,
    validate_not_null,
    validate_range,
)
from api_commons.validators.constraints import (
    FrenchPhoneNumber,
    FrenchPostalCode,
    StrictEmail,
    ValidIBAN,
    ValidISODate,
    ValidUUID,
)
from api_commons.validators.formats import (
    is_valid_email,
    is_valid_french_phone,
    is_valid_french_postal_code,
    is_valid_iban,
    is_valid_iso_date,
    is_valid_uuid,
)
from api_commons.validators.registry import (
    Constraint,
    ValidatorRegistry,
    default_registry,
    ensure_valid,
    validate_fields,
)

__all__ = [
    "Constraint",
    "FrenchPhoneNumber",
    "FrenchPostalCode",
    "StrictEmail",
    "ValidIBAN",
    "ValidISODate",
    "ValidUUID",
    "ValidatorRegistry",
    "default_registry",
    "ensure_valid",
    "is_valid_email",
    "is_valid_french_phone",
    "is_valid_french_postal_code",
    "is_valid_iban",
    "is_valid_iso_date",
    "is_valid_uuid",
    "validate_email",
    "validate_fields",
    "validate_not_empty",
    "validate_not_null",
    "validate_range",
]
