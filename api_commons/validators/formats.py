"""Format predicates for common field types.

Every predicate treats ``None`` and the empty string as valid: whether a
field is required is a separate concern, checked by ``validate_not_empty`` /
``validate_not_null`` or by the model field itself.
"""

from __future__ import annotations

import calendar
import re

_EMAIL_RE = re.compile(r"[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,6}", re.IGNORECASE | re.ASCII)
_FRENCH_PHONE_RE = re.compile(r"(\+33|0)[1-9][0-9]{8}")
_FRENCH_POSTAL_CODE_RE = re.compile(r"[0-9]{5}")
_UUID_RE = re.compile(
    r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
)
# Format only: the MOD-97 checksum is not verified.
_IBAN_RE = re.compile(r"[A-Z]{2}[0-9]{2}[A-Z0-9]{1,30}")
_ISO_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
_WHITESPACE_RE = re.compile(r"\s", re.ASCII)
_DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def is_valid_email(value: str | None) -> bool:
    """``local@domain.tld`` with a 2-6 letter TLD, case-insensitive."""
    return not value or _EMAIL_RE.fullmatch(value) is not None


def is_valid_french_phone(value: str | None) -> bool:
    """``+33`` or ``0``, then 1-9, then eight digits; no separators."""
    return not value or _FRENCH_PHONE_RE.fullmatch(value) is not None


def is_valid_french_postal_code(value: str | None) -> bool:
    return not value or _FRENCH_POSTAL_CODE_RE.fullmatch(value) is not None


def is_valid_uuid(value: str | None) -> bool:
    """Canonical 8-4-4-4-12 hexadecimal form."""
    return not value or _UUID_RE.fullmatch(value) is not None


def is_valid_iban(value: str | None) -> bool:
    """Country code, check digits and 1-30 alphanumerics, whitespace ignored."""
    if not value:
        return True
    return _IBAN_RE.fullmatch(_WHITESPACE_RE.sub("", value)) is not None


def is_valid_iso_date(value: str | None) -> bool:
    """A real ``yyyy-MM-dd`` proleptic Gregorian date.

    ``2019-02-29`` is rejected; year ``0000`` is accepted (and is a leap
    year).
    """
    if not value:
        return True
    if _ISO_DATE_RE.fullmatch(value) is None:
        return False
    year, month, day = (int(part) for part in value.split("-"))
    if not 1 <= month <= 12:
        return False
    days_in_month = 29 if month == 2 and calendar.isleap(year) else _DAYS_IN_MONTH[month - 1]
    return 1 <= day <= days_in_month
