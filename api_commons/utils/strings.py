"""String helpers."""

from __future__ import annotations

import re
import secrets
import string
import unicodedata
import uuid

_ALPHANUMERIC = string.ascii_uppercase + string.ascii_lowercase + string.digits
_ELLIPSIS = "..."


def is_blank(text: str | None) -> bool:
    """True for ``None``, ``""`` and whitespace-only strings."""
    return text is None or not text.strip()


def is_not_blank(text: str | None) -> bool:
    return not is_blank(text)


def truncate(text: str | None, max_length: int) -> str | None:
    """Cut *text* to *max_length* characters, the last three being ``...``.

    Raises ``ValueError`` when *max_length* leaves no room for the suffix.
    """
    if max_length < len(_ELLIPSIS):
        raise ValueError(f"max_length must be at least {len(_ELLIPSIS)}")
    if text is None:
        return None
    if len(text) <= max_length:
        return text
    return text[: max_length - len(_ELLIPSIS)] + _ELLIPSIS


def remove_accents(text: str | None) -> str | None:
    """Strip combining diacritical marks (``"Élève"`` -> ``"Eleve"``)."""
    if text is None:
        return None
    normalized = unicodedata.normalize("NFD", text)
    return "".join(ch for ch in normalized if not unicodedata.combining(ch))


def slugify(text: str | None) -> str | None:
    """Lowercase, accent-free, hyphen-separated ``[a-z0-9-]`` slug."""
    if text is None:
        return None
    slug = remove_accents(text.lower()) or ""
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"[^a-z0-9\-]", "", slug)
    return re.sub(r"-+", "-", slug)


def random_alphanumeric(length: int) -> str:
    if length < 0:
        raise ValueError("Length must be non-negative")
    return "".join(secrets.choice(_ALPHANUMERIC) for _ in range(length))


def generate_uuid() -> str:
    return str(uuid.uuid4())


def mask(text: str | None, visible_chars: int, mask_char: str = "*") -> str | None:
    """Keep *visible_chars* at both ends and mask the middle.

    Strings too short to hide anything are returned unchanged.
    """
    if text is None:
        return None
    if len(text) <= 2 * visible_chars:
        return text
    hidden = len(text) - 2 * visible_chars
    tail = text[len(text) - visible_chars:] if visible_chars else ""
    return text[:visible_chars] + mask_char * hidden + tail
