"""Read the authenticated principal from the current request.

Authentication itself belongs to the host's security layer, which is
expected to put a ``Principal`` on ``request.state.principal``. A request
without one is treated as unauthenticated with no authorities.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from fastapi import Request

ROLE_ANONYMOUS = "ROLE_ANONYMOUS"


@dataclass(frozen=True)
class Principal:
    """Identity attached to a request by the host's security layer."""

    username: str | None
    authorities: frozenset[str] = field(default_factory=frozenset)
    authenticated: bool = True


def get_principal(request: Request) -> Principal | None:
    return getattr(request.state, "principal", None)


def is_authenticated(request: Request) -> bool:
    principal = get_principal(request)
    return principal is not None and principal.authenticated


def get_current_username(request: Request) -> str | None:
    if not is_authenticated(request):
        return None
    return get_principal(request).username  # type: ignore[union-attr]


def get_authorities(request: Request) -> frozenset[str]:
    if not is_authenticated(request):
        return frozenset()
    return get_principal(request).authorities  # type: ignore[union-attr]


def has_authority(request: Request, authority: str) -> bool:
    return authority in get_authorities(request)


def has_any_authority(request: Request, *authorities: str) -> bool:
    granted = get_authorities(request)
    return any(a in granted for a in authorities)


def is_anonymous(request: Request) -> bool:
    return has_authority(request, ROLE_ANONYMOUS)
