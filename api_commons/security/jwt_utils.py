"""JWT helpers for services sharing one signing secret.

Tokens are HS512-signed with ``CommonsSettings.jwt_secret`` and expire
``jwt_expiration_ms`` after issue. Any decoding failure surfaces as
``InvalidTokenException`` so the central handler maps it like every other
API error.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import Any, TypeVar

import jwt
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError

from api_commons.config.settings import CommonsSettings
from api_commons.middleware.error_handler import ApiException, ErrorCode

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS512"

R = TypeVar("R")


class InvalidTokenException(ApiException):
    """The token is malformed, badly signed or expired."""

    def __init__(self, message: str = "Invalid token", cause: BaseException | None = None) -> None:
        super().__init__(ErrorCode.INVALID_TOKEN, message, cause)


class JwtUtils:
    """Generate, decode and check signed JWTs."""

    def __init__(self, secret: str, expiration_ms: int) -> None:
        self._secret = secret
        self.expiration_ms = expiration_ms

    @classmethod
    def from_settings(cls, settings: CommonsSettings) -> JwtUtils:
        return cls(settings.jwt_secret, settings.jwt_expiration_ms)

    def generate_token(self, subject: str, claims: dict[str, Any] | None = None) -> str:
        """Sign a token for *subject* carrying the extra *claims*."""
        now = datetime.now(timezone.utc)
        expiration = now + timedelta(milliseconds=self.expiration_ms)
        payload: dict[str, Any] = dict(claims or {})
        payload.update({"sub": subject, "iat": now, "exp": expiration})

        token = jwt.encode(payload, self._secret, algorithm=JWT_ALGORITHM)
        logger.debug("Created JWT for subject %s, expires at %s", subject, expiration)
        return token

    def extract_all_claims(self, token: str, *, verify_exp: bool = True) -> dict[str, Any]:
        """Decode *token* and return its claims.

        Raises
        ------
        InvalidTokenException
            If the signature does not match, the token is malformed, or
            (with ``verify_exp``) the token has expired.
        """
        try:
            return jwt.decode(
                token,
                self._secret,
                algorithms=[JWT_ALGORITHM],
                options={"verify_exp": verify_exp},
            )
        except ExpiredSignatureError as exc:
            raise InvalidTokenException("Token has expired", cause=exc) from exc
        except InvalidTokenError as exc:
            logger.warning("Rejected JWT: %s", exc)
            raise InvalidTokenException(cause=exc) from exc

    def extract_claim(self, token: str, resolver: Callable[[dict[str, Any]], R]) -> R:
        return resolver(self.extract_all_claims(token))

    def extract_username(self, token: str) -> str | None:
        return self.extract_claim(token, lambda claims: claims.get("sub"))

    def extract_expiration(self, token: str) -> datetime:
        claims = self.extract_all_claims(token, verify_exp=False)
        return datetime.fromtimestamp(claims["exp"], tz=timezone.utc)

    def is_token_expired(self, token: str) -> bool:
        return self.extract_expiration(token) < datetime.now(timezone.utc)

    def validate_token(self, token: str, username: str) -> bool:
        """True when the token belongs to *username* and has not expired.

        Badly signed or malformed tokens still raise ``InvalidTokenException``.
        """
        claims = self.extract_all_claims(token, verify_exp=False)
        if claims.get("sub") != username:
            return False
        return not self.is_token_expired(token)
