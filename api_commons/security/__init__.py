"""JWT helpers and current-principal accessors."""

from api_commons.security.jwt_utils import InvalidTokenException, JwtUtils
from api_commons.security.security_utils import Principal

__all__ = ["InvalidTokenException", "JwtUtils", "Principal"]
