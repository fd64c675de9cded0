"""Pydantic Settings for services built on api-commons.

All environment variables use the COMMONS_ prefix.
Example: COMMONS_PERFORMANCE_THRESHOLD_MS=250, COMMONS_JWT_SECRET=my-secret
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class CommonsSettings(BaseSettings):
    """Shared service configuration validated from environment variables."""

    # Service
    service_name: str = "api-commons"
    log_level: str = "INFO"

    # Request pipeline stages
    logging_aspect_enabled: bool = True
    performance_aspect_enabled: bool = True
    performance_threshold_ms: int = Field(default=500, ge=0)

    # JWT
    jwt_secret: str = "defaultSecretKeyWhichShouldBeChangedInProduction"
    jwt_expiration_ms: int = Field(default=86_400_000, ge=1)  # 24 hours

    model_config = {"env_prefix": "COMMONS_"}
