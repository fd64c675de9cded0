"""Shared test fixtures for the api-commons test suite."""

from __future__ import annotations

import pytest

from api_commons.config.settings import CommonsSettings
from api_commons.security.jwt_utils import JwtUtils

# 64 bytes, the HS512 minimum key length
TEST_JWT_SECRET = "test-secret-" + "x" * 52


# ---------------------------------------------------------------------------
# Keep the host environment out of CommonsSettings
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _clear_commons_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove COMMONS_* variables so settings defaults are deterministic."""
    import os

    for key in list(os.environ):
        if key.startswith("COMMONS_"):
            monkeypatch.delenv(key, raising=False)


# ---------------------------------------------------------------------------
# Settings / component fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def settings() -> CommonsSettings:
    """Test settings with a strong JWT secret and a generous threshold."""
    return CommonsSettings(
        service_name="test-service",
        jwt_secret=TEST_JWT_SECRET,
        jwt_expiration_ms=60_000,
        performance_threshold_ms=10_000,
    )


@pytest.fixture
def jwt_utils(settings: CommonsSettings) -> JwtUtils:
    return JwtUtils.from_settings(settings)


