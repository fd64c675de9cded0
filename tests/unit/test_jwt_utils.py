"""Unit tests for the JWT helpers."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from api_commons.config.settings import CommonsSettings
from api_commons.middleware.error_handler import ApiException, register_error_handlers
from api_commons.security.jwt_utils import JWT_ALGORITHM, InvalidTokenException, JwtUtils

TEST_JWT_SECRET = "test-secret-" + "x" * 52


def _expired_token(subject: str = "alice") -> str:
    past = datetime.now(timezone.utc) - timedelta(hours=2)
    payload = {"sub": subject, "iat": past, "exp": past + timedelta(minutes=5)}
    return jwt.encode(payload, TEST_JWT_SECRET, algorithm=JWT_ALGORITHM)


class TestTokenGeneration:
    def test_token_carries_subject_and_timestamps(self, jwt_utils: JwtUtils):
        token = jwt_utils.generate_token("alice")
        payload = jwt.decode(token, options={"verify_signature": False})
        assert payload["sub"] == "alice"
        assert payload["exp"] - payload["iat"] == 60

    def test_signed_with_hs512(self, jwt_utils: JwtUtils):
        token = jwt_utils.generate_token("alice")
        assert jwt.get_unverified_header(token)["alg"] == "HS512"

    def test_extra_claims_are_included(self, jwt_utils: JwtUtils):
        token = jwt_utils.generate_token("alice", {"roles": ["ADMIN"], "tenant": "acme"})
        claims = jwt_utils.extract_all_claims(token)
        assert claims["roles"] == ["ADMIN"]
        assert claims["tenant"] == "acme"

    def test_subject_overrides_claims(self, jwt_utils: JwtUtils):
        token = jwt_utils.generate_token("alice", {"sub": "mallory"})
        assert jwt_utils.extract_username(token) == "alice"

    def test_from_settings(self):
        settings = CommonsSettings(jwt_secret=TEST_JWT_SECRET, jwt_expiration_ms=1_000)
        utils = JwtUtils.from_settings(settings)
        assert utils.expiration_ms == 1_000


class TestClaimExtraction:
    def test_extract_username(self, jwt_utils: JwtUtils):
        assert jwt_utils.extract_username(jwt_utils.generate_token("bob")) == "bob"

    def test_extract_expiration(self, jwt_utils: JwtUtils):
        before = datetime.now(timezone.utc).replace(microsecond=0)
        expiration = jwt_utils.extract_expiration(jwt_utils.generate_token("bob"))
        assert expiration.tzinfo is not None
        assert before + timedelta(seconds=59) <= expiration <= before + timedelta(seconds=61)

    def test_extract_claim_with_resolver(self, jwt_utils: JwtUtils):
        token = jwt_utils.generate_token("bob", {"scope": "read write"})
        assert jwt_utils.extract_claim(token, lambda c: c["scope"].split()) == ["read", "write"]

    def test_wrong_secret_raises(self, jwt_utils: JwtUtils):
        other = JwtUtils("another-secret-" + "y" * 49, 60_000)
        with pytest.raises(InvalidTokenException) as exc_info:
            jwt_utils.extract_all_claims(other.generate_token("bob"))
        assert exc_info.value.code == "INVALID_TOKEN"
        assert isinstance(exc_info.value.__cause__, jwt.InvalidTokenError)

    def test_malformed_token_raises(self, jwt_utils: JwtUtils):
        with pytest.raises(InvalidTokenException):
            jwt_utils.extract_username("not.a.jwt")

    def test_expired_token_raises_on_extraction(self, jwt_utils: JwtUtils):
        with pytest.raises(InvalidTokenException, match="expired"):
            jwt_utils.extract_username(_expired_token())

    def test_invalid_token_is_an_api_exception(self):
        assert issubclass(InvalidTokenException, ApiException)


class TestTokenValidation:
    def test_valid_for_matching_user(self, jwt_utils: JwtUtils):
        assert jwt_utils.validate_token(jwt_utils.generate_token("carol"), "carol") is True

    def test_invalid_for_other_user(self, jwt_utils: JwtUtils):
        assert jwt_utils.validate_token(jwt_utils.generate_token("carol"), "dave") is False

    def test_fresh_token_is_not_expired(self, jwt_utils: JwtUtils):
        assert jwt_utils.is_token_expired(jwt_utils.generate_token("carol")) is False

    def test_expired_token(self, jwt_utils: JwtUtils):
        token = _expired_token("carol")
        assert jwt_utils.is_token_expired(token) is True
        assert jwt_utils.validate_token(token, "carol") is False


def test_invalid_token_maps_to_400():
    app = FastAPI()
    register_error_handlers(app)
    utils = JwtUtils(TEST_JWT_SECRET, 60_000)

    @app.get("/me")
    async def me(token: str):
        return {"user": utils.extract_username(token)}

    client = TestClient(app, raise_server_exceptions=False)
    assert client.get("/me", params={"token": utils.generate_token("erin")}).json() == {"user": "erin"}

    resp = client.get("/me", params={"token": "garbage"})
    assert resp.status_code == 400
    assert resp.json() == {"success": False, "data": None, "message": "Invalid token"}
