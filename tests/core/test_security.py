"""Tests for JwtHelper and password hashing."""

from __future__ import annotations

import time

import pytest
from jose import JWTError, jwt

from webapi_helper.core.security import (
    JwtHelper,
    JwtOptions,
    get_jwt_options,
    get_password_hash,
    verify_password,
)


class TestJwtHelper:
    def test_round_trip_claims(self, jwt_helper: JwtHelper) -> None:
        token = jwt_helper.create_token("user-1", {"roles": ["admin"]})
        claims = jwt_helper.decode_token(token)
        assert claims["sub"] == "user-1"
        assert claims["roles"] == ["admin"]
        assert claims["iss"] == "webapi-helper-tests"
        assert claims["aud"] == "tests"
        assert claims["exp"] - claims["iat"] == 30 * 60
        assert claims["jti"]

    def test_reserved_claims_not_overridden(self, jwt_helper: JwtHelper) -> None:
        token = jwt_helper.create_token("user-1", {"sub": "intruder", "iss": "evil"})
        claims = jwt_helper.decode_token(token)
        assert claims["sub"] == "user-1"
        assert claims["iss"] == "webapi-helper-tests"

    def test_custom_expiry(self, jwt_helper: JwtHelper) -> None:
        claims = jwt_helper.decode_token(jwt_helper.create_token("u", expires_minutes=5))
        assert claims["exp"] - claims["iat"] == 5 * 60

    def test_zero_expiry_is_respected(self, jwt_helper: JwtHelper) -> None:
        claims = jwt.get_unverified_claims(jwt_helper.create_token("u", expires_minutes=0))
        assert claims["exp"] == claims["iat"]

    def test_expired_token_rejected(self, jwt_helper: JwtHelper, jwt_options: JwtOptions) -> None:
        now = int(time.time())
        token = jwt.encode(
            {"sub": "u", "iat": now - 120, "exp": now - 60, "iss": jwt_options.issuer, "aud": jwt_options.audience},
            jwt_options.secret_key,
            algorithm="HS256",
        )
        with pytest.raises(JWTError):
            jwt_helper.decode_token(token)
        assert jwt_helper.try_decode_token(token) is None

    def test_wrong_key_rejected(self, jwt_helper: JwtHelper, jwt_options: JwtOptions) -> None:
        other = JwtHelper(jwt_options.model_copy(update={"secret_key": "another-secret"}))
        token = other.create_token("u")
        with pytest.raises(JWTError):
            jwt_helper.decode_token(token)

    def test_wrong_audience_rejected(self, jwt_helper: JwtHelper, jwt_options: JwtOptions) -> None:
        other = JwtHelper(jwt_options.model_copy(update={"audience": "someone-else"}))
        with pytest.raises(JWTError):
            jwt_helper.decode_token(other.create_token("u"))

    def test_wrong_issuer_rejected(self, jwt_helper: JwtHelper, jwt_options: JwtOptions) -> None:
        other = JwtHelper(jwt_options.model_copy(update={"issuer": "elsewhere"}))
        with pytest.raises(JWTError):
            jwt_helper.decode_token(other.create_token("u"))

    def test_garbage_token(self, jwt_helper: JwtHelper) -> None:
        assert jwt_helper.try_decode_token("not.a.jwt") is None
        assert jwt_helper.get_subject("not.a.jwt") is None

    def test_get_subject(self, jwt_helper: JwtHelper) -> None:
        assert jwt_helper.get_subject(jwt_helper.create_token(42)) == "42"

    def test_without_issuer_and_audience(self) -> None:
        helper = JwtHelper(JwtOptions(secret_key="k" * 32, issuer=None, audience=None))
        claims = helper.decode_token(helper.create_token("u"))
        assert "iss" not in claims
        assert "aud" not in claims

    def test_missing_secret_rejected(self) -> None:
        with pytest.raises(ValueError):
            JwtHelper(JwtOptions(secret_key=""))


class TestJwtOptions:
    def test_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("JWT_SECRET_KEY", "env-secret")
        monkeypatch.setenv("JWT_ISSUER", "env-issuer")
        monkeypatch.setenv("JWT_EXPIRE_MINUTES", "15")
        opts = get_jwt_options()
        assert opts.secret_key == "env-secret"
        assert opts.issuer == "env-issuer"
        assert opts.expire_minutes == 15
        assert opts.algorithm == "HS256"


class TestPasswords:
    def test_hash_and_verify(self) -> None:
        hashed = get_password_hash("s3cret!")
        assert hashed != "s3cret!"
        assert verify_password("s3cret!", hashed)
        assert not verify_password("wrong", hashed)

    def test_hash_is_salted(self) -> None:
        assert get_password_hash("same") != get_password_hash("same")
