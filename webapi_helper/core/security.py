from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Claims managed by JwtHelper; callers cannot override them through extra claims.
_RESERVED_CLAIMS = frozenset({"sub", "iss", "aud", "iat", "exp", "jti"})


class JwtOptions(BaseSettings):
    """
    JWT configuration read from JWT_* environment variables (or .env).
    """

    secret_key: str = Field(default="", description="HMAC signing key")
    issuer: Optional[str] = Field(default=None, description="Token issuer (iss)")
    audience: Optional[str] = Field(default=None, description="Token audience (aud)")
    expire_minutes: int = Field(default=120, ge=1, description="Token lifetime in minutes")
    algorithm: str = Field(default="HS256")

    model_config = SettingsConfigDict(
        env_prefix="JWT_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )


# PUBLIC_INTERFACE
def get_jwt_options() -> JwtOptions:
    """Return JwtOptions populated from the environment."""
    return JwtOptions()


class JwtHelper:
    """
    Creates and validates signed JWTs using python-jose.

    Issuer and audience are written into tokens and verified on decode when
    configured.
    """

    def __init__(self, options: JwtOptions) -> None:
        if not options.secret_key:
            raise ValueError("JWT secret key is not configured (JWT_SECRET_KEY).")
        self.options = options

    # PUBLIC_INTERFACE
    def create_token(
        self,
        subject: str,
        claims: Optional[Dict[str, Any]] = None,
        expires_minutes: Optional[int] = None,
    ) -> str:
        """Create a signed token for subject with optional extra claims."""
        now = datetime.now(tz=timezone.utc)
        lifetime = expires_minutes if expires_minutes is not None else self.options.expire_minutes
        expire = now + timedelta(minutes=lifetime)
        to_encode: Dict[str, Any] = {
            k: v for k, v in (claims or {}).items() if k not in _RESERVED_CLAIMS
        }
        to_encode.update({"sub": str(subject), "iat": now, "exp": expire, "jti": uuid.uuid4().hex})
        if self.options.issuer:
            to_encode["iss"] = self.options.issuer
        if self.options.audience:
            to_encode["aud"] = self.options.audience
        return jwt.encode(to_encode, self.options.secret_key, algorithm=self.options.algorithm)

    # PUBLIC_INTERFACE
    def decode_token(self, token: str) -> Dict[str, Any]:
        """Decode and validate a JWT; raises JWTError if invalid/expired."""
        return jwt.decode(
            token,
            self.options.secret_key,
            algorithms=[self.options.algorithm],
            audience=self.options.audience,
            issuer=self.options.issuer,
        )

    # PUBLIC_INTERFACE
    def try_decode_token(self, token: str) -> Optional[Dict[str, Any]]:
        """Return the claims, or None when the token is invalid."""
        try:
            return self.decode_token(token)
        except JWTError:
            return None

    # PUBLIC_INTERFACE
    def get_subject(self, token: str) -> Optional[str]:
        """Return 'sub' from a token or None when token is invalid."""
        payload = self.try_decode_token(token)
        return payload.get("sub") if payload else None


# PUBLIC_INTERFACE
def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a hashed password using bcrypt."""
    return _pwd_context.verify(plain_password, hashed_password)


# PUBLIC_INTERFACE
def get_password_hash(password: str) -> str:
    """Hash a password using bcrypt."""
    return _pwd_context.hash(password)
