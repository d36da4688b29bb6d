"""
security helpers:
- Argon2 password hashing via argon2-cffi
- Stateless access tokens (JWT, HS256 by default) via PyJWT
- Opaque identifiers for token ids and refresh tokens
"""
from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Mapping, Optional

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

from utils.exceptions import AccessTokenExpired, TokenInvalid


ph = PasswordHasher()

ACCESS_TOKEN_TYPE = "access"
DEFAULT_ACCESS_TOKEN_LIFETIME = timedelta(hours=24)


def hash_password(password: str) -> str:
    """Hash a plaintext password using Argon2 (fresh random salt on every call)
    """
    return ph.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """ Verify a plaintext password against a stored Argon2 hash
    """
    try:
        return ph.verify(password_hash, password)
    except (VerificationError, InvalidHashError):
        return False


def generate_jti() -> str:
    """Generate a unique random identifier (uuid4, 122 random bits).
    """
    return str(uuid.uuid4())


def _timestamp(now: Optional[datetime]) -> int:
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return int(now.timestamp())


class AccessTokenCodec:
    """
    Issues and verifies signed access tokens carrying a username as subject.

    Verification needs nothing but the shared key: there is no server-side record, so a
    token stays valid until its exp even after logout.
    """

    def __init__(self, secret: str, algorithm: str = "HS256",
                 lifetime: timedelta = DEFAULT_ACCESS_TOKEN_LIFETIME):
        if not secret:
            raise ValueError("A signing secret is required")
        self.secret = secret
        self.algorithm = algorithm
        self.lifetime = lifetime

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "AccessTokenCodec":
        return cls(
            secret=config["JWT_SECRET"],
            algorithm=config.get("JWT_ALGORITHM", "HS256"),
            lifetime=config.get("ACCESS_TOKEN_EXPIRES", DEFAULT_ACCESS_TOKEN_LIFETIME),
        )

    @property
    def expires_in(self) -> int:
        return int(self.lifetime.total_seconds())

    def issue(self, subject: str, now: Optional[datetime] = None) -> str:
        iat = _timestamp(now)
        payload = {
            "sub": str(subject),
            "iat": iat,
            "exp": iat + self.expires_in,
            "type": ACCESS_TOKEN_TYPE,
            "jti": generate_jti(),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode(self, token: str, now: Optional[datetime] = None) -> Dict[str, Any]:
        """
        Decode and validate a token. Raises TokenInvalid on a bad signature or payload
        and AccessTokenExpired once now > exp (no leeway).
        """
        if not token:
            raise TokenInvalid("Access token is empty")
        try:
            # exp is checked below against the caller's clock
            decoded = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"verify_exp": False, "verify_iat": False, "require": ["sub", "iat", "exp"]},
            )
        except jwt.InvalidTokenError as exc:
            raise TokenInvalid(f"Invalid access token: {exc}") from exc

        if decoded.get("type") != ACCESS_TOKEN_TYPE:
            raise TokenInvalid("Wrong token type")
        exp = decoded.get("exp")
        if not isinstance(exp, int) or not isinstance(decoded.get("sub"), str):
            raise TokenInvalid("Malformed token payload")
        if _timestamp(now) > exp:
            raise AccessTokenExpired()
        return decoded

    def verify(self, token: str, now: Optional[datetime] = None) -> str:
        """Return the token subject (a username) or raise TokenInvalid."""
        return self.decode(token, now)["sub"]
