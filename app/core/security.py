"""Password hashing and bearer token helpers.

Passwords are stored as bcrypt hashes only. Tokens are HS256 JWTs signed
with ``JWT_SECRET`` that carry the user id (``sub``) and an expiry.
"""
import base64
import hashlib
from datetime import UTC, datetime, timedelta
from uuid import UUID

import bcrypt
import jwt

from app.core.config import settings
from app.core.errors import Unauthorized


class SecurityConfigError(RuntimeError):
    """Raised when token signing prerequisites are not satisfied."""


def _secret() -> str:
    if not settings.jwt_secret:
        raise SecurityConfigError("JWT_SECRET is not configured")
    return settings.jwt_secret


def _prehash(password: str) -> bytes:
    # bcrypt only reads 72 bytes; a SHA-256 digest keeps every byte significant
    return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())


def hash_password(password: str) -> str:
    """Return a salted bcrypt hash of ``password``. Any length is accepted."""
    return bcrypt.hashpw(_prehash(password), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    """Check ``password`` against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(_prehash(password), hashed.encode("utf-8"))
    except ValueError:
        # Corrupt or non-bcrypt hash in storage
        return False


def create_access_token(user_id: UUID, now: datetime | None = None) -> str:
    """Issue a signed token for ``user_id`` valid for ``token_ttl_days``."""
    issued_at = now or datetime.now(UTC)
    payload = {
        "sub": str(user_id),
        "iat": issued_at,
        "exp": issued_at + timedelta(days=settings.token_ttl_days),
    }
    return jwt.encode(payload, _secret(), algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> UUID:
    """Return the user id carried by ``token``.

    Raises:
        Unauthorized: If the token is malformed, badly signed or expired.
    """
    try:
        payload = jwt.decode(
            token,
            _secret(),
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "exp"]},
        )
        return UUID(payload["sub"])
    except jwt.ExpiredSignatureError as e:
        raise Unauthorized("Not authorized, token expired") from e
    except (jwt.InvalidTokenError, ValueError) as e:
        raise Unauthorized("Not authorized, token failed") from e
