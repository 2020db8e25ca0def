"""
Password hashing and session token utilities
Passwords are hashed with bcrypt; session tokens are HS256-signed JWTs
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import bcrypt
import jwt

from invoice_it.core.config import settings

logger = logging.getLogger(__name__)


class TokenError(Exception):
    """Raised when a session token cannot be verified"""
    pass


def hash_password(password: str) -> str:
    """
    Hash a plaintext password with bcrypt

    Args:
        password: Plaintext password

    Returns:
        bcrypt hash suitable for storage
    """
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plaintext password against a stored bcrypt hash"""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        logger.warning("Stored password hash could not be parsed")
        return False


def create_access_token(user_id: int, email: str, expires_minutes: Optional[int] = None) -> str:
    """
    Issue a signed session token for a user

    Args:
        user_id: Database id of the user (stored as the `sub` claim)
        email: User email
        expires_minutes: Lifetime override, defaults to JWT_EXPIRE_MINUTES

    Returns:
        Encoded JWT
    """
    now = datetime.now(timezone.utc)
    lifetime = expires_minutes if expires_minutes is not None else settings.JWT_EXPIRE_MINUTES
    payload = {
        "sub": str(user_id),
        "email": email,
        "iat": now,
        "exp": now + timedelta(minutes=lifetime),
    }
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Verify a session token and return its identity claims

    Returns:
        Dict with `id` (int) and `email`

    Raises:
        TokenError: signature, expiry or claim shape is invalid
    """
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise TokenError("Token has expired") from e
    except jwt.InvalidTokenError as e:
        raise TokenError(f"Invalid token: {e}") from e

    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError) as e:
        raise TokenError("Invalid subject claim") from e

    return {"id": user_id, "email": payload.get("email")}
