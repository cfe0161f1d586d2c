"""
Password hashing and access tokens for VoiceHire
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

import bcrypt
from jose import JWTError, jwt

from voicehire.config.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def hash_password(plain_password: str) -> str:
    """
    Hash a password with bcrypt.

    Args:
        plain_password: Password as typed by the user

    Returns:
        bcrypt hash string
    """
    salt = bcrypt.gensalt(rounds=12)
    hashed = bcrypt.hashpw(plain_password.encode("utf-8"), salt)
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a password against its stored bcrypt hash."""
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash is not a valid bcrypt hash")
        return False


def create_access_token(
    user_id: int,
    email: str,
    name: str,
    settings: Settings | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    """
    Create a signed access token for a user.

    Args:
        user_id: User primary key, stored as the ``sub`` claim
        email: User email
        name: Display name
        expires_delta: Lifetime (default: configured jwt_expires_minutes)

    Returns:
        Encoded JWT string
    """
    settings = settings or get_settings()
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.jwt_expires_minutes))

    payload = {
        "sub": str(user_id),
        "email": email,
        "name": name,
        "iat": now,
        "exp": expire,
        "type": "access",
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings | None = None) -> dict[str, Any] | None:
    """
    Decode and verify an access token.

    Returns:
        The payload, or None when the token is invalid or expired
    """
    settings = settings or get_settings()
    try:
        return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        logger.debug(f"JWT decode failed: {e}")
        return None
