"""Password hashing and JWT creation/verification for authentication."""

from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from app.core.config import Settings
from app.schemas.auth import Claim

# Bcrypt cost (rounds); 12 is a good default for security vs speed.
BCRYPT_ROUNDS = 12

# Name of the cookie carrying the access token.
TOKEN_COOKIE = "token"

ROLES = frozenset({"user", "admin"})


class InvalidCredential(Exception):
    """Raised when a token is unsigned, expired, tampered with, or has a malformed payload."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


def hash_password(plain_password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def create_access_token(
    settings: Settings,
    sub: str | int,
    role: str,
    email: str | None = None,
) -> str:
    """Create a JWT access token with sub (user id), role, optional email, and exp."""
    now = datetime.now(UTC)
    expire = now + timedelta(minutes=settings.JWT_EXPIRE_MINUTES)
    payload: dict[str, Any] = {
        "sub": str(sub),
        "role": role,
        "exp": expire,
        "iat": now,
    }
    if email is not None:
        payload["email"] = email
    return jwt.encode(
        payload,
        settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
    )


def decode_access_token(settings: Settings, token: str) -> dict[str, Any]:
    """
    Decode and validate JWT; return payload (sub, role, exp, iat).
    Raises jwt.PyJWTError on invalid or expired token.
    """
    return jwt.decode(
        token,
        settings.JWT_SECRET.get_secret_value(),
        algorithms=[settings.JWT_ALGORITHM],
        options={"require": ["exp", "sub"]},
    )


def verify_credential(token: str, settings: Settings) -> Claim:
    """Turn a signed token into a Claim, or raise InvalidCredential."""
    try:
        payload = decode_access_token(settings, token)
    except jwt.ExpiredSignatureError as e:
        raise InvalidCredential("Token has expired") from e
    except jwt.PyJWTError as e:
        raise InvalidCredential(f"Token rejected: {e}") from e

    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError) as e:
        raise InvalidCredential("Invalid token payload: sub") from e
    if user_id <= 0:
        raise InvalidCredential("Invalid token payload: sub")
    role = payload.get("role")
    if role not in ROLES:
        raise InvalidCredential("Invalid token payload: role")

    return Claim(
        id=user_id,
        role=role,
        email=payload.get("email"),
        exp=payload.get("exp"),
        iat=payload.get("iat"),
    )
