"""JWT service for RentalTrack authentication."""

from datetime import datetime, timedelta, timezone

import jwt

from ...config import settings


def get_token_expiry_seconds() -> int:
    """Get access token expiry in seconds."""
    return settings.access_token_expire_minutes * 60


def create_access_token(
    user_id: int,
    email: str,
    role_slug: str,
    expires_delta: timedelta | None = None,
) -> str:
    """Create a JWT access token."""
    now = datetime.now(timezone.utc)
    expire = now + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )

    payload = {
        "sub": str(user_id),
        "email": email,
        "role": role_slug,
        "exp": expire,
        "iat": now,
        "type": "access",
    }

    return jwt.encode(
        payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm
    )


def decode_access_token(token: str) -> dict | None:
    """Decode and validate a JWT access token.

    Returns:
        Token payload if valid, None if invalid or expired.
    """
    try:
        payload = jwt.decode(
            token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm]
        )
    except jwt.InvalidTokenError:
        return None
    if payload.get("type") != "access":
        return None
    return payload
