"""
Security utilities for authentication.

Sessions are issued by the hosted auth service; its access tokens are HS256
JWTs signed with the project's JWT secret. We only verify them here (and mint
compatible ones for local development and tests).
"""
from datetime import datetime, timedelta, timezone
from typing import Optional, Any
from jose import JWTError, jwt

from app.core.config import settings


def create_access_token(
    data: dict[str, Any],
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Create an access token shaped like the ones the auth service issues.

    Args:
        data: Payload data to encode in the token (must include "sub")
        expires_delta: Custom expiration time

    Returns:
        Encoded JWT token string
    """
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(hours=1)

    to_encode.update(
        {"exp": expire, "aud": settings.jwt_audience, "role": "authenticated"}
    )
    return jwt.encode(
        to_encode, settings.supabase_jwt_secret, algorithm=settings.jwt_algorithm
    )


def decode_token(token: str) -> Optional[dict[str, Any]]:
    """
    Decode and validate an access token.

    Returns:
        Decoded payload or None if invalid
    """
    try:
        payload = jwt.decode(
            token,
            settings.supabase_jwt_secret,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
        )
        return payload
    except JWTError:
        return None
