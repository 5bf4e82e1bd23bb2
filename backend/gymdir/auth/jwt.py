"""
JWT token utilities for authentication.

Tokens are issued by an external identity provider. The service only
verifies them and turns their claims into a ``User``.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt

from gymdir.config import get_settings
from gymdir.domain.entities import User


def create_access_token(user: User, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a JWT access token carrying a user's identity claims.

    Used by development tooling and tests; production tokens come from
    the identity provider.

    Args:
        user: The user the token identifies
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token string
    """
    settings = get_settings()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(
            minutes=settings.jwt_access_token_expire_minutes
        )

    to_encode = {
        "sub": user.id,
        "exp": expire,
        "preferred_username": user.username,
        "given_name": user.given_name,
        "family_name": user.family_name,
    }
    if settings.jwt_audience:
        to_encode["aud"] = settings.jwt_audience
    if settings.jwt_issuer:
        to_encode["iss"] = settings.jwt_issuer

    return jwt.encode(
        to_encode,
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )


def decode_access_token(token: str) -> Optional[User]:
    """
    Decode and validate a JWT access token.

    Args:
        token: The JWT token string

    Returns:
        User built from the token claims if valid, None otherwise
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            issuer=settings.jwt_issuer,
            options={"verify_aud": settings.jwt_audience is not None},
        )
    except JWTError:
        return None

    subject = payload.get("sub")
    if not subject:
        return None

    return User(
        id=str(subject),
        username=payload.get("preferred_username"),
        given_name=payload.get("given_name"),
        family_name=payload.get("family_name"),
    )
