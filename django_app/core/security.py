"""
Security & Authentication

JWT bearer tokens for the privileged function endpoints.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional

from django.conf import settings
from jose import JWTError, jwt


class TokenError(Exception):
    """Raised when a bearer token is missing, malformed or expired"""


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a JWT access token

    Args:
        data: Payload data (should include 'sub' for user identifier)
        expires_delta: Token expiration time

    Returns:
        Encoded JWT token
    """
    to_encode = data.copy()
    now = datetime.now(timezone.utc)

    if expires_delta:
        expire = now + expires_delta
    else:
        expire = now + timedelta(minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode.update({"exp": expire, "iat": now})

    return jwt.encode(
        to_encode,
        settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM
    )


def verify_token(token: str) -> dict:
    """
    Verify and decode a JWT token

    Raises:
        TokenError: If token is invalid or expired
    """
    if not token:
        raise TokenError('Missing token')
    try:
        return jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM]
        )
    except JWTError as e:
        raise TokenError(f'Invalid token: {e}') from e


def bearer_token(request) -> str:
    """Extract the token from an 'Authorization: Bearer <token>' header"""
    header = request.headers.get('Authorization', '')
    scheme, _, token = header.partition(' ')
    if scheme.lower() != 'bearer':
        return ''
    return token.strip()
