"""JWT access tokens for back-office users."""

from datetime import datetime, timedelta, timezone

from jose import jwt

from hoteldesk.config import settings
from hoteldesk.models.user import User


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    """Create a signed access token.

    Args:
        data: Payload data. Must include ``sub`` (user id as string).
        expires_delta: Custom expiration duration. Defaults to
            ``settings.jwt_access_token_expire_minutes`` minutes.

    Returns:
        Encoded JWT string.
    """
    to_encode = data.copy()
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.jwt_access_token_expire_minutes))
    to_encode.update({"exp": expire, "iat": now, "type": "access"})
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def create_user_token(user: User) -> str:
    """Access token for ``user`` carrying the role claims the frontend reads."""
    claims: dict = {"sub": str(user.id), "role": user.role, "name": user.name}
    if user.staff_id is not None:
        claims["staff_id"] = user.staff_id
    return create_access_token(claims)


def decode_token(token: str) -> dict:
    """Decode and verify a JWT token.

    Raises:
        jose.JWTError: If the token is invalid, expired, or malformed.
    """
    return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
