"""JWT token generation and validation

Identity is delegated: AutoDoc trusts bearer tokens signed with JWT_SECRET
and keeps no user table. The subject claim is the owner id stamped on
vehicle records and storage keys.

Token Claims:
- sub: Owner/user id (opaque string)
- email: Optional, for logging and display
- iat / exp: Issue and expiry timestamps (JWT_EXPIRY_MINUTES, default 60)

Algorithm: JWT_ALGORITHM (default HS256).
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt

from config import get_settings


def _get_jwt_secret() -> str:
    """Get JWT_SECRET from settings.

    Raises:
        ValueError: If JWT_SECRET is not set
    """
    secret = get_settings().JWT_SECRET
    if not secret:
        raise ValueError("JWT_SECRET environment variable is not set")
    return secret


def create_access_token(user_id: str, email: Optional[str] = None) -> str:
    """Create a signed access token for user_id.

    Raises:
        ValueError: If JWT_SECRET is not set
    """
    settings = get_settings()
    secret = _get_jwt_secret()

    now = datetime.now(timezone.utc)
    expiration = now + timedelta(minutes=settings.JWT_EXPIRY_MINUTES)

    payload: Dict[str, Any] = {
        "sub": str(user_id),
        "iat": int(now.timestamp()),
        "exp": int(expiration.timestamp()),
    }
    if email:
        payload["email"] = email

    return jwt.encode(payload, secret, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> Dict[str, Any]:
    """Decode and validate a JWT token.

    Raises:
        jwt.ExpiredSignatureError: If token has expired
        jwt.InvalidTokenError: If token is invalid or tampered
        ValueError: If JWT_SECRET is not set
    """
    secret = _get_jwt_secret()

    try:
        return jwt.decode(token, secret, algorithms=[get_settings().JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise jwt.ExpiredSignatureError("Token has expired")
    except jwt.InvalidTokenError as e:
        raise jwt.InvalidTokenError(f"Invalid token: {str(e)}")
