"""FastAPI dependencies for authentication.

Usage:
    @app.get("/protected")
    def protected_endpoint(identity: IdentityPort = Depends(get_identity)):
        return {"owner_id": identity.current_user_id()}
"""

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
import jwt

from domain.vehicles.ports.identity_port import IdentityPort
from infrastructure.identity.jwt_identity_provider import JWTIdentityProvider
from observability.request_id import set_owner_id

from .jwt import decode_token


# auto_error=False so a missing header yields 401 rather than 403
security = HTTPBearer(auto_error=False)


def get_identity(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> IdentityPort:
    """Validate the bearer token and return the caller's identity.

    Raises:
        HTTPException 401: If token is missing, invalid, expired, or has no subject
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    # A missing JWT_SECRET raises ValueError here and surfaces as a 500
    try:
        payload = decode_token(credentials.credentials)
    except jwt.ExpiredSignatureError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has expired",
            headers={"WWW-Authenticate": "Bearer"},
        )
    except jwt.InvalidTokenError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid authentication credentials: {e}",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        identity = JWTIdentityProvider(payload)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid authentication credentials: {e}",
            headers={"WWW-Authenticate": "Bearer"},
        )

    set_owner_id(identity.current_user_id())
    return identity


def get_current_user_id(identity: IdentityPort = Depends(get_identity)) -> str:
    return identity.current_user_id()
