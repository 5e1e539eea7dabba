"""Identity provider backed by decoded bearer token claims."""

from typing import Any, Mapping

from domain.vehicles.ports.identity_port import IdentityPort


class JWTIdentityProvider(IdentityPort):
    """Exposes the subject of an already validated token as the current user."""

    def __init__(self, claims: Mapping[str, Any]):
        subject = claims.get("sub")
        if not subject:
            raise ValueError("Token has no subject claim")
        self.claims = dict(claims)
        self._user_id = str(subject)

    def current_user_id(self) -> str:
        return self._user_id
