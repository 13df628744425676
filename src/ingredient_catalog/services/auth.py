"""Request identity resolution."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID


@dataclass(frozen=True)
class UserIdentity:
    """The authenticated caller of a request."""

    user_id: UUID
    email: str | None = None


class AuthResolver(Protocol):
    """Resolves a bearer token to a user identity."""

    def resolve(self, token: str) -> UserIdentity | None:
        """Return the identity for a token, or None when it is invalid."""


def bearer_token(authorization: str | None) -> str | None:
    """Extract the token from an ``Authorization: Bearer`` header value."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()
