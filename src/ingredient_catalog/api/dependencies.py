"""Shared FastAPI dependencies."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Header, Request

from ingredient_catalog.errors import Unauthorized
from ingredient_catalog.services.auth import UserIdentity, bearer_token

if TYPE_CHECKING:
    from ingredient_catalog.containers import AppContainer


def get_container(request: Request) -> AppContainer:
    return request.app.state.container


async def require_user(
    request: Request, authorization: str | None = Header(default=None)
) -> UserIdentity:
    """Resolve the bearer token of a request to a user identity."""
    token = bearer_token(authorization)
    if token is None:
        raise Unauthorized("Missing bearer token")
    container = get_container(request)
    identity = container.auth_resolver.resolve(token)
    if identity is None:
        raise Unauthorized("Invalid or expired token")
    return identity
