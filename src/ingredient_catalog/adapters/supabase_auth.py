"""Supabase Auth implementation of bearer token resolution."""

import logging
from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from ingredient_catalog.services.auth import AuthResolver, UserIdentity

_logger = logging.getLogger(__name__)


@dataclass
class SupabaseAuthResolver(AuthResolver):
    """Validates access tokens against Supabase Auth."""

    client: Client

    def resolve(self, token: str) -> UserIdentity | None:
        try:
            response = self.client.auth.get_user(token)
        except Exception as exc:
            _logger.info("Rejected access token: %s", type(exc).__name__)
            return None
        user = getattr(response, "user", None)
        if user is None:
            return None
        return UserIdentity(user_id=UUID(str(user.id)), email=getattr(user, "email", None))
