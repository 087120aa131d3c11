"""Supabase Auth adapter resolving access tokens to identities."""

from dataclasses import dataclass
from typing import Protocol

from supabase import AuthError, Client

from event_snaps.domain.models import AuthIdentity


class AuthVerifier(Protocol):
    """Interface for resolving bearer tokens to identities."""

    def verify(self, access_token: str) -> AuthIdentity | None:
        """Return the identity behind a token, or None if it is not valid."""


@dataclass
class SupabaseAuthVerifier:
    """Token verifier backed by Supabase Auth."""

    client: Client

    def verify(self, access_token: str) -> AuthIdentity | None:
        """Look the token up with Supabase Auth."""
        try:
            response = self.client.auth.get_user(access_token)
        except AuthError:
            return None
        if response is None or response.user is None:
            return None
        user = response.user
        metadata = user.user_metadata or {}
        return AuthIdentity(
            uid=user.id,
            email=user.email,
            display_name=metadata.get("display_name") or metadata.get("full_name"),
        )
